"""
Library modules:
- config: configuration data model classes
- logger: logging configuration and utilities
- status: start/end progress reporting
- command: base class for CLI commands
"""
from . import config
from . import logger
from . import status
from . import command
__all__ = ["config", "logger", "status", "command"]
