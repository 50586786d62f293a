"""Base class for CLI command classes."""
from dataclasses import dataclass
from typing import TYPE_CHECKING
from .logger import get_logger
if TYPE_CHECKING:
    from .config import ClusterConfig
logger = get_logger(__name__)


@dataclass
class Command:
    """Base class for command classes; holds the loaded cluster configuration."""
    cfg: "ClusterConfig"

    @staticmethod
    def banner(title: str):
        """Log a section banner"""
        logger.info("=" * 50)
        logger.info(title)
        logger.info("=" * 50)
