"""
Services module - provides persistent connections and service wrappers
"""
from .lxc import LXCService
from .pct import PCTService
from .ssh import SSHService
__all__ = ["LXCService", "PCTService", "SSHService"]
