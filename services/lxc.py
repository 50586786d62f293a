"""
LXC Service - maintains persistent SSH connection to the LXC host
"""
import logging
from typing import Optional
from libs.config import ClusterConfig, SSHConfig
from .ssh import SSHService
logger = logging.getLogger(__name__)


class LXCService:
    """Service that maintains a persistent SSH connection to the LXC host"""
    def __init__(self, lxc_host: str, ssh_config: SSHConfig):
        """
        Initialize LXC service with SSH connection
        Args:
            lxc_host: LXC host (format: user@host or just host)
            ssh_config: SSH configuration
        """
        self.lxc_host = lxc_host
        self.ssh_config = ssh_config
        self._ssh_service = SSHService(lxc_host, ssh_config)

    @classmethod
    def from_config(cls, cfg: ClusterConfig) -> "LXCService":
        """Create LXCService from ClusterConfig"""
        return cls(cfg.lxc_host, cfg.ssh)

    def connect(self) -> bool:
        """Establish SSH connection to the LXC host"""
        return self._ssh_service.connect()

    def disconnect(self):
        """Close SSH connection"""
        self._ssh_service.disconnect()

    def is_connected(self) -> bool:
        """Check if SSH connection is active"""
        return self._ssh_service.is_connected()

    def execute(self, command: str, timeout: Optional[int] = None) -> tuple[Optional[str], Optional[int]]:
        """
        Execute command on the LXC host
        Returns:
            Tuple of (output, exit_code)
        """
        return self._ssh_service.execute(command, timeout=timeout)

    def __enter__(self):
        """Context manager entry"""
        if not self.connect():
            raise ConnectionError(f"Failed to connect to LXC host {self.lxc_host}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        self.disconnect()
