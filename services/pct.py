"""
PCT Service - uses LXC service to run commands inside containers
"""
import base64
import logging
from typing import Optional
from cli.pct import PCT
from .lxc import LXCService
logger = logging.getLogger(__name__)


class PCTService:
    """Service for executing PCT commands using LXC service"""
    DEFAULT_SHELL = "bash"

    def __init__(self, lxc_service: LXCService, shell: str = None):
        """
        Initialize PCT service
        Args:
            lxc_service: LXC service instance with SSH connection
            shell: Shell to use inside containers (default: bash)
        """
        self.lxc = lxc_service
        self.shell = shell or self.DEFAULT_SHELL

    @staticmethod
    def _encode_command(command: str) -> str:
        """Encode command using base64 to avoid quote escaping issues"""
        return base64.b64encode(command.encode("utf-8")).decode("ascii")

    def execute(self, container_id, command: str, timeout: Optional[int] = None) -> tuple[Optional[str], Optional[int]]:
        """
        Execute command in container via pct exec
        Args:
            container_id: Container ID
            command: Command to execute (shell syntax allowed)
            timeout: Command timeout in seconds
        Returns:
            Tuple of (output, exit_code). output is always captured
        """
        logger.debug("Running in container %s: %s", container_id, command)
        pct_cmd = PCT().container_id(container_id).shell(self.shell).exec_encoded(self._encode_command(command))
        return self.lxc.execute(pct_cmd, timeout=timeout)

    def status(self, container_id=None) -> tuple[Optional[str], Optional[int]]:
        """
        Get container status using pct status
        Args:
            container_id: Container ID (None for list all)
        Returns:
            Tuple of (output, exit_code)
        """
        pct = PCT()
        if container_id is not None:
            pct.container_id(container_id)
        return self.lxc.execute(pct.status())

    def is_running(self, container_id) -> bool:
        """Check whether the container is running"""
        output, exit_code = self.status(container_id)
        return exit_code == 0 and PCT.parse_status_output(output)
