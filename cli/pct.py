"""
PCT (Proxmox Container Toolkit) command wrapper with fluent API
"""
import logging
from typing import Optional
from .base import CommandWrapper
logger = logging.getLogger(__name__)


class PCT(CommandWrapper):
    """Wrapper for PCT commands run on the LXC host"""
    BASE64_DECODE_CMD = "base64 -d"

    def __init__(self):
        """Initialize with default settings"""
        self._container_id: Optional[str] = None
        self._shell: str = "bash"

    def container_id(self, cid) -> "PCT":
        """Set container ID (returns self for chaining)."""
        self._container_id = str(cid)
        return self

    def shell(self, name: str) -> "PCT":
        """Set shell used inside the container (returns self for chaining)."""
        self._shell = name
        return self

    def _require_container(self):
        if not self._container_id:
            raise ValueError("Container ID must be set")

    def exec_encoded(self, encoded_command: str) -> str:
        """
        Generate pct exec command for a base64 encoded script
        The script is decoded inside the container so no quoting of the
        original command is needed on the host side.
        """
        self._require_container()
        return (
            f"pct exec {self._container_id} -- {self._shell} -c "
            f'"echo {encoded_command} | {self.BASE64_DECODE_CMD} | {self._shell}"'
        )

    def status(self) -> str:
        """Generate command to get container status"""
        if self._container_id:
            return f"pct status {self._container_id}"
        return "pct list"

    @staticmethod
    def parse_status_output(output: Optional[str]) -> bool:
        """Parse status output to check if container is running"""
        if not output:
            return False
        return "status: running" in output.lower()
