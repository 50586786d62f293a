"""
Abstract cluster node handle
"""
import base64
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional
from cli.files import FileOps
from .exec import run_command


class NodeRole(Enum):
    """Kubernetes role of a node"""
    CONTROL_PLANE = "control-plane"
    WORKER = "worker"


class Node(ABC):
    """
    A provisioned machine that can run commands
    Backends only implement exec(); file transfer is built on top of it by
    moving base64 text over the command channel.
    """

    def __init__(self, name: str, role):
        """
        Args:
            name: Stable node name, used for addressing and ordering
            role: NodeRole or its string value
        """
        self.name = name
        self.role = NodeRole(role)

    @abstractmethod
    def exec(self, command: str, timeout: Optional[int] = None) -> tuple[Optional[str], Optional[int]]:
        """
        Run a shell command on the node
        Returns:
            Tuple of (combined_output, exit_code); exit_code is None when the
            command could not be launched or timed out
        """

    @property
    def is_control_plane(self) -> bool:
        return self.role is NodeRole.CONTROL_PLANE

    def read_file(self, path: str, timeout: Optional[int] = None) -> bytes:
        """
        Return the bytes of path on this node
        Raises:
            CommandFailed: the file could not be read
            ValueError: the output is not exactly one base64 line
        """
        result = run_command(self, FileOps().read_base64(path), timeout=timeout)
        # base64 -w0 prints one line; anything else is stderr noise mixed into the output
        lines = [line for line in result.lines if line]
        if len(lines) > 1:
            raise ValueError(f"expected one base64 line for {path}, got {len(lines)} output lines")
        # binascii.Error is a ValueError
        return base64.b64decode(lines[0] if lines else "", validate=True)

    def write_file(self, path: str, data: bytes, mode: str = "0644", timeout: Optional[int] = None):
        """Write data to path on this node, creating parent directories; raises CommandFailed"""
        encoded = base64.b64encode(data).decode("ascii")
        run_command(self, FileOps().write_base64(path, encoded, mode=mode), timeout=timeout)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, role={self.role.value!r})"
