"""
Copy files between nodes
"""
from typing import Optional, Union
from cli.base import ErrorType
from libs.logger import get_logger
from .base import Node
from .exec import CommandFailed
logger = get_logger(__name__)

# Private keys and kubeconfigs stay readable by root only
PRIVATE_SUFFIXES = (".key", ".conf")


def file_mode(path: str) -> str:
    """Return the octal mode a copied file is written with"""
    return "0600" if path.endswith(PRIVATE_SUFFIXES) else "0644"


class CopyFailed(RuntimeError):
    """Raised when a file cannot be copied from one node to another."""

    def __init__(self, source: str, destination: str, path: str, stage: str, cause: Union[CommandFailed, ValueError]):
        self.source = source
        self.destination = destination
        self.path = path
        self.stage = stage
        self.cause = cause
        if stage == "read":
            detail = f"failed to read {path!r} from node {source}"
        else:
            detail = f"failed to write {path!r} to node {destination}"
        super().__init__(f"{detail}: {cause}")

    @property
    def error_type(self) -> Optional[ErrorType]:
        if isinstance(self.cause, CommandFailed):
            return self.cause.error_type
        return None


def copy_node_to_node(source: Node, destination: Node, path: str, timeout: Optional[int] = None):
    """
    Copy path from source to the same path on destination
    Raises:
        CopyFailed: the source file could not be read or the destination
            write failed
    """
    logger.debug("Copying %s from %s to %s", path, source.name, destination.name)
    try:
        data = source.read_file(path, timeout=timeout)
    except (CommandFailed, ValueError) as err:
        raise CopyFailed(source.name, destination.name, path, "read", err) from err
    try:
        destination.write_file(path, data, mode=file_mode(path), timeout=timeout)
    except CommandFailed as err:
        raise CopyFailed(source.name, destination.name, path, "write", err) from err
