"""Errors raised by control-plane bootstrap."""
from enum import Enum
from typing import Optional


class BootstrapErrorKind(Enum):
    """Which bootstrap step failed"""
    NO_CONTROL_PLANE_NODE = "no_control_plane_node"
    INIT_FAILED = "init_failed"
    PROPAGATION_FAILED = "propagation_failed"
    TAINT_REMOVAL_FAILED = "taint_removal_failed"
    CANCELLED = "cancelled"


class BootstrapError(RuntimeError):
    """Raised when control-plane bootstrap aborts; wraps the low level cause."""

    def __init__(
        self,
        kind: BootstrapErrorKind,
        message: str,
        cause: Optional[BaseException] = None,
        node: Optional[str] = None,
        path: Optional[str] = None,
    ):
        self.kind = kind
        self.message = message
        self.cause = cause
        self.node = node
        self.path = path
        super().__init__(f"{message}: {cause}" if cause is not None else message)
