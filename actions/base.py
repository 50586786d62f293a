"""
Base Action class for cluster setup steps
"""
import logging
import threading
from typing import List, Optional, TYPE_CHECKING
if TYPE_CHECKING:
    from libs.config import ClusterConfig
    from libs.status import Status
    from nodes import Node
logger = logging.getLogger(__name__)


class Action:
    """Base class for actions run against the cluster nodes"""
    description: str = ""

    def __init__(
        self,
        nodes: Optional[List["Node"]] = None,
        cfg: Optional["ClusterConfig"] = None,
        status: Optional["Status"] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        """
        Initialize action
        Args:
            nodes: All cluster nodes
            cfg: Cluster configuration
            status: Progress reporter
            cancel_event: Set by the caller to stop the action early
        """
        self.nodes = list(nodes or [])
        self.cfg = cfg
        self.status = status
        self.cancel_event = cancel_event
        # Exception that made execute() return False, if any
        self.error: Optional[Exception] = None

    def execute(self) -> bool:
        """
        Execute the action
        Returns:
            True if successful, False otherwise
        """
        raise NotImplementedError("Subclasses must implement execute()")
