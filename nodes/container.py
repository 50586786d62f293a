"""
LXC container backed nodes
"""
from typing import TYPE_CHECKING, List, Optional
from .base import Node
if TYPE_CHECKING:
    from libs.config import ClusterConfig
    from services.pct import PCTService


class ContainerNode(Node):
    """Node running in an LXC container, reached through pct exec on the LXC host"""

    def __init__(self, name: str, role, container_id: int, pct_service: "PCTService", hostname: Optional[str] = None):
        super().__init__(name, role)
        self.container_id = container_id
        self.hostname = hostname or name
        self.pct_service = pct_service

    def exec(self, command: str, timeout: Optional[int] = None) -> tuple[Optional[str], Optional[int]]:
        return self.pct_service.execute(self.container_id, command, timeout=timeout)

    def __repr__(self) -> str:
        return f"ContainerNode(name={self.name!r}, role={self.role.value!r}, container_id={self.container_id})"


def nodes_from_config(cfg: "ClusterConfig", pct_service: "PCTService") -> List[ContainerNode]:
    """Build one ContainerNode per configured node, in configuration order"""
    return [
        ContainerNode(
            name=node_cfg.name,
            role=node_cfg.role,
            container_id=node_cfg.id,
            pct_service=pct_service,
            hostname=node_cfg.hostname,
        )
        for node_cfg in cfg.nodes
    ]
