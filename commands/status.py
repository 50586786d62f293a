"""Status command: show configured nodes and their containers."""
from dataclasses import dataclass
from libs.command import Command
from libs.logger import get_logger
from nodes import NoControlPlaneNodeError, bootstrap_control_plane_node, nodes_from_config
from services.lxc import LXCService
from services.pct import PCTService
logger = get_logger(__name__)


@dataclass
class ClusterStatus(Command):
    """Status command class."""
    lxc_service: LXCService = None
    pct_service: PCTService = None

    def run(self, args):
        """Show current cluster node status."""
        if not self.lxc_service.connect():
            logger.error("Failed to connect to LXC host %s", self.cfg.lxc_host)
            return
        try:
            self.banner(f"Cluster {self.cfg.name}")
            logger.info(
                "%d control-plane node(s), %d worker node(s)",
                len(self.cfg.control_plane), len(self.cfg.workers),
            )
            nodes = nodes_from_config(self.cfg, self.pct_service)
            try:
                bootstrap_name = bootstrap_control_plane_node(nodes).name
            except NoControlPlaneNodeError:
                logger.warning("No control-plane node configured")
                bootstrap_name = None
            for node in nodes:
                state = "running" if self.pct_service.is_running(node.container_id) else "not running"
                marker = " (bootstrap)" if node.name == bootstrap_name else ""
                logger.info(
                    "  %-25s %-14s ct %-6s %s%s",
                    node.name, node.role.value, node.container_id, state, marker,
                )
        finally:
            self.lxc_service.disconnect()
