"""Init command: bootstrap the control plane on configured nodes."""
from __future__ import annotations
import sys
from dataclasses import dataclass, field
from typing import List, Optional, TYPE_CHECKING
from actions import KubeadmInitAction
from libs.command import Command
from libs.logger import get_logger
from libs.status import Status
from nodes import NoControlPlaneNodeError, Node, nodes_from_config
from orchestration import kubeadm_init_command, plan_bootstrap, remove_taint_command
if TYPE_CHECKING:
    from services.lxc import LXCService
    from services.pct import PCTService
logger = get_logger(__name__)


@dataclass
class Init(Command):
    """Runs kubeadm init and certificate propagation."""
    lxc_service: Optional["LXCService"] = field(default=None)
    pct_service: Optional["PCTService"] = field(default=None)

    def run(self, args):
        """Execute the bootstrap, or only log its plan with --planonly."""
        nodes = nodes_from_config(self.cfg, self.pct_service)
        if getattr(args, "planonly", False):
            self._log_plan(nodes)
            logger.info("")
            logger.info("Plan-only mode: Exiting without executing bootstrap.")
            return
        if not self.lxc_service.connect():
            logger.error("Failed to connect to LXC host %s", self.cfg.lxc_host)
            sys.exit(1)
        try:
            self.banner(f"Bootstrapping control plane of cluster {self.cfg.name}")
            action = KubeadmInitAction(nodes=nodes, cfg=self.cfg, status=Status())
            if not action.execute():
                logger.error("Error during control-plane bootstrap: %s", action.error)
                sys.exit(1)
        finally:
            self.lxc_service.disconnect()

    def _log_plan(self, nodes: List[Node]):
        """Log every step the bootstrap would take."""
        try:
            plan = plan_bootstrap(nodes)
        except NoControlPlaneNodeError as err:
            logger.error("Cannot plan bootstrap: %s", err)
            sys.exit(1)
        self.banner(f"Bootstrap plan for cluster {self.cfg.name}")
        step = 1
        logger.info("[%d] %s: %s", step, plan.bootstrap_node.name, kubeadm_init_command())
        for destination, path in plan.copies:
            step += 1
            logger.info("[%d] copy %s: %s -> %s", step, path, plan.bootstrap_node.name, destination.name)
        if plan.remove_taint:
            step += 1
            logger.info("[%d] %s: %s", step, plan.bootstrap_node.name, remove_taint_command())
        logger.info("Total steps: %d", step)
