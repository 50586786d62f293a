"""
kubeadm init action
"""
import logging
from orchestration import BootstrapError, ControlPlaneBootstrap
from .base import Action

logger = logging.getLogger(__name__)


class KubeadmInitAction(Action):
    """Action running kubeadm init and sharing its certificates with the other control-plane nodes"""
    description = "kubeadm init"

    def execute(self) -> bool:
        """Execute the control-plane bootstrap."""
        init_timeout = self.cfg.timeouts.kubeadm_init if self.cfg else None
        command_timeout = self.cfg.timeouts.command if self.cfg else None
        bootstrap = ControlPlaneBootstrap(
            self.nodes,
            status=self.status,
            cancel_event=self.cancel_event,
            init_timeout=init_timeout,
            command_timeout=command_timeout,
        )
        try:
            bootstrap.run()
        except BootstrapError as err:
            logger.error("Control-plane bootstrap failed (%s): %s", err.kind.value, err)
            self.error = err
            return False
        logger.info("Control-plane bootstrap completed on %s", bootstrap.bootstrap_node.name)
        return True
