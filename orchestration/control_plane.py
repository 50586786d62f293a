"""Control-plane bootstrap: kubeadm init on one node, certificates to the others."""
from __future__ import annotations
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple
from cli import CommandSpec, Kubeadm, Kubectl
from libs.logger import get_logger
from libs.status import Status
from nodes import (
    CommandFailed,
    CopyFailed,
    NoControlPlaneNodeError,
    Node,
    bootstrap_control_plane_node,
    copy_node_to_node,
    run_command,
    secondary_control_plane_nodes,
)
from .errors import BootstrapError, BootstrapErrorKind
logger = get_logger(__name__)

# Written by the kubeadm config generation step before this runs
KUBEADM_CONFIG_PATH = "/kind/kubeadm.conf"
ADMIN_KUBECONFIG = "/etc/kubernetes/admin.conf"
CONTROL_PLANE_TAINT = "node-role.kubernetes.io/master"

# Copied from the bootstrap node to every other control-plane node, in this order
CONTROL_PLANE_ARTIFACTS: Tuple[str, ...] = (
    # admin kubeconfig, so any control-plane node can hand it out later
    ADMIN_KUBECONFIG,
    "/etc/kubernetes/pki/ca.crt",
    "/etc/kubernetes/pki/ca.key",
    "/etc/kubernetes/pki/front-proxy-ca.crt",
    "/etc/kubernetes/pki/front-proxy-ca.key",
    "/etc/kubernetes/pki/sa.pub",
    "/etc/kubernetes/pki/sa.key",
    # stacked etcd only; external etcd would bring its own CA
    "/etc/kubernetes/pki/etcd/ca.crt",
    "/etc/kubernetes/pki/etcd/ca.key",
)


class BootstrapState(Enum):
    """Bootstrap progress; ABORTED is reachable from every state but DONE"""
    INIT = "init"
    INITIALIZING = "initializing"
    PROPAGATING = "propagating"
    POST_ADJUSTING = "post_adjusting"
    DONE = "done"
    ABORTED = "aborted"


@dataclass(frozen=True)
class BootstrapPlan:
    """Everything a bootstrap run will do, decided before any command runs"""
    bootstrap_node: Node
    secondaries: Tuple[Node, ...]
    node_count: int

    @property
    def copies(self) -> List[Tuple[Node, str]]:
        """(destination, path) pairs: secondaries outer, artifacts inner"""
        return [(node, path) for node in self.secondaries for path in CONTROL_PLANE_ARTIFACTS]

    @property
    def remove_taint(self) -> bool:
        """A single node cluster must schedule workloads on its control plane"""
        return self.node_count == 1


def plan_bootstrap(nodes: Sequence[Node]) -> BootstrapPlan:
    """
    Decide bootstrap node, secondaries and post-init steps for nodes
    Raises:
        NoControlPlaneNodeError: no control-plane node in nodes
    """
    return BootstrapPlan(
        bootstrap_node=bootstrap_control_plane_node(nodes),
        secondaries=tuple(secondary_control_plane_nodes(nodes)),
        node_count=len(nodes),
    )


def kubeadm_init_command() -> CommandSpec:
    """kubeadm init with the fixed bootstrap flags"""
    return (
        Kubeadm()
        # preflight checks have side effects and tell us little in containers
        .skip_phase("preflight")
        .config(KUBEADM_CONFIG_PATH)
        .skip_token_print()
        # verbose output ends up in the debug log
        .verbosity(6)
        .init()
    )


def remove_taint_command() -> CommandSpec:
    """kubectl command lifting the control-plane NoSchedule taint from all nodes"""
    return Kubectl().kubeconfig(ADMIN_KUBECONFIG).taint_remove_all(CONTROL_PLANE_TAINT)


class ControlPlaneBootstrap:
    """One bootstrap run over a fixed node set"""

    def __init__(
        self,
        nodes: Iterable[Node],
        status: Optional[Status] = None,
        cancel_event: Optional[threading.Event] = None,
        init_timeout: Optional[int] = None,
        command_timeout: Optional[int] = None,
    ):
        """
        Args:
            nodes: All cluster nodes; not modified
            status: Progress reporter (a new Status if None)
            cancel_event: When set, the run aborts before its next blocking step
            init_timeout: Timeout for kubeadm init in seconds
            command_timeout: Timeout for every other command in seconds
        """
        self.nodes: Tuple[Node, ...] = tuple(nodes)
        self.status = status or Status()
        self.cancel_event = cancel_event
        self.init_timeout = init_timeout
        self.command_timeout = command_timeout
        self.state = BootstrapState.INIT
        self.plan: Optional[BootstrapPlan] = None
        self.copied: List[Tuple[str, str]] = []

    @property
    def bootstrap_node(self) -> Optional[Node]:
        return self.plan.bootstrap_node if self.plan else None

    @property
    def secondaries(self) -> List[Node]:
        return list(self.plan.secondaries) if self.plan else []

    def run(self) -> BootstrapPlan:
        """
        Run the bootstrap to completion
        Returns:
            The plan that was carried out
        Raises:
            BootstrapError: the first step that failed
        """
        if self.state is not BootstrapState.INIT:
            raise RuntimeError(f"bootstrap already ran (state: {self.state.value})")
        with self.status.running("Starting control-plane"):
            try:
                self._select_nodes()
                self._init()
                self._propagate()
                self._post_adjust()
            except BootstrapError as err:
                self._transition(BootstrapState.ABORTED)
                logger.debug("Control-plane bootstrap aborted: %s", err.kind.value)
                raise
            except Exception:
                self._transition(BootstrapState.ABORTED)
                raise
            self._transition(BootstrapState.DONE)
            self.status.end(True)
        return self.plan

    def _transition(self, state: BootstrapState):
        logger.debug("Control-plane bootstrap: %s -> %s", self.state.value, state.value)
        self.state = state

    def _check_cancelled(self):
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise BootstrapError(BootstrapErrorKind.CANCELLED, f"control-plane bootstrap cancelled while {self.state.value}")

    @staticmethod
    def _log_output(lines: List[str], failed: bool = False):
        if not lines:
            return
        text = "\n".join(lines)
        if failed:
            logger.error("Command output:\n%s", text)
        else:
            logger.debug("Command output:\n%s", text)

    def _select_nodes(self):
        try:
            self.plan = plan_bootstrap(self.nodes)
        except NoControlPlaneNodeError as err:
            raise BootstrapError(
                BootstrapErrorKind.NO_CONTROL_PLANE_NODE, "failed to select bootstrap control-plane node", cause=err
            ) from err
        logger.info(
            "Bootstrap node: %s, secondary control-plane nodes: %s",
            self.plan.bootstrap_node.name,
            ", ".join(node.name for node in self.plan.secondaries) or "none",
        )
        self._transition(BootstrapState.INITIALIZING)

    def _init(self):
        self._check_cancelled()
        node = self.plan.bootstrap_node
        logger.info("Running kubeadm init on %s", node.name)
        try:
            result = run_command(node, kubeadm_init_command(), timeout=self.init_timeout)
        except CommandFailed as err:
            self._log_output(err.lines, failed=True)
            raise BootstrapError(
                BootstrapErrorKind.INIT_FAILED, "failed to init node with kubeadm", cause=err, node=node.name
            ) from err
        self._log_output(result.lines)
        self._transition(BootstrapState.PROPAGATING)

    def _propagate(self):
        source = self.plan.bootstrap_node
        for destination, path in self.plan.copies:
            self._check_cancelled()
            try:
                copy_node_to_node(source, destination, path, timeout=self.command_timeout)
            except CopyFailed as err:
                if isinstance(err.cause, CommandFailed):
                    self._log_output(err.cause.lines, failed=True)
                logger.error(
                    "Propagation stopped at %s on %s after %d of %d copies",
                    path, destination.name, len(self.copied), len(self.plan.copies),
                )
                raise BootstrapError(
                    BootstrapErrorKind.PROPAGATION_FAILED,
                    f"failed to copy {path} to node {destination.name}",
                    cause=err,
                    node=destination.name,
                    path=path,
                ) from err
            self.copied.append((destination.name, path))
        if self.copied:
            logger.info("Copied %d control-plane files to %d node(s)", len(self.copied), len(self.plan.secondaries))
        self._transition(BootstrapState.POST_ADJUSTING)

    def _post_adjust(self):
        if not self.plan.remove_taint:
            logger.debug("Keeping control-plane taint on a %d node cluster", self.plan.node_count)
            return
        self._check_cancelled()
        node = self.plan.bootstrap_node
        logger.info("Removing control-plane taint on single node cluster")
        try:
            result = run_command(node, remove_taint_command(), timeout=self.command_timeout)
        except CommandFailed as err:
            self._log_output(err.lines, failed=True)
            raise BootstrapError(
                BootstrapErrorKind.TAINT_REMOVAL_FAILED, "failed to remove master taint", cause=err, node=node.name
            ) from err
        self._log_output(result.lines)


def bootstrap_control_plane(
    nodes: Iterable[Node],
    status: Optional[Status] = None,
    cancel_event: Optional[threading.Event] = None,
    init_timeout: Optional[int] = None,
    command_timeout: Optional[int] = None,
) -> ControlPlaneBootstrap:
    """Bootstrap the control plane on nodes; raises BootstrapError on the first failure"""
    bootstrap = ControlPlaneBootstrap(
        nodes,
        status=status,
        cancel_event=cancel_event,
        init_timeout=init_timeout,
        command_timeout=command_timeout,
    )
    bootstrap.run()
    return bootstrap
