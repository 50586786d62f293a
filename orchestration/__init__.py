"""Orchestrators for cluster bootstrap workflows."""
from .errors import BootstrapError, BootstrapErrorKind  # noqa: F401
from .control_plane import (  # noqa: F401
    CONTROL_PLANE_ARTIFACTS,
    BootstrapPlan,
    BootstrapState,
    ControlPlaneBootstrap,
    bootstrap_control_plane,
    kubeadm_init_command,
    plan_bootstrap,
    remove_taint_command,
)
__all__ = [
    "BootstrapError",
    "BootstrapErrorKind",
    "CONTROL_PLANE_ARTIFACTS",
    "BootstrapPlan",
    "BootstrapState",
    "ControlPlaneBootstrap",
    "bootstrap_control_plane",
    "kubeadm_init_command",
    "plan_bootstrap",
    "remove_taint_command",
]
