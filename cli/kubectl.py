"""
kubectl command wrapper with fluent API
"""
from typing import Optional
from .base import CommandSpec, CommandWrapper


class Kubectl(CommandWrapper):
    """Wrapper for kubectl commands"""
    def __init__(self):
        """Initialize with default settings"""
        self._kubeconfig: Optional[str] = None

    def kubeconfig(self, path: str) -> "Kubectl":
        """Set kubeconfig file (returns self for chaining)."""
        self._kubeconfig = path
        return self

    def _base_args(self):
        if self._kubeconfig:
            return [f"--kubeconfig={self._kubeconfig}"]
        return []

    def taint_remove_all(self, key: str) -> CommandSpec:
        """Generate command removing a taint from every node"""
        if not key.endswith("-"):
            # kubectl removes a taint when its spec ends with '-'
            key = f"{key}-"
        return CommandSpec("kubectl", self._base_args() + ["taint", "nodes", "--all", key])
