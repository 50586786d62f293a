"""
kubeadm command wrapper with fluent API
"""
from typing import List, Optional
from .base import CommandSpec, CommandWrapper


class Kubeadm(CommandWrapper):
    """Wrapper for kubeadm commands"""
    def __init__(self):
        """Initialize with default settings"""
        self._config: Optional[str] = None
        self._skip_phases: List[str] = []
        self._skip_token_print: bool = False
        self._verbosity: Optional[int] = None

    def config(self, path: str) -> "Kubeadm":
        """Set kubeadm config file (returns self for chaining)."""
        self._config = path
        return self

    def skip_phase(self, phase: str) -> "Kubeadm":
        """Add a phase to skip (returns self for chaining)."""
        self._skip_phases.append(phase)
        return self

    def skip_token_print(self, value: bool = True) -> "Kubeadm":
        """Do not print the bootstrap token (returns self for chaining)."""
        self._skip_token_print = value
        return self

    def verbosity(self, level: int) -> "Kubeadm":
        """Set log verbosity (returns self for chaining)."""
        self._verbosity = level
        return self

    def init(self) -> CommandSpec:
        """Generate kubeadm init command"""
        args = ["init"]
        if self._skip_phases:
            args.append(f"--skip-phases={','.join(self._skip_phases)}")
        if self._config:
            args.append(f"--config={self._config}")
        if self._skip_token_print:
            args.append("--skip-token-print")
        if self._verbosity is not None:
            args.append(f"--v={self._verbosity}")
        return CommandSpec("kubeadm", args)
