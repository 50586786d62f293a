"""
CLI command wrappers with error parsing and structured results
"""
from .base import CommandResult, CommandSpec, ErrorType, CommandWrapper
from .pct import PCT
from .kubeadm import Kubeadm
from .kubectl import Kubectl
from .files import FileOps
__all__ = [
    "CommandResult",
    "CommandSpec",
    "ErrorType",
    "CommandWrapper",
    "PCT",
    "Kubeadm",
    "Kubectl",
    "FileOps",
]
