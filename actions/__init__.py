"""
Actions for cluster setup
"""
from .base import Action
from .kubeadm_init import KubeadmInitAction

__all__ = [
    "Action",
    "KubeadmInitAction",
]
