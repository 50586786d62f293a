"""
Cluster node handles and the primitives run against them
"""
from .exec import CommandFailed, run_command
from .base import Node, NodeRole
from .roles import (
    NoControlPlaneNodeError,
    bootstrap_control_plane_node,
    control_plane_nodes,
    secondary_control_plane_nodes,
    select_nodes_by_role,
)
from .copy import CopyFailed, copy_node_to_node
from .container import ContainerNode, nodes_from_config
__all__ = [
    "CommandFailed",
    "run_command",
    "Node",
    "NodeRole",
    "NoControlPlaneNodeError",
    "bootstrap_control_plane_node",
    "control_plane_nodes",
    "secondary_control_plane_nodes",
    "select_nodes_by_role",
    "CopyFailed",
    "copy_node_to_node",
    "ContainerNode",
    "nodes_from_config",
]
