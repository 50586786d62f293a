"""
Select nodes by role and pick the bootstrap control-plane node
"""
from typing import List, Sequence
from .base import Node, NodeRole


class NoControlPlaneNodeError(LookupError):
    """Raised when a node set has no control-plane node."""


def select_nodes_by_role(nodes: Sequence[Node], role) -> List[Node]:
    """Return nodes with the given role, keeping input order"""
    role = NodeRole(role)
    return [node for node in nodes if node.role is role]


def control_plane_nodes(nodes: Sequence[Node]) -> List[Node]:
    """Return control-plane nodes sorted by name"""
    return sorted(select_nodes_by_role(nodes, NodeRole.CONTROL_PLANE), key=lambda node: node.name)


def bootstrap_control_plane_node(nodes: Sequence[Node]) -> Node:
    """
    Return the control-plane node that runs kubeadm init
    The same node set always yields the same node.
    Raises:
        NoControlPlaneNodeError: no node has the control-plane role
    """
    control_plane = control_plane_nodes(nodes)
    if not control_plane:
        raise NoControlPlaneNodeError(
            f"expected at least one {NodeRole.CONTROL_PLANE.value} node, got {len(nodes)} node(s) without one"
        )
    return control_plane[0]


def secondary_control_plane_nodes(nodes: Sequence[Node]) -> List[Node]:
    """Return every control-plane node except the bootstrap one, in name order"""
    return control_plane_nodes(nodes)[1:]
