"""High-level CLI command implementations."""
from .init import Init  # noqa: F401
from .status import ClusterStatus  # noqa: F401
__all__ = ["Init", "ClusterStatus"]
