"""Domain port definitions for adapters."""

from __future__ import annotations

from .cluster import (
    AccessReviewer,
    ClusterAccessError,
    PolicyObjectNotFoundError,
    PolicyObjectReader,
)
from .reconciling import PolicyReconciler, ReconcileError

__all__ = [
    "AccessReviewer",
    "ClusterAccessError",
    "PolicyObjectNotFoundError",
    "PolicyObjectReader",
    "PolicyReconciler",
    "ReconcileError",
]
