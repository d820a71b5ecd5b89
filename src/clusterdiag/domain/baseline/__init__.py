"""Built-in policy baseline and the reconciler that compares it to the cluster."""

from __future__ import annotations

from .defaults import default_access, default_security_context_constraints
from .reconcile import BaselineReconciler, compute_updated_scc

__all__ = [
    "BaselineReconciler",
    "compute_updated_scc",
    "default_access",
    "default_security_context_constraints",
]
