"""Public interface for the cluster API adapter."""

from __future__ import annotations

from .client import ClusterAPIError, ClusterClient, ClusterPolicyReader
from .schema import SecurityContextConstraintsPayload, SelfSubjectAccessReview
from .translator import parse_security_context_constraints

__all__ = [
    "ClusterAPIError",
    "ClusterClient",
    "ClusterPolicyReader",
    "SecurityContextConstraintsPayload",
    "SelfSubjectAccessReview",
    "parse_security_context_constraints",
]
