"""Domain model exports."""

from __future__ import annotations

from .findings import DiagnosticResult, Finding, Severity
from .policy import (
    DEFAULT_INFRA_NAMESPACE,
    SCC_API_GROUP,
    SCC_RESOURCE,
    ChangedPolicyObject,
    PolicyObjectRef,
    ReconcileStrategy,
    SecurityContextConstraints,
    StrategyType,
)

__all__ = [
    "DEFAULT_INFRA_NAMESPACE",
    "SCC_API_GROUP",
    "SCC_RESOURCE",
    "ChangedPolicyObject",
    "DiagnosticResult",
    "Finding",
    "PolicyObjectRef",
    "ReconcileStrategy",
    "SecurityContextConstraints",
    "Severity",
    "StrategyType",
]
