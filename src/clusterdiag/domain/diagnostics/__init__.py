"""Diagnostics, their shared contract and the runner that executes them."""

from __future__ import annotations

from .base import Diagnostic, DiagnosticUnavailableError, Requirements
from .runner import DiagnosticOutcome, DiagnosticStatus, run_diagnostics
from .scc import (
    SCC_DIAGNOSTIC_NAME,
    DriftCheckState,
    SecurityContextConstraintsDiagnostic,
)

__all__ = [
    "SCC_DIAGNOSTIC_NAME",
    "Diagnostic",
    "DiagnosticOutcome",
    "DiagnosticStatus",
    "DiagnosticUnavailableError",
    "DriftCheckState",
    "Requirements",
    "SecurityContextConstraintsDiagnostic",
    "run_diagnostics",
]
