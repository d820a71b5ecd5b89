"""Run diagnostics behind their requirement and capability pre-checks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from clusterdiag.domain.model import DiagnosticResult

    from .base import Diagnostic

log = getLogger(__name__)


class DiagnosticStatus(StrEnum):
    COMPLETED = "completed"
    CANNOT_RUN = "cannot-run"
    SKIPPED = "skipped"


@dataclass(slots=True)
class DiagnosticOutcome:
    """What happened to one diagnostic during a run.

    ``result`` is only set for completed diagnostics; an empty result means the
    check ran and found nothing, which is distinct from ``CANNOT_RUN``.
    """

    name: str
    description: str
    status: DiagnosticStatus
    reason: str | None = None
    result: DiagnosticResult | None = None


def run_diagnostics(
    diagnostics: Iterable[Diagnostic],
    *,
    client_available: bool = True,
    host_available: bool = False,
) -> list[DiagnosticOutcome]:
    """Execute each diagnostic in order and report one outcome per diagnostic."""

    outcomes: list[DiagnosticOutcome] = []
    for diagnostic in diagnostics:
        outcome = _run_one(
            diagnostic,
            client_available=client_available,
            host_available=host_available,
        )
        _log_outcome(outcome)
        outcomes.append(outcome)
    return outcomes


def _run_one(
    diagnostic: Diagnostic,
    *,
    client_available: bool,
    host_available: bool,
) -> DiagnosticOutcome:
    def outcome(status: DiagnosticStatus, reason: str | None = None) -> DiagnosticOutcome:
        return DiagnosticOutcome(
            name=diagnostic.name,
            description=diagnostic.description,
            status=status,
            reason=reason,
        )

    requirements = diagnostic.requirements
    if requirements.client and not client_available:
        return outcome(DiagnosticStatus.SKIPPED, "requires a cluster client")
    if requirements.host and not host_available:
        return outcome(DiagnosticStatus.SKIPPED, "requires access to the host")

    try:
        allowed = diagnostic.can_run()
    except Exception as exc:  # noqa: BLE001
        return outcome(DiagnosticStatus.CANNOT_RUN, f"unable to determine permissions: {exc}")
    if not allowed:
        return outcome(DiagnosticStatus.CANNOT_RUN, "current user is not permitted to run it")

    completed = outcome(DiagnosticStatus.COMPLETED)
    completed.result = diagnostic.check()
    return completed


def _log_outcome(outcome: DiagnosticOutcome) -> None:
    if outcome.status is not DiagnosticStatus.COMPLETED:
        log.info("Skipping diagnostic %s (%s): %s", outcome.name, outcome.status, outcome.reason)
        return
    log.info("Running diagnostic: %s", outcome.name)
    log.info("Description: %s", outcome.description)
    if outcome.result is None:
        return
    for finding in outcome.result.findings:
        log.log(finding.severity.log_level, "[%s] %s", finding.code, finding.message)
    log.info(
        "Diagnostic %s finished: errors=%s, warnings=%s",
        outcome.name,
        len(outcome.result.errors()),
        len(outcome.result.warnings()),
    )
