"""Diagnostic findings and the result accumulator they are collected in."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum


class Severity(StrEnum):
    """Closed set of severities a diagnostic can attach to a finding."""

    ERROR = "error"
    WARNING = "warning"
    DEBUG = "debug"

    @property
    def log_level(self) -> int:
        return _LOG_LEVELS[self]


_LOG_LEVELS: dict[Severity, int] = {
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
    Severity.DEBUG: logging.DEBUG,
}


@dataclass(frozen=True, slots=True)
class Finding:
    """One coded observation emitted by a diagnostic.

    ``cause`` keeps the underlying exception for callers that want a traceback;
    it is excluded from equality so repeated runs over the same state compare equal.
    """

    code: str
    severity: Severity
    message: str
    cause: BaseException | None = field(default=None, compare=False, repr=False)


@dataclass(slots=True)
class DiagnosticResult:
    """Append-only accumulator for the findings of one diagnostic run."""

    name: str
    aborted: bool = False
    _findings: list[Finding] = field(default_factory=list[Finding], repr=False)

    @property
    def findings(self) -> tuple[Finding, ...]:
        return tuple(self._findings)

    def add_error(self, code: str, cause: BaseException | None, message: str) -> None:
        self._findings.append(Finding(code, Severity.ERROR, message, cause))

    def add_warning(self, code: str, cause: BaseException | None, message: str) -> None:
        self._findings.append(Finding(code, Severity.WARNING, message, cause))

    def add_debug(self, code: str, message: str) -> None:
        self._findings.append(Finding(code, Severity.DEBUG, message))

    def errors(self) -> tuple[Finding, ...]:
        return self._by_severity(Severity.ERROR)

    def warnings(self) -> tuple[Finding, ...]:
        return self._by_severity(Severity.WARNING)

    def _by_severity(self, severity: Severity) -> tuple[Finding, ...]:
        return tuple(finding for finding in self._findings if finding.severity is severity)
