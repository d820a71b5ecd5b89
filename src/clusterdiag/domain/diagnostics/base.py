"""Contract shared by every diagnostic the runner can execute."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from clusterdiag.domain.model import DiagnosticResult


class DiagnosticUnavailableError(RuntimeError):
    """Raised by ``can_run`` when a diagnostic lacks a collaborator it needs."""


@dataclass(frozen=True, slots=True)
class Requirements:
    """Environment a diagnostic needs before it is worth probing."""

    client: bool = True
    host: bool = False


@runtime_checkable
class Diagnostic(Protocol):
    """A named, self-describing check.

    ``can_run`` answers whether the check may run at all and raises when that
    cannot be determined. ``check`` never raises for collaborator failures; it
    reports them as findings on the returned result.
    """

    @property
    def name(self) -> str: ...

    @property
    def description(self) -> str: ...

    @property
    def requirements(self) -> Requirements: ...

    def can_run(self) -> bool: ...

    def check(self) -> DiagnosticResult: ...
