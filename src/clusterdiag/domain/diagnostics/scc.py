"""Diagnostic comparing live SecurityContextConstraints with the built-in baseline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from clusterdiag.domain.model import (
    DEFAULT_INFRA_NAMESPACE,
    SCC_API_GROUP,
    SCC_RESOURCE,
    DiagnosticResult,
    ReconcileStrategy,
)
from clusterdiag.domain.ports import PolicyObjectNotFoundError

from .base import DiagnosticUnavailableError, Requirements

if TYPE_CHECKING:
    from collections.abc import Sequence

    from clusterdiag.domain.model import PolicyObjectRef
    from clusterdiag.domain.ports import AccessReviewer, PolicyObjectReader, PolicyReconciler

log = getLogger(__name__)

SCC_DIAGNOSTIC_NAME = "SecurityContextConstraints"

RECONCILE_FAILED = "CSD1000"
SCC_MISSING = "CSD1001"
SCC_FETCH_FAILED = "CSD1002"
SCC_WILL_RECONCILE = "CSD1003"
SCC_NON_ADDITIVE_DRIFT = "CSD1004"


class DriftCheckState(StrEnum):
    NOT_STARTED = "not-started"
    UNION_PASS_RUNNING = "union-pass-running"
    UNION_PASS_FAILED = "union-pass-failed"
    UNION_PASS_DONE = "union-pass-done"
    REPLACE_PASS_RUNNING = "replace-pass-running"
    REPLACE_PASS_FAILED = "replace-pass-failed"
    COMPLETE = "complete"


@dataclass(slots=True)
class SecurityContextConstraintsDiagnostic:
    """Check that the default SCCs are present and contain the expected permissions.

    The reconciler runs twice. The additive-only (union) pass finds baseline
    objects that are missing or lack default grants; each yields one error or
    warning. The full (replace) pass additionally finds objects whose drift a
    union merge cannot explain, such as extra grants or altered settings.
    Those are reported at debug severity only, since they are often deliberate
    local customisation and a full reconcile would discard them.
    """

    reconciler: PolicyReconciler
    reader: PolicyObjectReader
    access_reviewer: AccessReviewer | None = None
    infra_namespace: str = DEFAULT_INFRA_NAMESPACE

    @property
    def name(self) -> str:
        return SCC_DIAGNOSTIC_NAME

    @property
    def description(self) -> str:
        return (
            "Check that the default SecurityContextConstraints are present and contain "
            "the expected permissions"
        )

    @property
    def requirements(self) -> Requirements:
        return Requirements(client=True, host=False)

    def can_run(self) -> bool:
        if self.access_reviewer is None:
            raise DiagnosticUnavailableError("must have an access reviewer for the cluster")
        return self.access_reviewer.user_can("list", group=SCC_API_GROUP, resource=SCC_RESOURCE)

    def check(self) -> DiagnosticResult:
        result = DiagnosticResult(self.name)
        state = DriftCheckState.NOT_STARTED

        state = _advance(state, DriftCheckState.UNION_PASS_RUNNING)
        changed = self._reconcile(ReconcileStrategy.UNION, result)
        if changed is None:
            _advance(state, DriftCheckState.UNION_PASS_FAILED)
            return result

        seen: set[str] = set()
        for ref in changed:
            self._classify_additive(ref.name, result)
            seen.add(ref.name)
        state = _advance(state, DriftCheckState.UNION_PASS_DONE)

        state = _advance(state, DriftCheckState.REPLACE_PASS_RUNNING)
        changed = self._reconcile(ReconcileStrategy.REPLACE, result)
        if changed is None:
            _advance(state, DriftCheckState.REPLACE_PASS_FAILED)
            return result

        for ref in changed:
            if ref.name in seen:
                continue
            result.add_debug(
                SCC_NON_ADDITIVE_DRIFT,
                f"scc/{ref.name} does not match defaults. Use the "
                "`oc adm policy reconcile-sccs --additive-only=false` command to check sccs.",
            )
        _advance(state, DriftCheckState.COMPLETE)
        return result

    def _reconcile(
        self,
        strategy: ReconcileStrategy,
        result: DiagnosticResult,
    ) -> Sequence[PolicyObjectRef] | None:
        try:
            return list(self.reconciler(strategy, namespace=self.infra_namespace))
        except Exception as exc:  # noqa: BLE001
            result.add_error(
                RECONCILE_FAILED,
                exc,
                f"Error inspecting SCCs ({_pass_label(strategy)} pass): {exc}",
            )
            result.aborted = True
            return None

    def _classify_additive(self, name: str, result: DiagnosticResult) -> None:
        try:
            self.reader.get(name)
        except PolicyObjectNotFoundError:
            result.add_error(
                SCC_MISSING,
                None,
                f"scc/{name} is missing.\n\n"
                "Use the `oc adm policy reconcile-sccs` command to recreate sccs.",
            )
            return
        except Exception as exc:  # noqa: BLE001
            result.add_error(SCC_FETCH_FAILED, exc, f"Unable to get scc/{name}: {exc}")
            return
        result.add_warning(
            SCC_WILL_RECONCILE,
            None,
            f"scc/{name} will be reconciled. "
            "Use the `oc adm policy reconcile-sccs` command to check sccs.",
        )


def _pass_label(strategy: ReconcileStrategy) -> str:
    return "additive-only" if strategy is ReconcileStrategy.UNION else "full"


def _advance(current: DriftCheckState, target: DriftCheckState) -> DriftCheckState:
    log.debug("%s check: %s -> %s", SCC_DIAGNOSTIC_NAME, current, target)
    return target
