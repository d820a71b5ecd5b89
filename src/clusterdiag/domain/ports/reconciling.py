"""Port for the baseline reconciliation engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from clusterdiag.domain.model import PolicyObjectRef, ReconcileStrategy


class ReconcileError(RuntimeError):
    """Raised when a reconciliation pass cannot compute its changed set."""


@runtime_checkable
class PolicyReconciler(Protocol):
    """Callable port returning the policy objects that differ from the baseline.

    Implementations never write to the cluster; the returned sequence is what a
    reconcile run *would* change, in the engine's iteration order.
    """

    def __call__(
        self,
        strategy: ReconcileStrategy,
        *,
        namespace: str,
    ) -> Sequence[PolicyObjectRef]:
        ...


__all__ = ["PolicyReconciler", "ReconcileError"]
