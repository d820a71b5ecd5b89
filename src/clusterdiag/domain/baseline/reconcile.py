"""Compute which baseline SCCs a reconcile run would change."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from logging import getLogger
from typing import TYPE_CHECKING

from clusterdiag.domain.model import ChangedPolicyObject, ReconcileStrategy
from clusterdiag.domain.ports import PolicyObjectNotFoundError, ReconcileError

from .defaults import default_security_context_constraints

if TYPE_CHECKING:
    from collections.abc import Callable

    from clusterdiag.domain.model import SecurityContextConstraints
    from clusterdiag.domain.ports import PolicyObjectReader

type BaselineFactory = Callable[[str], tuple[SecurityContextConstraints, ...]]

log = getLogger(__name__)


def compute_updated_scc(
    expected: SecurityContextConstraints,
    actual: SecurityContextConstraints,
    strategy: ReconcileStrategy,
) -> SecurityContextConstraints | None:
    """Return the object a reconcile would write over ``actual``, or ``None`` if unchanged.

    Under :attr:`ReconcileStrategy.UNION` the live users and groups are kept
    alongside the expected ones, a live priority wins over the default, and live
    labels and annotations win over the defaults. Only missing grants or
    differing settings then count as a change.
    """

    updated = expected
    if strategy is ReconcileStrategy.UNION:
        updated = replace(
            expected,
            users=(*actual.users, *expected.users),
            groups=(*actual.groups, *expected.groups),
            priority=actual.priority if actual.priority is not None else expected.priority,
            labels={**expected.labels, **actual.labels},
            annotations={**expected.annotations, **actual.annotations},
        )

    updated = updated.normalized()
    if updated == actual.normalized():
        return None
    return updated


@dataclass(slots=True)
class BaselineReconciler:
    """Reconciler port implementation backed by the built-in SCC baseline.

    ``names`` restricts the pass to the given baseline objects. The reconciler
    only reads from the cluster.
    """

    reader: PolicyObjectReader
    names: frozenset[str] | None = None
    baseline: BaselineFactory = field(default=default_security_context_constraints)

    def __call__(
        self,
        strategy: ReconcileStrategy,
        *,
        namespace: str,
    ) -> list[ChangedPolicyObject]:
        changed: list[ChangedPolicyObject] = []
        for expected in self.baseline(namespace):
            if self.names is not None and expected.name not in self.names:
                continue
            try:
                actual = self.reader.get(expected.name)
            except PolicyObjectNotFoundError:
                log.debug("Baseline scc/%s is absent and would be created", expected.name)
                changed.append(ChangedPolicyObject(expected.name, proposed=expected.normalized()))
                continue
            except Exception as exc:
                raise ReconcileError(f"unable to read scc/{expected.name}: {exc}") from exc

            updated = compute_updated_scc(expected, actual, strategy)
            if updated is not None:
                log.debug("scc/%s differs from baseline under %s", expected.name, strategy)
                changed.append(ChangedPolicyObject(expected.name, proposed=updated))
        return changed
