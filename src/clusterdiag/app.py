"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from clusterdiag.adapters.cluster import ClusterClient, ClusterPolicyReader
from clusterdiag.domain.baseline import BaselineReconciler
from clusterdiag.domain.diagnostics import (
    SecurityContextConstraintsDiagnostic,
    run_diagnostics,
)

if TYPE_CHECKING:
    from clusterdiag.config import ClusterConfig
    from clusterdiag.domain.diagnostics import DiagnosticOutcome


log = getLogger(__name__)


def build_scc_diagnostic(
    cluster: ClusterClient,
    *,
    infra_namespace: str | None = None,
    names: frozenset[str] | None = None,
) -> SecurityContextConstraintsDiagnostic:
    """Wire the SCC drift diagnostic to a cluster client."""

    reader = ClusterPolicyReader(cluster)
    return SecurityContextConstraintsDiagnostic(
        reconciler=BaselineReconciler(reader=reader, names=names),
        reader=reader,
        access_reviewer=cluster,
        infra_namespace=infra_namespace or cluster.infra_namespace,
    )


def run_policy_diagnostics(
    *,
    cluster: ClusterClient | None = None,
    config: ClusterConfig | None = None,
    names: frozenset[str] | None = None,
) -> list[DiagnosticOutcome]:
    """Audit the cluster's default policy objects and return one outcome per diagnostic."""

    effective_cluster = cluster or ClusterClient(config=config)
    diagnostic = build_scc_diagnostic(effective_cluster, names=names)
    log.info(
        "Starting policy diagnostics: infra_namespace=%s, names=%s",
        diagnostic.infra_namespace,
        sorted(names) if names else "all",
    )

    outcomes = run_diagnostics([diagnostic])

    finding_count = sum(len(o.result.findings) for o in outcomes if o.result is not None)
    log.info(
        "Finished policy diagnostics: diagnostics=%s, findings=%s",
        len(outcomes),
        finding_count,
    )
    return outcomes
