from __future__ import annotations

import pytest

from clusterdiag.config import ClusterConfig, ResilienceConfig, RetryPolicy
from clusterdiag.domain.diagnostics import SecurityContextConstraintsDiagnostic
from tests.helpers.policy import FakeAccessReviewer, FakePolicyReader, FakeReconciler


@pytest.fixture
def reconciler() -> FakeReconciler:
    return FakeReconciler()


@pytest.fixture
def reader() -> FakePolicyReader:
    return FakePolicyReader()


@pytest.fixture
def access_reviewer() -> FakeAccessReviewer:
    return FakeAccessReviewer()


@pytest.fixture
def scc_diagnostic(
    reconciler: FakeReconciler,
    reader: FakePolicyReader,
    access_reviewer: FakeAccessReviewer,
) -> SecurityContextConstraintsDiagnostic:
    return SecurityContextConstraintsDiagnostic(
        reconciler=reconciler,
        reader=reader,
        access_reviewer=access_reviewer,
    )


@pytest.fixture
def cluster_config() -> ClusterConfig:
    return ClusterConfig(
        api_url="https://api.cluster.test:6443",
        resilience=ResilienceConfig(
            name="cluster-test",
            base_url="https://api.cluster.test:6443",
            retry=RetryPolicy(total=0),
            ratelimit=None,
            default_headers={"Authorization": "Bearer test-token"},
        ),
    )
