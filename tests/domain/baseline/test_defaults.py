from __future__ import annotations

from clusterdiag.domain.baseline import default_access, default_security_context_constraints
from clusterdiag.domain.model import StrategyType


def test_baseline_contains_the_default_sccs_in_order() -> None:
    names = [scc.name for scc in default_security_context_constraints("openshift-infra")]

    assert names == [
        "privileged",
        "nonroot",
        "hostmount-anyuid",
        "hostaccess",
        "restricted",
        "anyuid",
        "hostnetwork",
    ]


def test_service_account_grants_follow_infra_namespace() -> None:
    _groups, users = default_access("custom-infra")

    assert "system:serviceaccount:custom-infra:build-controller" in users["privileged"]
    assert users["hostmount-anyuid"] == (
        "system:serviceaccount:custom-infra:pv-recycler-controller",
    )


def test_restricted_is_granted_to_authenticated_users() -> None:
    by_name = {scc.name: scc for scc in default_security_context_constraints("openshift-infra")}
    restricted = by_name["restricted"]

    assert restricted.groups == ("system:authenticated",)
    assert restricted.run_as_user is StrategyType.MUST_RUN_AS_RANGE
    assert not restricted.allow_privileged_container
    assert by_name["anyuid"].priority == 10
    assert by_name["privileged"].allow_privileged_container
