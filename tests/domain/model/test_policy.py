from __future__ import annotations

from clusterdiag.domain.model import ChangedPolicyObject, PolicyObjectRef
from tests.helpers.policy import make_scc


def test_normalized_sorts_and_deduplicates_unordered_lists() -> None:
    scc = make_scc(
        "restricted",
        users=("b", "a", "b"),
        groups=("z", "y"),
        volumes=("secret", "configMap"),
        required_drop_capabilities=("SETUID", "KILL"),
    )

    normalized = scc.normalized()

    assert normalized.users == ("a", "b")
    assert normalized.groups == ("y", "z")
    assert normalized.volumes == ("configMap", "secret")
    assert normalized.required_drop_capabilities == ("KILL", "SETUID")
    assert normalized.normalized() == normalized


def test_changed_object_is_a_named_ref() -> None:
    changed = ChangedPolicyObject("restricted", proposed=make_scc("restricted"))

    assert isinstance(changed, PolicyObjectRef)
    assert changed.name == "restricted"
    assert changed.proposed.name == "restricted"
