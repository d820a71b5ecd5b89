from __future__ import annotations

import json
from dataclasses import replace

import httpx
import pytest

from clusterdiag.adapters.cluster import ClusterAPIError, ClusterClient, ClusterPolicyReader
from clusterdiag.adapters.cluster.client import SCC_PATH, SELF_SUBJECT_ACCESS_REVIEW_PATH
from clusterdiag.config import ClusterConfig, RetryPolicy  # noqa: TC001
from clusterdiag.domain.model import SCC_API_GROUP, SCC_RESOURCE, StrategyType
from clusterdiag.domain.ports import ClusterAccessError, PolicyObjectNotFoundError
from tests.helpers.http import make_client_factory


def _scc_payload(name: str = "restricted") -> dict[str, object]:
    return {
        "apiVersion": "security.openshift.io/v1",
        "kind": "SecurityContextConstraints",
        "metadata": {
            "name": name,
            "resourceVersion": "1234",
            "annotations": {"kubernetes.io/description": "restricted denies access"},
            "labels": None,
        },
        "priority": None,
        "allowPrivilegedContainer": False,
        "allowHostDirVolumePlugin": False,
        "allowHostNetwork": False,
        "allowHostPorts": False,
        "allowHostPID": False,
        "allowHostIPC": False,
        "readOnlyRootFilesystem": False,
        "allowedCapabilities": None,
        "defaultAddCapabilities": None,
        "requiredDropCapabilities": ["KILL", "MKNOD", "SETUID", "SETGID"],
        "volumes": ["configMap", "downwardAPI", "emptyDir", "persistentVolumeClaim", "secret"],
        "seLinuxContext": {"type": "MustRunAs"},
        "runAsUser": {"type": "MustRunAsRange"},
        "fsGroup": {"type": "MustRunAs"},
        "supplementalGroups": {"type": "RunAsAny"},
        "users": [],
        "groups": ["system:authenticated"],
    }


def _status(code: int, message: str, reason: str) -> httpx.Response:
    return httpx.Response(
        code,
        json={
            "kind": "Status",
            "apiVersion": "v1",
            "status": "Failure",
            "message": message,
            "reason": reason,
            "code": code,
        },
    )


def test_get_scc_parses_payload(cluster_config: ClusterConfig) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_scc_payload())

    client = ClusterClient(config=cluster_config, client_factory=make_client_factory(handler))

    scc = client.get_security_context_constraints("restricted")

    assert seen[0].method == "GET"
    assert seen[0].url.path == f"{SCC_PATH}/restricted"
    assert seen[0].headers["Authorization"] == "Bearer test-token"
    assert scc.name == "restricted"
    assert scc.priority is None
    assert scc.allowed_capabilities == ()
    assert scc.required_drop_capabilities == ("KILL", "MKNOD", "SETUID", "SETGID")
    assert scc.run_as_user is StrategyType.MUST_RUN_AS_RANGE
    assert scc.groups == ("system:authenticated",)
    assert scc.labels == {}
    assert scc.annotations == {"kubernetes.io/description": "restricted denies access"}


def test_get_scc_maps_404_to_not_found(cluster_config: ClusterConfig) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return _status(404, 'securitycontextconstraints "anyuid" not found', "NotFound")

    client = ClusterClient(config=cluster_config, client_factory=make_client_factory(handler))

    with pytest.raises(PolicyObjectNotFoundError) as excinfo:
        client.get_security_context_constraints("anyuid")

    assert excinfo.value.name == "anyuid"
    assert isinstance(excinfo.value, LookupError)


@pytest.mark.parametrize(
    ("status_code", "message"),
    [
        (403, "securitycontextconstraints is forbidden"),
        (500, "etcdserver: request timed out"),
    ],
)
def test_get_scc_raises_api_error_with_status_message(
    cluster_config: ClusterConfig,
    status_code: int,
    message: str,
) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return _status(status_code, message, "Failure")

    client = ClusterClient(config=cluster_config, client_factory=make_client_factory(handler))

    with pytest.raises(ClusterAPIError) as excinfo:
        client.get_security_context_constraints("privileged")

    assert excinfo.value.status_code == status_code
    assert str(excinfo.value) == message
    assert not isinstance(excinfo.value, PolicyObjectNotFoundError)


def test_get_scc_rejects_non_json_body(cluster_config: ClusterConfig) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>proxy login</html>")

    client = ClusterClient(config=cluster_config, client_factory=make_client_factory(handler))

    with pytest.raises(ClusterAPIError, match="non-JSON"):
        client.get_security_context_constraints("restricted")


def test_get_scc_rejects_malformed_payload(cluster_config: ClusterConfig) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        payload = _scc_payload()
        payload["runAsUser"] = {"type": "Sometimes"}
        return httpx.Response(200, json=payload)

    client = ClusterClient(config=cluster_config, client_factory=make_client_factory(handler))

    with pytest.raises(ClusterAPIError, match="Malformed scc/restricted"):
        client.get_security_context_constraints("restricted")


def test_transport_errors_become_cluster_access_errors(cluster_config: ClusterConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = ClusterClient(config=cluster_config, client_factory=make_client_factory(handler))

    with pytest.raises(ClusterAccessError, match="connection refused"):
        client.get_security_context_constraints("restricted")


@pytest.mark.parametrize("allowed", [True, False])
def test_user_can_posts_self_subject_access_review(
    cluster_config: ClusterConfig,
    allowed: bool,
) -> None:
    bodies: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.url.path == SELF_SUBJECT_ACCESS_REVIEW_PATH
        body = json.loads(request.content)
        bodies.append(body)
        return httpx.Response(201, json={**body, "status": {"allowed": allowed}})

    client = ClusterClient(config=cluster_config, client_factory=make_client_factory(handler))

    assert client.user_can("list", group=SCC_API_GROUP, resource=SCC_RESOURCE) is allowed
    assert bodies == [
        {
            "apiVersion": "authorization.k8s.io/v1",
            "kind": "SelfSubjectAccessReview",
            "spec": {
                "resourceAttributes": {
                    "verb": "list",
                    "group": SCC_API_GROUP,
                    "resource": SCC_RESOURCE,
                }
            },
        }
    ]


def test_user_can_requires_status(cluster_config: ClusterConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(201, json=json.loads(request.content))

    client = ClusterClient(config=cluster_config, client_factory=make_client_factory(handler))

    with pytest.raises(ClusterAPIError, match="no status"):
        client.user_can("list", group=SCC_API_GROUP, resource=SCC_RESOURCE)


def test_user_can_logs_evaluation_errors(
    cluster_config: ClusterConfig,
    caplog: pytest.LogCaptureFixture,
) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        status = {"allowed": False, "evaluationError": "webhook authorizer unavailable"}
        return httpx.Response(201, json={**body, "status": status})

    client = ClusterClient(config=cluster_config, client_factory=make_client_factory(handler))

    with caplog.at_level("WARNING", logger="clusterdiag.adapters.cluster.client"):
        assert client.user_can("list", group=SCC_API_GROUP, resource=SCC_RESOURCE) is False

    assert "webhook authorizer unavailable" in caplog.text


def test_policy_reader_delegates_to_client(cluster_config: ClusterConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        name = request.url.path.rsplit("/", 1)[-1]
        return httpx.Response(200, json=_scc_payload(name))

    client = ClusterClient(config=cluster_config, client_factory=make_client_factory(handler))
    reader = ClusterPolicyReader(client)

    assert reader.get("nonroot").name == "nonroot"
    assert client.infra_namespace == cluster_config.infra_namespace


def test_get_scc_quotes_object_name(cluster_config: ClusterConfig) -> None:
    raw_paths: list[bytes] = []

    def handler(request: httpx.Request) -> httpx.Response:
        raw_paths.append(request.url.raw_path)
        return httpx.Response(200, json=_scc_payload("odd/name"))

    client = ClusterClient(config=cluster_config, client_factory=make_client_factory(handler))

    assert client.get_security_context_constraints("odd/name").name == "odd/name"
    assert raw_paths == [f"{SCC_PATH}/odd%2Fname".encode()]


def test_transient_server_errors_are_retried(cluster_config: ClusterConfig) -> None:
    statuses = iter([503, 200])
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        status = next(statuses)
        if status != 200:
            return _status(status, "apiserver is shutting down", "ServiceUnavailable")
        return httpx.Response(200, json=_scc_payload())

    retrying = replace(
        cluster_config,
        resilience=replace(
            cluster_config.resilience,
            retry=RetryPolicy(total=2, backoff_factor=0.0, backoff_jitter=0.0),
        ),
    )
    client = ClusterClient(config=retrying, client_factory=make_client_factory(handler))

    scc = client.get_security_context_constraints("restricted")

    assert scc.name == "restricted"
    assert len(calls) == 2


def test_user_can_logs_denial_reason(
    cluster_config: ClusterConfig,
    caplog: pytest.LogCaptureFixture,
) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        status = {"allowed": False, "denied": True, "reason": "scc access is restricted"}
        return httpx.Response(201, json={**body, "status": status})

    client = ClusterClient(config=cluster_config, client_factory=make_client_factory(handler))

    with caplog.at_level("INFO", logger="clusterdiag.adapters.cluster.client"):
        assert client.user_can("list", group=SCC_API_GROUP, resource=SCC_RESOURCE) is False

    assert "explicit=True" in caplog.text
    assert "scc access is restricted" in caplog.text
