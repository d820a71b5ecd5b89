"""Cluster API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from clusterdiag.domain.model import DEFAULT_INFRA_NAMESPACE

from .env import env_flag, optional_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

CLUSTER_TIMEOUT_SECONDS = 15.0


@dataclass(frozen=True, slots=True)
class ClusterConfig:
    """Holds the connection settings for the cluster API server."""

    api_url: str
    resilience: ResilienceConfig
    infra_namespace: str = DEFAULT_INFRA_NAMESPACE


def get_cluster_config(*, resilience: ResilienceConfig | None = None) -> ClusterConfig:
    values = require_env_vars(("CLUSTER_API_URL",))
    api_url = values["CLUSTER_API_URL"].rstrip("/")
    if not api_url.startswith(("https://", "http://")):
        raise ConfigurationError(f"CLUSTER_API_URL must be an http(s) URL: {api_url}")

    token = optional_env_var("CLUSTER_TOKEN")
    ca_bundle = optional_env_var("CLUSTER_CA_BUNDLE")
    insecure = env_flag("CLUSTER_INSECURE_SKIP_TLS_VERIFY")
    if insecure and ca_bundle is not None:
        raise ConfigurationError(
            "CLUSTER_CA_BUNDLE and CLUSTER_INSECURE_SKIP_TLS_VERIFY are mutually exclusive"
        )

    headers = {"Accept": "application/json"}
    if token is not None:
        headers["Authorization"] = f"Bearer {token}"

    verify: bool | str = ca_bundle if ca_bundle is not None else not insecure

    return ClusterConfig(
        api_url=api_url,
        infra_namespace=optional_env_var("CLUSTERDIAG_INFRA_NAMESPACE") or DEFAULT_INFRA_NAMESPACE,
        resilience=resilience
        or ResilienceConfig(
            name="cluster",
            base_url=api_url,
            timeout_seconds=CLUSTER_TIMEOUT_SECONDS,
            retry=RetryPolicy(),
            ratelimit=RateLimit(max_calls=20, per_seconds=1.0),
            default_headers=headers,
            verify=verify,
        ),
    )
