"""Application configuration helpers."""

from __future__ import annotations

from .cluster import DEFAULT_INFRA_NAMESPACE, ClusterConfig, get_cluster_config
from .env import env_flag, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging

__all__ = [
    "DEFAULT_INFRA_NAMESPACE",
    "ClusterConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "env_flag",
    "get_cluster_config",
    "optional_env_var",
    "require_env_vars",
]
