"""Pydantic models describing the cluster API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from clusterdiag.domain.model import StrategyType


def _none_to_empty(value: object) -> object:
    return [] if value is None else value


def _none_to_empty_mapping(value: object) -> object:
    return {} if value is None else value


class ClusterBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ObjectMeta(ClusterBaseModel):
    name: str
    labels: dict[str, str] = Field(default_factory=dict[str, str])
    annotations: dict[str, str] = Field(default_factory=dict[str, str])

    _normalize_maps = field_validator("labels", "annotations", mode="before")(
        _none_to_empty_mapping
    )


class StrategyOptions(ClusterBaseModel):
    type: StrategyType


class SecurityContextConstraintsPayload(ClusterBaseModel):
    metadata: ObjectMeta
    priority: int | None = None
    allow_privileged_container: bool = Field(default=False, alias="allowPrivilegedContainer")
    allow_host_dir_volume_plugin: bool = Field(default=False, alias="allowHostDirVolumePlugin")
    allow_host_network: bool = Field(default=False, alias="allowHostNetwork")
    allow_host_ports: bool = Field(default=False, alias="allowHostPorts")
    allow_host_pid: bool = Field(default=False, alias="allowHostPID")
    allow_host_ipc: bool = Field(default=False, alias="allowHostIPC")
    read_only_root_filesystem: bool = Field(default=False, alias="readOnlyRootFilesystem")
    volumes: list[str] = Field(default_factory=list[str])
    allowed_capabilities: list[str] = Field(default_factory=list[str], alias="allowedCapabilities")
    default_add_capabilities: list[str] = Field(
        default_factory=list[str], alias="defaultAddCapabilities"
    )
    required_drop_capabilities: list[str] = Field(
        default_factory=list[str], alias="requiredDropCapabilities"
    )
    se_linux_context: StrategyOptions = Field(alias="seLinuxContext")
    run_as_user: StrategyOptions = Field(alias="runAsUser")
    fs_group: StrategyOptions = Field(alias="fsGroup")
    supplemental_groups: StrategyOptions = Field(alias="supplementalGroups")
    users: list[str] = Field(default_factory=list[str])
    groups: list[str] = Field(default_factory=list[str])

    _normalize_lists = field_validator(
        "volumes",
        "allowed_capabilities",
        "default_add_capabilities",
        "required_drop_capabilities",
        "users",
        "groups",
        mode="before",
    )(_none_to_empty)


class ResourceAttributes(ClusterBaseModel):
    verb: str
    group: str = ""
    resource: str
    namespace: str | None = None


class SelfSubjectAccessReviewSpec(ClusterBaseModel):
    resource_attributes: ResourceAttributes = Field(alias="resourceAttributes")


class SelfSubjectAccessReviewStatus(ClusterBaseModel):
    allowed: bool
    denied: bool = False
    reason: str | None = None
    evaluation_error: str | None = Field(default=None, alias="evaluationError")


class SelfSubjectAccessReview(ClusterBaseModel):
    api_version: str = Field(default="authorization.k8s.io/v1", alias="apiVersion")
    kind: str = "SelfSubjectAccessReview"
    spec: SelfSubjectAccessReviewSpec
    status: SelfSubjectAccessReviewStatus | None = None


class StatusPayload(ClusterBaseModel):
    """The ``Status`` object the API server returns alongside error responses."""

    message: str | None = None
    reason: str | None = None
