"""Cluster-scoped policy objects and reconciliation vocabulary."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

SCC_API_GROUP = "security.openshift.io"
SCC_RESOURCE = "securitycontextconstraints"
DEFAULT_INFRA_NAMESPACE = "openshift-infra"


class ReconcileStrategy(StrEnum):
    """How the baseline is merged into live content before comparing."""

    UNION = "union"
    REPLACE = "replace"


class StrategyType(StrEnum):
    """Allocation strategies understood by the SCC admission plugin."""

    RUN_AS_ANY = "RunAsAny"
    MUST_RUN_AS = "MustRunAs"
    MUST_RUN_AS_RANGE = "MustRunAsRange"
    MUST_RUN_AS_NON_ROOT = "MustRunAsNonRoot"


@dataclass(frozen=True, slots=True)
class SecurityContextConstraints:
    """Domain view of one SecurityContextConstraints object.

    Only the fields the reconciler owns are modelled. List-valued fields are
    tuples so instances stay hashable; ordering carries no meaning and is
    normalised by :meth:`normalized` before comparison.
    """

    name: str
    priority: int | None = None
    allow_privileged_container: bool = False
    allow_host_dir_volume_plugin: bool = False
    allow_host_network: bool = False
    allow_host_ports: bool = False
    allow_host_pid: bool = False
    allow_host_ipc: bool = False
    read_only_root_filesystem: bool = False
    volumes: tuple[str, ...] = ()
    allowed_capabilities: tuple[str, ...] = ()
    default_add_capabilities: tuple[str, ...] = ()
    required_drop_capabilities: tuple[str, ...] = ()
    se_linux_context: StrategyType = StrategyType.MUST_RUN_AS
    run_as_user: StrategyType = StrategyType.MUST_RUN_AS_RANGE
    fs_group: StrategyType = StrategyType.MUST_RUN_AS
    supplemental_groups: StrategyType = StrategyType.RUN_AS_ANY
    users: tuple[str, ...] = ()
    groups: tuple[str, ...] = ()
    labels: dict[str, str] = field(default_factory=dict[str, str], hash=False)
    annotations: dict[str, str] = field(default_factory=dict[str, str], hash=False)

    def normalized(self) -> SecurityContextConstraints:
        """Return a copy with every unordered list sorted and de-duplicated."""

        return SecurityContextConstraints(
            name=self.name,
            priority=self.priority,
            allow_privileged_container=self.allow_privileged_container,
            allow_host_dir_volume_plugin=self.allow_host_dir_volume_plugin,
            allow_host_network=self.allow_host_network,
            allow_host_ports=self.allow_host_ports,
            allow_host_pid=self.allow_host_pid,
            allow_host_ipc=self.allow_host_ipc,
            read_only_root_filesystem=self.read_only_root_filesystem,
            volumes=_sorted_unique(self.volumes),
            allowed_capabilities=_sorted_unique(self.allowed_capabilities),
            default_add_capabilities=_sorted_unique(self.default_add_capabilities),
            required_drop_capabilities=_sorted_unique(self.required_drop_capabilities),
            se_linux_context=self.se_linux_context,
            run_as_user=self.run_as_user,
            fs_group=self.fs_group,
            supplemental_groups=self.supplemental_groups,
            users=_sorted_unique(self.users),
            groups=_sorted_unique(self.groups),
            labels=dict(self.labels),
            annotations=dict(self.annotations),
        )


def _sorted_unique(values: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(sorted(set(values)))


@dataclass(frozen=True, slots=True)
class PolicyObjectRef:
    """Identifies a cluster-scoped policy object by name."""

    name: str


@dataclass(frozen=True, slots=True)
class ChangedPolicyObject(PolicyObjectRef):
    """A policy object the reconciler would write, with the content it would write."""

    proposed: SecurityContextConstraints
