"""Built-in default SecurityContextConstraints.

The set and its grants follow the bootstrap policy a fresh cluster is created
with. Service-account grants are scoped to the infrastructure namespace, so the
baseline is a function of that namespace rather than a constant.
"""

from __future__ import annotations

from typing import Final

from clusterdiag.domain.model import SecurityContextConstraints, StrategyType

PRIVILEGED: Final = "privileged"
NONROOT: Final = "nonroot"
HOSTMOUNT_ANYUID: Final = "hostmount-anyuid"
HOSTACCESS: Final = "hostaccess"
RESTRICTED: Final = "restricted"
ANYUID: Final = "anyuid"
HOSTNETWORK: Final = "hostnetwork"

DESCRIPTION_ANNOTATION: Final = "kubernetes.io/description"

CLUSTER_ADMINS_GROUP: Final = "system:cluster-admins"
NODES_GROUP: Final = "system:nodes"
MASTERS_GROUP: Final = "system:masters"
AUTHENTICATED_GROUP: Final = "system:authenticated"
SYSTEM_ADMIN_USER: Final = "system:admin"

BUILD_CONTROLLER_SA: Final = "build-controller"
PV_RECYCLER_CONTROLLER_SA: Final = "pv-recycler-controller"

_RESTRICTED_VOLUMES: Final = (
    "configMap",
    "downwardAPI",
    "emptyDir",
    "persistentVolumeClaim",
    "projected",
    "secret",
)
_DROP_SETUID: Final = ("KILL", "MKNOD", "SETUID", "SETGID")

type AccessByName = dict[str, tuple[str, ...]]


def service_account_username(namespace: str, name: str) -> str:
    return f"system:serviceaccount:{namespace}:{name}"


def default_access(infra_namespace: str) -> tuple[AccessByName, AccessByName]:
    """Return the default ``(groups, users)`` granted each baseline SCC."""

    groups: AccessByName = {
        PRIVILEGED: (CLUSTER_ADMINS_GROUP, NODES_GROUP, MASTERS_GROUP),
        ANYUID: (CLUSTER_ADMINS_GROUP,),
        RESTRICTED: (AUTHENTICATED_GROUP,),
    }
    users: AccessByName = {
        PRIVILEGED: (
            SYSTEM_ADMIN_USER,
            service_account_username(infra_namespace, BUILD_CONTROLLER_SA),
        ),
        HOSTMOUNT_ANYUID: (service_account_username(infra_namespace, PV_RECYCLER_CONTROLLER_SA),),
    }
    return groups, users


def default_security_context_constraints(
    infra_namespace: str,
) -> tuple[SecurityContextConstraints, ...]:
    """Return the baseline SCCs in the order the reconciler walks them."""

    groups, users = default_access(infra_namespace)

    return (
        SecurityContextConstraints(
            name=PRIVILEGED,
            allow_privileged_container=True,
            allow_host_dir_volume_plugin=True,
            allow_host_network=True,
            allow_host_ports=True,
            allow_host_pid=True,
            allow_host_ipc=True,
            volumes=("*",),
            allowed_capabilities=("*",),
            se_linux_context=StrategyType.RUN_AS_ANY,
            run_as_user=StrategyType.RUN_AS_ANY,
            fs_group=StrategyType.RUN_AS_ANY,
            supplemental_groups=StrategyType.RUN_AS_ANY,
            annotations={
                DESCRIPTION_ANNOTATION: "privileged allows access to all privileged and host "
                "features and the ability to run as any user, any group, any fsGroup, and "
                "with any SELinux context.  WARNING: this is the most relaxed SCC and should "
                "be used only for cluster administration. Grant with caution."
            },
            groups=groups.get(PRIVILEGED, ()),
            users=users.get(PRIVILEGED, ()),
        ),
        SecurityContextConstraints(
            name=NONROOT,
            volumes=_RESTRICTED_VOLUMES,
            required_drop_capabilities=_DROP_SETUID,
            se_linux_context=StrategyType.MUST_RUN_AS,
            run_as_user=StrategyType.MUST_RUN_AS_NON_ROOT,
            fs_group=StrategyType.RUN_AS_ANY,
            supplemental_groups=StrategyType.RUN_AS_ANY,
            annotations={
                DESCRIPTION_ANNOTATION: "nonroot provides all features of the restricted SCC "
                "but allows users to run with any non-root UID.  The user must specify the "
                "UID or it must be specified on the by the manifest of the container runtime."
            },
            groups=groups.get(NONROOT, ()),
            users=users.get(NONROOT, ()),
        ),
        SecurityContextConstraints(
            name=HOSTMOUNT_ANYUID,
            allow_host_dir_volume_plugin=True,
            volumes=(*_RESTRICTED_VOLUMES, "hostPath", "nfs"),
            required_drop_capabilities=("MKNOD",),
            se_linux_context=StrategyType.MUST_RUN_AS,
            run_as_user=StrategyType.RUN_AS_ANY,
            fs_group=StrategyType.RUN_AS_ANY,
            supplemental_groups=StrategyType.RUN_AS_ANY,
            annotations={
                DESCRIPTION_ANNOTATION: "hostmount-anyuid provides all the features of the "
                "restricted SCC but allows host mounts and any UID by a pod.  This is "
                "primarily used by the persistent volume recycler. WARNING: this SCC allows "
                "host file system access as any UID, including UID 0.  Grant with caution."
            },
            groups=groups.get(HOSTMOUNT_ANYUID, ()),
            users=users.get(HOSTMOUNT_ANYUID, ()),
        ),
        SecurityContextConstraints(
            name=HOSTACCESS,
            allow_host_dir_volume_plugin=True,
            allow_host_network=True,
            allow_host_ports=True,
            allow_host_pid=True,
            allow_host_ipc=True,
            volumes=(*_RESTRICTED_VOLUMES, "hostPath"),
            required_drop_capabilities=_DROP_SETUID,
            se_linux_context=StrategyType.MUST_RUN_AS,
            run_as_user=StrategyType.MUST_RUN_AS_RANGE,
            fs_group=StrategyType.MUST_RUN_AS,
            supplemental_groups=StrategyType.RUN_AS_ANY,
            annotations={
                DESCRIPTION_ANNOTATION: "hostaccess allows access to all host namespaces but "
                "still requires pods to be run with a UID and SELinux context that are "
                "allocated to the namespace. WARNING: this SCC allows host access to "
                "namespaces, file systems, and PIDS.  It should only be used by trusted "
                "pods.  Grant with caution."
            },
            groups=groups.get(HOSTACCESS, ()),
            users=users.get(HOSTACCESS, ()),
        ),
        SecurityContextConstraints(
            name=RESTRICTED,
            volumes=_RESTRICTED_VOLUMES,
            required_drop_capabilities=_DROP_SETUID,
            se_linux_context=StrategyType.MUST_RUN_AS,
            run_as_user=StrategyType.MUST_RUN_AS_RANGE,
            fs_group=StrategyType.MUST_RUN_AS,
            supplemental_groups=StrategyType.RUN_AS_ANY,
            annotations={
                DESCRIPTION_ANNOTATION: "restricted denies access to all host features and "
                "requires pods to be run with a UID, and SELinux context that are allocated "
                "to the namespace.  This is the most restrictive SCC and it is used by "
                "default for authenticated users."
            },
            groups=groups.get(RESTRICTED, ()),
            users=users.get(RESTRICTED, ()),
        ),
        SecurityContextConstraints(
            name=ANYUID,
            priority=10,
            volumes=_RESTRICTED_VOLUMES,
            required_drop_capabilities=("MKNOD",),
            se_linux_context=StrategyType.MUST_RUN_AS,
            run_as_user=StrategyType.RUN_AS_ANY,
            fs_group=StrategyType.RUN_AS_ANY,
            supplemental_groups=StrategyType.RUN_AS_ANY,
            annotations={
                DESCRIPTION_ANNOTATION: "anyuid provides all features of the restricted SCC "
                "but allows users to run with any UID and any GID."
            },
            groups=groups.get(ANYUID, ()),
            users=users.get(ANYUID, ()),
        ),
        SecurityContextConstraints(
            name=HOSTNETWORK,
            allow_host_network=True,
            allow_host_ports=True,
            volumes=_RESTRICTED_VOLUMES,
            required_drop_capabilities=_DROP_SETUID,
            se_linux_context=StrategyType.MUST_RUN_AS,
            run_as_user=StrategyType.MUST_RUN_AS_RANGE,
            fs_group=StrategyType.MUST_RUN_AS,
            supplemental_groups=StrategyType.MUST_RUN_AS,
            annotations={
                DESCRIPTION_ANNOTATION: "hostnetwork allows using host networking and host "
                "ports but still requires pods to be run with a UID and SELinux context "
                "that are allocated to the namespace."
            },
            groups=groups.get(HOSTNETWORK, ()),
            users=users.get(HOSTNETWORK, ()),
        ),
    )
