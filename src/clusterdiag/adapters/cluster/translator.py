"""Translate cluster API payloads into domain objects."""

from __future__ import annotations

from clusterdiag.domain.model import SecurityContextConstraints

from .schema import SecurityContextConstraintsPayload


def parse_security_context_constraints(
    payload: SecurityContextConstraintsPayload | dict[str, object],
) -> SecurityContextConstraints:
    validated = (
        payload
        if isinstance(payload, SecurityContextConstraintsPayload)
        else SecurityContextConstraintsPayload.model_validate(payload)
    )
    return SecurityContextConstraints(
        name=validated.metadata.name,
        priority=validated.priority,
        allow_privileged_container=validated.allow_privileged_container,
        allow_host_dir_volume_plugin=validated.allow_host_dir_volume_plugin,
        allow_host_network=validated.allow_host_network,
        allow_host_ports=validated.allow_host_ports,
        allow_host_pid=validated.allow_host_pid,
        allow_host_ipc=validated.allow_host_ipc,
        read_only_root_filesystem=validated.read_only_root_filesystem,
        volumes=tuple(validated.volumes),
        allowed_capabilities=tuple(validated.allowed_capabilities),
        default_add_capabilities=tuple(validated.default_add_capabilities),
        required_drop_capabilities=tuple(validated.required_drop_capabilities),
        se_linux_context=validated.se_linux_context.type,
        run_as_user=validated.run_as_user.type,
        fs_group=validated.fs_group.type,
        supplemental_groups=validated.supplemental_groups.type,
        users=tuple(validated.users),
        groups=tuple(validated.groups),
        labels=dict(validated.metadata.labels),
        annotations=dict(validated.metadata.annotations),
    )
