"""Building Service specs for Superset components, plus related helpers."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional

from superset_operator.deployment import FlatComponentSpec

SERVICE_TYPE_CLUSTER_IP = "ClusterIP"
SERVICE_TYPE_NODE_PORT = "NodePort"
SERVICE_TYPE_LOAD_BALANCER = "LoadBalancer"
SERVICE_TYPE_EXTERNAL_NAME = "ExternalName"

PROTOCOL_TCP = "TCP"
SERVICE_PORT_NAME = "http"

ANNOTATION_CONFIG_CHECKSUM = "superset.apache.org/config-checksum"


@dataclass
class ComponentServiceSpec:
    """User-facing Service settings for a component."""

    type: str = ""
    port: Optional[int] = None
    node_port: Optional[int] = None
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)


@dataclass
class ServicePort:
    """A single port exposed by a Service."""

    name: str = ""
    port: int = 0
    target_port: int = 0
    protocol: str = PROTOCOL_TCP
    node_port: int = 0


@dataclass
class ServiceSpec:
    """A Service spec, including the fields the cluster allocates."""

    type: str = SERVICE_TYPE_CLUSTER_IP
    selector: dict[str, str] = field(default_factory=dict)
    ports: list[ServicePort] = field(default_factory=list)
    cluster_ip: str = ""
    cluster_ips: Optional[list[str]] = None
    ip_families: Optional[list[str]] = None
    ip_family_policy: Optional[str] = None
    health_check_node_port: int = 0


def resolve_container_port(spec: Optional[FlatComponentSpec], default_port: int) -> int:
    """The first user-supplied container port, or ``default_port`` when none is set."""
    if spec is not None and spec.pod_template is not None:
        container = spec.pod_template.container
        if container is not None and container.ports:
            return container.ports[0].container_port
    return default_port


def build_service_spec(
    service_spec: Optional[ComponentServiceSpec],
    labels: dict[str, str],
    container_port: int,
    default_port: int,
) -> ServiceSpec:
    """Build a Service spec targeting ``container_port`` and selecting ``labels``."""
    port = default_port
    service_type = SERVICE_TYPE_CLUSTER_IP
    node_port = 0

    if service_spec is not None:
        if service_spec.port:
            port = service_spec.port
        if service_spec.type:
            service_type = service_spec.type
        if service_spec.node_port is not None:
            node_port = service_spec.node_port

    return ServiceSpec(
        type=service_type,
        selector=dict(labels),
        ports=[
            ServicePort(
                name=SERVICE_PORT_NAME,
                port=port,
                target_port=container_port,
                protocol=PROTOCOL_TCP,
                node_port=node_port,
            )
        ],
    )


def preserve_service_allocated_fields(desired: ServiceSpec, existing: ServiceSpec) -> ServiceSpec:
    """Return ``desired`` with the cluster-allocated fields carried over from ``existing``.

    ExternalName services have no cluster IPs, so those fields are cleared for them.
    """
    result = replace(
        desired,
        cluster_ip=existing.cluster_ip,
        cluster_ips=None if existing.cluster_ips is None else list(existing.cluster_ips),
        ip_families=None if existing.ip_families is None else list(existing.ip_families),
        ip_family_policy=existing.ip_family_policy,
        health_check_node_port=existing.health_check_node_port,
    )
    if result.type == SERVICE_TYPE_EXTERNAL_NAME:
        result = replace(
            result,
            cluster_ip="",
            cluster_ips=None,
            ip_families=None,
            ip_family_policy=None,
        )
    return result


def build_checksum_annotations(config_checksum: str) -> dict[str, str]:
    """Pod annotations carrying the config checksum; empty when there is none."""
    if not config_checksum:
        return {}
    return {ANNOTATION_CONFIG_CHECKSUM: config_checksum}


def names_to_delete(names: Iterable[str], keep_name: str) -> list[str]:
    """The names, in order, that are not ``keep_name``; an empty ``keep_name`` keeps none."""
    return [name for name in names if name != keep_name]