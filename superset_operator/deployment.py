"""Building Deployment specs for Superset components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from superset_operator.helpers import merge_annotations, merge_labels


@dataclass
class ImageSpec:
    """Container image reference."""

    repository: str = ""
    tag: str = ""
    pull_policy: str = ""
    pull_secrets: list[Any] = field(default_factory=list)


@dataclass
class ContainerPort:
    """A port exposed by a container."""

    name: str = ""
    container_port: int = 0
    protocol: str = "TCP"


@dataclass
class ContainerTemplate:
    """User overrides for the main container."""

    command: list[str] = field(default_factory=list)
    args: list[str] = field(default_factory=list)
    env: list[Any] = field(default_factory=list)
    env_from: list[Any] = field(default_factory=list)
    volume_mounts: list[Any] = field(default_factory=list)
    ports: list[ContainerPort] = field(default_factory=list)
    resources: Optional[Any] = None
    liveness_probe: Optional[Any] = None
    readiness_probe: Optional[Any] = None
    startup_probe: Optional[Any] = None
    security_context: Optional[Any] = None
    lifecycle: Optional[Any] = None


@dataclass
class Container:
    """A fully-built container definition."""

    name: str = ""
    image: str = ""
    image_pull_policy: str = ""
    command: list[str] = field(default_factory=list)
    args: list[str] = field(default_factory=list)
    env: list[Any] = field(default_factory=list)
    env_from: list[Any] = field(default_factory=list)
    volume_mounts: list[Any] = field(default_factory=list)
    ports: list[ContainerPort] = field(default_factory=list)
    resources: Optional[Any] = None
    liveness_probe: Optional[Any] = None
    readiness_probe: Optional[Any] = None
    startup_probe: Optional[Any] = None
    security_context: Optional[Any] = None
    lifecycle: Optional[Any] = None


@dataclass
class PodTemplate:
    """User overrides for the pod."""

    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    container: Optional[ContainerTemplate] = None
    sidecars: list[Container] = field(default_factory=list)
    init_containers: list[Container] = field(default_factory=list)
    volumes: list[Any] = field(default_factory=list)
    pod_security_context: Optional[Any] = None
    affinity: Optional[Any] = None
    tolerations: list[Any] = field(default_factory=list)
    node_selector: dict[str, str] = field(default_factory=dict)
    topology_spread_constraints: list[Any] = field(default_factory=list)
    host_aliases: list[Any] = field(default_factory=list)
    termination_grace_period_seconds: Optional[int] = None
    runtime_class_name: Optional[str] = None
    share_process_namespace: Optional[bool] = None
    enable_service_links: Optional[bool] = None
    dns_config: Optional[Any] = None
    priority_class_name: Optional[str] = None
    dns_policy: Optional[str] = None


@dataclass
class DeploymentTemplate:
    """User overrides for the Deployment itself."""

    revision_history_limit: Optional[int] = None
    progress_deadline_seconds: Optional[int] = None
    min_ready_seconds: Optional[int] = None
    strategy: Optional[Any] = None


@dataclass
class AutoscalingSpec:
    """Horizontal pod autoscaler settings."""

    max_replicas: int = 0
    min_replicas: Optional[int] = None
    metrics: list[Any] = field(default_factory=list)


@dataclass
class FlatComponentSpec:
    """Fully-resolved spec of one child component."""

    image: ImageSpec = field(default_factory=ImageSpec)
    replicas: Optional[int] = None
    deployment_template: Optional[DeploymentTemplate] = None
    pod_template: Optional[PodTemplate] = None
    autoscaling: Optional[AutoscalingSpec] = None
    pod_disruption_budget: Optional[Any] = None
    service_account_name: str = ""


@dataclass
class DeploymentConfig:
    """Component-specific defaults used when building a Deployment."""

    container_name: str = ""
    default_command: list[str] = field(default_factory=list)
    default_args: list[str] = field(default_factory=list)
    default_ports: list[ContainerPort] = field(default_factory=list)
    force_replicas: Optional[int] = None


@dataclass
class PodSpec:
    """A fully-built pod spec."""

    containers: list[Container] = field(default_factory=list)
    init_containers: list[Container] = field(default_factory=list)
    image_pull_secrets: list[Any] = field(default_factory=list)
    volumes: list[Any] = field(default_factory=list)
    security_context: Optional[Any] = None
    affinity: Optional[Any] = None
    tolerations: list[Any] = field(default_factory=list)
    node_selector: dict[str, str] = field(default_factory=dict)
    topology_spread_constraints: list[Any] = field(default_factory=list)
    host_aliases: list[Any] = field(default_factory=list)
    termination_grace_period_seconds: Optional[int] = None
    runtime_class_name: Optional[str] = None
    share_process_namespace: Optional[bool] = None
    enable_service_links: Optional[bool] = None
    dns_config: Optional[Any] = None
    priority_class_name: str = ""
    service_account_name: str = ""
    dns_policy: str = ""


@dataclass
class DeploymentSpec:
    """A fully-built Deployment spec, including its pod template."""

    replicas: Optional[int] = None
    selector: dict[str, str] = field(default_factory=dict)
    pod_labels: dict[str, str] = field(default_factory=dict)
    pod_annotations: Optional[dict[str, str]] = None
    pod_spec: PodSpec = field(default_factory=PodSpec)
    revision_history_limit: Optional[int] = None
    progress_deadline_seconds: Optional[int] = None
    min_ready_seconds: int = 0
    strategy: Optional[Any] = None


def _resolve_replicas(spec: FlatComponentSpec, config: DeploymentConfig) -> Optional[int]:
    if config.force_replicas is not None:
        return config.force_replicas
    if spec.autoscaling is None:
        return spec.replicas
    # The autoscaler owns the replica count.
    return None


def build_deployment_spec(
    spec: FlatComponentSpec,
    config: DeploymentConfig,
    pod_annotations: Optional[dict[str, str]],
    selector_labels: dict[str, str],
) -> DeploymentSpec:
    """Build a Deployment spec from a component spec and its defaults.

    Selector labels always win over user pod labels; user pod annotations win
    over the operator's pod annotations.
    """
    dt = spec.deployment_template or DeploymentTemplate()
    pt = spec.pod_template or PodTemplate()
    ct = pt.container or ContainerTemplate()

    main = Container(
        name=config.container_name,
        image=f"{spec.image.repository}:{spec.image.tag}",
        image_pull_policy=spec.image.pull_policy,
        command=list(ct.command or config.default_command),
        args=list(ct.args or config.default_args),
        env=list(ct.env),
        env_from=list(ct.env_from),
        volume_mounts=list(ct.volume_mounts),
        ports=list(ct.ports or config.default_ports),
        resources=ct.resources,
        liveness_probe=ct.liveness_probe,
        readiness_probe=ct.readiness_probe,
        startup_probe=ct.startup_probe,
        security_context=ct.security_context,
        lifecycle=ct.lifecycle,
    )

    pod_spec = PodSpec(
        containers=[main, *pt.sidecars],
        init_containers=list(pt.init_containers),
        image_pull_secrets=list(spec.image.pull_secrets),
        volumes=list(pt.volumes),
        security_context=pt.pod_security_context,
        affinity=pt.affinity,
        tolerations=list(pt.tolerations),
        node_selector=dict(pt.node_selector),
        topology_spread_constraints=list(pt.topology_spread_constraints),
        host_aliases=list(pt.host_aliases),
        termination_grace_period_seconds=pt.termination_grace_period_seconds,
        runtime_class_name=pt.runtime_class_name,
        share_process_namespace=pt.share_process_namespace,
        enable_service_links=pt.enable_service_links,
        dns_config=pt.dns_config,
        priority_class_name=pt.priority_class_name or "",
        service_account_name=spec.service_account_name,
        dns_policy=pt.dns_policy or "",
    )

    return DeploymentSpec(
        replicas=_resolve_replicas(spec, config),
        selector=dict(selector_labels),
        pod_labels=merge_labels(pt.labels, selector_labels),
        pod_annotations=merge_annotations(pod_annotations, pt.annotations),
        pod_spec=pod_spec,
        revision_history_limit=dt.revision_history_limit,
        progress_deadline_seconds=dt.progress_deadline_seconds,
        min_ready_seconds=dt.min_ready_seconds or 0,
        strategy=dt.strategy,
    )