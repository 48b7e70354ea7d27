import pytest

from superset_operator.deployment import (
    ContainerPort,
    ContainerTemplate,
    FlatComponentSpec,
    PodTemplate,
)
from superset_operator.services import (
    ANNOTATION_CONFIG_CHECKSUM,
    ComponentServiceSpec,
    ServicePort,
    ServiceSpec,
    build_checksum_annotations,
    build_service_spec,
    names_to_delete,
    preserve_service_allocated_fields,
    resolve_container_port,
)

LABELS = {"app": "test"}


def test_build_service_spec_defaults():
    result = build_service_spec(None, LABELS, 8088, 8088)
    assert result.type == "ClusterIP"
    assert result.ports[0].port == 8088
    assert result.ports[0].target_port == 8088
    assert result.ports[0].name == "http"
    assert result.ports[0].protocol == "TCP"
    assert result.ports[0].node_port == 0
    assert result.selector == LABELS


def test_build_service_spec_custom_values():
    svc = ComponentServiceSpec(type="NodePort", port=9090, node_port=30090)
    result = build_service_spec(svc, LABELS, 8088, 8088)
    assert result.type == "NodePort"
    assert result.ports[0].port == 9090
    assert result.ports[0].node_port == 30090
    assert result.ports[0].target_port == 8088


def test_build_service_spec_custom_container_port():
    svc = ComponentServiceSpec(port=443)
    result = build_service_spec(svc, LABELS, 9090, 8088)
    assert result.ports[0].port == 443
    assert result.ports[0].target_port == 9090


def test_build_service_spec_zero_port_falls_back_to_default():
    svc = ComponentServiceSpec(port=0)
    result = build_service_spec(svc, LABELS, 8088, 8088)
    assert result.ports[0].port == 8088
    assert len(result.ports) == 1


def test_resolve_container_port_nil_spec():
    assert resolve_container_port(None, 8088) == 8088


def test_resolve_container_port_no_container_ports():
    assert resolve_container_port(FlatComponentSpec(), 8088) == 8088


def test_resolve_container_port_custom():
    spec = FlatComponentSpec(
        pod_template=PodTemplate(
            container=ContainerTemplate(ports=[ContainerPort(container_port=9090)])
        )
    )
    assert resolve_container_port(spec, 8088) == 9090


def test_preserve_service_allocated_fields():
    desired = ServiceSpec(type="ClusterIP", ports=[ServicePort(port=9090)])
    existing = ServiceSpec(
        type="ClusterIP",
        cluster_ip="10.0.0.12",
        cluster_ips=["10.0.0.12"],
        ip_families=["IPv4"],
        ip_family_policy="SingleStack",
    )
    result = preserve_service_allocated_fields(desired, existing)
    assert result.cluster_ip == "10.0.0.12"
    assert result.cluster_ips == ["10.0.0.12"]
    assert result.ip_families == ["IPv4"]
    assert result.ip_family_policy == "SingleStack"
    assert result.ports[0].port == 9090


def test_preserve_service_allocated_fields_external_name_clears_ips():
    desired = ServiceSpec(type="ExternalName")
    existing = ServiceSpec(
        cluster_ip="10.0.0.12",
        cluster_ips=["10.0.0.12"],
        ip_families=["IPv4"],
        ip_family_policy="SingleStack",
        health_check_node_port=31000,
    )
    result = preserve_service_allocated_fields(desired, existing)
    assert result.cluster_ip == ""
    assert result.cluster_ips is None
    assert result.ip_families is None
    assert result.ip_family_policy is None
    assert result.health_check_node_port == 31000


@pytest.mark.parametrize(
    "checksum, expected_len",
    [("", 0), ("sha256:abc", 1)],
)
def test_build_checksum_annotations(checksum, expected_len):
    result = build_checksum_annotations(checksum)
    assert len(result) == expected_len
    if expected_len:
        assert result[ANNOTATION_CONFIG_CHECKSUM] == checksum


def test_names_to_delete_keeps_named():
    assert names_to_delete(["a", "b", "c"], "b") == ["a", "c"]


def test_names_to_delete_empty_keep_deletes_all():
    assert names_to_delete(["a", "b"], "") == ["a", "b"]