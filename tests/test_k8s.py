from typing import Any

import pytest
from kubernetes import client
from pytest_cases import parametrize_with_cases

from isilon_provisioner.k8s import (
    IDENTITY_ANNOTATION,
    PROVISIONED_BY_ANNOTATION,
    VOLUME_ANNOTATION,
    persistent_volume_from_record,
    record_from_persistent_volume,
    request_from_claim,
    storage_bytes,
    to_dict,
)
from isilon_provisioner.models.volume import ProvisionedVolumeRecord


def claim_dict(**spec: Any) -> dict[str, Any]:
    return {
        "apiVersion": "v1",
        "kind": "PersistentVolumeClaim",
        "metadata": {"name": "claim1", "namespace": "team-a"},
        "spec": {
            "accessModes": ["ReadWriteMany"],
            "resources": {"requests": {"storage": "1Gi"}},
            **spec,
        },
    }


def record() -> ProvisionedVolumeRecord:
    return ProvisionedVolumeRecord(
        orchestrator_resource_name="pv-0001",
        ownership_tag="isilon.example.com",
        backend_volume_name="team-a-claim1-pv-0001",
        backend_export_handle="7",
        local_mount_path="/ifs/k8s/team-a-claim1-pv-0001",
        backend_server_address="isilon.example.com",
        capacity_bytes=1073741824,
        mount_options=["vers=4", "hard"],
        access_modes=["ReadWriteMany"],
        reclaim_policy="Retain",
    )


class CaseQuantity:
    def case_none(self) -> tuple[Any, int]:
        return None, 0

    def case_gibibytes(self) -> tuple[Any, int]:
        return "1Gi", 1073741824

    def case_megabytes(self) -> tuple[Any, int]:
        return "500M", 500000000

    def case_plain(self) -> tuple[Any, int]:
        return "2048", 2048

    def case_int(self) -> tuple[Any, int]:
        return 10, 10


@parametrize_with_cases("quantity, expected", cases=CaseQuantity)
def test_storage_bytes(quantity: Any, expected: int) -> None:
    assert storage_bytes(quantity) == expected


def test_invalid_quantity() -> None:
    with pytest.raises(ValueError):
        storage_bytes("lots")


def test_request_from_claim() -> None:
    request = request_from_claim(
        claim_dict(),
        pv_name="pv-0001",
        parameters={"mountOptions": "hard"},
        reclaim_policy="Retain",
    )
    assert request.requesting_namespace == "team-a"
    assert request.requesting_name == "claim1"
    assert request.target_resource_name == "pv-0001"
    assert request.requested_capacity_bytes == 1073741824
    assert request.storage_class_parameters == {"mountOptions": "hard"}
    assert request.access_modes == ["ReadWriteMany"]
    assert request.reclaim_policy == "Retain"


def test_request_from_claim_without_size() -> None:
    request = request_from_claim(claim_dict(resources={}), pv_name="pv-0001")
    assert request.requested_capacity_bytes == 0
    assert request.storage_class_parameters == {}


def test_request_from_claim_object() -> None:
    claim = client.V1PersistentVolumeClaim(
        metadata=client.V1ObjectMeta(name="claim1", namespace="team-a"),
        spec=client.V1PersistentVolumeClaimSpec(
            access_modes=["ReadWriteOnce"],
            resources=client.V1VolumeResourceRequirements(
                requests={"storage": "2Gi"}
            ),
        ),
    )
    request = request_from_claim(claim, pv_name="pv-0001")
    assert request.requested_capacity_bytes == 2 * 1073741824
    assert request.access_modes == ["ReadWriteOnce"]


def test_claim_without_name() -> None:
    claim = claim_dict()
    del claim["metadata"]["name"]
    with pytest.raises(KeyError):
        request_from_claim(claim, pv_name="pv-0001")


def test_persistent_volume_from_record() -> None:
    pv = persistent_volume_from_record(record(), provisioner_name="example.com/isilon")
    assert isinstance(pv, client.V1PersistentVolume)
    assert pv.metadata.name == "pv-0001"
    assert pv.metadata.annotations == {
        PROVISIONED_BY_ANNOTATION: "example.com/isilon",
        IDENTITY_ANNOTATION: "isilon.example.com",
        VOLUME_ANNOTATION: "team-a-claim1-pv-0001",
    }
    assert pv.spec.nfs.server == "isilon.example.com"
    assert pv.spec.nfs.path == "/ifs/k8s/team-a-claim1-pv-0001"
    assert pv.spec.nfs.read_only is False
    assert pv.spec.mount_options == ["vers=4", "hard"]
    assert pv.spec.capacity == {"storage": "1073741824"}
    assert pv.spec.persistent_volume_reclaim_policy == "Retain"
    assert pv.spec.access_modes == ["ReadWriteMany"]


def test_record_from_persistent_volume() -> None:
    """The export handle is not stored on the volume."""
    pv = persistent_volume_from_record(record(), provisioner_name="example.com/isilon")
    for item in (pv, to_dict(pv)):
        read = record_from_persistent_volume(item)
        assert read == record().model_copy(update={"backend_export_handle": None})


def test_record_without_annotations() -> None:
    pv = {"metadata": {"name": "pv-0001"}, "spec": {}}
    read = record_from_persistent_volume(pv)
    assert read.ownership_tag is None
    assert read.backend_volume_name is None
    assert read.capacity_bytes == 0


def test_claim_with_null_sections() -> None:
    claim = {"metadata": {"name": "claim1"}, "spec": {"resources": None}}
    request = request_from_claim(claim, pv_name="pv-0001")
    assert request.requesting_namespace == "default"
    assert request.requested_capacity_bytes == 0
    assert request.access_modes == []


def test_claim_with_null_metadata() -> None:
    with pytest.raises(KeyError):
        request_from_claim({"metadata": None, "spec": {}}, pv_name="pv-0001")


def test_section_not_a_mapping() -> None:
    with pytest.raises(ValueError):
        request_from_claim(
            {"metadata": {"name": "claim1"}, "spec": ["ReadWriteMany"]},
            pv_name="pv-0001",
        )


def test_record_with_null_sections() -> None:
    pv = {"metadata": {"name": "pv-0001", "annotations": None}, "spec": None}
    read = record_from_persistent_volume(pv)
    assert read.ownership_tag is None
    assert read.local_mount_path == ""
    assert read.reclaim_policy == "Delete"
