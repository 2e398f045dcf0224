"""Translation between Kubernetes objects and provisioner data types."""

from typing import Any

from kubernetes import client
from kubernetes.utils.quantity import parse_quantity

from isilon_provisioner.models.request import ProvisioningRequest
from isilon_provisioner.models.volume import ProvisionedVolumeRecord

IDENTITY_ANNOTATION = "isilonProvisionerIdentity"
VOLUME_ANNOTATION = "isilonVolume"
PROVISIONED_BY_ANNOTATION = "pv.kubernetes.io/provisioned-by"


def to_dict(obj: Any) -> dict[str, Any]:
    """Return the camelCase dict representation of a kubernetes object.

    Dicts, such as loaded manifests, are returned as they are.
    """
    if isinstance(obj, dict):
        return obj
    return client.ApiClient().sanitize_for_serialization(obj)


def section(data: dict[str, Any], key: str) -> dict[str, Any]:
    """Return a nested mapping of a manifest. A missing or null entry is empty."""
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ValueError(f"'{key}' is not a mapping")
    return value


def storage_bytes(quantity: str | int | None) -> int:
    """Convert a storage quantity ('10Gi', '500M', ...) to bytes."""
    if quantity is None or quantity == "":
        return 0
    return int(parse_quantity(quantity))


def request_from_claim(
    claim: Any,
    *,
    pv_name: str,
    parameters: dict[str, str] | None = None,
    reclaim_policy: str = "Delete",
) -> ProvisioningRequest:
    """Build a provisioning request from a PersistentVolumeClaim.

    Args:
        claim (dict | V1PersistentVolumeClaim): the claim.
        pv_name (str): name of the PersistentVolume to create.
        parameters (dict of str | None): storage class parameters.
        reclaim_policy (str): storage class reclaim policy.

    Returns:
        ProvisioningRequest: the request.

    """
    data = to_dict(claim)
    metadata = section(data, "metadata")
    spec = section(data, "spec")
    requests = section(section(spec, "resources"), "requests")
    return ProvisioningRequest(
        requesting_namespace=metadata.get("namespace", "default"),
        requesting_name=metadata["name"],
        target_resource_name=pv_name,
        requested_capacity_bytes=storage_bytes(requests.get("storage")),
        storage_class_parameters=parameters or {},
        access_modes=spec.get("accessModes") or [],
        reclaim_policy=reclaim_policy,
    )


def persistent_volume_from_record(
    record: ProvisionedVolumeRecord, *, provisioner_name: str
) -> client.V1PersistentVolume:
    """Build the PersistentVolume exposing a provisioned volume over NFS.

    The ownership tag and the backend volume name are stored as annotations, they
    are needed to delete the volume.
    """
    annotations = {PROVISIONED_BY_ANNOTATION: provisioner_name}
    if record.ownership_tag is not None:
        annotations[IDENTITY_ANNOTATION] = record.ownership_tag
    if record.backend_volume_name is not None:
        annotations[VOLUME_ANNOTATION] = record.backend_volume_name

    return client.V1PersistentVolume(
        api_version="v1",
        kind="PersistentVolume",
        metadata=client.V1ObjectMeta(
            name=record.orchestrator_resource_name, annotations=annotations
        ),
        spec=client.V1PersistentVolumeSpec(
            persistent_volume_reclaim_policy=record.reclaim_policy,
            access_modes=list(record.access_modes),
            capacity={"storage": str(record.capacity_bytes)},
            mount_options=list(record.mount_options) or None,
            nfs=client.V1NFSVolumeSource(
                server=record.backend_server_address,
                path=record.local_mount_path,
                read_only=False,
            ),
        ),
    )


def record_from_persistent_volume(pv: Any) -> ProvisionedVolumeRecord:
    """Read back the record of a PersistentVolume to delete.

    Missing annotations are left empty: the deletion workflow decides what to do.

    Args:
        pv (dict | V1PersistentVolume): the volume.

    Returns:
        ProvisionedVolumeRecord: the record.

    """
    data = to_dict(pv)
    metadata = section(data, "metadata")
    annotations = section(metadata, "annotations")
    spec = section(data, "spec")
    nfs = section(spec, "nfs")
    capacity = section(spec, "capacity")
    return ProvisionedVolumeRecord(
        orchestrator_resource_name=metadata["name"],
        ownership_tag=annotations.get(IDENTITY_ANNOTATION),
        backend_volume_name=annotations.get(VOLUME_ANNOTATION),
        local_mount_path=nfs.get("path", ""),
        backend_server_address=nfs.get("server", ""),
        capacity_bytes=storage_bytes(capacity.get("storage")),
        mount_options=spec.get("mountOptions") or [],
        access_modes=spec.get("accessModes") or [],
        reclaim_policy=spec.get("persistentVolumeReclaimPolicy") or "Delete",
    )
