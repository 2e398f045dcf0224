"""Backend volume naming."""

from isilon_provisioner.models.request import ProvisioningRequest

SEPARATOR = "-"


def make_volume_name(namespace: str, name: str, target: str) -> str:
    """Create a unique volume name based on the claim requesting the volume.

    The orchestrator guarantees the namespace, claim name and generated resource
    name triplet is unique, so the same triplet always gives the same name.
    """
    return SEPARATOR.join([namespace, name, target])


def volume_name_for(request: ProvisioningRequest) -> str:
    """Return the backend volume name of a provisioning request."""
    return make_volume_name(
        request.requesting_namespace,
        request.requesting_name,
        request.target_resource_name,
    )
