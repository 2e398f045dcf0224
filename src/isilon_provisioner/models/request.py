"""Model of a volume provisioning request."""

from typing import Annotated

from pydantic import Field

from isilon_provisioner.models.core import FrozenModel


class ProvisioningRequest(FrozenModel):
    """Data needed to provision a new volume.

    The caller builds one instance per request, usually from a claim of the
    orchestrator.

    Attributes:
    ----------
        requesting_namespace (str): Namespace of the claim.
        requesting_name (str): Name of the claim.
        target_resource_name (str): Name of the volume resource to create.
        requested_capacity_bytes (int): Requested size. 0 means unspecified.
        storage_class_parameters (dict of str): Parameters of the storage class.
        access_modes (list of str): Access modes requested by the claim.
        reclaim_policy (str): Reclaim policy of the volume resource.
    """

    requesting_namespace: Annotated[str, Field(description="Namespace of the claim")]
    requesting_name: Annotated[str, Field(description="Name of the claim")]
    target_resource_name: Annotated[
        str, Field(description="Name of the volume resource to create")
    ]
    requested_capacity_bytes: Annotated[
        int, Field(default=0, ge=0, description="Requested size. 0 means unspecified")
    ]
    storage_class_parameters: Annotated[
        dict[str, str],
        Field(default_factory=dict, description="Parameters of the storage class"),
    ]
    access_modes: Annotated[
        list[str],
        Field(default_factory=list, description="Access modes requested by the claim"),
    ]
    reclaim_policy: Annotated[
        str, Field(default="Delete", description="Reclaim policy of the volume")
    ]
