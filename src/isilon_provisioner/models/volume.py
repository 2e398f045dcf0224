"""Model of a provisioned volume."""

from typing import Annotated

from pydantic import Field

from isilon_provisioner.models.core import FrozenModel


class ProvisionedVolumeRecord(FrozenModel):
    """Durable description of a volume created by the provisioner.

    Records read back from the orchestrator may miss the ownership tag or the
    backend volume name: the deletion workflow treats those volumes as not ours.
    """

    orchestrator_resource_name: Annotated[
        str, Field(description="Name of the volume resource in the orchestrator")
    ]
    ownership_tag: Annotated[
        str | None,
        Field(default=None, description="Identity of the provisioner owning it"),
    ]
    backend_volume_name: Annotated[
        str | None, Field(default=None, description="Volume name on the appliance")
    ]
    backend_export_handle: Annotated[
        str | None, Field(default=None, description="Export ID on the appliance")
    ]
    local_mount_path: Annotated[str, Field(description="Path of the volume")]
    backend_server_address: Annotated[
        str, Field(description="Address of the server exporting the volume")
    ]
    capacity_bytes: Annotated[int, Field(default=0, ge=0, description="Volume size")]
    mount_options: Annotated[
        list[str], Field(default_factory=list, description="NFS mount options")
    ]
    access_modes: Annotated[list[str], Field(default_factory=list)]
    reclaim_policy: Annotated[str, Field(default="Delete")]
