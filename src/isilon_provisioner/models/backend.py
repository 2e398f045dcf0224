"""Objects returned by the storage backend clients."""

from typing import Annotated

from pydantic import Field

from isilon_provisioner.models.core import FrozenModel


class VolumeHandle(FrozenModel):
    """A volume (directory) created on the appliance."""

    name: Annotated[str, Field(description="Volume name")]
    path: Annotated[
        str | None, Field(default=None, description="Absolute path on the appliance")
    ]


class ExportHandle(FrozenModel):
    """An NFS export published for a volume."""

    id: Annotated[str, Field(description="Export ID")]
    paths: Annotated[list[str], Field(default_factory=list)]


class QuotaDescriptor(FrozenModel):
    """A capacity limit attached to a volume."""

    id: Annotated[str, Field(description="Quota ID")]
    path: Annotated[str | None, Field(default=None)]
    hard_threshold: Annotated[
        int | None, Field(default=None, ge=0, description="Size limit in bytes")
    ]
