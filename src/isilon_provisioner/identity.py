"""Identity of the provisioner process."""

from typing import Annotated

from pydantic import Field

from isilon_provisioner.config import Settings
from isilon_provisioner.models.core import FrozenModel


class ProvisionerIdentity(FrozenModel):
    """Ownership tag written on every created volume.

    Provisioners sharing the same appliance use different identities, so each one
    deletes only the volumes it created.
    """

    value: Annotated[str, Field(min_length=1, description="Ownership tag")]

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProvisionerIdentity":
        """The identity is the address of the appliance."""
        return cls(value=settings.ISI_SERVER)

    def owns(self, tag: str | None) -> bool:
        """Check the ownership tag of a volume matches this identity."""
        return tag == self.value

    def __str__(self) -> str:
        return self.value
