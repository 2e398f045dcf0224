"""Volume deletion workflow."""

from logging import Logger

from isilon_provisioner.backends.core import StorageBackendClient
from isilon_provisioner.config import Settings
from isilon_provisioner.exceptions import (
    ForeignVolumeError,
    MissingIdentityError,
    MissingVolumeNameError,
)
from isilon_provisioner.identity import ProvisionerIdentity
from isilon_provisioner.models.volume import ProvisionedVolumeRecord
from isilon_provisioner.workflows.context import OperationContext


class DeletionWorkflow:
    """Remove from the appliance a volume created by this provisioner."""

    def __init__(
        self,
        *,
        backend: StorageBackendClient,
        identity: ProvisionerIdentity,
        settings: Settings,
        logger: Logger,
    ) -> None:
        self.backend = backend
        self.identity = identity
        self.quota_enable = settings.ISI_QUOTA_ENABLE
        self.exports_enable = settings.ISI_EXPORTS_ENABLE
        self.logger = logger

    def check_ownership(self, record: ProvisionedVolumeRecord) -> str:
        """Return the backend volume name if the volume belongs to us.

        Raises:
            MissingIdentityError when the record has no ownership tag.
            ForeignVolumeError when the tag belongs to another provisioner.
            MissingVolumeNameError when the record has no backend volume.

        """
        if not record.ownership_tag:
            raise MissingIdentityError()
        if not self.identity.owns(record.ownership_tag):
            raise ForeignVolumeError(record.ownership_tag)
        if not record.backend_volume_name:
            raise MissingVolumeNameError()
        return record.backend_volume_name

    def delete(
        self, record: ProvisionedVolumeRecord, ctx: OperationContext | None = None
    ) -> None:
        """Tear down export, quota and volume, in this order.

        Ownership is verified before any call to the appliance. Every failure is
        propagated so the caller can retry the deletion.

        Args:
            record (ProvisionedVolumeRecord): volume to delete.
            ctx (OperationContext | None): deadline and cancellation signal.

        Raises:
            IgnoredError subclasses when the volume is not ours.
            BackendError when an appliance call fails.
            OperationCancelledError when the caller stops the procedure.

        """
        ctx = ctx or OperationContext()
        name = self.check_ownership(record)
        self.logger.info("Removing volume: %s", name)

        if self.exports_enable:
            timeout = ctx.check("unexport volume")
            self.backend.unexport(name, timeout=timeout)
            self.logger.info("Export for volume: %s has been removed", name)

        if self.quota_enable:
            timeout = ctx.check("get quota")
            quota = self.backend.get_quota(name, timeout=timeout)
            if quota is not None:
                self.logger.info("Found quota on volume: %s - trying to clear it", name)
                timeout = ctx.check("clear quota")
                self.backend.clear_quota(name, timeout=timeout)
                self.logger.info("Quota for volume: %s has been cleared", name)

        timeout = ctx.check("delete volume")
        self.backend.delete_volume(name, timeout=timeout)
        self.logger.info("Volume: %s has been deleted", name)
