"""Provisioner interface and its implementation for the storage appliance."""

from abc import ABC, abstractmethod
from logging import Logger

from isilon_provisioner.backends.core import StorageBackendClient
from isilon_provisioner.config import Settings
from isilon_provisioner.identity import ProvisionerIdentity
from isilon_provisioner.models.request import ProvisioningRequest
from isilon_provisioner.models.volume import ProvisionedVolumeRecord
from isilon_provisioner.workflows.context import OperationContext
from isilon_provisioner.workflows.delete import DeletionWorkflow
from isilon_provisioner.workflows.provision import ProvisionWorkflow


class Provisioner(ABC):
    """Operations a driver (controller loop, CLI, tests) invokes.

    Both calls are synchronous. Retries are up to the caller.
    """

    @abstractmethod
    def provision(
        self, request: ProvisioningRequest, ctx: OperationContext | None = None
    ) -> ProvisionedVolumeRecord:
        """Create a storage asset and return the record describing it."""

    @abstractmethod
    def delete(
        self, record: ProvisionedVolumeRecord, ctx: OperationContext | None = None
    ) -> None:
        """Remove the storage asset created by provision."""


class IsilonProvisioner(Provisioner):
    """Provision NFS volumes on the storage appliance."""

    def __init__(
        self,
        *,
        backend: StorageBackendClient,
        settings: Settings,
        logger: Logger,
        identity: ProvisionerIdentity | None = None,
    ) -> None:
        self.identity = identity or ProvisionerIdentity.from_settings(settings)
        self.logger = logger
        self.provision_workflow = ProvisionWorkflow(
            backend=backend, identity=self.identity, settings=settings, logger=logger
        )
        self.deletion_workflow = DeletionWorkflow(
            backend=backend, identity=self.identity, settings=settings, logger=logger
        )
        if settings.ISI_QUOTA_ENABLE:
            logger.info("Quotas enabled. Setting quotas at: %s", settings.ISI_PATH)
        else:
            logger.info("ISI_QUOTA_ENABLE not set. Quota support disabled")
        if settings.ISI_EXPORTS_ENABLE:
            logger.info("Exports enabled. Creating exports at: %s", settings.ISI_PATH)
        else:
            logger.info("ISI_EXPORTS_ENABLE not set. Exports support disabled")

    def provision(
        self, request: ProvisioningRequest, ctx: OperationContext | None = None
    ) -> ProvisionedVolumeRecord:
        return self.provision_workflow.provision(request, ctx)

    def delete(
        self, record: ProvisionedVolumeRecord, ctx: OperationContext | None = None
    ) -> None:
        self.deletion_workflow.delete(record, ctx)
