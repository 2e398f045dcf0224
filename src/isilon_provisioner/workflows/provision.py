"""Volume provisioning workflow."""

import os
from logging import Logger
from pathlib import Path

from isilon_provisioner.backends.core import StorageBackendClient
from isilon_provisioner.config import Settings
from isilon_provisioner.exceptions import (
    BackendError,
    InvalidParameterError,
    MountPathError,
    QuotaSizeRequiredError,
)
from isilon_provisioner.identity import ProvisionerIdentity
from isilon_provisioner.models.request import ProvisioningRequest
from isilon_provisioner.models.volume import ProvisionedVolumeRecord
from isilon_provisioner.naming import volume_name_for
from isilon_provisioner.workflows.context import OperationContext

MOUNT_OPTIONS_PARAM = "mountOptions"
MOUNT_PATH_MODE = 0o777


def parse_mount_options(parameters: dict[str, str]) -> list[str]:
    """Read the mount options from the storage class parameters.

    `mountOptions` is the only supported parameter. The key is case insensitive and
    its value is a comma separated list.

    Args:
        parameters (dict of str): storage class parameters.

    Returns:
        list of str: mount options, in the given order.

    Raises:
        InvalidParameterError when an unknown parameter is found.

    """
    mount_options = []
    for key, value in parameters.items():
        if key.lower() != MOUNT_OPTIONS_PARAM.lower():
            raise InvalidParameterError(key)
        mount_options = [i.strip() for i in value.split(",") if i.strip()]
    return mount_options


class ProvisionWorkflow:
    """Create a volume on the appliance and describe it.

    The workflow holds only read-only state: the same instance serves concurrent
    requests.
    """

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
        self.root_path = settings.ISI_PATH
        self.server_name = settings.ISI_SERVER
        self.quota_enable = settings.ISI_QUOTA_ENABLE
        self.exports_enable = settings.ISI_EXPORTS_ENABLE
        self.logger = logger

    def provision(
        self, request: ProvisioningRequest, ctx: OperationContext | None = None
    ) -> ProvisionedVolumeRecord:
        """Create the volume requested and return its record.

        Steps, in order: volume creation, quota, export, mount path creation and
        parameters validation. A failure in the quota assignment is logged and
        ignored, any other failure stops the procedure. Resources created by the
        completed steps are not removed.

        Args:
            request (ProvisioningRequest): what to create.
            ctx (OperationContext | None): deadline and cancellation signal.

        Returns:
            ProvisionedVolumeRecord: the new volume, tagged with our identity.

        Raises:
            BackendError when an appliance call fails.
            QuotaSizeRequiredError when quotas are enabled and no size is given.
            MountPathError when the local directory can't be created.
            InvalidParameterError when the storage class has unknown parameters.
            OperationCancelledError when the caller stops the procedure.

        """
        ctx = ctx or OperationContext()
        size = request.requested_capacity_bytes
        self.logger.info(
            "Got namespace: %s, name: %s, pvName: %s, size: %d",
            request.requesting_namespace,
            request.requesting_name,
            request.target_resource_name,
            size,
        )

        name = volume_name_for(request)
        path = os.path.join(self.root_path, name)

        timeout = ctx.check("create volume")
        self.logger.info("Creating volume: %s", name)
        volume = self.backend.create_volume(name, timeout=timeout)
        self.logger.info("Created volume: %s", volume.name)
        self.logger.debug("Volume details: %s", volume)

        if self.quota_enable:
            self.set_quota(name, size, ctx)

        export_id = None
        if self.exports_enable:
            timeout = ctx.check("export volume")
            export = self.backend.export_volume(name, timeout=timeout)
            export_id = export.id
            self.logger.info("Created export %s for volume: %s", export_id, name)

        ctx.check("prepare mount path")
        self.prepare_mount_path(path)

        try:
            mount_options = parse_mount_options(request.storage_class_parameters)
        except InvalidParameterError as e:
            self.logger.error("%s. Volume %s left on the appliance", e.message, name)
            raise

        return ProvisionedVolumeRecord(
            orchestrator_resource_name=request.target_resource_name,
            ownership_tag=self.identity.value,
            backend_volume_name=name,
            backend_export_handle=export_id,
            local_mount_path=path,
            backend_server_address=self.server_name,
            capacity_bytes=size,
            mount_options=mount_options,
            access_modes=request.access_modes,
            reclaim_policy=request.reclaim_policy,
        )

    def set_quota(self, name: str, size: int, ctx: OperationContext) -> None:
        """Apply the requested size as quota.

        A missing size is a policy violation. A failure of the appliance is only
        logged: the volume stays without limits.
        """
        if size <= 0:
            raise QuotaSizeRequiredError(name)
        timeout = ctx.check("set quota")
        try:
            self.backend.set_quota_size(name, size, timeout=timeout)
        except BackendError as e:
            self.logger.error(
                "Failed to set quota to: %d on volume: %s, error: %s", size, name, e
            )
        else:
            self.logger.info("Quota set to: %d on volume: %s", size, name)

    def prepare_mount_path(self, path: str) -> None:
        """Create the volume directory, writable by every user.

        An existing directory is not an error and is left untouched: it may
        belong to another user.
        """
        p = Path(path)
        try:
            p.mkdir(mode=MOUNT_PATH_MODE, parents=True)
        except FileExistsError:
            if not p.is_dir():
                self.logger.error("Mount path %s is not a directory", path)
                raise MountPathError(path) from None
            self.logger.debug("Mount path already exists: %s", path)
            return
        except OSError as e:
            self.logger.error("Failed to create mount path %s: %s", path, e)
            raise MountPathError(path) from e
        try:
            # mkdir mode is filtered by the umask
            p.chmod(MOUNT_PATH_MODE)
        except OSError as e:
            self.logger.error("Failed to set mode of mount path %s: %s", path, e)
            raise MountPathError(path) from e
        self.logger.debug("Mount path ready: %s", path)
