"""Storage backend client base class."""

from abc import ABC, abstractmethod
from logging import Logger

from isilon_provisioner.config import Settings
from isilon_provisioner.exceptions import ConfigurationError
from isilon_provisioner.models.backend import ExportHandle, QuotaDescriptor, VolumeHandle


class StorageBackendClient(ABC):
    """Capabilities of the storage appliance used by the workflows.

    Volumes are addressed by name, relative to the root path the client was
    created with. Every method accepts a `timeout` in seconds: None means no
    deadline.

    Implementations raise BackendError, or a subclass, when a call fails. The
    connection is shared by concurrent workflows so implementations must not keep
    per-request state.
    """

    @abstractmethod
    def create_volume(self, name: str, *, timeout: float | None = None) -> VolumeHandle:
        """Create a volume.

        Args:
            name (str): volume name.
            timeout (float | None): call timeout.

        Returns:
            VolumeHandle: the created volume.

        """

    @abstractmethod
    def delete_volume(self, name: str, *, timeout: float | None = None) -> None:
        """Delete a volume and its content."""

    @abstractmethod
    def set_quota_size(
        self, name: str, size_bytes: int, *, timeout: float | None = None
    ) -> None:
        """Apply a hard capacity limit to a volume.

        Args:
            name (str): volume name.
            size_bytes (int): limit in bytes.
            timeout (float | None): call timeout.

        """

    @abstractmethod
    def get_quota(
        self, name: str, *, timeout: float | None = None
    ) -> QuotaDescriptor | None:
        """Retrieve the quota of a volume.

        Returns:
            QuotaDescriptor | None: the quota or None when the volume has no quota.

        """

    @abstractmethod
    def clear_quota(self, name: str, *, timeout: float | None = None) -> None:
        """Remove the quota of a volume."""

    @abstractmethod
    def export_volume(self, name: str, *, timeout: float | None = None) -> ExportHandle:
        """Publish an NFS export for a volume.

        Returns:
            ExportHandle: the created export.

        """

    @abstractmethod
    def unexport(self, name: str, *, timeout: float | None = None) -> None:
        """Remove the NFS export of a volume."""


def load_backend_client(settings: Settings, *, logger: Logger) -> StorageBackendClient:
    """Create the storage backend client using the configured factory.

    The factory receives the settings and returns a connected client.

    Args:
        settings (Settings): application settings.
        logger (Logger): logger instance.

    Returns:
        StorageBackendClient: the connected client.

    Raises:
        ConfigurationError when no factory is configured or it does not build a
        StorageBackendClient.
        BackendError when the connection with the appliance fails.

    """
    factory = settings.ISI_BACKEND_FACTORY
    if factory is None:
        raise ConfigurationError("ISI_BACKEND_FACTORY not set")

    logger.info("Connecting to storage appliance at: %s", settings.endpoint)
    logger.info("URL access point is: %s", settings.access_path)
    client = factory(settings)
    if not isinstance(client, StorageBackendClient):
        msg = f"ISI_BACKEND_FACTORY returned {type(client).__name__}, "
        msg += "expected a StorageBackendClient"
        raise ConfigurationError(msg)
    logger.info("Successfully connected to: %s", settings.endpoint)
    return client
