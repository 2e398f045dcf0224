import string
from pathlib import Path
from random import choices, randint

from isilon_provisioner.backends.core import StorageBackendClient
from isilon_provisioner.exceptions import BackendError
from isilon_provisioner.models.backend import (
    ExportHandle,
    QuotaDescriptor,
    VolumeHandle,
)


def random_lower_string() -> str:
    """Return a generic random string."""
    return "".join(choices(string.ascii_lowercase, k=32))


def random_size() -> int:
    """Return a random positive size in bytes."""
    return randint(1, 2**40)


def settings_dict(root: Path, **kwargs) -> dict[str, str]:
    """Minimal valid settings, volumes created in root."""
    return {
        "ISI_SERVER": "isilon.example.com",
        "ISI_PATH": str(root),
        "ISI_USER": "admin",
        "ISI_PASS": "secret",
        "ISI_GROUP": "wheel",
        **kwargs,
    }


class FakeStorageBackend(StorageBackendClient):
    """In memory storage appliance.

    Every call is appended to `calls`. Operations listed in `fail_on` raise a
    BackendError.
    """

    def __init__(self, fail_on: tuple[str, ...] = ()) -> None:
        self.fail_on = set(fail_on)
        self.calls = []
        self.timeouts = []
        self.volumes = set()
        self.quotas = {}
        self.exports = {}

    def _call(self, operation: str, name: str, timeout: float | None) -> None:
        self.calls.append((operation, name))
        self.timeouts.append(timeout)
        if operation in self.fail_on:
            raise BackendError(
                f"{operation} failed", operation=operation, volume=name
            )

    def create_volume(self, name, *, timeout=None):
        self._call("create_volume", name, timeout)
        self.volumes.add(name)
        return VolumeHandle(name=name, path=f"/ifs/{name}")

    def delete_volume(self, name, *, timeout=None):
        self._call("delete_volume", name, timeout)
        self.volumes.discard(name)

    def set_quota_size(self, name, size_bytes, *, timeout=None):
        self._call("set_quota_size", name, timeout)
        self.quotas[name] = size_bytes

    def get_quota(self, name, *, timeout=None):
        self._call("get_quota", name, timeout)
        if name not in self.quotas:
            return None
        return QuotaDescriptor(id=name, hard_threshold=self.quotas[name])

    def clear_quota(self, name, *, timeout=None):
        self._call("clear_quota", name, timeout)
        self.quotas.pop(name, None)

    def export_volume(self, name, *, timeout=None):
        self._call("export_volume", name, timeout)
        export_id = str(len(self.exports) + 1)
        self.exports[name] = export_id
        return ExportHandle(id=export_id, paths=[f"/ifs/{name}"])

    def unexport(self, name, *, timeout=None):
        self._call("unexport", name, timeout)
        self.exports.pop(name, None)


def fake_backend_factory(settings) -> FakeStorageBackend:
    """Factory usable as ISI_BACKEND_FACTORY."""
    return FakeStorageBackend()


def not_a_backend_factory(settings) -> object:
    return object()


def failing_backend_factory(settings) -> FakeStorageBackend:
    raise BackendError(f"Failed to connect to {settings.endpoint}")
