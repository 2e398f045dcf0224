import logging
import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from isilon_provisioner.backends.core import StorageBackendClient
from isilon_provisioner.config import Settings
from isilon_provisioner.identity import ProvisionerIdentity
from isilon_provisioner.models.backend import ExportHandle, VolumeHandle
from isilon_provisioner.models.request import ProvisioningRequest
from tests.utils import FakeStorageBackend, random_lower_string, settings_dict


@pytest.fixture(autouse=True)
def clear_os_environment() -> None:
    """Clear the OS environment."""
    os.environ.clear()


@pytest.fixture
def root_path(tmp_path: Path) -> Path:
    """Root path of the volumes."""
    return tmp_path / "ifs" / "k8s"


@pytest.fixture
def make_settings(root_path: Path):
    """Factory of settings, independent from the environment."""

    def _make(**kwargs) -> Settings:
        return Settings(_env_file=None, **settings_dict(root_path, **kwargs))

    return _make


@pytest.fixture
def settings(make_settings) -> Settings:
    """Settings with quotas and exports disabled."""
    return make_settings()


@pytest.fixture
def identity(settings: Settings) -> ProvisionerIdentity:
    return ProvisionerIdentity.from_settings(settings)


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger(random_lower_string())


@pytest.fixture
def fake_backend() -> FakeStorageBackend:
    return FakeStorageBackend()


@pytest.fixture
def mock_backend() -> MagicMock:
    """Backend mock recording the order of the calls in mock_calls."""
    backend = MagicMock(spec=StorageBackendClient)
    backend.create_volume.side_effect = lambda name, **kw: VolumeHandle(name=name)
    backend.export_volume.return_value = ExportHandle(id="42")
    backend.get_quota.return_value = None
    return backend


@pytest.fixture
def request_data() -> ProvisioningRequest:
    return ProvisioningRequest(
        requesting_namespace="team-a",
        requesting_name="claim1",
        target_resource_name="pv-0001",
    )
