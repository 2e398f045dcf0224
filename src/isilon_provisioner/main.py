"""One-shot provisioning driver."""

import sys
from importlib.metadata import PackageNotFoundError, version
from logging import Logger
from typing import Any

import yaml
from pydantic import ValidationError

from isilon_provisioner.backends.core import load_backend_client
from isilon_provisioner.config import load_settings
from isilon_provisioner.exceptions import (
    BackendError,
    ConfigurationError,
    IgnoredError,
    InvalidManifestError,
    ProvisionerError,
)
from isilon_provisioner.k8s import (
    persistent_volume_from_record,
    record_from_persistent_volume,
    request_from_claim,
    to_dict,
)
from isilon_provisioner.logger import create_logger
from isilon_provisioner.parser import parser
from isilon_provisioner.provisioner import IsilonProvisioner, Provisioner

APP_NAME = "isilon-provisioner"

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_STARTUP_FAILURE = 2


def get_version() -> str:
    try:
        return version(APP_NAME)
    except PackageNotFoundError:
        return "Version not set"


def read_manifest(fname: str, *, logger: Logger) -> dict[str, Any]:
    """Load a kubernetes object from a YAML file.

    Args:
        fname (str): path to the YAML file.
        logger (Logger): logger instance.

    Returns:
        dict: the object.

    Raises:
        InvalidManifestError when the file does not exist, is not parsable or does
        not contain an object.

    """
    logger.info("Loading manifest from file: %s", fname)
    try:
        with open(fname) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise InvalidManifestError(f"Error reading file {fname}") from e
    except yaml.YAMLError as e:
        raise InvalidManifestError(f"Error parsing file {fname}") from e
    if not isinstance(data, dict):
        raise InvalidManifestError(f"File {fname} does not contain an object")
    logger.debug(data)
    return data


def write_manifest(data: dict[str, Any], fname: str) -> None:
    """Write an object as YAML to a file."""
    with open(fname, "w") as f:
        yaml.safe_dump(data, f, sort_keys=False)


def provision(
    provisioner: Provisioner, args: Any, *, provisioner_name: str, logger: Logger
) -> None:
    """Create the volume for the given claim and write its PersistentVolume."""
    claim = read_manifest(args.claim, logger=logger)
    try:
        request = request_from_claim(
            claim,
            pv_name=args.pv_name,
            parameters=dict(args.parameters),
            reclaim_policy=args.reclaim_policy,
        )
    except (KeyError, ValueError, ValidationError) as e:
        raise InvalidManifestError(f"Invalid claim in file {args.claim}: {e}") from e

    record = provisioner.provision(request)
    pv = persistent_volume_from_record(record, provisioner_name=provisioner_name)
    try:
        write_manifest(to_dict(pv), args.output)
    except OSError as e:
        raise InvalidManifestError(f"Error writing file {args.output}") from e
    logger.info("Volume %s provisioned", record.backend_volume_name)


def delete(provisioner: Provisioner, args: Any, *, logger: Logger) -> None:
    """Remove the volume behind the given PersistentVolume."""
    pv = read_manifest(args.volume, logger=logger)
    try:
        record = record_from_persistent_volume(pv)
    except (KeyError, ValueError, ValidationError) as e:
        raise InvalidManifestError(f"Invalid volume in file {args.volume}: {e}") from e

    provisioner.delete(record)
    logger.info("Volume %s deleted", record.backend_volume_name)


def main(argv: list[str] | None = None) -> int:
    """Main function.

    Load the settings and connect to the storage appliance. Any failure at this
    stage stops the process before serving the request.

    Then execute the requested command. Volumes owned by other provisioners are
    skipped without errors.
    """
    args = parser.parse_args(argv)
    logger = create_logger(APP_NAME, level=args.loglevel.upper())
    logger.info("Starting Isilon Dynamic Provisioner version: %s", get_version())

    try:
        settings = load_settings()
        backend = load_backend_client(settings, logger=logger)
    except (ConfigurationError, BackendError) as e:
        logger.error("Startup failed: %s", e.message)
        return EXIT_STARTUP_FAILURE

    provisioner = IsilonProvisioner(backend=backend, settings=settings, logger=logger)
    try:
        if args.command == "provision":
            provision(
                provisioner,
                args,
                provisioner_name=settings.PROVISIONER_NAME,
                logger=logger,
            )
        else:
            delete(provisioner, args, logger=logger)
    except IgnoredError as e:
        logger.warning("Volume ignored: %s", e.reason)
    except ProvisionerError as e:
        kind = "retryable" if e.retryable else "permanent"
        logger.error("Operation failed (%s): %s", kind, e.message)
        return EXIT_FAILURE
    return EXIT_OK


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
