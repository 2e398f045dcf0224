"""Command line arguments parser."""

import argparse
import logging

log_values = [i.lower() for i in logging.getLevelNamesMapping().keys()]


def key_value(item: str) -> tuple[str, str]:
    """Split a 'key=value' storage class parameter."""
    key, sep, value = item.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected key=value, got {item!r}")
    return key, value


parser = argparse.ArgumentParser(
    prog="isilon-provisioner",
    description="Provision and delete NFS volumes on the storage appliance.",
)
parser.add_argument(
    "-l",
    "--loglevel",
    default="info",
    choices=log_values,
    help=f"Provide logging level. Valid values: {log_values}. \
        Example --loglevel debug, default=info",
)
subparsers = parser.add_subparsers(dest="command", required=True)

provision_parser = subparsers.add_parser(
    "provision", help="Create a volume for a PersistentVolumeClaim"
)
provision_parser.add_argument(
    "--claim", required=True, help="YAML file with the PersistentVolumeClaim"
)
provision_parser.add_argument(
    "--pv-name", required=True, help="Name of the PersistentVolume to create"
)
provision_parser.add_argument(
    "--parameters",
    nargs="*",
    type=key_value,
    default=[],
    metavar="KEY=VALUE",
    help="Storage class parameters. Example --parameters mountOptions=vers=4,hard",
)
provision_parser.add_argument(
    "--reclaim-policy", default="Delete", help="PersistentVolume reclaim policy"
)
provision_parser.add_argument(
    "--output", required=True, help="File where to write the PersistentVolume"
)

delete_parser = subparsers.add_parser(
    "delete", help="Delete the volume behind a PersistentVolume"
)
delete_parser.add_argument(
    "--volume", required=True, help="YAML file with the PersistentVolume"
)
