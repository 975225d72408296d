"""
Command line entry point for the Redfish inventory collector.

Gathers hardware inventory from one management controller over Redfish and
registers it with the inventory API.
"""

import argparse
import asyncio
import sys

from src.i18n import _, set_language
from src.redfish_inventory.core.config import ConfigManager
from src.redfish_inventory.core.errors import InventoryError, format_error_chain
from src.redfish_inventory.registration.orchestrator import (
    InventoryOrchestrator,
    collect_and_register,
)
from src.redfish_inventory.utils.logging_setup import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="redfish-inventory",
        description=_(
            "Gathers hardware inventory via Redfish and posts it to the inventory API."
        ),
    )
    parser.add_argument(
        "-i",
        "--ip",
        required=True,
        help=_("The IP address of the BMC to gather inventory from"),
    )
    parser.add_argument("-c", "--config", help=_("Path to a YAML configuration file"))
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help=_("Discover and print devices without registering them"),
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = ConfigManager(args.config)
        set_language(config.get_language())
        setup_logging(config)
        settings = config.to_settings()
    except (OSError, ValueError, RuntimeError) as error:
        print(_("Configuration error: %s") % error, file=sys.stderr)
        return 1

    print(_("Starting inventory collection for BMC IP: %s") % args.ip)
    try:
        if args.dry_run:
            devices = asyncio.run(InventoryOrchestrator(settings).discover_only(args.ip))
            for device in devices:
                print(
                    f"{device.device_type.value}\t{device.manufacturer}\t"
                    f"{device.part_number}\t{device.serial_number}\t{device.source_uri}"
                )
            return 0
        result = asyncio.run(collect_and_register(args.ip, settings))
    except InventoryError as error:
        print(_("Collection Failed: %s") % format_error_chain(error), file=sys.stderr)
        return 1

    for warning in result.warnings:
        print(
            _("Warning: skipped %s: %s") % (warning.path, warning.reason),
            file=sys.stderr,
        )
    print(_("Inventory collection and posting completed successfully."))
    return 0


if __name__ == "__main__":
    sys.exit(main())
