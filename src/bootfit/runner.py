"""Command-line runner for boot packing.

Loads a vehicle and a selection of items from the catalog files, packs
them (in a worker thread, optionally with a timeout), prints a summary and
optionally exports the result as JSON.

Usage:
    bootfit-pack --vehicles data/vehicles.json --vehicle "Toyota Corolla" \\
        --items data/items.json --item "Large Suitcase" --item "Duffel Bag"
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import yaml

from bootfit.catalog import (
    CatalogError,
    CatalogValidationError,
    find_vehicle,
    load_items,
    load_vehicles,
    select_items,
)
from bootfit.config import PackingConfig, load_config
from bootfit.models import BootGeometry, Item, PackingResult
from bootfit.packer import pack
from bootfit.reporting import export_to_json, format_summary

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CATALOG_ERROR = 2
EXIT_TIMEOUT = 3


async def pack_async(
    boot: BootGeometry,
    items: Sequence[Item],
    config: Optional[PackingConfig] = None,
    timeout: Optional[float] = None,
) -> PackingResult:
    """
    Run ``pack`` in a worker thread so an event loop stays responsive.

    Args:
        boot: Boot geometry to pack into.
        items: Items to pack.
        config: Packing parameters (defaults when None).
        timeout: Seconds to wait for the result; None waits indefinitely.

    Returns:
        The PackingResult.

    Raises:
        asyncio.TimeoutError: the result was not ready within *timeout*.
            The worker thread is abandoned, not interrupted; use
            ``PackingConfig.max_seconds`` to bound the work itself.
    """
    work = asyncio.to_thread(pack, boot, list(items), config)
    if timeout is None:
        return await work
    return await asyncio.wait_for(work, timeout=timeout)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bootfit-pack",
        description="Check whether items fit in a vehicle boot",
    )
    parser.add_argument("--vehicles", type=Path, required=True,
                        help="Vehicle catalog JSON (catalog or raw format)")
    parser.add_argument("--vehicle", required=True,
                        help="Make/model of the vehicle (substring match)")
    parser.add_argument("--items", type=Path, required=True,
                        help="Item catalog JSON")
    parser.add_argument("--item", action="append", default=[], dest="item_names",
                        help="Item name to pack; repeat for several (default: all)")
    parser.add_argument("--config", type=Path, default=None,
                        help="YAML file with packing parameters")
    parser.add_argument("--output", type=Path, default=None,
                        help="Write the result as JSON to this path")
    parser.add_argument("--timeout", type=float, default=None,
                        help="Give up waiting after this many seconds")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log per-item decisions")
    return parser


async def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Process exit code: 0 on success, 2 for catalog problems, 3 on timeout.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = load_config(args.config)
        vehicle = find_vehicle(load_vehicles(args.vehicles), args.vehicle)
        records = select_items(load_items(args.items), args.item_names)
    except CatalogValidationError as exc:
        print(f"Catalog error: {exc}", file=sys.stderr)
        for issue in exc.result.errors:
            print(f"  {issue.field}: {issue.message}", file=sys.stderr)
        return EXIT_CATALOG_ERROR
    except (CatalogError, FileNotFoundError, ValueError, yaml.YAMLError) as exc:
        print(f"Catalog error: {exc}", file=sys.stderr)
        return EXIT_CATALOG_ERROR

    boot = vehicle.to_boot_geometry()
    items = [record.to_item() for record in records]
    logger.info("Packing %d items into %s", len(items), vehicle.make_model)

    try:
        result = await pack_async(boot, items, config, timeout=args.timeout)
    except asyncio.TimeoutError:
        print(f"No packing found within {args.timeout:.1f}s", file=sys.stderr)
        return EXIT_TIMEOUT

    print(format_summary(result, title=vehicle.make_model))

    if args.output is not None:
        export_to_json(result, args.output)
        print(f"Saved result to {args.output}")

    return EXIT_OK


def cli() -> None:
    """Console-script wrapper around :func:`main`."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
