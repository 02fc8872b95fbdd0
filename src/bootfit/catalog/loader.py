"""
Catalog loading and lookup.

Reads vehicle and item catalogs from JSON files, validates every record,
drops hidden vehicles, and offers the make/model search and category
filter used to pick a vehicle, plus name, category and size lookups over
the item catalog.

Usage:
    vehicles = load_vehicles("data/vehicles.json")
    vehicle = find_vehicle(vehicles, "corolla")
    items = load_items("data/items.json")
    result = pack(vehicle.to_boot_geometry(), [i.to_item() for i in items])
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence

from pydantic import ValidationError

from bootfit.catalog.schemas import ItemRecord, VehicleRecord
from bootfit.catalog.transforms import transform_vehicle_data
from bootfit.catalog.validation import (
    ValidationIssue,
    ValidationResult,
    issues_from_error,
)

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────────────────────────────────────

class CatalogError(Exception):
    """Base class for catalog loading errors."""


class CatalogValidationError(CatalogError):
    """No usable record could be loaded; carries the validation details."""

    def __init__(self, message: str, result: ValidationResult) -> None:
        super().__init__(message)
        self.result = result


class VehicleNotFoundError(CatalogError):
    """No vehicle matches the requested make/model."""


class ItemNotFoundError(CatalogError):
    """No catalog item has the requested name."""


# ─────────────────────────────────────────────────────────────────────────────
# Loading
# ─────────────────────────────────────────────────────────────────────────────

def _read_json(path: Path | str) -> Any:
    with Path(path).open("r", encoding="utf-8") as f:
        return json.load(f)


def _is_raw_format(entries: Sequence[Any]) -> bool:
    return bool(entries) and isinstance(entries[0], dict) and "boot_dimensions" in entries[0]


def parse_records(
    entries: Any,
    model: type[VehicleRecord] | type[ItemRecord],
    name: str,
) -> tuple[list, ValidationResult]:
    """
    Validate *entries* one by one, keeping the valid records.

    Returns the records and a ValidationResult listing every rejected field.
    """
    if not isinstance(entries, list):
        message = f"{name} must be an array"
        result = ValidationResult(
            is_valid=False, errors=[ValidationIssue(field=name, message=message)],
        )
        raise CatalogValidationError(message, result)

    records = []
    errors = []
    for idx, entry in enumerate(entries):
        try:
            records.append(model.model_validate(entry))
        except ValidationError as exc:
            issues = issues_from_error(exc, prefix=f"{name}[{idx}]")
            errors.extend(issues)
            logger.warning("Dropping %s[%d]: %s", name, idx,
                           "; ".join(f"{i.field}: {i.message}" for i in issues))
    return records, ValidationResult(is_valid=not errors, errors=errors)


def load_vehicles(path: Path | str, include_hidden: bool = False) -> list[VehicleRecord]:
    """
    Load the vehicle catalog from *path*.

    Both the normalised catalog format and the raw scraped format
    (``boot_dimensions`` / ``opening_dimensions`` keys) are accepted.

    Raises:
        CatalogValidationError: the file holds no valid vehicle.
    """
    entries = _read_json(path)
    if isinstance(entries, list) and _is_raw_format(entries):
        vehicles = transform_vehicle_data(entries)
        result = ValidationResult(is_valid=True)
    else:
        vehicles, result = parse_records(entries, VehicleRecord, "vehicles")

    if not vehicles:
        raise CatalogValidationError(f"No valid vehicle data in {path}", result)

    if not include_hidden:
        vehicles = [v for v in vehicles if not v.hide]
    logger.info("Loaded %d vehicles from %s", len(vehicles), path)
    return vehicles


def load_items(path: Path | str) -> list[ItemRecord]:
    """
    Load the item catalog from *path*.

    Invalid records are logged and dropped; the valid ones are kept.

    Raises:
        CatalogValidationError: the file is not a list of items, or it has
                                invalid records and none valid.
    """
    items, result = parse_records(_read_json(path), ItemRecord, "items")
    if not result.is_valid and not items:
        raise CatalogValidationError(f"No valid items found in {path}", result)
    logger.info("Loaded %d items from %s", len(items), path)
    return items


# ─────────────────────────────────────────────────────────────────────────────
# Lookup
# ─────────────────────────────────────────────────────────────────────────────

def search_vehicles(vehicles: Iterable[VehicleRecord], term: str) -> list[VehicleRecord]:
    """Case-insensitive substring search on make/model; blank term returns all."""
    vehicles = list(vehicles)
    term = term.strip().lower()
    if not term:
        return vehicles
    return [v for v in vehicles if term in v.make_model.lower()]


def filter_vehicles(
    vehicles: Iterable[VehicleRecord],
    categories: Optional[Sequence[str]] = None,
) -> list[VehicleRecord]:
    """Vehicles carrying at least one of *categories*; no filter returns all."""
    vehicles = list(vehicles)
    if not categories:
        return vehicles
    return [v for v in vehicles if any(c in v.category_tags for c in categories)]


def search_items(items: Iterable[ItemRecord], term: str) -> list[ItemRecord]:
    """Case-insensitive substring search on item names; blank term returns all."""
    items = list(items)
    term = term.strip().lower()
    if not term:
        return items
    return [i for i in items if term in i.name.lower()]


def filter_items(
    items: Iterable[ItemRecord],
    categories: Optional[Sequence[str]] = None,
) -> list[ItemRecord]:
    """Items in one of *categories*; no filter returns all."""
    items = list(items)
    if not categories:
        return items
    return [i for i in items if i.category in categories]


def filter_items_by_size(
    items: Iterable[ItemRecord],
    max_length: Optional[int] = None,
    max_width: Optional[int] = None,
    max_height: Optional[int] = None,
) -> list[ItemRecord]:
    """
    Items whose nominal dimensions stay within the given maxima (mm).

    A limit of None or 0 is ignored.
    """
    def within(value: int, limit: Optional[int]) -> bool:
        return not limit or value <= limit

    return [
        i for i in items
        if within(i.dimensions.length, max_length)
        and within(i.dimensions.width, max_width)
        and within(i.dimensions.height, max_height)
    ]


def find_vehicle(vehicles: Iterable[VehicleRecord], name: str) -> VehicleRecord:
    """
    The vehicle whose make/model equals *name* (case-insensitive), else the
    first search match.

    Raises:
        VehicleNotFoundError: nothing matches.
    """
    matches = search_vehicles(vehicles, name)
    for vehicle in matches:
        if vehicle.make_model.lower() == name.strip().lower():
            return vehicle
    if not matches:
        raise VehicleNotFoundError(f"No vehicle matches {name!r}")
    return matches[0]


def select_items(items: Sequence[ItemRecord], names: Sequence[str]) -> list[ItemRecord]:
    """
    Pick catalog items by exact name, keeping repeats (two suitcases are two
    entries).  With no names the whole catalog is returned.

    Raises:
        ItemNotFoundError: a name is not in the catalog.
    """
    if not names:
        return list(items)
    by_name = {item.name.lower(): item for item in items}
    selected = []
    for name in names:
        item = by_name.get(name.lower())
        if item is None:
            raise ItemNotFoundError(f"No catalog item named {name!r}")
        selected.append(item)
    return selected
