"""
Raw vehicle data transforms.

Turns the scraped vehicle source format (free-text irregularity notes,
nullable dimensions, measurement-source strings) into VehicleRecords.
Vehicles without complete boot dimensions are dropped.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from bootfit.catalog.schemas import RawVehicle, VehicleRecord
from bootfit.models import IrregularityType, Severity

logger = logging.getLogger(__name__)

# Cabin overflow spaces assumed for every transformed vehicle (mm).
DEFAULT_CABIN_SPACES = {
    "rearFloor": {"length": 300, "width": 400, "height": 200},
    "frontPassengerFloor": {"length": 350, "width": 300, "height": 250},
}

COMMON_RENTALS = ("corolla", "civic", "rav4", "cr-v", "explorer")


def map_irregularities(descriptions: Iterable[str]) -> list[dict]:
    """
    Map free-text irregularity notes to structured irregularities.

    One description may yield several irregularities (e.g. a note about a
    spare tire on a sloped floor).
    """
    mapped: list[dict] = []
    for description in descriptions:
        lower = description.lower()

        if "wheel well" in lower:
            if "significant" in lower or "major" in lower:
                severity = Severity.SIGNIFICANT
            elif "limited" in lower or "minimal" in lower:
                severity = Severity.MINOR
            else:
                severity = Severity.MODERATE
            mapped.append({"type": IrregularityType.WHEEL_WELLS.value,
                           "severity": severity.value})

        if "spare tire" in lower:
            mapped.append({"type": IrregularityType.SPARE_TIRE_BUMP.value,
                           "severity": Severity.MODERATE.value})

        if "slope" in lower:
            mapped.append({"type": IrregularityType.SLOPED_FLOOR.value,
                           "severity": Severity.MODERATE.value})

        if "opening" in lower:
            mapped.append({"type": IrregularityType.NARROW_OPENING.value,
                           "severity": Severity.MODERATE.value})
    return mapped


def map_measurement_confidence(source: str) -> str:
    """Classify a measurement-source string; verified sources win."""
    if "verified" in source or "specs_and_forums" in source:
        return "verified"
    if "manufacturer" in source:
        return "manufacturer"
    return "user_submitted"


def category_tags(raw: RawVehicle) -> list[str]:
    """Category tags derived from the variant and model name."""
    tags: list[str] = []
    variant = raw.variant.lower()
    model = raw.model.lower()

    if "sedan" in variant:
        tags.append("sedan")
    if "hatchback" in variant:
        tags.append("hatchback")
    if "rav4" in model or "cr-v" in model:
        tags.extend(["suv", "compact_suv"])
    if "explorer" in model or "tahoe" in model:
        tags.extend(["suv", "large_suv"])
    if "sienna" in model or "odyssey" in model:
        tags.append("minivan")
    if "corolla" in model or "civic" in model:
        tags.append("compact")
    if any(name in model for name in COMMON_RENTALS):
        tags.append("rental_common")
    return tags


def transform_vehicle(raw: RawVehicle, today: Optional[date] = None) -> dict:
    """Catalog-form (camelCase) dict for one raw vehicle with a complete boot."""
    today = today or date.today()
    make_model = f"{raw.make} {raw.model} {raw.year}"
    if raw.variant:
        make_model += f" {raw.variant}"

    bd = raw.boot_dimensions
    od = raw.opening_dimensions
    measurements: dict[str, Any] = {"length": bd.length, "width": bd.width,
                                    "height": bd.height}
    # Zero means "not measured" in the source data.
    if od.width:
        measurements["openingWidth"] = od.width
    if od.height:
        measurements["openingHeight"] = od.height

    record: dict[str, Any] = {
        "makeModel": make_model,
        "categoryTags": category_tags(raw),
        "bootMeasurements": measurements,
        "bootIrregularities": map_irregularities(raw.irregularities),
        "cabinOverflowSpaces": DEFAULT_CABIN_SPACES,
        "measurementConfidence": map_measurement_confidence(raw.measurement_source),
        "submissionCount": 1,
        "lastUpdated": today.isoformat(),
    }
    if raw.hide is not None:
        record["hide"] = raw.hide
    return record


def transform_vehicle_data(
    raw_data: Iterable[dict],
    today: Optional[date] = None,
) -> list[VehicleRecord]:
    """
    Transform scraped vehicle entries into validated VehicleRecords.

    Entries with missing boot dimensions are skipped silently; entries that
    fail validation after transformation are logged and skipped.
    """
    vehicles: list[VehicleRecord] = []
    for idx, entry in enumerate(raw_data):
        try:
            raw = RawVehicle.model_validate(entry)
        except ValidationError as exc:
            logger.warning("Skipping raw vehicle %d: %s", idx, exc.errors()[0]["msg"])
            continue
        if not raw.has_complete_boot:
            continue
        try:
            vehicles.append(VehicleRecord.model_validate(transform_vehicle(raw, today)))
        except ValidationError as exc:
            logger.warning(
                "Skipping %s %s %s: %d validation error(s)",
                raw.make, raw.model, raw.year, exc.error_count(),
            )
    return vehicles
