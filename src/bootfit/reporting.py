"""
Result and summary reporting for packing runs.

Provides the utilisation metric, the warning synthesis applied at the end
of every ``pack`` call, the read-only utilities callers use on a finished
PackingResult, and JSON export.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from bootfit.config import PackingConfig
from bootfit.models import (
    BootGeometry,
    EffectiveSpace,
    Item,
    PackedItem,
    PackingResult,
    PackingSummary,
    Severity,
)
from bootfit.space import opening_area

SIGNIFICANT_IRREGULARITY_WARNING = (
    "Boot has significant irregularities that may affect actual packing capacity"
)


@dataclass
class PackingDiagnostics:
    """Per-call tallies the orchestrator collects for warning synthesis.

    Attributes:
        input_errors: Messages about malformed boot or item input.
        opening_rejected: Items whose every orientation, at every permitted
            compression level, is blocked by the opening.
        opening_compressed: Items that only cleared the opening compressed.
        budget_skipped: Items left unevaluated once the search budget ran out.
    """

    input_errors: list[str] = field(default_factory=list)
    opening_rejected: list[Item] = field(default_factory=list)
    opening_compressed: list[Item] = field(default_factory=list)
    budget_skipped: list[Item] = field(default_factory=list)


def volume_utilization(used_volume: float, space: EffectiveSpace) -> float:
    """Percent of the effective volume occupied, clamped to [0, 100]."""
    available = space.effective_volume
    if available <= 0:
        return 0.0
    return min(100.0, 100.0 * used_volume / available)


def cabin_overflow(unpacked_items: Iterable[Item]) -> list[Item]:
    """Unpacked items that could travel in the passenger cabin instead."""
    return [item for item in unpacked_items if item.cabin_suitable]


def _minimal_cross_section(item: Item) -> int:
    """Larger side of the item's smallest face."""
    return sorted(item.dimensions.as_tuple())[1]


def build_warnings(
    boot: BootGeometry,
    space: EffectiveSpace,
    packed_items: list[PackedItem],
    diagnostics: PackingDiagnostics,
    config: PackingConfig,
) -> list[str]:
    """Assemble the free-text diagnostics of a packing run, in a fixed order."""
    warnings: list[str] = list(diagnostics.input_errors)

    if any(irr.severity == Severity.SIGNIFICANT for irr in boot.irregularities):
        warnings.append(SIGNIFICANT_IRREGULARITY_WARNING)

    if diagnostics.opening_rejected:
        warnings.append(
            f"{len(diagnostics.opening_rejected)} item(s) cannot pass through "
            f"the boot opening"
        )

    if diagnostics.opening_compressed:
        warnings.append(
            f"{len(diagnostics.opening_compressed)} item(s) needed compression "
            f"to fit through the boot opening"
        )

    if space.has_opening_constraints:
        cross_section = space.width * space.height
        if cross_section > 0:
            ratio = opening_area(space) / cross_section
            if ratio < config.narrow_opening_ratio:
                warnings.append(
                    f"Boot opening is only {ratio:.0%} of the boot cross-section; "
                    f"bulky items may not pass through"
                )

        if len(packed_items) > 1:
            warnings.append(
                f"{len(packed_items)} items must pass through a restricted "
                f"opening; load the deepest items first"
            )

        larger_opening = max(
            space.opening_width if space.opening_width is not None else space.width,
            space.opening_height if space.opening_height is not None else space.height,
        )
        for item in diagnostics.opening_rejected:
            gap = _minimal_cross_section(item) - larger_opening
            if abs(gap) <= config.tight_clearance:
                warnings.append(
                    f"{item.name} is within {config.tight_clearance} mm of the "
                    f"opening size; check the fit by hand"
                )

    if diagnostics.budget_skipped:
        warnings.append(
            f"Search budget exhausted; {len(diagnostics.budget_skipped)} item(s) "
            f"were not placed"
        )

    return warnings


# ─────────────────────────────────────────────────────────────────────────────
# Read-only utilities on finished results
# ─────────────────────────────────────────────────────────────────────────────

def total_weight(packed_items: Iterable[PackedItem]) -> float:
    """Sum of the packed items' weights (kg); 0 for no items.

    Example:
        >>> total_weight([])
        0
    """
    return sum(packed.item.weight for packed in packed_items)


def summarize(result: PackingResult) -> PackingSummary:
    """Counts and weight totals of *result*."""
    return PackingSummary(
        total_items=len(result.packed_items) + len(result.unpacked_items),
        packed_count=len(result.packed_items),
        unpacked_count=len(result.unpacked_items),
        cabin_suitable_unpacked=len(result.cabin_overflow_suggested),
        total_weight=total_weight(result.packed_items),
    )


def format_summary(result: PackingResult, title: str = "Packing result") -> str:
    """Human-readable multi-line summary of *result*."""
    summary = summarize(result)
    lines = [
        "=" * 60,
        title,
        "=" * 60,
        f"Items:        {summary.total_items}",
        f"Packed:       {summary.packed_count}",
        f"Unpacked:     {summary.unpacked_count}",
        f"Cabin suited: {summary.cabin_suitable_unpacked}",
        f"Total weight: {summary.total_weight:.1f} kg",
        f"Utilization:  {result.volume_utilization:.1f}% of "
        f"{result.boot_space_available / 1e6:.1f} L usable",
        "",
    ]
    for packed in result.packed_items:
        o = packed.orientation
        p = packed.position
        line = (
            f"  + {packed.item.name}: {o.length}x{o.width}x{o.height} mm "
            f"at ({p.x}, {p.y}, {p.z})"
        )
        if packed.compressed:
            line += f", compressed {packed.compression_applied:.0f}%"
        lines.append(line)
    for item in result.unpacked_items:
        suffix = " (cabin)" if item.cabin_suitable else ""
        lines.append(f"  - {item.name}{suffix}")
    if result.warnings:
        lines.append("")
        lines.append("Warnings:")
        lines.extend(f"  ! {w}" for w in result.warnings)
    lines.append("=" * 60)
    return "\n".join(lines)


def export_to_json(result: PackingResult, output_path: Path | str) -> None:
    """Write *result* and its summary to a JSON file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = result.to_dict()
    data["summary"] = summarize(result).to_dict()

    with output_path.open("w") as f:
        json.dump(data, f, indent=2)
