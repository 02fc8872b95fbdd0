"""
Packing orchestrator — greedy single-pass boot packing.

Algorithm:
  1. Derive the EffectiveSpace of the boot.
  2. Prepare every item once (volume, rigidity rank, orientations) and sort
     by volume descending, then by rigidity (more rigid first).
  3. For each item:
       a. filter its orientations through the opening (if constrained)
       b. try each remaining orientation in the position search
       c. compressible and the filter emptied the list
            → opening-targeted compression, then position search
          compressible and orientations existed but none fit
            → space-targeted compression
       d. otherwise the item is unpacked
  4. Synthesize utilisation, cabin-overflow suggestions and warnings.

Items are placed at most once and never revisited; a different global
arrangement could sometimes fit more, which is accepted.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from bootfit.compression import find_opening_compression, find_space_compression
from bootfit.config import PackingConfig
from bootfit.models import (
    BootGeometry,
    Dimensions,
    EffectiveSpace,
    Item,
    PackedItem,
    PackingResult,
)
from bootfit.orientations import filter_by_opening, generate_orientations
from bootfit.placement import PositionSearch, SearchBudget
from bootfit.reporting import (
    PackingDiagnostics,
    build_warnings,
    cabin_overflow,
    volume_utilization,
)
from bootfit.space import effective_space

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Item preparation
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PreparedItem:
    """
    A catalog item with the metrics derived once per packing call.

    Kept separate from the caller's Item so sorting never aliases or
    mutates catalog data.
    """
    item: Item
    index: int
    volume: int
    rigidity_rank: int
    orientations: Tuple[Dimensions, ...]

    @property
    def sort_key(self) -> Tuple[int, int]:
        return (-self.volume, self.rigidity_rank)


def prepare_items(items: Sequence[Item], config: PackingConfig) -> List[PreparedItem]:
    """Build PreparedItems and return them in packing order (stable sort)."""
    prepared = [
        PreparedItem(
            item=item,
            index=idx,
            volume=item.dimensions.volume,
            rigidity_rank=item.rigidity.rank,
            orientations=tuple(generate_orientations(
                item.dimensions, item.orientation_constraints, config,
            )),
        )
        for idx, item in enumerate(items)
    ]
    return sorted(prepared, key=lambda p: p.sort_key)


def _has_valid_dimensions(dims: Dimensions) -> bool:
    return dims.length > 0 and dims.width > 0 and dims.height > 0


# ─────────────────────────────────────────────────────────────────────────────
# Packer
# ─────────────────────────────────────────────────────────────────────────────

class BootPacker:
    """
    Greedy first-fit boot packer.

    Holds only its configuration; every ``pack`` call builds fresh state,
    so one instance can serve any number of calls.
    """

    def __init__(self, config: Optional[PackingConfig] = None) -> None:
        self.config = config if config is not None else PackingConfig()

    def pack(self, boot: BootGeometry, items: Sequence[Item]) -> PackingResult:
        """
        Pack *items* into *boot*.

        Never raises for well-typed input: infeasible items end up in
        ``unpacked_items`` and malformed input is reported as a warning.
        """
        cfg = self.config
        space = effective_space(boot, cfg)
        diagnostics = PackingDiagnostics()

        if not _has_valid_dimensions(Dimensions(boot.length, boot.width, boot.height)):
            diagnostics.input_errors.append(
                f"Boot dimensions {boot.length}x{boot.width}x{boot.height} mm are "
                f"invalid; nothing was packed"
            )
            logger.warning("Invalid boot dimensions %s", boot)
            unpacked = list(items)
            return PackingResult(
                unpacked_items=unpacked,
                boot_space_available=max(0.0, space.effective_volume),
                cabin_overflow_suggested=cabin_overflow(unpacked),
                warnings=build_warnings(boot, space, [], diagnostics, cfg),
            )

        valid_items: List[Item] = []
        unpacked_items: List[Item] = []
        for item in items:
            if _has_valid_dimensions(item.dimensions):
                valid_items.append(item)
            else:
                diagnostics.input_errors.append(
                    f"{item.name} has invalid dimensions "
                    f"{item.dimensions.as_tuple()} and was not packed"
                )
                unpacked_items.append(item)

        budget = SearchBudget(cfg.max_seconds, cfg.max_position_checks)
        search = PositionSearch(space, grid_step=cfg.grid_step, budget=budget)
        packed_items: List[PackedItem] = []

        for prepared in prepare_items(valid_items, cfg):
            if budget.exhausted:
                diagnostics.budget_skipped.append(prepared.item)
                unpacked_items.append(prepared.item)
                continue

            packed = self._pack_item(prepared, space, search, diagnostics)
            if packed is not None:
                search.place(packed.position, packed.orientation)
                packed_items.append(packed)
            elif budget.exhausted:
                diagnostics.budget_skipped.append(prepared.item)
                unpacked_items.append(prepared.item)
            else:
                unpacked_items.append(prepared.item)

        used = search.occupied_volume
        result = PackingResult(
            packed_items=packed_items,
            unpacked_items=unpacked_items,
            volume_utilization=volume_utilization(used, space),
            boot_space_used=used,
            boot_space_available=space.effective_volume,
            cabin_overflow_suggested=cabin_overflow(unpacked_items),
            warnings=build_warnings(boot, space, packed_items, diagnostics, cfg),
        )
        logger.info(
            "Packed %d/%d items, utilization %.1f%% (%d position checks)",
            len(packed_items), len(items), result.volume_utilization,
            budget.position_checks,
        )
        return result

    def _pack_item(
        self,
        prepared: PreparedItem,
        space: EffectiveSpace,
        search: PositionSearch,
        diagnostics: PackingDiagnostics,
    ) -> Optional[PackedItem]:
        """Run the per-item state machine; returns None if the item stays out."""
        cfg = self.config
        item = prepared.item
        if not prepared.orientations:
            logger.debug("%s has no orientation satisfying its constraint", item.name)
            return None

        orientations = filter_by_opening(list(prepared.orientations), space, cfg)
        blocked_by_opening = not orientations

        for orientation in orientations:
            position = search.find_position(orientation)
            if position is not None:
                logger.debug("%s placed at %s as %s", item.name, position, orientation)
                return PackedItem(item=item, position=position, orientation=orientation)

        if item.compressibility <= 0:
            if blocked_by_opening:
                diagnostics.opening_rejected.append(item)
            logger.debug("%s does not fit", item.name)
            return None

        if blocked_by_opening:
            candidate = find_opening_compression(item, space, cfg)
            if candidate is None:
                diagnostics.opening_rejected.append(item)
                logger.debug("%s cannot clear the opening even compressed", item.name)
                return None
            for orientation in candidate.orientations:
                position = search.find_position(orientation)
                if position is not None:
                    diagnostics.opening_compressed.append(item)
                    return PackedItem(
                        item=item,
                        position=position,
                        orientation=orientation,
                        compressed=True,
                        compression_applied=float(candidate.level),
                    )
            logger.debug(
                "%s clears the opening at %d%% but finds no room",
                item.name, candidate.level,
            )
            return None

        fit = find_space_compression(item, space, search, cfg)
        if fit is None:
            logger.debug("%s does not fit even compressed", item.name)
            return None
        return PackedItem(
            item=item,
            position=fit.position,
            orientation=fit.orientation,
            compressed=True,
            compression_applied=float(fit.level),
        )


def pack(
    boot: BootGeometry,
    items: Sequence[Item],
    config: Optional[PackingConfig] = None,
) -> PackingResult:
    """Pack *items* into *boot* with a fresh BootPacker."""
    return BootPacker(config).pack(boot, items)
