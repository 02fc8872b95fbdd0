"""
Compression engine.

Compressible items may shrink uniformly in all three dimensions, in steps
of ``config.compression_step`` percent up to their compressibility.  Two
independent searches exist because they stop on different criteria:

  find_opening_compression — first level whose cross-section clears the
                             opening (no position search involved)
  find_space_compression   — first level for which the position search
                             finds room for some orientation
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from bootfit.config import PackingConfig
from bootfit.models import Dimensions, EffectiveSpace, Item, Position
from bootfit.orientations import filter_by_opening, generate_orientations
from bootfit.placement import PositionSearch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompressionCandidate:
    """Opening-clearing orientations at the first sufficient compression level."""
    level: int
    orientations: List[Dimensions]


@dataclass(frozen=True)
class CompressionFit:
    """A compression level together with the orientation and position it fits."""
    level: int
    orientation: Dimensions
    position: Position


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compression_levels(item: Item, config: PackingConfig) -> List[int]:
    """Percent levels to try, ascending; empty for incompressible items."""
    limit = min(item.compressibility, 100)
    if limit <= 0:
        return []
    return list(range(config.compression_step, limit + 1, config.compression_step))


def compress_dimensions(dims: Dimensions, pct: float) -> Dimensions:
    """Shrink every dimension by *pct* percent, rounded to the nearest mm."""
    factor = 1 - pct / 100
    return Dimensions(
        length=max(1, _round_half_up(dims.length * factor)),
        width=max(1, _round_half_up(dims.width * factor)),
        height=max(1, _round_half_up(dims.height * factor)),
    )


def find_opening_compression(
    item: Item,
    space: EffectiveSpace,
    config: PackingConfig,
) -> Optional[CompressionCandidate]:
    """
    Smallest compression level at which some orientation clears the opening.

    Returns the clearing orientations of that level only, or None when no
    permitted level is enough.
    """
    for level in compression_levels(item, config):
        compressed = compress_dimensions(item.dimensions, level)
        orientations = generate_orientations(
            compressed, item.orientation_constraints, config,
        )
        passing = filter_by_opening(orientations, space, config)
        if passing:
            logger.debug("%s clears the opening at %d%% compression", item.name, level)
            return CompressionCandidate(level=level, orientations=passing)
    return None


def find_space_compression(
    item: Item,
    space: EffectiveSpace,
    search: PositionSearch,
    config: PackingConfig,
) -> Optional[CompressionFit]:
    """
    Smallest compression level at which some orientation finds a position.

    When the boot has opening constraints only orientations that clear the
    opening are tried, so compression never sneaks an item past the opening.
    """
    for level in compression_levels(item, config):
        if search.budget.exhausted:
            return None
        compressed = compress_dimensions(item.dimensions, level)
        orientations = filter_by_opening(
            generate_orientations(compressed, item.orientation_constraints, config),
            space,
            config,
        )
        for orientation in orientations:
            position = search.find_position(orientation)
            if position is not None:
                logger.debug(
                    "%s fits the remaining space at %d%% compression",
                    item.name, level,
                )
                return CompressionFit(level=level, orientation=orientation,
                                      position=position)
    return None
