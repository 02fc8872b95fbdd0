"""
Orientation generator and opening-access filter.

Orientations are plain Dimensions triples; the insertion axis is the
length, so only an orientation's width and height have to clear the
loading opening.
"""

from typing import List

from bootfit.config import PackingConfig
from bootfit.geometry import rotations
from bootfit.models import Dimensions, EffectiveSpace, OrientationConstraint
from bootfit.space import opening_limits


def generate_orientations(
    dims: Dimensions,
    constraint: OrientationConstraint,
    config: PackingConfig = PackingConfig(),
) -> List[Dimensions]:
    """
    Candidate orientations of *dims* in a stable order.

    ``upright_only`` keeps the original orientation only.  ``flat_only``
    keeps rotations no taller than ``flat_height_ratio`` × the larger of the
    original length and width.  ``any`` returns all six rotations.
    """
    if constraint == OrientationConstraint.UPRIGHT_ONLY:
        return [dims]

    candidates = rotations(dims)
    if constraint == OrientationConstraint.FLAT_ONLY:
        limit = max(dims.length, dims.width) * config.flat_height_ratio
        return [o for o in candidates if o.height <= limit]

    return candidates


def clears_opening(
    orientation: Dimensions,
    space: EffectiveSpace,
    config: PackingConfig,
) -> bool:
    """True if the orientation's cross-section passes through the opening."""
    if not space.has_opening_constraints:
        return True
    max_width, max_height = opening_limits(space, config)
    return orientation.width <= max_width and orientation.height <= max_height


def filter_by_opening(
    orientations: List[Dimensions],
    space: EffectiveSpace,
    config: PackingConfig = PackingConfig(),
) -> List[Dimensions]:
    """Orientations that can be inserted through the opening, order preserved."""
    if not space.has_opening_constraints:
        return list(orientations)
    return [o for o in orientations if clears_opening(o, space, config)]
