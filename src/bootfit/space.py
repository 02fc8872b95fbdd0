"""
Effective-space calculator.

Reduces the nominal boot volume by an efficiency factor derived from the
worst irregularity present and exposes the loading-opening limits.
"""

import logging
from typing import Tuple

from bootfit.config import PackingConfig
from bootfit.models import BootGeometry, EffectiveSpace, Severity

logger = logging.getLogger(__name__)


def efficiency_factor(boot: BootGeometry, config: PackingConfig) -> float:
    """
    Usable fraction of the boot volume.

    Starts at ``config.base_efficiency`` and is capped by each irregularity's
    severity.  Irregularities do not compound; the worst one governs.
    """
    caps = {
        Severity.MINOR: config.minor_efficiency,
        Severity.MODERATE: config.moderate_efficiency,
        Severity.SIGNIFICANT: config.significant_efficiency,
    }
    factor = config.base_efficiency
    for irregularity in boot.irregularities:
        factor = min(factor, caps[irregularity.severity])
    return factor


def effective_space(
    boot: BootGeometry,
    config: PackingConfig = PackingConfig(),
) -> EffectiveSpace:
    """Derive the EffectiveSpace of *boot*."""
    factor = efficiency_factor(boot, config)
    space = EffectiveSpace(
        length=boot.length,
        width=boot.width,
        height=boot.height,
        volume=boot.volume,
        efficiency_factor=factor,
        opening_width=boot.opening_width,
        opening_height=boot.opening_height,
        has_opening_constraints=(
            boot.opening_width is not None or boot.opening_height is not None
        ),
    )
    logger.debug(
        "Effective space %dx%dx%d mm, efficiency %.2f, opening %s",
        space.length, space.width, space.height, factor,
        (space.opening_width, space.opening_height)
        if space.has_opening_constraints else "unconstrained",
    )
    return space


def opening_limits(space: EffectiveSpace, config: PackingConfig) -> Tuple[int, int]:
    """
    Maximum (width, height) of a cross-section that clears the opening.

    A declared opening dimension is reduced by the clearance margin; an
    undeclared one falls back to the internal dimension, which leaves that
    axis unconstrained.
    """
    if space.opening_width is not None:
        max_width = space.opening_width - config.opening_clearance
    else:
        max_width = space.width
    if space.opening_height is not None:
        max_height = space.opening_height - config.opening_clearance
    else:
        max_height = space.height
    return max_width, max_height


def opening_area(space: EffectiveSpace) -> int:
    """Area of the loading aperture, using internal dimensions where undeclared."""
    width = space.opening_width if space.opening_width is not None else space.width
    height = space.opening_height if space.opening_height is not None else space.height
    return width * height
