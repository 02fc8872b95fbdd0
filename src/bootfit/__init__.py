"""
bootfit — vehicle boot packing engine.

Public API:
    from bootfit import pack, PackingConfig, BootGeometry, Item, Dimensions
    from bootfit import total_weight, summarize
    from bootfit.catalog import load_vehicles, load_items, find_vehicle
    from bootfit.runner import pack_async
"""

from bootfit.config import PackingConfig, load_config
from bootfit.models import (
    BootGeometry,
    Category,
    Dimensions,
    EffectiveSpace,
    Irregularity,
    IrregularityType,
    Item,
    OrientationConstraint,
    PackedItem,
    PackingResult,
    PackingSummary,
    Position,
    Rigidity,
    Severity,
)
from bootfit.packer import BootPacker, pack
from bootfit.reporting import summarize, total_weight
from bootfit.space import effective_space

__version__ = "0.1.0"

__all__ = [
    "BootGeometry",
    "BootPacker",
    "Category",
    "Dimensions",
    "EffectiveSpace",
    "Irregularity",
    "IrregularityType",
    "Item",
    "OrientationConstraint",
    "PackedItem",
    "PackingConfig",
    "PackingResult",
    "PackingSummary",
    "Position",
    "Rigidity",
    "Severity",
    "effective_space",
    "load_config",
    "pack",
    "summarize",
    "total_weight",
]
