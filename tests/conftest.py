"""Shared fixtures for the bootfit test suite."""

import os
import sys
from pathlib import Path

import pytest

# Ensure the src directory is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from bootfit.config import PackingConfig
from bootfit.models import (
    BootGeometry,
    Dimensions,
    Irregularity,
    IrregularityType,
    Item,
    OrientationConstraint,
    Rigidity,
    Severity,
)

REPO_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = REPO_ROOT / "data"
CONFIG_DIR = REPO_ROOT / "configs"


def make_item(
    name: str,
    length: int,
    width: int,
    height: int,
    **kwargs,
) -> Item:
    """Build an Item with sensible defaults for tests."""
    kwargs.setdefault("weight", 5.0)
    return Item(name=name, dimensions=Dimensions(length, width, height), **kwargs)


# ---------------------------------------------------------------------------
# Boots
# ---------------------------------------------------------------------------

@pytest.fixture
def open_boot():
    """1000 x 1000 x 500 mm boot with no opening restriction."""
    return BootGeometry(length=1000, width=1000, height=500)


@pytest.fixture
def restricted_boot():
    """Same boot behind an 800 x 400 mm opening."""
    return BootGeometry(
        length=1000, width=1000, height=500,
        opening_width=800, opening_height=400,
    )


@pytest.fixture
def significant_boot():
    return BootGeometry(
        length=1000, width=1000, height=500,
        irregularities=(
            Irregularity(IrregularityType.WHEEL_WELLS, Severity.SIGNIFICANT),
        ),
    )


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------

@pytest.fixture
def suitcase():
    return make_item("Suitcase", 400, 300, 200, weight=12.0)


@pytest.fixture
def mattress():
    """Flat-only item too wide for the restricted opening."""
    return make_item(
        "Mattress", 900, 900, 100,
        rigidity=Rigidity.FLEXIBLE,
        orientation_constraints=OrientationConstraint.FLAT_ONLY,
    )


@pytest.fixture
def mixed_items():
    return [
        make_item("Large Suitcase", 750, 500, 300, weight=23.0),
        make_item("Carry-on", 550, 400, 230, rigidity=Rigidity.COMPLETELY_RIGID,
                  cabin_suitable=True),
        make_item("Duffel", 600, 300, 300, rigidity=Rigidity.FLEXIBLE,
                  compressibility=20, cabin_suitable=True),
        make_item("Box", 300, 300, 300, rigidity=Rigidity.SEMI_RIGID),
        make_item("Backpack", 450, 300, 200, rigidity=Rigidity.VERY_FLEXIBLE,
                  compressibility=30),
        make_item("Golf Bag", 1300, 350, 350),
    ]


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

@pytest.fixture
def coarse_config():
    """Coarse grid for fast tests."""
    return PackingConfig(grid_step=100)
