"""
Tests for the position search, search budget and compression engine.
"""

import pytest

from bootfit.compression import (
    compress_dimensions,
    compression_levels,
    find_opening_compression,
    find_space_compression,
)
from bootfit.config import PackingConfig
from bootfit.models import BootGeometry, Dimensions, OrientationConstraint, Position
from bootfit.placement import PositionSearch, SearchBudget
from bootfit.space import effective_space

from conftest import make_item


@pytest.fixture
def space(open_boot):
    return effective_space(open_boot)


@pytest.fixture
def search(space):
    return PositionSearch(space, grid_step=50)


# ---------------------------------------------------------------------------
# Position search
# ---------------------------------------------------------------------------

class TestPositionSearch:

    def test_empty_boot_returns_origin(self, search):
        assert search.find_position(Dimensions(400, 300, 200)) == Position(0, 0, 0)

    def test_oversized_box_returns_none(self, search):
        assert search.find_position(Dimensions(1200, 800, 600)) is None

    def test_next_box_is_placed_against_previous(self, search):
        dims = Dimensions(400, 300, 200)
        search.place(Position(0, 0, 0), dims)
        # Touching faces are allowed, so x = 400 is the first free slot.
        assert search.find_position(dims) == Position(400, 0, 0)

    def test_width_then_height_once_row_is_full(self, search):
        dims = Dimensions(500, 500, 250)
        for expected in [(0, 0, 0), (500, 0, 0), (0, 500, 0), (500, 500, 0),
                         (0, 0, 250), (500, 0, 250), (0, 500, 250), (500, 500, 250)]:
            pos = search.find_position(dims)
            assert pos is not None and pos.as_tuple() == expected
            search.place(pos, dims)
        assert search.find_position(dims) is None
        assert search.placed_count == 8
        assert search.occupied_volume == 500_000_000

    def test_exact_fit(self):
        space = effective_space(BootGeometry(length=600, width=300, height=300))
        search = PositionSearch(space, grid_step=50)
        assert search.find_position(Dimensions(600, 300, 300)) == Position(0, 0, 0)

    def test_has_collision(self, search):
        search.place(Position(0, 0, 0), Dimensions(400, 300, 200))
        assert search.has_collision(Position(100, 100, 100), Dimensions(50, 50, 50))
        assert not search.has_collision(Position(400, 0, 0), Dimensions(50, 50, 50))

    def test_found_position_never_collides(self, search):
        dims = Dimensions(350, 250, 150)
        while True:
            pos = search.find_position(dims)
            if pos is None:
                break
            assert not search.has_collision(pos, dims)
            search.place(pos, dims)
        assert search.placed_count > 0


class TestSearchBudget:

    def test_unlimited_budget_never_exhausts(self):
        budget = SearchBudget()
        budget.charge(10 ** 9)
        assert not budget.exhausted

    def test_position_checks_limit(self):
        budget = SearchBudget(max_position_checks=10)
        budget.charge(9)
        assert not budget.exhausted
        budget.charge(1)
        assert budget.exhausted

    def test_zero_seconds_exhausts_immediately(self):
        assert SearchBudget(max_seconds=0).exhausted

    def test_exhausted_search_returns_none(self, space):
        search = PositionSearch(space, budget=SearchBudget(max_position_checks=1))
        assert search.find_position(Dimensions(100, 100, 100)) == Position(0, 0, 0)
        assert search.find_position(Dimensions(100, 100, 100)) is None


# ---------------------------------------------------------------------------
# Compression
# ---------------------------------------------------------------------------

class TestCompression:

    @pytest.mark.parametrize("compressibility,expected", [
        (0, []),
        (3, []),
        (12, [5, 10]),
        (20, [5, 10, 15, 20]),
    ])
    def test_levels(self, compressibility, expected):
        item = make_item("Bag", 100, 100, 100, compressibility=compressibility)
        assert compression_levels(item, PackingConfig()) == expected

    def test_levels_are_capped_at_100(self):
        item = make_item("Bag", 100, 100, 100, compressibility=150)
        levels = compression_levels(item, PackingConfig())
        assert levels[-1] == 100

    def test_compress_rounds_half_up(self):
        assert compress_dimensions(Dimensions(5, 3, 1), 50) == Dimensions(3, 2, 1)

    def test_compress_keeps_at_least_one_mm(self):
        assert compress_dimensions(Dimensions(10, 10, 10), 100) == Dimensions(1, 1, 1)

    def test_opening_compression_finds_first_level(self, restricted_boot):
        space = effective_space(restricted_boot)
        item = make_item("Mat", 820, 820, 100, compressibility=10,
                         orientation_constraints=OrientationConstraint.FLAT_ONLY)
        candidate = find_opening_compression(item, space, PackingConfig())
        assert candidate is not None
        assert candidate.level == 5
        assert all(o.width <= 780 and o.height <= 380 for o in candidate.orientations)

    def test_opening_compression_not_enough(self, restricted_boot, mattress):
        space = effective_space(restricted_boot)
        item = make_item("Mat", 900, 900, 100, compressibility=10,
                         orientation_constraints=OrientationConstraint.FLAT_ONLY)
        assert find_opening_compression(item, space, PackingConfig()) is None
        assert find_opening_compression(mattress, space, PackingConfig()) is None

    def test_space_compression(self):
        space = effective_space(BootGeometry(length=650, width=350, height=350))
        search = PositionSearch(space)
        item = make_item("Duffel", 700, 300, 300, compressibility=10,
                         orientation_constraints=OrientationConstraint.UPRIGHT_ONLY)
        fit = find_space_compression(item, space, search, PackingConfig())
        assert fit is not None
        assert fit.level == 10
        assert fit.orientation == Dimensions(630, 270, 270)
        assert fit.position == Position(0, 0, 0)

    def test_space_compression_respects_limit(self):
        space = effective_space(BootGeometry(length=650, width=350, height=350))
        search = PositionSearch(space)
        item = make_item("Duffel", 800, 300, 300, compressibility=15,
                         orientation_constraints=OrientationConstraint.UPRIGHT_ONLY)
        assert find_space_compression(item, space, search, PackingConfig()) is None
