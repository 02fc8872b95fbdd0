"""
Integration tests for the packing orchestrator.

Covers the invariants every result must satisfy (conservation,
non-overlap, containment, utilisation bounds) and the concrete packing
scenarios: plain fit, oversize, opening rejection, compression and empty
input.
"""

from itertools import combinations

import pytest

from bootfit import BootPacker, PackingConfig, pack
from bootfit.geometry import boxes_overlap, fits_within, volume
from bootfit.models import BootGeometry, OrientationConstraint, Rigidity
from bootfit.packer import prepare_items
from bootfit.reporting import SIGNIFICANT_IRREGULARITY_WARNING

from conftest import make_item


def assert_valid_result(result, boot, items):
    """Invariants shared by every packing result."""
    assert len(result.packed_items) + len(result.unpacked_items) == len(items)

    bounds = (boot.length, boot.width, boot.height)
    for packed in result.packed_items:
        assert fits_within(packed.position.as_tuple(), packed.orientation.as_tuple(), bounds)
        assert packed.compression_applied <= packed.item.compressibility

    for a, b in combinations(result.packed_items, 2):
        assert not boxes_overlap(
            a.position.as_tuple(), a.orientation.as_tuple(),
            b.position.as_tuple(), b.orientation.as_tuple(),
        ), f"{a.item.name} overlaps {b.item.name}"

    assert result.boot_space_used == sum(volume(p.orientation) for p in result.packed_items)
    assert 0 <= result.volume_utilization <= 100
    assert (result.volume_utilization == 0) == (not result.packed_items)


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

class TestScenarios:

    def test_single_item_fits(self, open_boot, suitcase):
        result = pack(open_boot, [suitcase])
        assert_valid_result(result, open_boot, [suitcase])
        assert len(result.packed_items) == 1
        packed = result.packed_items[0]
        assert packed.compressed is False
        assert packed.item is suitcase
        assert result.volume_utilization > 0
        assert result.boot_space_used == 24_000_000
        assert result.boot_space_available == pytest.approx(425_000_000)

    def test_oversized_item_is_unpacked(self, open_boot):
        crate = make_item("Crate", 1200, 800, 600)
        result = pack(open_boot, [crate])
        assert_valid_result(result, open_boot, [crate])
        assert result.packed_items == []
        assert result.unpacked_items == [crate]

    def test_opening_rejects_item_that_fits_boot(self, open_boot, restricted_boot, mattress):
        assert len(pack(open_boot, [mattress]).packed_items) == 1

        result = pack(restricted_boot, [mattress])
        assert_valid_result(result, restricted_boot, [mattress])
        assert result.packed_items == []
        assert result.unpacked_items == [mattress]
        assert "1 item(s) cannot pass through the boot opening" in result.warnings

    def test_compressible_item_in_tight_boot(self):
        boot = BootGeometry(length=650, width=350, height=350)
        duffel = make_item("Duffel", 600, 300, 300, rigidity=Rigidity.FLEXIBLE,
                           compressibility=20)
        result = pack(boot, [duffel])
        assert_valid_result(result, boot, [duffel])
        assert len(result.packed_items) == 1
        packed = result.packed_items[0]
        assert not packed.compressed or packed.compression_applied <= 20

    def test_empty_item_list(self, open_boot):
        result = pack(open_boot, [])
        assert result.packed_items == []
        assert result.unpacked_items == []
        assert result.volume_utilization == 0
        assert result.boot_space_used == 0


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------

class TestOrdering:

    def test_volume_descending_then_rigidity(self):
        items = [
            make_item("Small", 100, 100, 100),
            make_item("Soft", 400, 300, 200, rigidity=Rigidity.VERY_FLEXIBLE),
            make_item("Hard", 400, 300, 200, rigidity=Rigidity.COMPLETELY_RIGID),
            make_item("Big", 500, 500, 500),
        ]
        order = [p.item.name for p in prepare_items(items, PackingConfig())]
        assert order == ["Big", "Hard", "Soft", "Small"]

    def test_equal_keys_keep_input_order(self):
        items = [make_item(f"Box {i}", 200, 200, 200) for i in range(4)]
        order = [p.item.name for p in prepare_items(items, PackingConfig())]
        assert order == ["Box 0", "Box 1", "Box 2", "Box 3"]

    def test_rigid_item_placed_first(self, open_boot):
        soft = make_item("Soft", 400, 300, 200, rigidity=Rigidity.FLEXIBLE)
        hard = make_item("Hard", 400, 300, 200, rigidity=Rigidity.COMPLETELY_RIGID)
        result = pack(open_boot, [soft, hard])
        assert [p.item.name for p in result.packed_items] == ["Hard", "Soft"]
        assert result.packed_items[0].position.as_tuple() == (0, 0, 0)
        assert result.packed_items[1].position.as_tuple() == (400, 0, 0)

    def test_caller_items_are_not_mutated(self, open_boot, mixed_items):
        before = list(mixed_items)
        pack(open_boot, mixed_items)
        assert mixed_items == before


# ---------------------------------------------------------------------------
# Invariants
# ---------------------------------------------------------------------------

class TestInvariants:

    @pytest.mark.parametrize("boot", [
        BootGeometry(length=1000, width=1000, height=500),
        BootGeometry(length=1000, width=1400, height=500,
                     opening_width=1000, opening_height=450),
        BootGeometry(length=700, width=600, height=400, opening_width=500),
        BootGeometry(length=300, width=300, height=300),
    ])
    def test_mixed_load(self, boot, mixed_items, coarse_config):
        result = pack(boot, mixed_items, coarse_config)
        assert_valid_result(result, boot, mixed_items)

    def test_overfilled_boot(self, coarse_config):
        boot = BootGeometry(length=600, width=600, height=300)
        items = [make_item(f"Box {i}", 300, 300, 300, compressibility=10)
                 for i in range(10)]
        result = pack(boot, items, coarse_config)
        assert_valid_result(result, boot, items)
        assert len(result.packed_items) == 4
        assert not any(p.compressed for p in result.packed_items)

    def test_significant_irregularity_lowers_available_space(self, open_boot,
                                                             significant_boot, suitcase):
        plain = pack(open_boot, [suitcase])
        rough = pack(significant_boot, [suitcase])
        assert rough.boot_space_available < plain.boot_space_available
        assert rough.volume_utilization > plain.volume_utilization
        assert SIGNIFICANT_IRREGULARITY_WARNING in rough.warnings

    def test_packer_instance_is_reusable(self, open_boot, mixed_items, coarse_config):
        packer = BootPacker(coarse_config)
        first = packer.pack(open_boot, mixed_items)
        second = packer.pack(open_boot, mixed_items)
        assert first.to_dict() == second.to_dict()


# ---------------------------------------------------------------------------
# Compression paths
# ---------------------------------------------------------------------------

class TestCompressionPaths:

    def test_compressed_to_clear_opening(self, restricted_boot):
        mat = make_item("Mat", 820, 820, 100, compressibility=10,
                        orientation_constraints=OrientationConstraint.FLAT_ONLY)
        result = pack(restricted_boot, [mat])
        assert len(result.packed_items) == 1
        packed = result.packed_items[0]
        assert packed.compressed
        assert packed.compression_applied == 5
        assert packed.orientation.width <= 780
        assert "1 item(s) needed compression to fit through the boot opening" in result.warnings

    def test_compressed_to_fit_remaining_space(self):
        boot = BootGeometry(length=650, width=350, height=350)
        duffel = make_item("Duffel", 700, 300, 300, compressibility=10,
                           orientation_constraints=OrientationConstraint.UPRIGHT_ONLY)
        result = pack(boot, [duffel])
        packed = result.packed_items[0]
        assert packed.compressed
        assert packed.compression_applied == 10
        assert result.boot_space_used == 630 * 270 * 270

    def test_incompressible_item_never_compressed(self):
        boot = BootGeometry(length=650, width=350, height=350)
        crate = make_item("Crate", 700, 300, 300,
                          orientation_constraints=OrientationConstraint.UPRIGHT_ONLY)
        result = pack(boot, [crate])
        assert result.unpacked_items == [crate]
        assert result.warnings == []

    def test_flat_only_cube_is_not_an_opening_rejection(self, restricted_boot):
        cube = make_item("Cube", 300, 300, 300, compressibility=10,
                         orientation_constraints=OrientationConstraint.FLAT_ONLY)
        result = pack(restricted_boot, [cube])
        assert result.unpacked_items == [cube]
        assert result.warnings == []


# ---------------------------------------------------------------------------
# Warnings and degenerate input
# ---------------------------------------------------------------------------

class TestWarnings:

    def test_cabin_overflow_suggestion(self, open_boot):
        pram = make_item("Pram", 1200, 800, 600, cabin_suitable=True)
        crate = make_item("Crate", 1200, 800, 600)
        result = pack(open_boot, [pram, crate])
        assert result.cabin_overflow_suggested == [pram]

    def test_tight_clearance_warning(self, restricted_boot):
        mat = make_item("Mat", 820, 820, 100,
                        orientation_constraints=OrientationConstraint.FLAT_ONLY)
        result = pack(restricted_boot, [mat])
        assert result.unpacked_items == [mat]
        assert any("Mat is within 30 mm" in w for w in result.warnings)

    def test_narrow_opening_warning(self, suitcase):
        boot = BootGeometry(length=1000, width=1000, height=500,
                            opening_width=400, opening_height=300)
        result = pack(boot, [suitcase])
        assert any("Boot opening is only 24%" in w for w in result.warnings)

    def test_multiple_items_through_restricted_opening(self, restricted_boot, suitcase):
        result = pack(restricted_boot, [suitcase, suitcase])
        assert len(result.packed_items) == 2
        assert any("2 items must pass through a restricted opening" in w
                   for w in result.warnings)

    def test_invalid_boot(self, suitcase):
        boot = BootGeometry(length=0, width=1000, height=500)
        result = pack(boot, [suitcase])
        assert result.packed_items == []
        assert result.unpacked_items == [suitcase]
        assert result.volume_utilization == 0
        assert "invalid" in result.warnings[0]

    def test_invalid_item_dimensions(self, open_boot, suitcase):
        broken = make_item("Broken", 0, 300, 200)
        result = pack(open_boot, [broken, suitcase])
        assert_valid_result(result, open_boot, [broken, suitcase])
        assert result.unpacked_items == [broken]
        assert result.warnings[0].startswith("Broken has invalid dimensions")

    def test_search_budget_exhaustion(self, open_boot, suitcase):
        other = make_item("Backpack", 300, 200, 100)
        result = pack(open_boot, [suitcase, other], PackingConfig(max_position_checks=1))
        assert_valid_result(result, open_boot, [suitcase, other])
        assert [p.item for p in result.packed_items] == [suitcase]
        assert result.unpacked_items == [other]
        assert "Search budget exhausted; 1 item(s) were not placed" in result.warnings
