"""Tests for the row-indexed merge registry."""

from sheet_table_extraction.models import EMPTY
from sheet_table_extraction.services.merge_registry import MergeRangeRegistry
from sheet_table_extraction.utils.coordinates import CellBounds
from tests.fixtures import make_merge


class TestMergeAt:
    """Tests for MergeRangeRegistry.merge_at."""

    def test_every_covered_cell_resolves_to_the_merge(self) -> None:
        merge = make_merge("B2:D3", "Block")
        registry = MergeRangeRegistry([merge])
        for row in (2, 3):
            for col in (2, 3, 4):
                assert registry.merge_at(row, col) is merge

    def test_cells_around_the_merge_resolve_to_none(self) -> None:
        registry = MergeRangeRegistry([make_merge("B2:D3", "Block")])
        for row, col in [(1, 2), (4, 2), (2, 1), (2, 5), (1, 1), (4, 5)]:
            assert registry.merge_at(row, col) is None

    def test_first_registered_wins_on_overlap(self) -> None:
        first = make_merge("A1:C1", "first")
        second = make_merge("B1:D2", "second")
        registry = MergeRangeRegistry([first, second])
        assert registry.merge_at(1, 2) is first
        assert registry.merge_at(1, 4) is second
        assert registry.merge_at(2, 2) is second

    def test_merge_without_anchor_carries_empty(self) -> None:
        registry = MergeRangeRegistry([make_merge("A1:B1")])
        merge = registry.merge_at(1, 2)
        assert merge is not None
        assert merge.anchor_value == EMPTY

    def test_empty_registry(self) -> None:
        registry = MergeRangeRegistry()
        assert len(registry) == 0
        assert registry.merge_at(1, 1) is None


class TestRegistryQueries:
    """Tests for row bucketing and containment filtering."""

    def test_merges_in_row_includes_vertical_spans(self) -> None:
        tall = make_merge("A1:A3", "Store")
        wide = make_merge("B1:C1", "2023")
        registry = MergeRangeRegistry([tall, wide])
        assert registry.merges_in_row(1) == (tall, wide)
        assert registry.merges_in_row(3) == (tall,)
        assert registry.merges_in_row(4) == ()

    def test_register_preserves_order(self) -> None:
        registry = MergeRangeRegistry()
        merges = [make_merge("A1:B1"), make_merge("C1:D1"), make_merge("A5:A6")]
        for merge in merges:
            registry.register(merge)
        assert list(registry) == merges
        assert registry.merges == tuple(merges)

    def test_within_keeps_only_enclosed_merges(self) -> None:
        inside = make_merge("A1:B1", "in")
        crossing = make_merge("C2:D2", "crosses edge")
        outside = make_merge("F9:G9", "out")
        registry = MergeRangeRegistry([inside, crossing, outside])

        subset = registry.within(CellBounds(1, 1, 3, 3))

        assert subset.merges == (inside,)
        assert len(registry) == 3
