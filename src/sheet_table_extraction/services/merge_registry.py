"""Row-indexed lookup of merged cell ranges.

Sheets with hundreds of merges and thousands of cells make a linear scan per
cell lookup too slow, so merges are bucketed by every row they span. A query
then only scans the handful of merges touching that row.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Iterator

from sheet_table_extraction.models import MergeRange
from sheet_table_extraction.utils.coordinates import CellBounds


class MergeRangeRegistry:
    """Merge ranges of one sheet or table, indexed by row.

    Overlapping merges are not validated; when two cover the same cell the
    one registered first is returned.
    """

    def __init__(self, merges: Iterable[MergeRange] = ()) -> None:
        self._merges: list[MergeRange] = []
        self._by_row: dict[int, list[MergeRange]] = defaultdict(list)
        for merge in merges:
            self.register(merge)

    def register(self, merge: MergeRange) -> None:
        self._merges.append(merge)
        for row in range(merge.bounds.start_row, merge.bounds.end_row + 1):
            self._by_row[row].append(merge)

    def __len__(self) -> int:
        return len(self._merges)

    def __iter__(self) -> Iterator[MergeRange]:
        return iter(self._merges)

    @property
    def merges(self) -> tuple[MergeRange, ...]:
        return tuple(self._merges)

    def merges_in_row(self, row: int) -> tuple[MergeRange, ...]:
        """Merges whose row span includes ``row``."""
        return tuple(self._by_row.get(row, ()))

    def merge_at(self, row: int, col: int) -> MergeRange | None:
        """Return the merge covering ``(row, col)``, or None."""
        return next(
            (merge for merge in self.merges_in_row(row) if merge.covers(row, col)),
            None,
        )

    def within(self, bounds: CellBounds) -> MergeRangeRegistry:
        """A new registry holding only merges fully inside ``bounds``."""
        return MergeRangeRegistry(
            merge for merge in self._merges if bounds.encloses(merge.bounds)
        )
