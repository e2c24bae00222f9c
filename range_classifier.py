"""Per-cell range state predicates for a calendar grid.

Everything here is a pure function of a CellGrid and a RangeBounds snapshot;
nothing mutates either. Predicates only ever compare ``compare_value``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from calendar_cells import CalendarCell, CellGrid, RangeBounds, is_set


class CellState(Enum):
    SELECTED = "selected"
    RANGE_START = "range-start"
    RANGE_END = "range-end"
    IN_RANGE = "in-range"
    COMPARISON_START = "comparison-start"
    COMPARISON_END = "comparison-end"
    IN_COMPARISON_RANGE = "in-comparison-range"
    COMPARISON_BRIDGE_START = "comparison-bridge-start"
    COMPARISON_BRIDGE_END = "comparison-bridge-end"
    IN_OVERLAP = "in-overlap"
    PREVIEW_START = "preview-start"
    PREVIEW_END = "preview-end"
    IN_PREVIEW = "in-preview"
    ACTIVE = "active"
    TODAY = "today"
    DISABLED = "disabled"


@dataclass(frozen=True)
class RangeClassifier:
    """Answers "is this cell X?" for one grid and one set of bounds."""

    grid: CellGrid
    bounds: RangeBounds

    # ------------------------------------------------------------------
    # Main range
    # ------------------------------------------------------------------
    def is_selected(self, cell: CalendarCell) -> bool:
        b = self.bounds
        v = cell.compare_value
        return ((is_set(b.start_value) and v == b.start_value)
                or (is_set(b.end_value) and v == b.end_value))

    def is_selecting_range(self) -> bool:
        """True while the start and end of the main range differ."""
        b = self.bounds
        if not is_set(b.start_value):
            return False
        end = b.end_value if is_set(b.end_value) else None
        return b.start_value != end

    def is_range_start(self, value: int) -> bool:
        start = self.bounds.start_value
        return is_set(start) and value == start

    def is_range_end(self, value: int) -> bool:
        b = self.bounds
        return (is_set(b.start_value) and value >= b.start_value
                and value == b.end_value)

    def is_in_range(self, value: int) -> bool:
        b = self.bounds
        return (self.is_selecting_range() and is_set(b.end_value)
                and b.start_value <= value <= b.end_value)

    # ------------------------------------------------------------------
    # Comparison range
    # ------------------------------------------------------------------
    def is_comparison_start(self, value: int) -> bool:
        start = self.bounds.comparison_start
        return is_set(start) and value == start

    def is_comparison_end(self, value: int) -> bool:
        b = self.bounds
        return (is_set(b.comparison_start) and value >= b.comparison_start
                and value == b.comparison_end)

    def is_in_comparison_range(self, value: int) -> bool:
        b = self.bounds
        return (is_set(b.comparison_start) and is_set(b.comparison_end)
                and b.comparison_start <= value <= b.comparison_end)

    def is_in_overlap(self, value: int) -> bool:
        """Inside both the main and the comparison range."""
        return self.is_in_range(value) and self.is_in_comparison_range(value)

    def is_comparison_bridge_start(self, value: int, row: int, col: int) -> bool:
        """Comparison start sitting inside the main range.

        Not a bridge when the cell before it ends the main range, or when
        there is no cell before it at all.
        """
        if (not self.is_comparison_start(value) or self.is_range_start(value)
                or not self.is_in_range(value)):
            return False
        previous = self.grid.previous_cell(row, col)
        return previous is not None and not self.is_range_end(previous.compare_value)

    def is_comparison_bridge_end(self, value: int, row: int, col: int) -> bool:
        """Comparison end sitting inside the main range (mirror of the start)."""
        if (not self.is_comparison_end(value) or self.is_range_end(value)
                or not self.is_in_range(value)):
            return False
        following = self.grid.next_cell(row, col)
        return following is not None and not self.is_range_start(following.compare_value)

    # ------------------------------------------------------------------
    # Preview range
    # ------------------------------------------------------------------
    def has_preview(self) -> bool:
        return self.bounds.preview_end > -1

    def is_preview_start(self, value: int) -> bool:
        return self.has_preview() and self.is_range_start(value)

    def is_preview_end(self, value: int) -> bool:
        return self.has_preview() and value == self.bounds.preview_end

    def is_in_preview(self, value: int) -> bool:
        b = self.bounds
        return (self.is_selecting_range()
                and b.start_value <= value <= b.preview_end)

    # ------------------------------------------------------------------
    # Position / misc
    # ------------------------------------------------------------------
    def is_active_cell(self, row: int, col: int) -> bool:
        if self.grid.cell_at(row, col) is None:
            return False
        return self.grid.cell_number(row, col) == self.bounds.active_cell

    def is_today(self, value: int) -> bool:
        today = self.bounds.today_value
        return is_set(today) and value == today

    def classify(self, cell: CalendarCell, row: int, col: int) -> frozenset[CellState]:
        """Return every state tag that applies to *cell* at (row, col)."""
        v = cell.compare_value
        checks = (
            (CellState.SELECTED, self.is_selected(cell)),
            (CellState.RANGE_START, self.is_range_start(v)),
            (CellState.RANGE_END, self.is_range_end(v)),
            (CellState.IN_RANGE, self.is_in_range(v)),
            (CellState.COMPARISON_START, self.is_comparison_start(v)),
            (CellState.COMPARISON_END, self.is_comparison_end(v)),
            (CellState.IN_COMPARISON_RANGE, self.is_in_comparison_range(v)),
            (CellState.COMPARISON_BRIDGE_START, self.is_comparison_bridge_start(v, row, col)),
            (CellState.COMPARISON_BRIDGE_END, self.is_comparison_bridge_end(v, row, col)),
            (CellState.IN_OVERLAP, self.is_in_overlap(v)),
            (CellState.PREVIEW_START, self.is_preview_start(v)),
            (CellState.PREVIEW_END, self.is_preview_end(v)),
            (CellState.IN_PREVIEW, self.is_in_preview(v)),
            (CellState.ACTIVE, self.is_active_cell(row, col)),
            (CellState.TODAY, self.is_today(v)),
            (CellState.DISABLED, not cell.enabled),
        )
        return frozenset(state for state, applies in checks if applies)

    def classify_grid(self) -> dict[tuple[int, int], frozenset[CellState]]:
        return {(r, c): self.classify(cell, r, c) for r, c, cell in self.grid.iter_cells()}


def classify(cell: CalendarCell, row: int, col: int,
             grid: CellGrid, bounds: RangeBounds) -> frozenset[CellState]:
    """Free-standing form of RangeClassifier.classify()."""
    return RangeClassifier(grid, bounds).classify(cell, row, col)
