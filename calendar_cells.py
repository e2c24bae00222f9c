"""Cell grid and range boundary snapshot. Plain data, no UI dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterator, Union

# Opaque styling payload, passed through untouched.
CssClasses = Union[str, list[str], set[str], dict[str, bool]]

PREVIEW_UNSET = -1


def is_set(value: int | None) -> bool:
    """Return True if a boundary value is set (0 counts as set)."""
    return value is not None and value >= 0


class GridShapeError(ValueError):
    """Raised when a grid's rows do not line up with its column count."""


@dataclass
class CalendarCell:
    """One selectable unit in the grid."""

    value: int
    display_value: str
    aria_label: str
    enabled: bool
    css_classes: CssClasses = field(default_factory=dict)
    compare_value: int | None = None

    def __post_init__(self) -> None:
        if self.compare_value is None:
            self.compare_value = self.value


def selected_value(cell: CalendarCell) -> int | None:
    """Return the value a click on *cell* selects, or None if it is disabled."""
    return cell.value if cell.enabled else None


@dataclass(frozen=True)
class CellGrid:
    """Rows of cells. Only the first row may be short (leading blank slots).

    The blank slots sit before the first cell, so column indices of the first
    row are relative to the row itself, not to the full column count.
    """

    rows: tuple[tuple[CalendarCell, ...], ...] = ()
    num_cols: int = 7

    def __post_init__(self) -> None:
        rows = tuple(tuple(r) for r in self.rows)
        object.__setattr__(self, "rows", rows)
        if self.num_cols <= 0:
            raise GridShapeError(f"num_cols must be positive, got {self.num_cols}")
        if not rows:
            return
        if not 1 <= len(rows[0]) <= self.num_cols:
            raise GridShapeError(
                f"first row has {len(rows[0])} cells, expected 1..{self.num_cols}")
        for i, row in enumerate(rows[1:], start=1):
            if len(row) != self.num_cols:
                raise GridShapeError(
                    f"row {i} has {len(row)} cells, expected {self.num_cols}")

    @property
    def first_row_offset(self) -> int:
        if not self.rows:
            return 0
        return self.num_cols - len(self.rows[0])

    def label_fits_first_row(self, min_required_cells: int) -> bool:
        """Return True if the first row's blank slots can hold the label."""
        return self.first_row_offset >= min_required_cells

    def cell_at(self, row: int, col: int) -> CalendarCell | None:
        """Bounds-checked lookup; negative indices are out of bounds."""
        if row < 0 or col < 0 or row >= len(self.rows):
            return None
        cells = self.rows[row]
        if col >= len(cells):
            return None
        return cells[col]

    def previous_cell(self, row: int, col: int) -> CalendarCell | None:
        """Cell before (row, col) in reading order, wrapping to the previous row."""
        if col > 0:
            return self.cell_at(row, col - 1)
        prev_row = row - 1
        if prev_row < 0 or prev_row >= len(self.rows):
            return None
        return self.rows[prev_row][-1]

    def next_cell(self, row: int, col: int) -> CalendarCell | None:
        """Cell after (row, col) in reading order, wrapping to the next row."""
        cell = self.cell_at(row, col + 1)
        if cell is not None:
            return cell
        return self.cell_at(row + 1, 0)

    def cell_number(self, row: int, col: int) -> int:
        """Row-major index of a position, adjusted for the first-row offset."""
        number = row * self.num_cols + col
        if row:
            number -= self.first_row_offset
        return number

    def position_of(self, cell_number: int) -> tuple[int, int] | None:
        """Inverse of cell_number(); None if the number is outside the grid."""
        if cell_number < 0 or not self.rows:
            return None
        first = len(self.rows[0])
        if cell_number < first:
            return 0, cell_number
        row, col = divmod(cell_number - first, self.num_cols)
        row += 1
        if row >= len(self.rows):
            return None
        return row, col

    def iter_cells(self) -> Iterator[tuple[int, int, CalendarCell]]:
        for r, row in enumerate(self.rows):
            for c, cell in enumerate(row):
                yield r, c, cell

    def __len__(self) -> int:
        return sum(len(r) for r in self.rows)


@dataclass(frozen=True)
class RangeBounds:
    """Boundary values for one render: main range, comparison range, preview."""

    start_value: int | None = None
    end_value: int | None = None
    comparison_start: int | None = None
    comparison_end: int | None = None
    preview_end: int = PREVIEW_UNSET
    active_cell: int = 0
    today_value: int | None = None

    def with_preview(self, preview_end: int) -> RangeBounds:
        return replace(self, preview_end=preview_end)

    def range_changed(self, other: RangeBounds) -> bool:
        """Return True if *other* has a different start or end value."""
        return (self.start_value != other.start_value
                or self.end_value != other.end_value)
