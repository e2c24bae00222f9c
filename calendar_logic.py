"""Pure calendar calculations — no UI dependencies."""

import calendar
from datetime import date, timedelta

from calendar_cells import CalendarCell, CellGrid

DAY_ABBR = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def date_value(d: date) -> int:
    """Return the compare value for a date (proleptic Gregorian ordinal)."""
    return d.toordinal()


def value_date(value: int) -> date:
    """Inverse of date_value()."""
    return date.fromordinal(value)


def _aria_label(d: date) -> str:
    return f"{calendar.day_name[d.weekday()]}, {d.day} {calendar.month_name[d.month]} {d.year}"


def _make_cell(d: date, enabled: bool, css_classes) -> CalendarCell:
    v = date_value(d)
    return CalendarCell(v, str(d.day), _aria_label(d), enabled, css_classes)


def month_cells(year: int, month: int, *,
                min_date: date | None = None,
                max_date: date | None = None) -> CellGrid:
    """Return a 7-column cell grid for the given month.

    Weeks start on Monday (ISO convention). The first row only holds the
    days from the 1st onwards; the blank slots before it are the grid's
    first-row offset. The last week is filled up with the next month's
    days as disabled "spill" cells.
    """
    first = date(year, month, 1)
    days_in_month = calendar.monthrange(year, month)[1]

    rows: list[list[CalendarCell]] = []
    row: list[CalendarCell] = []
    row_len = 7 - first.weekday()
    for day in range(1, days_in_month + 1):
        d = date(year, month, day)
        enabled = ((min_date is None or d >= min_date)
                   and (max_date is None or d <= max_date))
        row.append(_make_cell(d, enabled, {"weekend": d.weekday() >= 5}))
        if len(row) == row_len:
            rows.append(row)
            row = []
            row_len = 7

    # Pad the last week with the following month
    d = date(year, month, days_in_month)
    while row and len(row) < 7:
        d += timedelta(days=1)
        row.append(_make_cell(d, False, "spill"))
    if row:
        rows.append(row)
    return CellGrid(rows, num_cols=7)


def week_numbers(grid: CellGrid) -> list[str]:
    """Return the ISO week number for each grid row."""
    return [str(value_date(row[0].compare_value).isocalendar()[1]) for row in grid.rows]


def prev_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month earlier."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later."""
    if month == 12:
        return year + 1, 1
    return year, month + 1
