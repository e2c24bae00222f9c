"""Tests for the per-cell range predicates and classify()."""

import unittest

from calendar_cells import CalendarCell, CellGrid, RangeBounds
from range_classifier import CellState, RangeClassifier, classify


def _cell(value: int, compare_value: int | None = None, enabled: bool = True) -> CalendarCell:
    return CalendarCell(value, str(value), f"day {value}", enabled, compare_value=compare_value)


def _sample_grid() -> CellGrid:
    # Row 0: 1..3 (offset 4), row 1: 4..10, row 2: 11..17
    rows = [[_cell(v) for v in range(1, 4)],
            [_cell(v) for v in range(4, 11)],
            [_cell(v) for v in range(11, 18)]]
    return CellGrid(rows)


def _classifier(**bounds) -> RangeClassifier:
    return RangeClassifier(_sample_grid(), RangeBounds(**bounds))


class MainRangeTests(unittest.TestCase):
    def test_single_selection_is_not_a_range(self) -> None:
        c = _classifier(start_value=5, end_value=5)
        self.assertFalse(c.is_selecting_range())
        self.assertFalse(c.is_in_range(5))
        self.assertTrue(c.is_selected(_cell(5)))

    def test_open_range_is_selecting(self) -> None:
        self.assertTrue(_classifier(start_value=5).is_selecting_range())
        self.assertTrue(_classifier(start_value=5, end_value=-1).is_selecting_range())

    def test_in_range_is_inclusive(self) -> None:
        c = _classifier(start_value=3, end_value=7)
        self.assertEqual([v for v in range(1, 10) if c.is_in_range(v)], [3, 4, 5, 6, 7])
        self.assertTrue(c.is_range_start(3))
        self.assertTrue(c.is_range_end(7))
        self.assertFalse(c.is_range_end(3))

    def test_open_range_has_nothing_in_range(self) -> None:
        c = _classifier(start_value=3)
        self.assertFalse(any(c.is_in_range(v) for v in range(0, 20)))

    def test_end_without_start_is_degenerate(self) -> None:
        c = _classifier(end_value=7)
        self.assertFalse(c.is_selecting_range())
        self.assertFalse(c.is_in_range(7))
        self.assertFalse(c.is_range_end(7))
        self.assertFalse(c.is_range_start(7))

    def test_zero_is_a_valid_boundary(self) -> None:
        c = _classifier(start_value=0, end_value=2)
        self.assertTrue(c.is_range_start(0))
        self.assertTrue(c.is_in_range(1))
        self.assertTrue(c.is_range_end(2))

    def test_end_before_start_is_not_range_end(self) -> None:
        c = _classifier(start_value=7, end_value=3)
        self.assertFalse(c.is_range_end(3))
        self.assertTrue(c.is_selected(_cell(3)))

    def test_selected_matches_start_or_end(self) -> None:
        for start, end in ((3, 7), (5, 5), (5, None), (None, None), (0, 12)):
            c = _classifier(start_value=start, end_value=end)
            for _r, _col, cell in c.grid.iter_cells():
                v = cell.compare_value
                self.assertEqual(c.is_selected(cell), c.is_range_start(v) or c.is_range_end(v),
                                 msg=f"start={start} end={end} v={v}")

    def test_in_range_implies_selecting_range(self) -> None:
        for start, end in ((3, 7), (5, 5), (5, None), (None, 7), (None, None)):
            c = _classifier(start_value=start, end_value=end)
            for v in range(0, 20):
                if c.is_in_range(v):
                    self.assertTrue(c.is_selecting_range())
            if not c.is_selecting_range():
                self.assertFalse(any(c.is_in_range(v) for v in range(0, 20)))

    def test_selection_uses_compare_value_only(self) -> None:
        c = _classifier(start_value=40, end_value=50)
        self.assertTrue(c.is_selected(_cell(1, compare_value=40)))
        self.assertFalse(c.is_selected(_cell(40, compare_value=1)))


class ComparisonRangeTests(unittest.TestCase):
    def test_comparison_bounds(self) -> None:
        c = _classifier(comparison_start=3, comparison_end=10)
        self.assertTrue(c.is_comparison_start(3))
        self.assertTrue(c.is_comparison_end(10))
        self.assertTrue(c.is_in_comparison_range(3))
        self.assertTrue(c.is_in_comparison_range(10))
        self.assertFalse(c.is_in_comparison_range(11))

    def test_comparison_end_needs_start(self) -> None:
        c = _classifier(comparison_end=10)
        self.assertFalse(c.is_comparison_end(10))
        self.assertFalse(c.is_in_comparison_range(5))

    def test_overlap_needs_both_ranges(self) -> None:
        c = _classifier(start_value=5, end_value=9, comparison_start=3, comparison_end=6)
        self.assertEqual([v for v in range(1, 12) if c.is_in_overlap(v)], [5, 6])


class BridgeCellTests(unittest.TestCase):
    def test_comparison_start_on_range_start_is_not_a_bridge(self) -> None:
        c = _classifier(start_value=3, end_value=7, comparison_start=3, comparison_end=10)
        self.assertTrue(c.is_comparison_start(3))
        self.assertTrue(c.is_range_start(3))
        self.assertFalse(c.is_comparison_bridge_start(3, 0, 2))

    def test_comparison_start_inside_range_is_a_bridge(self) -> None:
        c = _classifier(start_value=2, end_value=9, comparison_start=5, comparison_end=12)
        self.assertTrue(c.is_comparison_bridge_start(5, 1, 1))

    def test_comparison_start_outside_range_is_not_a_bridge(self) -> None:
        c = _classifier(start_value=2, end_value=4, comparison_start=5, comparison_end=12)
        self.assertFalse(c.is_comparison_bridge_start(5, 1, 1))

    def test_bridge_start_suppressed_after_range_end(self) -> None:
        rows = [[_cell(1), _cell(2), _cell(3)],
                [_cell(4, compare_value=9)] + [_cell(v) for v in range(5, 11)]]
        c = RangeClassifier(CellGrid(rows), RangeBounds(start_value=2, end_value=9,
                                                        comparison_start=5))
        self.assertFalse(c.is_comparison_bridge_start(5, 1, 1))

    def test_bridge_start_at_column_zero_reads_previous_row(self) -> None:
        bounds = RangeBounds(start_value=2, end_value=9, comparison_start=4)
        plain = RangeClassifier(_sample_grid(), bounds)
        self.assertTrue(plain.is_comparison_bridge_start(4, 1, 0))

        # Last cell of row 0 now ends the range; row 1 itself is unchanged.
        rows = [[_cell(1), _cell(2), _cell(3, compare_value=9)],
                [_cell(v) for v in range(4, 11)]]
        suppressed = RangeClassifier(CellGrid(rows), bounds)
        self.assertFalse(suppressed.is_comparison_bridge_start(4, 1, 0))

    def test_bridge_start_in_first_cell_has_no_neighbour(self) -> None:
        c = _classifier(start_value=0, end_value=9, comparison_start=1)
        self.assertFalse(c.is_comparison_bridge_start(1, 0, 0))

    def test_comparison_end_inside_range_is_a_bridge(self) -> None:
        c = _classifier(start_value=2, end_value=9, comparison_start=1, comparison_end=6)
        self.assertTrue(c.is_comparison_bridge_end(6, 1, 2))

    def test_comparison_end_on_range_end_is_not_a_bridge(self) -> None:
        c = _classifier(start_value=2, end_value=6, comparison_start=1, comparison_end=6)
        self.assertFalse(c.is_comparison_bridge_end(6, 1, 2))

    def test_bridge_end_at_row_end_reads_next_row(self) -> None:
        bounds = RangeBounds(start_value=2, end_value=15, comparison_start=1, comparison_end=10)
        self.assertTrue(RangeClassifier(_sample_grid(), bounds).is_comparison_bridge_end(10, 1, 6))

        rows = [[_cell(v) for v in range(1, 4)],
                [_cell(v) for v in range(4, 11)],
                [_cell(11, compare_value=2)] + [_cell(v) for v in range(12, 18)]]
        suppressed = RangeClassifier(CellGrid(rows), bounds)
        self.assertFalse(suppressed.is_comparison_bridge_end(10, 1, 6))

    def test_bridge_end_in_last_cell_has_no_neighbour(self) -> None:
        c = _classifier(start_value=2, end_value=20, comparison_start=1, comparison_end=17)
        self.assertFalse(c.is_comparison_bridge_end(17, 2, 6))


class PreviewTests(unittest.TestCase):
    def test_preview_range(self) -> None:
        c = _classifier(start_value=5, preview_end=8)
        self.assertTrue(c.is_in_preview(6))
        self.assertTrue(c.is_in_preview(8))
        self.assertFalse(c.is_in_preview(9))
        self.assertFalse(c.is_in_preview(4))
        self.assertTrue(c.is_preview_start(5))
        self.assertTrue(c.is_preview_end(8))

    def test_no_preview(self) -> None:
        c = _classifier(start_value=5)
        self.assertFalse(c.has_preview())
        self.assertFalse(c.is_preview_start(5))
        self.assertFalse(c.is_preview_end(-1))
        self.assertFalse(c.is_in_preview(5))

    def test_preview_needs_a_range_in_progress(self) -> None:
        c = _classifier(start_value=5, end_value=5, preview_end=8)
        self.assertFalse(c.is_in_preview(6))


class PositionTests(unittest.TestCase):
    def test_active_cell_uses_offset_cell_number(self) -> None:
        c = _classifier(active_cell=3)
        self.assertTrue(c.is_active_cell(1, 0))
        self.assertFalse(c.is_active_cell(0, 3))
        self.assertFalse(c.is_active_cell(0, 0))

    def test_today(self) -> None:
        c = _classifier(today_value=4)
        self.assertTrue(c.is_today(4))
        self.assertFalse(c.is_today(5))
        self.assertFalse(_classifier().is_today(4))


class ClassifyTests(unittest.TestCase):
    def test_classify_collects_every_state(self) -> None:
        c = _classifier(start_value=3, end_value=7, comparison_start=3,
                        comparison_end=10, today_value=4)
        cell = c.grid.cell_at(0, 2)
        self.assertEqual(c.classify(cell, 0, 2), frozenset({
            CellState.SELECTED,
            CellState.RANGE_START,
            CellState.IN_RANGE,
            CellState.COMPARISON_START,
            CellState.IN_COMPARISON_RANGE,
            CellState.IN_OVERLAP,
        }))

    def test_classify_marks_active_today_and_disabled(self) -> None:
        grid = CellGrid([[_cell(1, enabled=False), _cell(2)]], num_cols=2)
        states = classify(grid.cell_at(0, 0), 0, 0, grid, RangeBounds(today_value=1))
        self.assertEqual(states, frozenset({CellState.ACTIVE, CellState.TODAY,
                                            CellState.DISABLED}))

    def test_classify_preview_states(self) -> None:
        c = _classifier(start_value=5, preview_end=8, active_cell=-1)
        self.assertEqual(c.classify(c.grid.cell_at(1, 4), 1, 4),
                         frozenset({CellState.PREVIEW_END, CellState.IN_PREVIEW}))
        self.assertEqual(c.classify(c.grid.cell_at(1, 1), 1, 1),
                         frozenset({CellState.SELECTED, CellState.RANGE_START,
                                    CellState.PREVIEW_START, CellState.IN_PREVIEW}))

    def test_module_function_matches_method(self) -> None:
        grid = _sample_grid()
        bounds = RangeBounds(start_value=2, end_value=9, comparison_start=5, comparison_end=12)
        c = RangeClassifier(grid, bounds)
        for r, col, cell in grid.iter_cells():
            self.assertEqual(classify(cell, r, col, grid, bounds), c.classify(cell, r, col))

    def test_classify_grid_covers_every_cell(self) -> None:
        c = _classifier(start_value=2, end_value=9)
        states = c.classify_grid()
        self.assertEqual(len(states), 17)
        self.assertIn(CellState.IN_RANGE, states[(1, 0)])
        self.assertNotIn(CellState.IN_RANGE, states[(2, 0)])


if __name__ == "__main__":
    unittest.main()
