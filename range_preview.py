"""Hover/focus driven preview of the range end.

While the user has picked a range start but no end yet, the cell under the
pointer (or keyboard focus) becomes the provisional end. The controller owns
that single value and tells the caller how urgently to repaint.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Any, Callable, Optional

from calendar_cells import PREVIEW_UNSET, CalendarCell, CellGrid, RangeBounds, is_set
from range_classifier import RangeClassifier

logger = logging.getLogger(__name__)


class RenderUrgency(Enum):
    NONE = "none"
    DEFERRED = "deferred"    # repaint may be batched
    IMMEDIATE = "immediate"  # repaint before the next frame


class PreviewState(Enum):
    IDLE = "idle"
    PREVIEWING = "previewing"


class GridCellResolver:
    """Resolves an interaction target (e.g. a widget) to its grid cell.

    Only the target itself and its immediate parent are inspected; whichever
    carries (row, col) coordinates first is taken as the cell element.
    """

    def __init__(
        self,
        grid: CellGrid,
        coordinates_of: Callable[[Any], Optional[tuple[int, int]]],
        parent_of: Callable[[Any], Any],
    ) -> None:
        self.grid = grid
        self._coordinates_of = coordinates_of
        self._parent_of = parent_of

    def is_cell_element(self, target: Any) -> bool:
        return target is not None and self._coordinates_of(target) is not None

    def lookup_cell(self, target: Any) -> CalendarCell | None:
        if target is None:
            return None
        coords = self._coordinates_of(target)
        if coords is None:
            parent = self._parent_of(target)
            if parent is None:
                return None
            coords = self._coordinates_of(parent)
            if coords is None:
                return None
        row, col = coords
        return self.grid.cell_at(row, col)


class PreviewController:
    """Keeps ``preview_end`` in step with enter/leave signals."""

    def __init__(self, bounds: RangeBounds, resolver: GridCellResolver) -> None:
        self._bounds = bounds.with_preview(PREVIEW_UNSET)
        self._resolver = resolver
        self._preview_end = PREVIEW_UNSET
        self._lock = threading.Lock()

    @property
    def preview_end(self) -> int:
        return self._preview_end

    @property
    def state(self) -> PreviewState:
        if self._preview_end > PREVIEW_UNSET:
            return PreviewState.PREVIEWING
        return PreviewState.IDLE

    @property
    def bounds(self) -> RangeBounds:
        """Current bounds with the live preview end folded in."""
        return self._bounds.with_preview(self._preview_end)

    @property
    def classifier(self) -> RangeClassifier:
        return RangeClassifier(self._resolver.grid, self.bounds)

    def on_enter(self, target: Any) -> RenderUrgency:
        with self._lock:
            b = self._bounds
            if (target is None or not is_set(b.start_value) or is_set(b.end_value)
                    or not self.classifier.is_selecting_range()):
                return RenderUrgency.NONE

            cell = self._resolver.lookup_cell(target)
            if cell is None:
                return RenderUrgency.NONE

            value = cell.compare_value
            # Only cells after the range start can become the preview end.
            candidate = value if cell.enabled and value > b.start_value else PREVIEW_UNSET
            if candidate == self._preview_end:
                return RenderUrgency.NONE

            logger.debug("preview end %s -> %s", self._preview_end, candidate)
            self._preview_end = candidate
            return RenderUrgency.DEFERRED

    def on_leave(self, target: Any) -> RenderUrgency:
        with self._lock:
            if self._preview_end == PREVIEW_UNSET or not self.classifier.is_selecting_range():
                return RenderUrgency.NONE
            # Leaving the gap between rows keeps the preview; re-entry follows.
            if not self._resolver.is_cell_element(target):
                return RenderUrgency.NONE

            logger.debug("preview end %s cleared on leave", self._preview_end)
            self._preview_end = PREVIEW_UNSET
            return RenderUrgency.IMMEDIATE

    def reset_preview(self, bounds: RangeBounds) -> RenderUrgency:
        """Take a new bounds snapshot; a changed start or end drops the preview."""
        with self._lock:
            changed = self._bounds.range_changed(bounds)
            self._bounds = bounds.with_preview(PREVIEW_UNSET)
            if changed:
                if self._preview_end != PREVIEW_UNSET:
                    logger.debug("preview end %s reset by new range", self._preview_end)
                self._preview_end = PREVIEW_UNSET
            return RenderUrgency.NONE
