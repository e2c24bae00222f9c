"""Single-month range calendar window (tkinter).

The window only paints and forwards events: every cell state comes from the
RangeClassifier, and hover/focus preview is handled by the PreviewController.
"""

import calendar as _cal
import logging
from datetime import date
from tkinter import font as tkfont
import tkinter as tk

from PIL import ImageTk

from calendar_cells import CalendarCell, RangeBounds, selected_value
from calendar_logic import DAY_ABBR, date_value, month_cells, next_month, prev_month, value_date, week_numbers
from cell_style import cell_colors, palette_for
from icon_gen import create_icon_image
from range_classifier import CellState
from range_preview import GridCellResolver, PreviewController, RenderUrgency
from settings import load_settings, save_settings

logger = logging.getLogger(__name__)

_MAX_WEEKS = 6
# Blank first-row slots needed to carry the month label inline
_LABEL_MIN_CELLS = 3


class _MonthPanel:
    """Pre-allocated widget pool for one month (header + 6 weeks max)."""

    __slots__ = ("frame", "header", "wk_header", "day_headers", "week_nums", "slots")

    def __init__(self, parent: tk.Frame, fonts: dict, palette, bind_cell) -> None:
        p = palette
        self.frame = tk.Frame(parent, bg=p.grid_bg)

        self.header = tk.Label(self.frame, font=fonts["header"], bg=p.header_bg, fg=p.text)

        self.wk_header = tk.Label(
            self.frame, text="Wk", font=fonts["bold"], bg=p.grid_bg, fg=p.muted, width=3,
        )
        self.wk_header.grid(row=1, column=0)

        self.day_headers: list[tk.Label] = []
        for col, abbr in enumerate(DAY_ABBR):
            fg = p.weekend if col >= 5 else p.text
            lbl = tk.Label(
                self.frame, text=abbr, font=fonts["bold"], bg=p.grid_bg, fg=fg, width=3,
            )
            lbl.grid(row=1, column=col + 1)
            self.day_headers.append(lbl)

        self.week_nums: list[tk.Label] = []
        # slots[r][s] = (cell frame, inner label), by display position
        self.slots: list[list[tuple[tk.Frame, tk.Label]]] = []
        for r in range(_MAX_WEEKS):
            grid_row = r + 2
            wn = tk.Label(self.frame, font=fonts["wn"], bg=p.grid_bg, fg=p.muted, width=3)
            wn.grid(row=grid_row, column=0)
            self.week_nums.append(wn)

            row_slots: list[tuple[tk.Frame, tk.Label]] = []
            for s in range(7):
                cell = tk.Frame(
                    self.frame, bg=p.grid_bg, takefocus=1,
                    highlightthickness=1, highlightbackground=p.grid_bg,
                )
                cell.grid(row=grid_row, column=s + 1, padx=0, pady=1, sticky="nsew")
                lbl = tk.Label(cell, font=fonts["normal"], bg=p.grid_bg, fg=p.text, width=3)
                lbl.pack(fill="both", expand=True)
                bind_cell(cell)
                bind_cell(lbl)
                row_slots.append((cell, lbl))
            self.slots.append(row_slots)


class RangeCalendarWindow:
    """Month view where two clicks pick a date range."""

    def __init__(self, year: int | None = None, month: int | None = None,
                 comparison: tuple[date, date] | None = None,
                 settings: dict | None = None) -> None:
        self._settings = settings if settings is not None else load_settings()
        self._palette = palette_for(self._settings["dark_mode"])

        self.root = tk.Tk()
        self.root.title("Range Calendar")
        self.root.resizable(False, False)
        self.root.configure(bg=self._palette.grid_bg)
        self._icon = ImageTk.PhotoImage(create_icon_image(self._palette))
        self.root.iconphoto(True, self._icon)
        if self._settings["window_x"] is not None and self._settings["window_y"] is not None:
            self.root.geometry(f"+{self._settings['window_x']}+{self._settings['window_y']}")

        self._setup_fonts()

        today = date.today()
        self.year = year or today.year
        self.month = month or today.month

        # Selection state, as compare values
        self.sel_start: int | None = None
        self.sel_end: int | None = None
        self._comparison: tuple[int, int] | None = None
        if comparison is not None:
            self._comparison = (date_value(comparison[0]), date_value(comparison[1]))
        self._active_cell = 0

        # Maps id(cell frame) -> (row, col) in the current grid
        self._cell_coords: dict[int, tuple[int, int]] = {}
        # Maps (row, col) -> (cell frame, label)
        self._cell_widgets: dict[tuple[int, int], tuple[tk.Frame, tk.Label]] = {}
        self._refresh_pending = False

        self._grid = month_cells(self.year, self.month)
        self._resolver = GridCellResolver(self._grid, self._coordinates_of, self._parent_of)
        self._preview = PreviewController(self._bounds(), self._resolver)

        self._build_shell()
        self._rebuild_month()

        self.root.bind("<Escape>", self._on_escape)
        self.root.bind("<Left>", lambda _e: self._move_active(-1))
        self.root.bind("<Right>", lambda _e: self._move_active(1))
        self.root.bind("<Up>", lambda _e: self._move_active(-7))
        self.root.bind("<Down>", lambda _e: self._move_active(7))
        self.root.bind("<Return>", self._on_return)
        self.root.protocol("WM_DELETE_WINDOW", self.close)

    # ------------------------------------------------------------------
    # Fonts & shell
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        families = tkfont.families(self.root)
        base = "Segoe UI" if "Segoe UI" in families else "TkDefaultFont"
        self.font_normal = tkfont.Font(family=base, size=9)
        self.font_bold = tkfont.Font(family=base, size=9, weight="bold")
        self.font_header = tkfont.Font(family=base, size=10, weight="bold")
        self.font_nav = tkfont.Font(family=base, size=12, weight="bold")
        self.font_wn = tkfont.Font(family=base, size=8)
        self.font_footer = tkfont.Font(family=base, size=9)

    def _build_shell(self) -> None:
        p = self._palette
        outer = tk.Frame(self.root, bg=p.grid_bg)
        outer.pack(padx=6, pady=4)

        nav = tk.Frame(outer, bg=p.grid_bg)
        nav.pack(fill="x")
        btn_prev = tk.Label(nav, text="◀", font=self.font_nav, bg=p.grid_bg,
                            fg=p.text, cursor="hand2")
        btn_prev.pack(side="left")
        btn_prev.bind("<Button-1>", lambda _e: self._navigate(-1))
        btn_next = tk.Label(nav, text="▶", font=self.font_nav, bg=p.grid_bg,
                            fg=p.text, cursor="hand2")
        btn_next.pack(side="right")
        btn_next.bind("<Button-1>", lambda _e: self._navigate(1))

        fonts = {
            "header": self.font_header, "bold": self.font_bold,
            "normal": self.font_normal, "wn": self.font_wn,
        }
        self._panel = _MonthPanel(outer, fonts, p, self._bind_cell)
        self._panel.frame.pack(pady=2)
        if not self._settings["show_week_numbers"]:
            self._panel.wk_header.grid_remove()
            for wn in self._panel.week_nums:
                wn.grid_remove()

        self._footer_label = tk.Label(outer, text="", font=self.font_footer,
                                      bg=p.grid_bg, fg=p.muted)
        self._footer_label.pack(pady=(4, 0))

    def _bind_cell(self, widget: tk.Widget) -> None:
        widget.bind("<Button-1>", self._on_click)
        widget.bind("<Enter>", self._on_enter)
        widget.bind("<FocusIn>", self._on_enter)
        widget.bind("<Leave>", self._on_leave)
        widget.bind("<FocusOut>", self._on_leave)

    # ------------------------------------------------------------------
    # Grid / bounds plumbing
    # ------------------------------------------------------------------
    def _coordinates_of(self, widget) -> tuple[int, int] | None:
        return self._cell_coords.get(id(widget))

    @staticmethod
    def _parent_of(widget):
        return getattr(widget, "master", None)

    def _bounds(self) -> RangeBounds:
        comp_start, comp_end = self._comparison if self._comparison else (None, None)
        return RangeBounds(
            start_value=self.sel_start,
            end_value=self.sel_end,
            comparison_start=comp_start,
            comparison_end=comp_end,
            active_cell=self._active_cell,
            today_value=date_value(date.today()),
        )

    def _rebuild_month(self) -> None:
        """Lay the current month's grid onto the widget pool."""
        self._grid = month_cells(self.year, self.month)
        self._resolver.grid = self._grid
        self._active_cell = min(self._active_cell, len(self._grid) - 1)
        self._preview.reset_preview(self._bounds())

        panel = self._panel
        offset = self._grid.first_row_offset
        self._cell_coords.clear()
        self._cell_widgets.clear()

        title = f"{_cal.month_name[self.month]} {self.year}"
        panel.header.grid_forget()
        if offset and self._grid.label_fits_first_row(_LABEL_MIN_CELLS):
            panel.header.configure(text=_cal.month_abbr[self.month].upper(), anchor="w")
            panel.header.grid(row=2, column=1, columnspan=offset, sticky="we")
        else:
            panel.header.configure(text=title, anchor="center")
            panel.header.grid(row=0, column=0, columnspan=8, sticky="we", pady=(0, 2))
        self.root.title(title)

        inline_label = self._grid.label_fits_first_row(_LABEL_MIN_CELLS)
        weeks = week_numbers(self._grid)
        for r in range(_MAX_WEEKS):
            panel.week_nums[r].configure(text=weeks[r] if r < len(weeks) else "")
            for s, (frame, lbl) in enumerate(panel.slots[r]):
                col = s - offset if r == 0 else s
                cell = self._grid.cell_at(r, col) if col >= 0 else None
                covered = inline_label and r == 0 and s < offset
                if cell is None or covered:
                    if covered:
                        frame.grid_remove()
                    else:
                        frame.grid()
                        self._paint_blank(frame, lbl)
                    continue
                frame.grid()
                self._cell_coords[id(frame)] = (r, col)
                self._cell_widgets[(r, col)] = (frame, lbl)

        self._refresh_highlight()

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------
    def _paint_blank(self, frame: tk.Frame, lbl: tk.Label) -> None:
        p = self._palette
        frame.configure(bg=p.grid_bg, highlightbackground=p.grid_bg, cursor="")
        lbl.configure(text="", bg=p.grid_bg, cursor="")

    def _refresh_highlight(self) -> None:
        """Repaint every cell from the classifier's view of the current bounds."""
        self._refresh_pending = False
        classifier = self._preview.classifier
        p = self._palette
        for r, c, cell in self._grid.iter_cells():
            widgets = self._cell_widgets.get((r, c))
            if widgets is None:
                continue
            frame, lbl = widgets
            states = classifier.classify(cell, r, c)
            is_weekend = value_date(cell.compare_value).weekday() >= 5
            bg, fg = cell_colors(states, is_weekend, p)
            ring = p.accent if CellState.ACTIVE in states else bg
            frame.configure(bg=bg, highlightbackground=ring, highlightcolor=p.accent,
                            cursor="hand2" if cell.enabled else "")
            lbl.configure(
                text=cell.display_value, bg=bg, fg=fg,
                font=self.font_bold if CellState.TODAY in states else self.font_normal,
                cursor="hand2" if cell.enabled else "",
            )
        self._footer_label.configure(text=self._footer_text())

    def _schedule_refresh(self) -> None:
        if not self._refresh_pending:
            self._refresh_pending = True
            self.root.after_idle(self._run_scheduled_refresh)

    def _run_scheduled_refresh(self) -> None:
        if self._refresh_pending:
            self._refresh_highlight()

    def _apply_urgency(self, urgency: RenderUrgency) -> None:
        if urgency is RenderUrgency.IMMEDIATE:
            self._refresh_highlight()
        elif urgency is RenderUrgency.DEFERRED:
            self._schedule_refresh()

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def select_cell(self, cell: CalendarCell) -> None:
        value = selected_value(cell)
        if value is None:
            return
        if self.sel_start is None or self.sel_end is not None:
            self.sel_start, self.sel_end = value, None
        elif value >= self.sel_start:
            self.sel_end = value
        else:
            self.sel_start = value
        logger.debug("selection %s..%s", self.sel_start, self.sel_end)
        self._preview.reset_preview(self._bounds())
        self._refresh_highlight()

    def clear_selection(self) -> None:
        self.sel_start = None
        self.sel_end = None
        self._preview.reset_preview(self._bounds())
        self._refresh_highlight()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def _on_click(self, event: tk.Event) -> None:
        cell = self._resolver.lookup_cell(event.widget)
        if cell is not None:
            coords = self._coordinates_of(event.widget) or self._coordinates_of(event.widget.master)
            self._active_cell = self._grid.cell_number(*coords)
            self.select_cell(cell)

    def _on_enter(self, event: tk.Event) -> None:
        self._apply_urgency(self._preview.on_enter(event.widget))

    def _on_leave(self, event: tk.Event) -> None:
        self._apply_urgency(self._preview.on_leave(event.widget))

    def _on_return(self, _event: tk.Event) -> None:
        pos = self._grid.position_of(self._active_cell)
        if pos is not None:
            self.select_cell(self._grid.cell_at(*pos))

    def _move_active(self, delta: int) -> None:
        target = self._active_cell + delta
        if target < 0:
            self._navigate(-1)
            target = len(self._grid) + target
        elif target >= len(self._grid):
            target -= len(self._grid)
            self._navigate(1)
        self._active_cell = max(0, min(target, len(self._grid) - 1))
        self._preview.reset_preview(self._bounds())
        pos = self._grid.position_of(self._active_cell)
        if pos in self._cell_widgets:
            self._cell_widgets[pos][0].focus_set()
        self._refresh_highlight()

    def _navigate(self, delta: int) -> None:
        step = prev_month if delta < 0 else next_month
        for _ in range(abs(delta)):
            self.year, self.month = step(self.year, self.month)
        self._rebuild_month()

    def _on_escape(self, _event: tk.Event) -> None:
        if self.sel_start is not None:
            self.clear_selection()
        else:
            self.close()

    # ------------------------------------------------------------------
    # Footer text
    # ------------------------------------------------------------------
    def _footer_text(self) -> str:
        today_str = f"Today: {date.today().strftime('%d.%m.%Y')}"
        if self.sel_start is None:
            return today_str
        end = self.sel_end
        if end is None and self._preview.preview_end > -1:
            end = self._preview.preview_end
        if end is None or end == self.sel_start:
            return f"{value_date(self.sel_start).strftime('%d.%m')} → …     {today_str}"

        total_days = end - self.sel_start + 1
        full_weeks, rem_days = divmod(total_days, 7)
        parts: list[str] = []
        if full_weeks:
            parts.append(f"{full_weeks} week{'s' if full_weeks != 1 else ''}")
        if rem_days:
            parts.append(f"{rem_days} day{'s' if rem_days != 1 else ''}")

        lo, hi = value_date(self.sel_start), value_date(end)
        range_str = f"{lo.strftime('%d.%m')} → {hi.strftime('%d.%m')}"
        return f"{range_str}:  {total_days} days  ({', '.join(parts)})     {today_str}"

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def _persist_position(self) -> None:
        stored = load_settings()
        stored["window_x"] = self.root.winfo_x()
        stored["window_y"] = self.root.winfo_y()
        try:
            save_settings(stored)
        except OSError as e:
            logger.warning("Could not save settings: %s", e)

    def close(self) -> None:
        self._persist_position()
        self.root.destroy()

    def run(self) -> None:
        self.root.mainloop()
