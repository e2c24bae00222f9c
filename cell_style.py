"""Colour resolution for classified calendar cells."""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet

from range_classifier import CellState


@dataclass(frozen=True)
class Palette:
    grid_bg: str
    header_bg: str
    text: str
    muted: str
    weekend: str
    accent: str        # range endpoints
    today: str
    range_bg: str
    preview_bg: str
    comparison_bg: str
    overlap_bg: str
    bridge_bg: str


LIGHT = Palette(
    grid_bg="white",
    header_bg="#F3F3F3",
    text="black",
    muted="#AAAAAA",
    weekend="#CC0000",
    accent="#0078D4",
    today="#005A9E",
    range_bg="#B3D7F2",
    preview_bg="#DCEBF7",
    comparison_bg="#F9E3B4",
    overlap_bg="#A8DAB5",
    bridge_bg="#C9E4C5",
)

DARK = Palette(
    grid_bg="#202020",
    header_bg="#2B2B2B",
    text="#F0F0F0",
    muted="#666666",
    weekend="#FF6B6B",
    accent="#4CC2FF",
    today="#3A96DD",
    range_bg="#1F4E79",
    preview_bg="#263F55",
    comparison_bg="#6B4F1D",
    overlap_bg="#2E6B3F",
    bridge_bg="#38583A",
)


def palette_for(dark_mode: bool) -> Palette:
    return DARK if dark_mode else LIGHT


def cell_colors(states: AbstractSet[CellState], is_weekend: bool,
                palette: Palette = LIGHT) -> tuple[str, str]:
    """Return (background, foreground) for a cell with the given states."""
    p = palette
    if CellState.DISABLED in states:
        return p.grid_bg, p.muted
    if CellState.RANGE_START in states or CellState.RANGE_END in states:
        return p.accent, "white"
    if CellState.SELECTED in states:
        return p.accent, "white"
    if CellState.TODAY in states:
        return p.today, "white"
    if CellState.PREVIEW_END in states:
        return p.accent, "white"
    if (CellState.COMPARISON_BRIDGE_START in states
            or CellState.COMPARISON_BRIDGE_END in states):
        return p.bridge_bg, p.text
    if CellState.IN_OVERLAP in states:
        return p.overlap_bg, p.text
    if CellState.IN_RANGE in states:
        return p.range_bg, p.text
    if CellState.IN_COMPARISON_RANGE in states:
        return p.comparison_bg, p.text
    if CellState.IN_PREVIEW in states:
        return p.preview_bg, p.text
    if is_weekend:
        return p.grid_bg, p.weekend
    return p.grid_bg, p.text
