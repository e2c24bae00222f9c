"""Generate the window icon (64×64 PIL Image, in-memory)."""

from PIL import Image, ImageDraw

from cell_style import LIGHT, Palette

SIZE = 64
_GRID = 4
_CELL = 13
_GAP = 2
_MARGIN = 2
# Cells drawn as a selected range, row-major
RANGE_START, RANGE_END = 5, 10


def cell_box(index: int) -> tuple[int, int, int, int]:
    """Return the (x0, y0, x1, y1) box of icon cell *index* (row-major)."""
    r, c = divmod(index, _GRID)
    x0 = _MARGIN + c * (_CELL + _GAP)
    y0 = _MARGIN + r * (_CELL + _GAP)
    return x0, y0, x0 + _CELL - 1, y0 + _CELL - 1


def create_icon_image(palette: Palette = LIGHT) -> Image.Image:
    """Return a 64×64 RGBA image: a 4×4 day grid with a highlighted range."""
    img = Image.new("RGBA", (SIZE, SIZE), palette.grid_bg)
    draw = ImageDraw.Draw(img)
    for i in range(_GRID * _GRID):
        if i in (RANGE_START, RANGE_END):
            fill = palette.accent
        elif RANGE_START < i < RANGE_END:
            fill = palette.range_bg
        else:
            fill = palette.header_bg
        draw.rectangle(cell_box(i), fill=fill)
    return img
