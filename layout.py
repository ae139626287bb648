# layout.py
"""
Turns a status code into ball seed positions.

Digits are drawn side by side with the 5x7 glyphs from glyphs.py, the
whole group centred on the canvas. The palette is passed in by the caller
so the layout never depends on the active theme.
"""
import logging
from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple

from constants import (
    BALL_RADIUS, CELL_SIZE, DIGIT_SPACING, FULL_SCALE_WIDTH, GLYPH_COLUMNS,
    GLYPH_ROWS, MIN_BALL_RADIUS
)
from glyphs import DIGIT_FONT
from particle import BallField

# --- Data Contracts ---
#
# compute_layout(status_code: int, canvas_width: float, canvas_height: float) -> Layout:
#   - Inputs:
#     - status_code: non-negative int.
#     - canvas_width, canvas_height: drawing surface size in px.
#   - Outputs: Layout with one seed per filled glyph cell, in emission
#     order (digit by digit, row-major inside a glyph), and the ball radius.
#   - Invariants: len(seeds) equals the sum of filled cells of the code's
#     digits.
#
# build_ball_field(status_code, canvas_width, canvas_height, palette) -> BallField:
#   - Ball i gets color palette[i % len(palette)].

Point = Tuple[float, float]


@dataclass(frozen=True)
class Layout:
    seeds: List[Point]
    radius: float


def digit_positions(digit: str, offset_x: float, offset_y: float, cell_size: float) -> List[Point]:
    """Centres of the filled cells of one digit, row by row. Unknown digits give []."""
    pattern = DIGIT_FONT.get(digit)
    if pattern is None:
        return []

    positions = []
    for row_idx, row in enumerate(pattern):
        for col_idx, char in enumerate(row):
            if char == '#':
                positions.append((offset_x + col_idx * cell_size, offset_y + row_idx * cell_size))
    return positions


def particle_radius(canvas_width: float) -> float:
    """Ball radius for a canvas width, shrinking below FULL_SCALE_WIDTH down to a floor."""
    scale = min(1.0, canvas_width / FULL_SCALE_WIDTH)
    return max(float(MIN_BALL_RADIUS), BALL_RADIUS * scale)


def compute_layout(status_code: int, canvas_width: float, canvas_height: float) -> Layout:
    if status_code < 0:
        raise ValueError(f"Status code must be non-negative, got {status_code}.")

    digits = str(status_code)
    digit_width = GLYPH_COLUMNS * CELL_SIZE
    total_width = len(digits) * digit_width + (len(digits) - 1) * DIGIT_SPACING

    start_x = (canvas_width - total_width) / 2
    start_y = (canvas_height - GLYPH_ROWS * CELL_SIZE) / 2

    seeds: List[Point] = []
    for index, digit in enumerate(digits):
        offset_x = start_x + index * (digit_width + DIGIT_SPACING)
        seeds.extend(digit_positions(digit, offset_x, start_y, CELL_SIZE))

    return Layout(seeds=seeds, radius=particle_radius(canvas_width))


def build_ball_field(
    status_code: int, canvas_width: float, canvas_height: float, palette: Sequence[Any]
) -> BallField:
    """
    Builds the balls spelling out a status code.

    Colors cycle through the palette ball by ball in emission order, which
    bands each digit instead of painting it one solid color.
    """
    if not palette:
        raise ValueError("Palette must contain at least one color.")

    layout = compute_layout(status_code, canvas_width, canvas_height)
    colors = [palette[i % len(palette)] for i in range(len(layout.seeds))]
    field = BallField(layout.seeds, layout.radius, colors)

    logging.info(
        f"Laid out status code {status_code} as {len(field)} balls "
        f"on a {canvas_width:.0f}x{canvas_height:.0f} canvas."
    )
    return field
