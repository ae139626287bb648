# glyphs.py
"""
Static bitmap font for the decimal digits.

Each glyph is 5 columns by 7 rows. '#' marks a cell that emits a ball,
'.' an empty cell.
"""
from typing import Dict, List

DIGIT_FONT: Dict[str, List[str]] = {
    '0': [
        '.###.',
        '#...#',
        '#...#',
        '#...#',
        '#...#',
        '#...#',
        '.###.',
    ],
    '1': [
        '..#..',
        '.##..',
        '..#..',
        '..#..',
        '..#..',
        '..#..',
        '.###.',
    ],
    '2': [
        '.###.',
        '#...#',
        '....#',
        '..##.',
        '.#...',
        '#....',
        '#####',
    ],
    '3': [
        '.###.',
        '#...#',
        '....#',
        '..##.',
        '....#',
        '#...#',
        '.###.',
    ],
    '4': [
        '#...#',
        '#...#',
        '#...#',
        '#####',
        '....#',
        '....#',
        '....#',
    ],
    '5': [
        '#####',
        '#....',
        '####.',
        '....#',
        '....#',
        '#...#',
        '.###.',
    ],
    '6': [
        '.###.',
        '#....',
        '#....',
        '####.',
        '#...#',
        '#...#',
        '.###.',
    ],
    '7': [
        '#####',
        '....#',
        '...#.',
        '..#..',
        '..#..',
        '..#..',
        '..#..',
    ],
    '8': [
        '.###.',
        '#...#',
        '#...#',
        '.###.',
        '#...#',
        '#...#',
        '.###.',
    ],
    '9': [
        '.###.',
        '#...#',
        '#...#',
        '.####',
        '....#',
        '....#',
        '.###.',
    ],
}


def filled_cells(digit: str) -> int:
    """Number of ball-emitting cells in a digit's glyph, 0 if unknown."""
    pattern = DIGIT_FONT.get(digit)
    if pattern is None:
        return 0
    return sum(row.count('#') for row in pattern)
