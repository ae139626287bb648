# constants.py
"""
Application-level constants.

These values are static and do not change between animation sessions.
They describe the digit layout, the physics tuning of the ball field and
the drawing surface. Values that a user may want to change per run (fps,
status codes, theme colors) live in config.json instead.
"""

# --- Digit Layout ---
GLYPH_COLUMNS = 5
GLYPH_ROWS = 7
CELL_SIZE = 12        # px between neighbouring ball centres inside a glyph
DIGIT_SPACING = 15    # px gap between two digit blocks
# Ball radius at full scale, and the floor it shrinks to on narrow canvases.
BALL_RADIUS = 8
MIN_BALL_RADIUS = 4
# Canvas width at which balls are drawn at full radius.
FULL_SCALE_WIDTH = 400

# --- Physics ---
# Per-millisecond coefficients. Each is multiplied by the frame's elapsed time.
RESTORE_FORCE = 0.002
MOUSE_FORCE = 1.0
FLOOR_FRICTION = 0.0005
# Fraction of speed lost on a wall bounce.
COLLISION_DAMPER = 0.3
# Balls are pushed this many pixels back inside a wall after a bounce.
WALL_INSET = 2

# Cursor position meaning "no pointer over the canvas".
CURSOR_SENTINEL = (9999.0, 9999.0)

# --- Canvas ---
MAX_CANVAS_WIDTH = 600
CANVAS_HEIGHT = 200
# Horizontal room left around the canvas inside the viewport.
CANVAS_MARGIN = 40

# --- Colors ---
# Named animation colors in palette order, with the fallback used when the
# active theme does not define one.
ANIMATION_COLOR_NAMES = ["blue", "yellow", "green", "pink", "purple"]
DEFAULT_ANIMATION_COLORS = [
    "#3b82f6",  # Blue
    "#f59e0b",  # Yellow
    "#10b981",  # Green
    "#ec4899",  # Pink
    "#8b5cf6",  # Purple
]
DARK_BACKGROUND_COLOR = (24, 24, 24)
LIGHT_BACKGROUND_COLOR = (245, 245, 245)

# Status codes offered by the demo when config.json lists none.
DEFAULT_STATUS_CODES = [400, 401, 403, 404, 500, 502, 503]
