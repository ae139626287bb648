# session.py
"""
Runs one error animation from setup to cleanup.

setup_error_animation() sizes the canvas, lays out the balls, hooks the
pointer listeners and starts a self-rescheduling frame loop on the host.
It returns a cleanup callable that stops the loop and unhooks everything.
"""
import logging
import time
from typing import Any, Callable, Optional, Protocol, Sequence

from constants import CANVAS_HEIGHT, CANVAS_MARGIN, DEFAULT_ANIMATION_COLORS, MAX_CANVAS_WIDTH
from layout import build_ball_field
from simulation import CursorState, Simulation
from visualization import Canvas, PointerEvent, RenderContext, render

# --- Data Contracts ---
#
# setup_error_animation(canvas, status_code, host, palette=None, clock=None,
#                       log_throttle_frames=300) -> Callable[[], None]:
#   - Inputs:
#     - canvas: Canvas (or anything with get_context, resize,
#       add/remove_event_listener and local_position).
#     - status_code: non-negative int to display.
#     - host: FrameHost providing request_frame, cancel_frame and
#       viewport_width.
#     - palette: five colors; the built-in defaults when None.
#     - clock: zero-argument callable returning milliseconds.
#   - Outputs: zero-argument cleanup callable.
#   - Side Effects: Resizes the canvas, registers "mousemove" and
#     "mouseout" listeners, runs the first frame and schedules the next.
#   - Invariants:
#     - At most one frame callback per session is pending at any time.
#     - After cleanup no frame is pending, both listeners are removed and
#       nothing is drawn again. Cleanup may be called repeatedly.
#     - If the canvas has no 2D context, nothing is set up and the
#       returned cleanup does nothing.


class FrameHost(Protocol):
    viewport_width: int

    def request_frame(self, callback: Callable[[], None]) -> int: ...

    def cancel_frame(self, handle: int) -> None: ...


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class ErrorAnimation:
    """
    State of one mounted animation: the simulation, its cursor, the last
    frame time and the pending frame handle.
    """
    def __init__(
        self,
        canvas: Canvas,
        context: RenderContext,
        status_code: int,
        host: FrameHost,
        palette: Sequence[Any],
        clock: Callable[[], float],
        log_throttle_frames: int = 300,
    ):
        self.canvas = canvas
        self.context = context
        self.status_code = status_code
        self.host = host
        self.clock = clock

        width = min(MAX_CANVAS_WIDTH, host.viewport_width - CANVAS_MARGIN)
        canvas.resize(width, CANVAS_HEIGHT)

        field = build_ball_field(status_code, width, CANVAS_HEIGHT, palette)
        self.simulation = Simulation(field, width, CANVAS_HEIGHT, log_throttle_frames)
        self.cursor: CursorState = self.simulation.cursor

        self.last_time = clock()
        self.frame_handle: Optional[int] = None
        self.running = False

    def handle_mouse_move(self, event: PointerEvent) -> None:
        x, y = self.canvas.local_position(event)
        self.cursor.move_to(x, y)

    def handle_mouse_out(self, event: Optional[PointerEvent] = None) -> None:
        self.cursor.reset()

    def start(self) -> None:
        self.canvas.add_event_listener("mousemove", self.handle_mouse_move)
        self.canvas.add_event_listener("mouseout", self.handle_mouse_out)
        self.running = True
        logging.info(f"Error animation started for status code {self.status_code}.")
        self.frame()

    def frame(self) -> None:
        """Steps, draws and schedules the next frame."""
        if not self.running:
            return
        self.frame_handle = None

        now = self.clock()
        time_diff = max(0.0, now - self.last_time)
        self.last_time = now

        self.simulation.tick(time_diff, self.cursor)
        render(self.context, self.simulation.field)

        self.frame_handle = self.host.request_frame(self.frame)

    def stop(self) -> None:
        if not self.running:
            return
        self.running = False
        if self.frame_handle is not None:
            self.host.cancel_frame(self.frame_handle)
            self.frame_handle = None
        self.canvas.remove_event_listener("mousemove", self.handle_mouse_move)
        self.canvas.remove_event_listener("mouseout", self.handle_mouse_out)
        logging.info(
            f"Error animation for status code {self.status_code} stopped "
            f"after {self.simulation.frame_count} frames."
        )


def _noop() -> None:
    return None


def setup_error_animation(
    canvas: Canvas,
    status_code: int,
    host: FrameHost,
    palette: Optional[Sequence[Any]] = None,
    clock: Optional[Callable[[], float]] = None,
    log_throttle_frames: int = 300,
) -> Callable[[], None]:
    """
    Sets up and starts the error animation on a canvas.

    Args:
        canvas (Canvas): The surface to draw on.
        status_code (int): The HTTP status code to display.
        host (FrameHost): Schedules frames and reports the viewport width.
        palette (Optional[Sequence[Any]]): Ball colors, cycled per ball.
        clock (Optional[Callable[[], float]]): Millisecond clock.

    Returns:
        Callable[[], None]: Cleanup function that stops the animation.
    """
    context = canvas.get_context()
    if context is None:
        logging.warning("Canvas has no 2D context. Error animation disabled.")
        return _noop

    animation = ErrorAnimation(
        canvas,
        context,
        status_code,
        host,
        list(palette) if palette else list(DEFAULT_ANIMATION_COLORS),
        clock or monotonic_ms,
        log_throttle_frames,
    )
    animation.start()
    return animation.stop
