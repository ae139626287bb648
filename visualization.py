# visualization.py
"""
Handles drawing the ball field with Pygame.

Three pieces live here: the render pass, the Canvas the session draws on,
and the PygameHost that owns the window, schedules frame callbacks and
turns Pygame mouse events into canvas events.
"""
import logging
import pygame
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

from constants import DARK_BACKGROUND_COLOR
from particle import BallField

# --- Data Contracts ---
#
# render(context: RenderContext, field: BallField) -> None:
#   - Inputs:
#     - context: anything with clear() and fill_circle(x, y, radius, color).
#     - field: the balls to draw.
#   - Side Effects: Clears the context, then draws one filled circle per
#     ball in field order. The field is not modified.
#
# class Canvas:
#   - get_context(self) -> Optional[PygameContext]:
#     - Returns None when no drawing surface can be created.
#   - add_event_listener / remove_event_listener / dispatch:
#     - Listeners are called with a PointerEvent (or None for "mouseout").
#
# class PygameHost:
#   - request_frame(self, callback) -> int
#   - cancel_frame(self, handle: int) -> None
#     - Cancelling an unknown or already-run handle is a no-op.
#   - pump(self) -> bool:
#     - Runs one frame. Returns False once the user has quit.


class RenderContext(Protocol):
    width: int
    height: int

    def clear(self) -> None: ...

    def fill_circle(self, x: float, y: float, radius: float, color: Any) -> None: ...


def render(context: RenderContext, field: BallField) -> None:
    """Clears the context and draws every ball; later balls draw over earlier ones."""
    context.clear()
    for i in range(field.ball_count):
        x, y = field.positions[i]
        context.fill_circle(float(x), float(y), float(field.radii[i]), field.colors[i])


class PointerEvent:
    """Pointer position in window (client) coordinates."""
    def __init__(self, client_x: float, client_y: float):
        self.client_x = client_x
        self.client_y = client_y

    def __repr__(self) -> str:
        return f"PointerEvent(client_x={self.client_x}, client_y={self.client_y})"


class Canvas:
    """
    A resizable drawing surface with DOM-style event listeners.
    """
    def __init__(self, width: int = 300, height: int = 150):
        self.width = int(width)
        self.height = int(height)
        # Top-left corner of the canvas in window coordinates.
        self.origin: Tuple[int, int] = (0, 0)
        self.surface: Optional[pygame.Surface] = None
        self._listeners: Dict[str, List[Callable]] = {}

    def resize(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        if self.surface is not None:
            self.surface = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        logging.debug(f"Canvas resized to {self.width}x{self.height}.")

    def get_context(self) -> Optional["PygameContext"]:
        """Returns a 2D drawing context, or None if no surface can be created."""
        if self.surface is None:
            try:
                self.surface = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
            except pygame.error as e:
                logging.warning(f"Could not create a drawing surface: {e}")
                return None
        return PygameContext(self)

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(self.origin[0], self.origin[1], self.width, self.height)

    def local_position(self, event: PointerEvent) -> Tuple[float, float]:
        """Converts window coordinates to canvas coordinates."""
        return event.client_x - self.origin[0], event.client_y - self.origin[1]

    def add_event_listener(self, event_type: str, handler: Callable) -> None:
        self._listeners.setdefault(event_type, []).append(handler)

    def remove_event_listener(self, event_type: str, handler: Callable) -> None:
        handlers = self._listeners.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def listener_count(self, event_type: Optional[str] = None) -> int:
        if event_type is not None:
            return len(self._listeners.get(event_type, []))
        return sum(len(handlers) for handlers in self._listeners.values())

    def dispatch(self, event_type: str, event: Optional[PointerEvent] = None) -> None:
        for handler in list(self._listeners.get(event_type, [])):
            handler(event)


class PygameContext:
    """
    2D drawing context bound to a Canvas. Always draws on the canvas's
    current surface, so it stays valid across resizes.
    """
    def __init__(self, canvas: Canvas):
        self.canvas = canvas
        self._color_cache: Dict[Any, pygame.Color] = {}

    @property
    def width(self) -> int:
        return self.canvas.width

    @property
    def height(self) -> int:
        return self.canvas.height

    def _color(self, color: Any) -> pygame.Color:
        key = tuple(color) if isinstance(color, list) else color
        cached = self._color_cache.get(key)
        if cached is None:
            cached = pygame.Color(key)
            self._color_cache[key] = cached
        return cached

    def clear(self) -> None:
        self.canvas.surface.fill((0, 0, 0, 0))

    def fill_circle(self, x: float, y: float, radius: float, color: Any) -> None:
        pygame.draw.circle(self.canvas.surface, self._color(color), (x, y), radius)


class PygameHost:
    """
    Owns the Pygame window and acts as the frame scheduler for sessions.
    """
    def __init__(
        self,
        viewport_width: int,
        window_height: int,
        fps: int = 60,
        background: Tuple[int, int, int] = DARK_BACKGROUND_COLOR,
    ):
        """
        Initializes Pygame and the display window.
        """
        pygame.init()
        self.viewport_width = int(viewport_width)
        self.window_height = int(window_height)
        self.screen = pygame.display.set_mode((self.viewport_width, self.window_height))
        pygame.display.set_caption("Error Animation Demo")
        self.clock = pygame.time.Clock()
        self.fps = fps
        self.background = background

        self.canvases: List[Canvas] = []
        self.key_handler: Optional[Callable[[int], None]] = None
        self._frame_callbacks: Dict[int, Callable[[], None]] = {}
        self._running_batch: Dict[int, Callable[[], None]] = {}
        self._next_handle = 1
        self._hovered: Dict[int, bool] = {}

        try:
            self.font = pygame.font.SysFont("Segoe UI", 16)
        except pygame.error:
            logging.warning("Segoe UI font not found, falling back to default sans-serif.")
            self.font = pygame.font.SysFont(None, 20)
        self.caption_text = ""

        logging.info(f"PygameHost initialized with display ({self.viewport_width}x{self.window_height}).")

    # --- Frame scheduling ---

    def request_frame(self, callback: Callable[[], None]) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._frame_callbacks[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._frame_callbacks.pop(handle, None)
        self._running_batch.pop(handle, None)

    @property
    def pending_frames(self) -> int:
        return len(self._frame_callbacks)

    def _run_frame_callbacks(self) -> None:
        # Callbacks requested while this batch runs wait for the next frame.
        self._running_batch = self._frame_callbacks
        self._frame_callbacks = {}
        for handle in list(self._running_batch):
            callback = self._running_batch.pop(handle, None)
            if callback is not None:
                callback()

    # --- Canvases and events ---

    def attach(self, canvas: Canvas) -> None:
        if canvas not in self.canvases:
            self.canvases.append(canvas)
            self._hovered[id(canvas)] = False

    def detach(self, canvas: Canvas) -> None:
        if canvas in self.canvases:
            self.canvases.remove(canvas)
            self._hovered.pop(id(canvas), None)

    def _layout_canvases(self) -> None:
        # Canvases are stacked and centred in the window.
        total_height = sum(c.height for c in self.canvases)
        y = (self.window_height - total_height) // 2
        for canvas in self.canvases:
            canvas.origin = ((self.viewport_width - canvas.width) // 2, y)
            y += canvas.height

    def _dispatch_pointer(self, pos: Tuple[int, int]) -> None:
        for canvas in self.canvases:
            inside = canvas.rect.collidepoint(pos)
            if inside:
                self._hovered[id(canvas)] = True
                canvas.dispatch("mousemove", PointerEvent(pos[0], pos[1]))
            elif self._hovered.get(id(canvas)):
                self._hovered[id(canvas)] = False
                canvas.dispatch("mouseout")

    def _dispatch_leave(self) -> None:
        for canvas in self.canvases:
            if self._hovered.get(id(canvas)):
                self._hovered[id(canvas)] = False
                canvas.dispatch("mouseout")

    def _handle_events(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down host.")
                return False
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    logging.info("ESC key pressed. Shutting down host.")
                    return False
                if self.key_handler is not None:
                    self.key_handler(event.key)
            elif event.type == pygame.MOUSEMOTION:
                self._dispatch_pointer(event.pos)
            elif event.type == pygame.WINDOWLEAVE:
                self._dispatch_leave()
        return True

    def pump(self) -> bool:
        """
        Runs a single frame: events, frame callbacks, then drawing.

        Returns:
            bool: False if the host should exit, True otherwise.
        """
        self._layout_canvases()
        if not self._handle_events():
            return False

        self._run_frame_callbacks()

        self.screen.fill(self.background)
        for canvas in self.canvases:
            if canvas.surface is not None:
                self.screen.blit(canvas.surface, canvas.origin)
        if self.caption_text:
            text_color = tuple(255 - c for c in self.background)
            text_surf = self.font.render(self.caption_text, True, text_color)
            text_rect = text_surf.get_rect(midbottom=(self.viewport_width // 2, self.window_height - 10))
            self.screen.blit(text_surf, text_rect)

        pygame.display.flip()
        self.clock.tick(self.fps)
        return True

    def close(self) -> None:
        """Shuts down Pygame."""
        pygame.font.quit()
        pygame.quit()
