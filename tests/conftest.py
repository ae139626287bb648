import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from visualization import Canvas


class RecordingContext:
    """Render context that records draw calls instead of drawing."""
    def __init__(self, canvas):
        self.canvas = canvas
        self.calls = []

    @property
    def width(self):
        return self.canvas.width

    @property
    def height(self):
        return self.canvas.height

    def clear(self):
        self.calls.append(("clear",))

    def fill_circle(self, x, y, radius, color):
        self.calls.append(("circle", x, y, radius, color))

    @property
    def clear_count(self):
        return sum(1 for call in self.calls if call[0] == "clear")


class RecordingCanvas(Canvas):
    def __init__(self, width=300, height=150):
        super().__init__(width, height)
        self.context = RecordingContext(self)

    def get_context(self):
        return self.context


class NoContextCanvas(Canvas):
    def get_context(self):
        return None


class ManualHost:
    """Frame host whose frames only run when the test pumps them."""
    def __init__(self, viewport_width=1000):
        self.viewport_width = viewport_width
        self.callbacks = {}
        self.next_handle = 1
        self.background = None
        self.caption_text = ""

    def request_frame(self, callback):
        handle = self.next_handle
        self.next_handle += 1
        self.callbacks[handle] = callback
        return handle

    def cancel_frame(self, handle):
        self.callbacks.pop(handle, None)

    @property
    def pending_frames(self):
        return len(self.callbacks)

    def pump(self, frames=1):
        for _ in range(frames):
            batch, self.callbacks = self.callbacks, {}
            for callback in batch.values():
                callback()


class ManualClock:
    def __init__(self, start=1000.0):
        self.now = start

    def advance(self, ms):
        self.now += ms

    def __call__(self):
        return self.now


@pytest.fixture
def host():
    return ManualHost()


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def canvas():
    return RecordingCanvas()
