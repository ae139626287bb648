import pygame
import pytest

from particle import BallField
from visualization import Canvas, PointerEvent, PygameHost, render

from conftest import RecordingCanvas


def test_render_clears_then_draws_in_order():
    canvas = RecordingCanvas(400, 200)
    field = BallField([(10.0, 20.0), (30.0, 40.0)], 6.0, ["red", "blue"])

    render(canvas.context, field)

    assert canvas.context.calls == [
        ("clear",),
        ("circle", 10.0, 20.0, 6.0, "red"),
        ("circle", 30.0, 40.0, 6.0, "blue"),
    ]


def test_render_does_not_touch_state():
    canvas = RecordingCanvas(400, 200)
    field = BallField([(10.0, 20.0)], 6.0, ["red"])
    field.velocities[0] = (1.0, 1.0)

    render(canvas.context, field)

    assert field.ball(0).x == 10.0
    assert field.ball(0).vx == 1.0


def test_pygame_context_draws_and_clears():
    canvas = Canvas(50, 40)
    context = canvas.get_context()
    assert (context.width, context.height) == (50, 40)

    context.fill_circle(20.0, 20.0, 5.0, "#ff0000")
    assert tuple(canvas.surface.get_at((20, 20))) == (255, 0, 0, 255)

    context.clear()
    assert tuple(canvas.surface.get_at((20, 20))) == (0, 0, 0, 0)


def test_context_follows_resize():
    canvas = Canvas()
    context = canvas.get_context()
    canvas.resize(120, 60)

    assert canvas.surface.get_size() == (120, 60)
    assert (context.width, context.height) == (120, 60)
    context.fill_circle(100.0, 50.0, 4.0, (0, 255, 0))
    assert tuple(canvas.surface.get_at((100, 50)))[:3] == (0, 255, 0)


def test_get_context_returns_none_without_surface(monkeypatch):
    def broken_surface(*args, **kwargs):
        raise pygame.error("no video")

    monkeypatch.setattr(pygame, "Surface", broken_surface)
    assert Canvas().get_context() is None


def test_canvas_listeners():
    canvas = Canvas()
    seen = []

    def handler(event):
        seen.append(event)

    canvas.add_event_listener("mousemove", handler)
    event = PointerEvent(5, 6)
    canvas.dispatch("mousemove", event)
    assert seen == [event]
    assert canvas.listener_count("mousemove") == 1

    canvas.remove_event_listener("mousemove", handler)
    canvas.remove_event_listener("mousemove", handler)
    canvas.dispatch("mousemove", event)
    assert seen == [event]
    assert canvas.listener_count() == 0


def test_local_position_uses_origin():
    canvas = Canvas()
    canvas.origin = (20, 60)
    assert canvas.local_position(PointerEvent(120, 110)) == (100, 50)


@pytest.fixture
def pygame_host():
    host = PygameHost(viewport_width=640, window_height=320, fps=0)
    yield host
    host.close()


def test_host_runs_each_frame_callback_once(pygame_host):
    calls = []
    pygame_host.request_frame(lambda: calls.append("a"))
    cancelled = pygame_host.request_frame(lambda: calls.append("b"))
    pygame_host.cancel_frame(cancelled)
    pygame_host.cancel_frame(999)

    assert pygame_host.pump()
    assert pygame_host.pump()

    assert calls == ["a"]
    assert pygame_host.pending_frames == 0


def test_host_defers_callbacks_requested_during_a_frame(pygame_host):
    calls = []

    def loop():
        calls.append(len(calls))
        pygame_host.request_frame(loop)

    pygame_host.request_frame(loop)
    pygame_host.pump()
    pygame_host.pump()

    assert calls == [0, 1]
    assert pygame_host.pending_frames == 1


def test_host_turns_motion_into_canvas_events(pygame_host):
    canvas = Canvas(200, 100)
    canvas.get_context()
    pygame_host.attach(canvas)
    pygame_host._layout_canvases()
    events = []
    canvas.add_event_listener("mousemove", lambda e: events.append(("move", canvas.local_position(e))))
    canvas.add_event_listener("mouseout", lambda e: events.append(("out", None)))

    x0, y0 = canvas.origin
    pygame_host._dispatch_pointer((x0 + 10, y0 + 20))
    pygame_host._dispatch_pointer((0, 0))
    pygame_host._dispatch_pointer((1, 1))

    assert events == [("move", (10, 20)), ("out", None)]


def test_host_stops_on_quit(pygame_host):
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    assert pygame_host.pump() is False
