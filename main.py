# main.py
"""
Main entry point for the error animation demo.

This script orchestrates the demo lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Restores the theme preference and opens the Pygame window.
4. Runs the frame loop, switching status codes and themes on key presses.
5. Handles clean shutdown.
"""
import logging
from utils import setup_logging, load_config
import cProfile
import pstats
import io

from constants import DEFAULT_STATUS_CODES


class ErrorDemo:
    """
    Keeps one animation session mounted and remounts it when the status
    code or the theme changes.
    """
    def __init__(self, host, canvas, theme_store, vis_params, theme_params, run_params):
        self.host = host
        self.canvas = canvas
        self.theme_store = theme_store
        self.theme_params = theme_params
        self.log_throttle = run_params.get('log_throttle_frames', 300)

        self.status_codes = list(vis_params.get('status_codes') or DEFAULT_STATUS_CODES)
        initial = vis_params.get('initial_status_code', self.status_codes[0])
        if initial not in self.status_codes:
            logging.warning(f"Initial status code {initial} is not in status_codes. Adding it.")
            self.status_codes.insert(0, initial)
        self.index = self.status_codes.index(initial)
        self.cleanup = None

    @property
    def status_code(self) -> int:
        return self.status_codes[self.index]

    def mount(self) -> None:
        from session import setup_error_animation
        from theme import animation_palette, background_color, theme_name

        if self.cleanup is not None:
            self.cleanup()

        dark = self.theme_store.dark
        self.host.background = background_color(self.theme_params.get('background'), dark)
        palette = animation_palette(self.theme_params.get('colors'), dark)
        self.cleanup = setup_error_animation(
            self.canvas, self.status_code, self.host,
            palette=palette, log_throttle_frames=self.log_throttle
        )
        self.host.caption_text = (
            f"{self.status_code}  |  <- / -> change code  |  T {theme_name(not dark)} theme  |  Esc quit"
        )

    def select(self, offset: int) -> None:
        self.index = (self.index + offset) % len(self.status_codes)
        logging.info(f"Status code selected: {self.status_code}.")
        self.mount()

    def handle_key(self, key: int) -> None:
        import pygame
        if key == pygame.K_RIGHT:
            self.select(1)
        elif key == pygame.K_LEFT:
            self.select(-1)
        elif key == pygame.K_t:
            self.theme_store.toggle()
            self.mount()

    def unmount(self) -> None:
        if self.cleanup is not None:
            self.cleanup()
            self.cleanup = None


def main():
    """
    The main function to run the demo.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config('config.json')
    except Exception as e:
        print(f"FATAL: Could not load config.json. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Error Animation Demo Starting ---")

    run_params = config.get('run_control', {})
    vis_params = config.get('visualization', {})
    theme_params = config.get('theme', {})

    from theme import ThemeStore
    from visualization import Canvas, PygameHost

    # --- Component Initialization ---
    theme_store = ThemeStore(
        theme_params.get('preference_file', 'prefs/theme.json'),
        default_dark=theme_params.get('default_dark', True)
    )
    host = PygameHost(
        viewport_width=vis_params.get('viewport_width', 640),
        window_height=vis_params.get('window_height', 320),
        fps=vis_params.get('fps', 60),
    )
    canvas = Canvas()
    host.attach(canvas)

    demo = ErrorDemo(host, canvas, theme_store, vis_params, theme_params, run_params)
    host.key_handler = demo.handle_key
    demo.mount()

    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    max_frames = run_params.get('max_frames', 0)
    frame_num = 0

    if profiler:
        profiler.enable()
    while host.pump():
        frame_num += 1
        if max_frames and frame_num >= max_frames:
            logging.info(f"Reached max_frames ({max_frames}). Stopping demo.")
            break
    if profiler:
        profiler.disable()

    demo.unmount()
    host.close()
    logging.info("Frame loop finished.")

    if profiler:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Error Animation Demo Shutting Down ---")


if __name__ == "__main__":
    main()
