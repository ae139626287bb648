# particle.py
"""
Manages the state of all balls in one animation session.

This module defines the BallField class, which stores ball data
(position, velocity, home position, radius, color) in NumPy arrays so the
physics kernel can work on them in place.
"""
import logging
import numpy as np
from dataclasses import dataclass
from typing import Any, Iterator, List, Sequence, Tuple

# --- Data Contracts ---
#
# class BallField:
#   - __init__(self, seeds: Sequence[Tuple[float, float]], radius: float,
#              colors: Sequence[Any]):
#     - Inputs:
#       - seeds: Ordered (x, y) positions, one per ball. Each seed is both
#         the starting position and the home position of its ball.
#       - radius: float, radius shared by every ball of the layout.
#       - colors: One color per ball, in the same order as seeds.
#     - Outputs: None
#     - Side Effects: Allocates the state arrays.
#     - Invariants:
#       - self.positions, self.velocities and self.origins are float64
#         arrays of shape (N, 2).
#       - self.radii is a float64 array of shape (N,).
#       - self.origins is never written after construction.
#       - N never changes during a session.


@dataclass(frozen=True)
class Ball:
    """A read-only snapshot of one ball."""
    x: float
    y: float
    vx: float
    vy: float
    orig_x: float
    orig_y: float
    radius: float
    color: Any


class BallField:
    """
    A container for all balls of a session, backed by NumPy arrays.
    """
    def __init__(self, seeds: Sequence[Tuple[float, float]], radius: float, colors: Sequence[Any]):
        if len(colors) != len(seeds):
            msg = (
                f"BallField needs one color per seed, got {len(colors)} colors "
                f"for {len(seeds)} seeds."
            )
            logging.error(msg)
            raise ValueError(msg)

        self.ball_count = len(seeds)
        self.positions = np.array(seeds, dtype=np.float64).reshape(self.ball_count, 2)
        self.velocities = np.zeros((self.ball_count, 2), dtype=np.float64)
        self.origins = self.positions.copy()
        self.origins.flags.writeable = False
        self.radii = np.full(self.ball_count, float(radius), dtype=np.float64)
        self.colors: List[Any] = list(colors)

        logging.debug(
            f"BallField created with {self.ball_count} balls "
            f"(radius {float(radius):.2f}px)."
        )

    def __len__(self) -> int:
        return self.ball_count

    def ball(self, index: int) -> Ball:
        x, y = self.positions[index]
        vx, vy = self.velocities[index]
        ox, oy = self.origins[index]
        return Ball(
            float(x), float(y), float(vx), float(vy),
            float(ox), float(oy), float(self.radii[index]), self.colors[index]
        )

    def __iter__(self) -> Iterator[Ball]:
        for i in range(self.ball_count):
            yield self.ball(i)

    def mean_speed(self) -> float:
        """Average velocity magnitude, 0.0 for an empty field."""
        if self.ball_count == 0:
            return 0.0
        return float(np.mean(np.linalg.norm(self.velocities, axis=1)))
