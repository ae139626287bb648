# simulation.py
"""
Handles the ball physics.

This module defines the numba-jitted kernel that advances every ball by
one frame, the CursorState shared with the pointer listeners, and the
Simulation class that owns a field and its canvas bounds.
"""
import logging
import math
from typing import Optional
from numba import jit

from constants import (
    COLLISION_DAMPER, CURSOR_SENTINEL, FLOOR_FRICTION, MOUSE_FORCE,
    RESTORE_FORCE, WALL_INSET
)
from particle import BallField

# --- Data Contracts ---
#
# step_balls(field, time_diff, cursor, width, height) -> None:
#   - Inputs:
#     - field: BallField whose positions and velocities are updated.
#     - time_diff: float >= 0, milliseconds since the previous frame.
#     - cursor: CursorState (or anything with x and y).
#     - width, height: canvas bounds in px.
#   - Outputs: None
#   - Side Effects: Modifies field.positions and field.velocities in place.
#   - Invariants: field.origins is untouched. No state outside the
#     arguments is read or written.
#
# class Simulation:
#   - tick(self, time_diff: float, cursor: Optional[CursorState] = None) -> None:
#     - Steps the owned field once and counts the frame.


@jit(nopython=True)
def _step_balls_numba(
    positions, velocities, origins, radii, time_diff,
    cursor_x, cursor_y, width, height,
    restore_coeff, mouse_coeff, friction_coeff, collision_damper, wall_inset
):
    """
    Numba-jitted per-ball update.

    The order of the stages matters: each stage reads what the previous one
    wrote for the same ball. Position advances by the raw velocity while
    the forces are scaled by time_diff.
    """
    restore_force = restore_coeff * time_diff
    mouse_force = mouse_coeff * time_diff
    floor_friction = friction_coeff * time_diff
    bounce = -1.0 * (1.0 - collision_damper)

    for i in range(positions.shape[0]):
        # 1. Integrate position
        positions[i, 1] += velocities[i, 1]
        positions[i, 0] += velocities[i, 0]

        x = positions[i, 0]
        y = positions[i, 1]

        # 2. Restore toward the home position, axis by axis
        if x > origins[i, 0]:
            velocities[i, 0] -= restore_force
        elif x < origins[i, 0]:
            velocities[i, 0] += restore_force
        if y > origins[i, 1]:
            velocities[i, 1] -= restore_force
        elif y < origins[i, 1]:
            velocities[i, 1] += restore_force

        # 3. Cursor repulsion: Euclidean falloff, split across axes by
        # the Manhattan share. No clamp near the cursor.
        dist_x = x - cursor_x
        dist_y = y - cursor_y
        radius = math.sqrt(dist_x * dist_x + dist_y * dist_y)
        total_dist = abs(dist_x) + abs(dist_y)

        if total_dist > 0.0 and radius > 0.0:
            force_x = (abs(dist_x) / total_dist) * (1.0 / radius) * mouse_force
            force_y = (abs(dist_y) / total_dist) * (1.0 / radius) * mouse_force
            if dist_x > 0.0:
                velocities[i, 0] += force_x
            else:
                velocities[i, 0] -= force_x
            if dist_y > 0.0:
                velocities[i, 1] += force_y
            else:
                velocities[i, 1] -= force_y

        # 4. Floor friction. A large time_diff may push past zero.
        if velocities[i, 0] > 0.0:
            velocities[i, 0] -= floor_friction
        elif velocities[i, 0] < 0.0:
            velocities[i, 0] += floor_friction
        if velocities[i, 1] > 0.0:
            velocities[i, 1] -= floor_friction
        elif velocities[i, 1] < 0.0:
            velocities[i, 1] += floor_friction

        # 5. Wall collisions: bottom, top, right, left
        r = radii[i]
        if positions[i, 1] > height - r:
            positions[i, 1] = height - r - wall_inset
            velocities[i, 1] *= bounce
        if positions[i, 1] < r:
            positions[i, 1] = r + wall_inset
            velocities[i, 1] *= bounce
        if positions[i, 0] > width - r:
            positions[i, 0] = width - r - wall_inset
            velocities[i, 0] *= bounce
        if positions[i, 0] < r:
            positions[i, 0] = r + wall_inset
            velocities[i, 0] *= bounce


def step_balls(field: BallField, time_diff: float, cursor, width: float, height: float) -> None:
    """Advances every ball of the field by one frame."""
    if field.ball_count == 0:
        return
    _step_balls_numba(
        field.positions, field.velocities, field.origins, field.radii,
        float(time_diff), float(cursor.x), float(cursor.y),
        float(width), float(height),
        RESTORE_FORCE, MOUSE_FORCE, FLOOR_FRICTION, COLLISION_DAMPER, float(WALL_INSET)
    )


class CursorState:
    """
    Pointer position in canvas coordinates, or the sentinel when the
    pointer is not over the canvas.
    """
    def __init__(self):
        self.x, self.y = CURSOR_SENTINEL

    def move_to(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)

    def reset(self) -> None:
        self.x, self.y = CURSOR_SENTINEL

    @property
    def is_active(self) -> bool:
        return (self.x, self.y) != CURSOR_SENTINEL

    def __repr__(self) -> str:
        return f"CursorState(x={self.x}, y={self.y})"


class Simulation:
    """
    Steps one ball field inside fixed canvas bounds.
    """
    def __init__(self, field: BallField, width: float, height: float, log_throttle_frames: int = 300):
        """
        Args:
            field (BallField): The balls to simulate.
            width (float): Canvas width in px.
            height (float): Canvas height in px.
            log_throttle_frames (int): Frames between diagnostic log lines.
        """
        self.field = field
        self.width = float(width)
        self.height = float(height)
        self.cursor = CursorState()
        self.log_throttle_frames = max(1, int(log_throttle_frames))
        self.frame_count = 0

        logging.info(
            f"Simulation initialized for {len(field)} balls "
            f"in {self.width:.0f}x{self.height:.0f}px."
        )

    def tick(self, time_diff: float, cursor: Optional[CursorState] = None) -> None:
        """
        Executes one frame of the simulation.

        Args:
            time_diff (float): Milliseconds elapsed since the previous frame.
            cursor (Optional[CursorState]): Overrides the simulation's own cursor.
        """
        step_balls(self.field, time_diff, cursor or self.cursor, self.width, self.height)
        self.frame_count += 1

        # Hot loop: throttle logs
        if self.frame_count % self.log_throttle_frames == 0:
            logging.debug(
                f"Frame {self.frame_count} | dt {time_diff:.1f}ms | "
                f"Average Speed: {self.field.mean_speed():.4f}"
            )
