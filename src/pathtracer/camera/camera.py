# camera/camera.py
import math
import random

from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_in_unit_disk
from pathtracer.core.vector import Vector3

# Distance the eye travels per forward/back step along the view axis.
MOVE_STEP = 0.5
# Vertical offset per up/down step.
LIFT_STEP = Vector3(0.0, 0.1, 0.0)
# Scroll units per unit of focus distance.
SCROLL_SCALE = 12.0


class Camera:
    """
    Thin-lens camera looking from ``eye`` toward ``lookat``.

    ``fov`` is the vertical field of view in degrees. With a zero aperture
    every ray leaves from the eye (pinhole); otherwise rays start on a lens
    disk of radius ``aperture / 2`` and converge on the focus plane.
    """

    def __init__(self, eye: Vector3, lookat: Vector3, vup: Vector3,
                 fov: float, aspect_ratio: float, aperture: float = 0.0, focus_dist: float = 10.0):
        self.eye = eye
        self.lookat = lookat
        self.vup = vup
        self.fov = fov
        self.aspect_ratio = aspect_ratio
        self.lens_radius = aperture / 2.0  # Lens aperture for depth of field
        self.focus_dist = focus_dist  # Distance to focus plane
        self.update_camera()

    @property
    def aperture(self) -> float:
        return self.lens_radius * 2.0

    def update_camera(self):
        """Updates the camera's basis vectors and viewport."""
        h = math.tan(math.radians(self.fov) / 2.0)
        viewport_height = 2.0 * h
        viewport_width = self.aspect_ratio * viewport_height

        self.w = (self.eye - self.lookat).normalize()
        self.u = self.vup.cross(self.w).normalize()
        self.v = self.w.cross(self.u)

        # Scale by focus distance
        self.horizontal = self.u * (viewport_width * self.focus_dist)
        self.vertical = self.v * (viewport_height * self.focus_dist)

        self.lower_left_corner = (self.eye -
                                  self.horizontal * 0.5 -
                                  self.vertical * 0.5 -
                                  self.w * self.focus_dist)

    def get_ray(self, x: float, y: float, jx: float, jy: float,
                width: int, height: int, rng: random.Random) -> Ray:
        """
        Primary ray through pixel ``(x, y)`` offset by the jitter ``(jx, jy)``.

        ``y`` grows upward: row 0 is the bottom of the image.
        """
        s = (x + jx) / max(width - 1, 1)
        t = (y + jy) / max(height - 1, 1)
        target = self.lower_left_corner + self.horizontal * s + self.vertical * t

        if self.lens_radius <= 0.0:
            return Ray(self.eye, target - self.eye)

        # Generate random point on lens
        rd = random_in_unit_disk(rng) * self.lens_radius
        offset = self.u * rd.x + self.v * rd.y
        return Ray(self.eye + offset, target - self.eye - offset)

    # Interactive movement. Callers must not move the camera while a render
    # is in flight.

    def forward(self):
        step = self.w * MOVE_STEP
        self.eye = self.eye - step
        self.lookat = self.lookat - step
        self.update_camera()

    def back(self):
        step = self.w * MOVE_STEP
        self.eye = self.eye + step
        self.lookat = self.lookat + step
        self.update_camera()

    def up(self):
        self.eye = self.eye + LIFT_STEP
        self.lookat = self.lookat + LIFT_STEP
        self.update_camera()

    def down(self):
        self.eye = self.eye - LIFT_STEP
        self.lookat = self.lookat - LIFT_STEP
        self.update_camera()

    def adjust_focus(self, scroll: float):
        """Moves the focus plane by ``scroll / 12``."""
        if scroll != 0.0:
            self.focus_dist += scroll / SCROLL_SCALE
            self.update_camera()

    def adjust_aperture(self, delta: float):
        """Widens (positive ``delta``) or narrows the lens radius, never below zero."""
        self.lens_radius = max(0.0, self.lens_radius + delta)
        self.update_camera()
