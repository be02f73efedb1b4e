"""
Ray class holding origin, direction and the precomputed inverse direction.
"""
import logging
from typing import Iterable, Optional

import numpy as np

from .bbox import (BBox, BatchIntersectionResult, IntersectionResult,
                   _as_array, ray_bboxes_intersection)
from .options import OptionsLike

logger = logging.getLogger(__name__)


class Ray:
    def __init__(
        self,
        origin: Iterable[float],
        direction: Iterable[float],
        inv_direction: Optional[Iterable[float]] = None,
        direction_is_negative: Optional[Iterable[bool]] = None,
    ):
        self.origin = _as_array(origin, (3,), "origin")
        self.direction = _as_array(direction, (3,), "direction")

        if inv_direction is None:
            with np.errstate(divide='ignore'):
                inv_direction = 1.0 / self.direction
        self.inv_direction = _as_array(inv_direction, (3,), "inv_direction")

        if direction_is_negative is None:
            direction_is_negative = self.direction < 0.0
        self.direction_is_negative = _as_array(
            direction_is_negative, (3,), "direction_is_negative", dtype=bool
        )

        if not np.any(self.direction):
            logger.warning("Ray direction is the zero vector; intersection distances will not be finite")

    @classmethod
    def from_endpoints(cls, start: Iterable[float], end: Iterable[float]) -> "Ray":
        """Segment running from *start* (t=0) to *end* (t=1)."""
        s = _as_array(start, (3,), "start")
        e = _as_array(end, (3,), "end")
        return cls(s, e - s)

    def at(self, t: float) -> np.ndarray:
        """Point ``origin + t * direction``."""
        return self.origin + t * self.direction

    def reversed(self) -> "Ray":
        """Same segment traversed backwards: t=0 and t=1 swap ends."""
        return Ray(self.origin + self.direction, -self.direction)

    def intersect(self, bbox: BBox, options: OptionsLike = None) -> IntersectionResult:
        """Delegate to BBox.intersect."""
        return bbox.intersect(self, options)

    def intersect_many(self, bboxes, options: OptionsLike = None) -> BatchIntersectionResult:
        """Test this ray against an ``(n, 6)`` array of boxes."""
        return ray_bboxes_intersection(
            self.origin,
            self.direction,
            self.inv_direction,
            self.direction_is_negative,
            bboxes,
            options,
        )

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin.tolist()}, direction={self.direction.tolist()})"
