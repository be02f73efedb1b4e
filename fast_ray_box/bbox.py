"""
User‑facing BBox class and top‑level intersection helpers.
"""
import logging
from typing import TYPE_CHECKING, Iterable, NamedTuple, Optional, Sequence

import numpy as np
import matplotlib.pyplot as plt
from mpl_toolkits.mplot3d import Axes3D  # noqa: F401

from ._core import _ray_bbox_intersect, _ray_bboxes_intersect
from .options import OptionsLike, resolve_options

if TYPE_CHECKING:
    from .ray import Ray

logger = logging.getLogger(__name__)

# corner i has bit 2/1/0 set when it takes the max x/y/z; an edge joins
# corners differing in exactly one bit
_BOX_EDGES = [(i, i | b) for i in range(8) for b in (4, 2, 1) if not i & b]


class IntersectionResult(NamedTuple):
    is_intersection: bool
    tmin: float
    tmax: float


class BatchIntersectionResult(NamedTuple):
    hits: np.ndarray
    tmin: np.ndarray
    tmax: np.ndarray


def _as_array(values, shape: Sequence[int], name: str, dtype=np.float64) -> np.ndarray:
    arr = np.ascontiguousarray(values, dtype=dtype)
    if arr.shape != tuple(shape):
        raise ValueError(f"{name} must have shape {tuple(shape)}, got {arr.shape}")
    return arr


def _as_bboxes(bboxes) -> np.ndarray:
    arr = np.ascontiguousarray(bboxes, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 6:
        raise ValueError(f"bboxes must have shape (n, 6), got {arr.shape}")
    return arr


class BBox:
    """Axis‑aligned bounding box stored as ``(xmin, ymin, zmin, xmax, ymax, zmax)``."""

    def __init__(
        self,
        bounds: Optional[Sequence[float]] = None,
        *,
        bbox_min: Optional[Sequence[float]] = None,
        bbox_max: Optional[Sequence[float]] = None,
    ) -> None:
        # Choose representation mode
        if bounds is not None:
            self.bounds = _as_array(bounds, (6,), "bounds")
        elif bbox_min is not None and bbox_max is not None:
            self.bounds = np.concatenate([
                _as_array(bbox_min, (3,), "bbox_min"),
                _as_array(bbox_max, (3,), "bbox_max"),
            ])
        else:
            raise ValueError("Must specify either bounds or bbox_min+bbox_max.")

    @classmethod
    def from_points(cls, points: Iterable[Sequence[float]]) -> "BBox":
        """Smallest box containing every point (e.g. the vertices of a triangle)."""
        pts = np.asarray(points, dtype=np.float64)
        if pts.ndim != 2 or pts.shape[1] != 3 or pts.shape[0] == 0:
            raise ValueError(f"points must have shape (n, 3) with n > 0, got {pts.shape}")
        return cls(bbox_min=pts.min(axis=0), bbox_max=pts.max(axis=0))

    @property
    def min(self) -> np.ndarray:
        return self.bounds[:3]

    @property
    def max(self) -> np.ndarray:
        return self.bounds[3:]

    def __repr__(self) -> str:
        return f"BBox(min={self.min.tolist()}, max={self.max.tolist()})"

    # ---------------------------------------------------------------------
    # Analytics
    # ---------------------------------------------------------------------
    def intersect(self, ray: "Ray", options: OptionsLike = None) -> IntersectionResult:
        """Slab test of *ray* against this box; see :func:`ray_bbox_intersection`."""
        opts = resolve_options(options)
        hit, t0, t1 = _ray_bbox_intersect(
            ray.origin,
            ray.direction,
            ray.inv_direction,
            self.bounds,
            opts.is_infinite_ray,
            opts.zero,
        )
        return IntersectionResult(bool(hit), float(t0), float(t1))

    # ---------------------------------------------------------------------
    # Visualization
    # ---------------------------------------------------------------------
    def plot(
        self,
        ray: Optional["Ray"] = None,
        options: OptionsLike = None,
        ax: Optional[Axes3D] = None,
        color: str = 'C0',
        ray_color: str = 'C3',
        set_limits: bool = True,
        show: bool = True,
    ) -> Axes3D:
        """
        Plot the box edges in 3D and, optionally, a ray clipped against it.

        A hit draws the ray between the returned entry/exit distances (or the
        segment's own ends for a finite ray); a miss draws ``t in [0, 1]`` dashed.
        """
        lo, hi = self.min, self.max
        corners = np.array([[hi[0] if i & 4 else lo[0],
                             hi[1] if i & 2 else lo[1],
                             hi[2] if i & 1 else lo[2]] for i in range(8)])

        if ax is None:
            fig = plt.figure()
            ax = fig.add_subplot(111, projection='3d')

        for i, j in _BOX_EDGES:
            ax.plot(*zip(corners[i], corners[j]), color=color)

        if ray is not None:
            opts = resolve_options(options)
            hit, t0, t1 = self.intersect(ray, opts)
            if hit and opts.is_infinite_ray:
                ts = (t0, t1)
            elif hit:
                ts = (max(t0, 0.0), min(t1, 1.0))
            else:
                ts = (0.0, 1.0)
            pts = np.stack([ray.at(t) for t in ts])
            ax.plot(pts[:, 0], pts[:, 1], pts[:, 2],
                    color=ray_color, linestyle='-' if hit else '--')

        # Set limits to box bounds
        if set_limits:
            ax.set_xlim(lo[0], hi[0])
            ax.set_ylim(lo[1], hi[1])
            ax.set_zlim(lo[2], hi[2])

        if show:
            plt.show()
        return ax


# -------------------------------------------------------------------------
# Convenience top‑level helpers
# -------------------------------------------------------------------------
def ray_bbox_intersection(
    origin,
    direction,
    inv_direction,
    direction_is_negative,
    bbox,
    options: OptionsLike = None,
) -> IntersectionResult:
    """
    Determine whether the ray ``origin + t * direction`` intersects *bbox*.

    Parameters
    ----------
    origin, direction     : array‑like(3); direction need not be unit length
    inv_direction         : array‑like(3), ``1 / direction`` (±inf for zero components)
    direction_is_negative : array‑like(3) of bool; accepted for signature
                            compatibility, not used by the slab test
    bbox                  : ``(xmin, ymin, zmin, xmax, ymax, zmax)`` or a :class:`BBox`
    options               : :class:`IntersectionOptions`, a partial mapping, or None

    Returns ``(is_intersection, tmin, tmax)`` with distances in units of
    *direction*. They are computed even when the box is missed.
    """
    o = _as_array(origin, (3,), "origin")
    d = _as_array(direction, (3,), "direction")
    inv_d = _as_array(inv_direction, (3,), "inv_direction")
    _as_array(direction_is_negative, (3,), "direction_is_negative", dtype=bool)
    bounds = bbox.bounds if isinstance(bbox, BBox) else _as_array(bbox, (6,), "bbox")
    opts = resolve_options(options)

    hit, t0, t1 = _ray_bbox_intersect(o, d, inv_d, bounds,
                                      opts.is_infinite_ray, opts.zero)
    return IntersectionResult(bool(hit), float(t0), float(t1))


def ray_bboxes_intersection(
    origin,
    direction,
    inv_direction,
    direction_is_negative,
    bboxes,
    options: OptionsLike = None,
) -> BatchIntersectionResult:
    """
    Test one ray against an ``(n, 6)`` array of boxes.

    Row ``i`` of the result equals ``ray_bbox_intersection(..., bboxes[i], options)``.
    """
    o = _as_array(origin, (3,), "origin")
    d = _as_array(direction, (3,), "direction")
    inv_d = _as_array(inv_direction, (3,), "inv_direction")
    _as_array(direction_is_negative, (3,), "direction_is_negative", dtype=bool)
    boxes = _as_bboxes(bboxes)
    opts = resolve_options(options)

    n = boxes.shape[0]
    hits = np.empty(n, dtype=np.bool_)
    tmin = np.empty(n, dtype=np.float64)
    tmax = np.empty(n, dtype=np.float64)

    count = _ray_bboxes_intersect(o, d, inv_d, boxes,
                                  opts.is_infinite_ray, opts.zero,
                                  hits, tmin, tmax)
    logger.debug("Ray hit %d of %d boxes", count, n)
    return BatchIntersectionResult(hits, tmin, tmax)
