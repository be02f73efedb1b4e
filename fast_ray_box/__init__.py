"""
Numba‑accelerated slab‑method ray / axis‑aligned bounding box intersection.

Public API
----------
ray_bbox_intersection(origin, direction, inv_direction, direction_is_negative, bbox, options)
    – ``(is_intersection, tmin, tmax)`` for one ray and one box

ray_bboxes_intersection(origin, direction, inv_direction, direction_is_negative, bboxes, options)
    – the same test against an ``(n, 6)`` array of boxes
"""
from .bbox import (BBox, BatchIntersectionResult, IntersectionResult,
                   ray_bbox_intersection, ray_bboxes_intersection)
from .options import DEFAULT_OPTIONS, IntersectionOptions, resolve_options
from .ray import Ray

__all__ = [
    "BBox",
    "BatchIntersectionResult",
    "DEFAULT_OPTIONS",
    "IntersectionOptions",
    "IntersectionResult",
    "Ray",
    "ray_bbox_intersection",
    "ray_bboxes_intersection",
    "resolve_options",
]
