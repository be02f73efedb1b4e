"""
Low-level NumPy+Numba kernels for the slab ray/box test.
"""
import math
import numpy as np
from numba import njit
from typing import Tuple

# No fastmath here: the slab bounds start at +-inf and zero directions are
# compared exactly. error_model="numpy" lets a zero-length direction produce
# NaN/inf instead of raising ZeroDivisionError.

@njit(cache=True, error_model="numpy")
def _ray_bbox_intersect(o: np.ndarray, d: np.ndarray, inv_d: np.ndarray,
                        bbox: np.ndarray, is_infinite: bool,
                        zero: float) -> Tuple[bool, float, float]:
    """
    Slab test of ray ``o + t d`` against ``bbox = (xmin, ymin, zmin, xmax, ymax, zmax)``.

    Works in distance units along the unit direction and converts back to the
    caller's parametrization on return. ``zero`` is the signed tolerance
    applied to both segment ends (ignored when ``is_infinite``).
    Returns ``(is_intersection, tmin, tmax)``.
    """
    # scaled norm: no overflow/underflow for huge or tiny directions
    s = max(abs(d[0]), abs(d[1]), abs(d[2]))
    length = s * math.sqrt((d[0] / s) ** 2 + (d[1] / s) ** 2 + (d[2] / s) ** 2)

    if is_infinite:
        tmin = -math.inf
        tmax = math.inf
    else:
        tmin = 0.0 - zero
        tmax = length + zero

    for k in range(3):
        if d[k] / length != 0.0:
            inv = inv_d[k] * length
            t1 = (bbox[k] - o[k]) * inv
            t2 = (bbox[k + 3] - o[k]) * inv
            if t1 < t2:
                tmin = max(t1, tmin)
                tmax = min(t2, tmax)
            else:
                tmin = max(t2, tmin)
                tmax = min(t1, tmax)
            # z is settled by the final comparison
            if k < 2 and tmin > tmax:
                return False, tmin / length, tmax / length
        elif o[k] < bbox[k] or o[k] > bbox[k + 3]:
            # parallel to the slab and outside it
            return False, tmin / length, tmax / length

    return tmin <= tmax, tmin / length, tmax / length


@njit(cache=True, error_model="numpy")
def _ray_bboxes_intersect(o: np.ndarray, d: np.ndarray, inv_d: np.ndarray,
                          bboxes: np.ndarray, is_infinite: bool, zero: float,
                          out_hit: np.ndarray,
                          out_tmin: np.ndarray,
                          out_tmax: np.ndarray) -> int:
    """
    Test one ray against every row of ``bboxes`` (shape ``(n, 6)``).

    Fills the pre-allocated ``out_hit``, ``out_tmin``, ``out_tmax`` buffers
    and returns the number of boxes hit.
    """
    count = 0
    for i in range(bboxes.shape[0]):
        hit, t0, t1 = _ray_bbox_intersect(o, d, inv_d, bboxes[i],
                                          is_infinite, zero)
        out_hit[i] = hit
        out_tmin[i] = t0
        out_tmax[i] = t1
        if hit:
            count += 1
    return count
