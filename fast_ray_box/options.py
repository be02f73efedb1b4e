"""
Options controlling how a ray is clipped against a bounding box.

Build an :class:`IntersectionOptions` once and reuse it for every call;
the kernels never inspect optional fields themselves.
"""
import math
from dataclasses import dataclass, fields
from typing import Any, Mapping, Union

import numpy as np

DEFAULT_EPS_RAY_ENDS = 1e-10

# camelCase spellings accepted by ``from_mapping``
_ALIASES = {
    "isInfiniteRay": "is_infinite_ray",
    "isIncludeRayEnds": "is_include_ray_ends",
    "epsRayEnds": "eps_ray_ends",
}


@dataclass(frozen=True)
class IntersectionOptions:
    """
    Parameters
    ----------
    is_infinite_ray     : treat ``origin + t * direction`` as a line
                          (-inf < t < inf) rather than a segment (0 <= t <= 1)
    is_include_ray_ends : count segment end points as hits, within
                          ``eps_ray_ends`` (ignored for infinite rays)
    eps_ray_ends        : tolerance applied at both segment ends
    """
    is_infinite_ray: bool = True
    is_include_ray_ends: bool = True
    eps_ray_ends: float = DEFAULT_EPS_RAY_ENDS

    def __post_init__(self) -> None:
        eps = float(self.eps_ray_ends)
        if not math.isfinite(eps) or eps < 0.0:
            raise ValueError(f"eps_ray_ends must be finite and >= 0, got {self.eps_ray_ends!r}")
        for name in ("is_infinite_ray", "is_include_ray_ends"):
            value = getattr(self, name)
            if not isinstance(value, (bool, int, np.bool_)):
                raise TypeError(f"{name} must be a bool, not {type(value).__name__}")
        object.__setattr__(self, "is_infinite_ray", bool(self.is_infinite_ray))
        object.__setattr__(self, "is_include_ray_ends", bool(self.is_include_ray_ends))
        object.__setattr__(self, "eps_ray_ends", eps)

    @property
    def zero(self) -> float:
        """Signed end tolerance: widens the segment when ends are included, shrinks it otherwise."""
        return self.eps_ray_ends if self.is_include_ray_ends else -self.eps_ray_ends

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "IntersectionOptions":
        """Build options from a partial mapping; absent keys keep their defaults."""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in mapping.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown intersection option {key!r}")
            kwargs[name] = value
        return cls(**kwargs)


DEFAULT_OPTIONS = IntersectionOptions()

OptionsLike = Union[IntersectionOptions, Mapping[str, Any], None]


def resolve_options(options: OptionsLike = None) -> IntersectionOptions:
    if options is None:
        return DEFAULT_OPTIONS
    if isinstance(options, IntersectionOptions):
        return options
    if isinstance(options, Mapping):
        return IntersectionOptions.from_mapping(options)
    raise TypeError(
        f"options must be IntersectionOptions, a mapping or None, not {type(options).__name__}"
    )
