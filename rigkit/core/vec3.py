# rigkit/core/vec3.py
"""
Vec3 - three component vector value type.

Arithmetic returns new vectors. Only copy(), set(), from_array(),
from_buffer(), from_barycentric() and orthonormalize() write into an
existing instance.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Sequence, Tuple
import logging
import math

import numpy as np

from .config import DEFAULT_LAYOUT
from .layout import read_array, read_buffer, write_array, write_buffer
from .scalar import EPSILON, clamp, frac, lerp

logger = logging.getLogger(__name__)


@dataclass(init=False)
class Vec3:
    """3D vector.

    ``Vec3()`` is all zeros. Otherwise omitted components fall back to ``x``:
    ``Vec3(2)`` is ``(2, 2, 2)`` and ``Vec3(1, 2)`` is ``(1, 2, 1)``.
    """
    x: float
    y: float
    z: float

    SIZE: ClassVar[int] = 3

    def __init__(self, x: Optional[float] = None, y: Optional[float] = None,
                 z: Optional[float] = None):
        self.x = 0.0
        self.y = 0.0
        self.z = 0.0
        if x is not None:
            self.set(x, y, z)

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def __add__(self, other: Vec3) -> Vec3:
        return self.add(other)

    def __sub__(self, other: Vec3) -> Vec3:
        return self.sub(other)

    def __mul__(self, scalar: float) -> Vec3:
        return self.scale(scalar)

    def __rmul__(self, scalar: float) -> Vec3:
        return self.scale(scalar)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def add(self, v: Vec3) -> Vec3:
        return Vec3(self.x + v.x, self.y + v.y, self.z + v.z)

    def sub(self, v: Vec3) -> Vec3:
        return Vec3(self.x - v.x, self.y - v.y, self.z - v.z)

    def mul(self, v: Vec3) -> Vec3:
        """Component-wise product."""
        return Vec3(self.x * v.x, self.y * v.y, self.z * v.z)

    def scale(self, s: float) -> Vec3:
        return Vec3(self.x * s, self.y * s, self.z * s)

    def dot(self, v: Vec3) -> float:
        return self.x * v.x + self.y * v.y + self.z * v.z

    def cross(self, v: Vec3) -> Vec3:
        return Vec3(
            self.y * v.z - self.z * v.y,
            self.z * v.x - self.x * v.z,
            self.x * v.y - self.y * v.x
        )

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def length_sqr(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def normalize(self) -> Vec3:
        """Unit-length copy. Vectors with ``length_sqr() < EPSILON`` come back unchanged."""
        length_sqr = self.length_sqr()
        if length_sqr >= EPSILON:
            return self.scale(1.0 / math.sqrt(length_sqr))
        logger.debug(f"Vec3.normalize: degenerate length_sqr {length_sqr}, returning unchanged")
        return self.clone()

    def clamp_length(self, min_length: float, max_length: float) -> Vec3:
        """Rescale so the length lies in [min_length, max_length].

        A zero vector has no direction to rescale along and comes back as NaN
        in every component, as IEEE division would give; callers must guard.
        """
        length = self.length()
        if length == 0.0:
            return self.scale(math.nan)
        return self.scale(clamp(length, min_length, max_length) / length)

    def reflect(self, n: Vec3) -> Vec3:
        """Reflect across the plane with normal ``n``."""
        return self.sub(n.scale(2.0 * self.dot(n)))

    def lerp(self, v: Vec3, t: float) -> Vec3:
        return Vec3(
            lerp(self.x, v.x, t),
            lerp(self.y, v.y, t),
            lerp(self.z, v.z, t)
        )

    def orthonormalize(self, v: Vec3) -> bool:
        """One Gram-Schmidt step, in place on both ``self`` and ``v``.

        ``self`` is always replaced by its normalized direction. ``v`` is
        replaced by the normalized part orthogonal to ``self`` only when that
        residual is non-zero; otherwise ``v`` is left alone and False is
        returned.
        """
        v1 = self.normalize()
        v1.copy(self)
        residual = v.sub(v1.scale(v.dot(v1)))
        if residual.length() <= 0.0:
            logger.debug("Vec3.orthonormalize: vectors are parallel")
            return False
        residual.normalize().copy(v)
        return True

    def transform(self, matrix: Sequence[float]) -> Vec3:
        """Apply a column-major 4x4 matrix to the point (x, y, z, 1)."""
        m = matrix
        x, y, z = self.x, self.y, self.z
        return Vec3(
            m[0] * x + m[4] * y + m[8] * z + m[12],
            m[1] * x + m[5] * y + m[9] * z + m[13],
            m[2] * x + m[6] * y + m[10] * z + m[14]
        )

    # -------------------------------------------------------------------------
    # Component-wise helpers
    # -------------------------------------------------------------------------

    def abs(self) -> Vec3:
        return Vec3(abs(self.x), abs(self.y), abs(self.z))

    def floor(self) -> Vec3:
        return Vec3(float(math.floor(self.x)), float(math.floor(self.y)), float(math.floor(self.z)))

    def ceil(self) -> Vec3:
        return Vec3(float(math.ceil(self.x)), float(math.ceil(self.y)), float(math.ceil(self.z)))

    def round(self) -> Vec3:
        return Vec3(float(round(self.x)), float(round(self.y)), float(round(self.z)))

    def frac(self) -> Vec3:
        return Vec3(frac(self.x), frac(self.y), frac(self.z))

    def clamp(self, lo: Vec3, hi: Vec3) -> Vec3:
        return Vec3(
            clamp(self.x, lo.x, hi.x),
            clamp(self.y, lo.y, hi.y),
            clamp(self.z, lo.z, hi.z)
        )

    def minimize(self, v: Vec3) -> Vec3:
        return Vec3(min(self.x, v.x), min(self.y, v.y), min(self.z, v.z))

    def maximize(self, v: Vec3) -> Vec3:
        return Vec3(max(self.x, v.x), max(self.y, v.y), max(self.z, v.z))

    def min_component(self) -> float:
        return min(self.x, self.y, self.z)

    def max_component(self) -> float:
        return max(self.x, self.y, self.z)

    def get(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    # -------------------------------------------------------------------------
    # Copy / in-place
    # -------------------------------------------------------------------------

    def equals(self, v: Vec3) -> bool:
        return self.x == v.x and self.y == v.y and self.z == v.z

    def clone(self) -> Vec3:
        return Vec3(self.x, self.y, self.z)

    def copy(self, dest: Vec3) -> Vec3:
        """Write components into ``dest`` and return it. ``dest`` must not be ``self``."""
        dest.x = self.x
        dest.y = self.y
        dest.z = self.z
        return dest

    def set(self, x: float = 0.0, y: Optional[float] = None, z: Optional[float] = None) -> Vec3:
        """Set components in place, with the constructor's fallback to ``x``."""
        self.x = x
        self.y = x if y is None else y
        self.z = x if z is None else z
        return self

    def from_barycentric(self, v1: Vec3, v2: Vec3, v3: Vec3, f: float, g: float) -> Vec3:
        """In place: ``v1 + f * (v2 - v1) + g * (v3 - v1)``."""
        self.x = v1.x + f * (v2.x - v1.x) + g * (v3.x - v1.x)
        self.y = v1.y + f * (v2.y - v1.y) + g * (v3.y - v1.y)
        self.z = v1.z + f * (v2.z - v1.z) + g * (v3.z - v1.z)
        return self

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_array(self, array: Optional[Any] = None, index: int = 0) -> Any:
        return write_array((self.x, self.y, self.z), array, index)

    def from_array(self, array: Sequence[float], index: int = 0) -> Vec3:
        self.x, self.y, self.z = read_array(array, index, 3)
        return self

    def to_buffer(self, buffer: Any, dtype: Any, offset: int = 0) -> int:
        """Write x, y, z as ``dtype``. Returns the byte offset after the last component."""
        return write_buffer(buffer, dtype, offset, (self.x, self.y, self.z))

    def from_buffer(self, buffer: Any, dtype: Any, offset: int = 0) -> int:
        (self.x, self.y, self.z), offset = read_buffer(buffer, dtype, offset, 3)
        return offset

    def to_numpy(self, dtype: Any = None) -> np.ndarray:
        return np.array((self.x, self.y, self.z), dtype=DEFAULT_LAYOUT.resolve(dtype))

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @staticmethod
    def from_tuple(t: Tuple[float, float, float]) -> Vec3:
        return Vec3(t[0], t[1], t[2])

    @staticmethod
    def unit_x() -> Vec3:
        return Vec3(1.0, 0.0, 0.0)

    @staticmethod
    def unit_y() -> Vec3:
        return Vec3(0.0, 1.0, 0.0)

    @staticmethod
    def unit_z() -> Vec3:
        return Vec3(0.0, 0.0, 1.0)
