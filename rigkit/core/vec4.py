# rigkit/core/vec4.py
"""
Vec4 - four component vector value type (homogeneous points, colors,
packed quaternion data).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Sequence
import logging
import math

import numpy as np

from .config import DEFAULT_LAYOUT
from .layout import read_array, read_buffer, write_array, write_buffer
from .scalar import EPSILON, clamp, frac, lerp
from .vec3 import Vec3

logger = logging.getLogger(__name__)


@dataclass(init=False)
class Vec4:
    """4D vector.

    ``Vec4()`` is all zeros. Otherwise each omitted component repeats the one
    before it: ``Vec4(1, 2)`` is ``(1, 2, 2, 2)``.
    """
    x: float
    y: float
    z: float
    w: float

    SIZE: ClassVar[int] = 4

    def __init__(self, x: Optional[float] = None, y: Optional[float] = None,
                 z: Optional[float] = None, w: Optional[float] = None):
        self.x = 0.0
        self.y = 0.0
        self.z = 0.0
        self.w = 0.0
        if x is not None:
            self.set(x, y, z, w)

    def __add__(self, other: Vec4) -> Vec4:
        return self.add(other)

    def __sub__(self, other: Vec4) -> Vec4:
        return self.sub(other)

    def __mul__(self, scalar: float) -> Vec4:
        return self.scale(scalar)

    def __rmul__(self, scalar: float) -> Vec4:
        return self.scale(scalar)

    def __neg__(self) -> Vec4:
        return Vec4(-self.x, -self.y, -self.z, -self.w)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def add(self, v: Vec4) -> Vec4:
        return Vec4(self.x + v.x, self.y + v.y, self.z + v.z, self.w + v.w)

    def sub(self, v: Vec4) -> Vec4:
        return Vec4(self.x - v.x, self.y - v.y, self.z - v.z, self.w - v.w)

    def mul(self, v: Vec4) -> Vec4:
        return Vec4(self.x * v.x, self.y * v.y, self.z * v.z, self.w * v.w)

    def scale(self, s: float) -> Vec4:
        return Vec4(self.x * s, self.y * s, self.z * s, self.w * s)

    def dot(self, v: Vec4) -> float:
        return self.x * v.x + self.y * v.y + self.z * v.z + self.w * v.w

    def length(self) -> float:
        return math.sqrt(self.length_sqr())

    def length_sqr(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w

    def normalize(self) -> Vec4:
        length_sqr = self.length_sqr()
        if length_sqr >= EPSILON:
            return self.scale(1.0 / math.sqrt(length_sqr))
        logger.debug(f"Vec4.normalize: degenerate length_sqr {length_sqr}, returning unchanged")
        return self.clone()

    def clamp_length(self, min_length: float, max_length: float) -> Vec4:
        """Rescale into [min_length, max_length]. A zero vector comes back as all NaN."""
        length = self.length()
        if length == 0.0:
            return self.scale(math.nan)
        return self.scale(clamp(length, min_length, max_length) / length)

    def reflect(self, n: Vec4) -> Vec4:
        return self.sub(n.scale(2.0 * self.dot(n)))

    def lerp(self, v: Vec4, t: float) -> Vec4:
        return Vec4(
            lerp(self.x, v.x, t),
            lerp(self.y, v.y, t),
            lerp(self.z, v.z, t),
            lerp(self.w, v.w, t)
        )

    def transform(self, matrix: Sequence[float]) -> Vec4:
        """Apply a column-major 4x4 matrix to (x, y, z, w)."""
        m = matrix
        x, y, z, w = self.x, self.y, self.z, self.w
        return Vec4(
            m[0] * x + m[4] * y + m[8] * z + m[12] * w,
            m[1] * x + m[5] * y + m[9] * z + m[13] * w,
            m[2] * x + m[6] * y + m[10] * z + m[14] * w,
            m[3] * x + m[7] * y + m[11] * z + m[15] * w
        )

    # -------------------------------------------------------------------------
    # Component-wise helpers
    # -------------------------------------------------------------------------

    def abs(self) -> Vec4:
        return Vec4(abs(self.x), abs(self.y), abs(self.z), abs(self.w))

    def floor(self) -> Vec4:
        return Vec4(*(float(math.floor(c)) for c in self))

    def ceil(self) -> Vec4:
        return Vec4(*(float(math.ceil(c)) for c in self))

    def round(self) -> Vec4:
        return Vec4(*(float(round(c)) for c in self))

    def frac(self) -> Vec4:
        return Vec4(*(frac(c) for c in self))

    def clamp(self, lo: Vec4, hi: Vec4) -> Vec4:
        return Vec4(
            clamp(self.x, lo.x, hi.x),
            clamp(self.y, lo.y, hi.y),
            clamp(self.z, lo.z, hi.z),
            clamp(self.w, lo.w, hi.w)
        )

    def minimize(self, v: Vec4) -> Vec4:
        return Vec4(min(self.x, v.x), min(self.y, v.y), min(self.z, v.z), min(self.w, v.w))

    def maximize(self, v: Vec4) -> Vec4:
        return Vec4(max(self.x, v.x), max(self.y, v.y), max(self.z, v.z), max(self.w, v.w))

    def min_component(self) -> float:
        return min(self.x, self.y, self.z, self.w)

    def max_component(self) -> float:
        return max(self.x, self.y, self.z, self.w)

    def get(self, index: int) -> float:
        return (self.x, self.y, self.z, self.w)[index]

    def xyz(self) -> Vec3:
        return Vec3(self.x, self.y, self.z)

    # -------------------------------------------------------------------------
    # Copy / in-place
    # -------------------------------------------------------------------------

    def equals(self, v: Vec4) -> bool:
        return self.x == v.x and self.y == v.y and self.z == v.z and self.w == v.w

    def clone(self) -> Vec4:
        return Vec4(self.x, self.y, self.z, self.w)

    def copy(self, dest: Vec4) -> Vec4:
        """Write components into ``dest`` and return it. ``dest`` must not be ``self``."""
        dest.x = self.x
        dest.y = self.y
        dest.z = self.z
        dest.w = self.w
        return dest

    def set(self, x: float = 0.0, y: Optional[float] = None, z: Optional[float] = None,
            w: Optional[float] = None) -> Vec4:
        self.x = x
        self.y = x if y is None else y
        self.z = self.y if z is None else z
        self.w = self.z if w is None else w
        return self

    def from_barycentric(self, v1: Vec4, v2: Vec4, v3: Vec4, f: float, g: float) -> Vec4:
        """In place: ``v1 + f * (v2 - v1) + g * (v3 - v1)``."""
        self.x = v1.x + f * (v2.x - v1.x) + g * (v3.x - v1.x)
        self.y = v1.y + f * (v2.y - v1.y) + g * (v3.y - v1.y)
        self.z = v1.z + f * (v2.z - v1.z) + g * (v3.z - v1.z)
        self.w = v1.w + f * (v2.w - v1.w) + g * (v3.w - v1.w)
        return self

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_array(self, array: Optional[Any] = None, index: int = 0) -> Any:
        return write_array((self.x, self.y, self.z, self.w), array, index)

    def from_array(self, array: Sequence[float], index: int = 0) -> Vec4:
        self.x, self.y, self.z, self.w = read_array(array, index, 4)
        return self

    def to_buffer(self, buffer: Any, dtype: Any, offset: int = 0) -> int:
        return write_buffer(buffer, dtype, offset, (self.x, self.y, self.z, self.w))

    def from_buffer(self, buffer: Any, dtype: Any, offset: int = 0) -> int:
        (self.x, self.y, self.z, self.w), offset = read_buffer(buffer, dtype, offset, 4)
        return offset

    def to_numpy(self, dtype: Any = None) -> np.ndarray:
        return np.array((self.x, self.y, self.z, self.w), dtype=DEFAULT_LAYOUT.resolve(dtype))

    @staticmethod
    def from_vec3(v: Vec3, w: float = 1.0) -> Vec4:
        return Vec4(v.x, v.y, v.z, w)

    @staticmethod
    def point(x: float, y: float, z: float) -> Vec4:
        """Homogeneous point (w = 1)."""
        return Vec4(x, y, z, 1.0)

    @staticmethod
    def direction(x: float, y: float, z: float) -> Vec4:
        """Homogeneous direction (w = 0)."""
        return Vec4(x, y, z, 0.0)
