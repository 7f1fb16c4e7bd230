# rigkit/core/quat.py
"""
Quaternion for rotations, stored as (x, y, z, w) with w the scalar part.

mul() is the Hamilton product ``self ⊗ q``: the result rotates by ``q``
first and then by ``self``. Nothing here renormalizes implicitly, so a
product of unit quaternions can drift and callers call normalize() at their
own boundaries.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Sequence
import logging
import math

import numpy as np

from .config import DEFAULT_LAYOUT
from .layout import read_array, read_buffer, write_array, write_buffer
from .scalar import EPSILON, SLERP_LINEAR_THRESHOLD, clamp, sinc
from .vec3 import Vec3

logger = logging.getLogger(__name__)


@dataclass
class Quaternion:
    """Quaternion for rotations. ``Quaternion()`` is the identity."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    SIZE: ClassVar[int] = 4

    def __mul__(self, other: Quaternion) -> Quaternion:
        return self.mul(other)

    def __add__(self, other: Quaternion) -> Quaternion:
        return self.add(other)

    def __sub__(self, other: Quaternion) -> Quaternion:
        return self.sub(other)

    def __neg__(self) -> Quaternion:
        return Quaternion(-self.x, -self.y, -self.z, -self.w)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    # -------------------------------------------------------------------------
    # Algebra
    # -------------------------------------------------------------------------

    def add(self, q: Quaternion) -> Quaternion:
        return Quaternion(self.x + q.x, self.y + q.y, self.z + q.z, self.w + q.w)

    def sub(self, q: Quaternion) -> Quaternion:
        return Quaternion(self.x - q.x, self.y - q.y, self.z - q.z, self.w - q.w)

    def scale(self, s: float) -> Quaternion:
        return Quaternion(self.x * s, self.y * s, self.z * s, self.w * s)

    def mul(self, q: Quaternion) -> Quaternion:
        """Hamilton product ``self ⊗ q``."""
        return Quaternion(
            self.w*q.x + self.x*q.w + self.y*q.z - self.z*q.y,
            self.w*q.y - self.x*q.z + self.y*q.w + self.z*q.x,
            self.w*q.z + self.x*q.y - self.y*q.x + self.z*q.w,
            self.w*q.w - self.x*q.x - self.y*q.y - self.z*q.z
        )

    def conjugate(self) -> Quaternion:
        return Quaternion(-self.x, -self.y, -self.z, self.w)

    def inverse(self) -> Quaternion:
        length_sqr = self.length_sqr()
        if length_sqr >= EPSILON:
            return self.conjugate().scale(1.0 / length_sqr)
        logger.debug(f"Quaternion.inverse: degenerate length_sqr {length_sqr}, returning unchanged")
        return self.clone()

    def dot(self, q: Quaternion) -> float:
        return self.x*q.x + self.y*q.y + self.z*q.z + self.w*q.w

    def length(self) -> float:
        return math.sqrt(self.length_sqr())

    def length_sqr(self) -> float:
        return self.x*self.x + self.y*self.y + self.z*self.z + self.w*self.w

    def normalize(self) -> Quaternion:
        """Unit-length copy. Returns an unchanged copy when ``length_sqr() < EPSILON``."""
        length_sqr = self.length_sqr()
        if length_sqr >= EPSILON:
            return self.scale(1.0 / math.sqrt(length_sqr))
        logger.debug(f"Quaternion.normalize: degenerate length_sqr {length_sqr}, returning unchanged")
        return self.clone()

    def exp(self) -> Quaternion:
        """e^q = e^w * (v * sin|v| / |v|, cos|v|).

        A scalar part too large for a double overflows to inf instead of raising.
        """
        angle = math.sqrt(self.x*self.x + self.y*self.y + self.z*self.z)
        try:
            ew = math.exp(self.w)
        except OverflowError:
            ew = math.inf
        k = ew * sinc(angle)
        return Quaternion(self.x * k, self.y * k, self.z * k, ew * math.cos(angle))

    def log(self) -> Quaternion:
        """ln q = (v / |v| * atan2(|v|, w), ln |q|).

        The zero quaternion maps to w = -inf, which exp() sends back to zero.
        """
        length = self.length()
        if length <= 0.0:
            return Quaternion(0.0, 0.0, 0.0, -math.inf)
        vlen = math.sqrt(self.x*self.x + self.y*self.y + self.z*self.z)
        k = 0.0
        if vlen > 0.0:
            # atan2 stays accurate where acos(w / |q|) loses digits near identity
            k = math.atan2(vlen, self.w) / vlen
        return Quaternion(self.x * k, self.y * k, self.z * k, math.log(length))

    def pow(self, p: float) -> Quaternion:
        return self.log().scale(p).exp()

    def lerp(self, q: Quaternion, t: float) -> Quaternion:
        return Quaternion(
            self.x + t*(q.x - self.x),
            self.y + t*(q.y - self.y),
            self.z + t*(q.z - self.z),
            self.w + t*(q.w - self.w)
        ).normalize()

    def slerp(self, q: Quaternion, t: float) -> Quaternion:
        """Spherical interpolation along the shorter arc."""
        dot = self.dot(q)

        if dot < 0.0:
            q = -q
            dot = -dot

        if dot > SLERP_LINEAR_THRESHOLD:
            return self.lerp(q, t)

        theta = math.acos(dot)
        sin_theta = math.sin(theta)

        s0 = math.sin((1-t)*theta) / sin_theta
        s1 = math.sin(t*theta) / sin_theta

        return Quaternion(
            s0*self.x + s1*q.x,
            s0*self.y + s1*q.y,
            s0*self.z + s1*q.z,
            s0*self.w + s1*q.w
        )

    # -------------------------------------------------------------------------
    # Rotation
    # -------------------------------------------------------------------------

    def rotate(self, v: Vec3) -> Vec3:
        """Rotate ``v`` by this quaternion: ``q ⊗ (v, 0) ⊗ q*``."""
        qv = Quaternion(v.x, v.y, v.z, 0.0)
        result = self.mul(qv).mul(self.conjugate())
        return Vec3(result.x, result.y, result.z)

    def get_angle(self) -> float:
        """Rotation angle in radians of a unit quaternion."""
        return 2.0 * math.acos(clamp(self.w, -1.0, 1.0))

    def get_axis(self) -> Vec3:
        """Rotation axis of a unit quaternion; +X when the angle is (near) zero."""
        sin_half = math.sqrt(max(0.0, 1.0 - self.w*self.w))
        if sin_half > EPSILON:
            inv = 1.0 / sin_half
            return Vec3(self.x * inv, self.y * inv, self.z * inv)
        return Vec3.unit_x()

    def to_matrix(self, array: Optional[Any] = None, index: int = 0) -> Any:
        """16-element column-major rotation matrix."""
        x, y, z, w = self.x, self.y, self.z, self.w

        xx = x*x; yy = y*y; zz = z*z
        xy = x*y; xz = x*z; yz = y*z
        wx = w*x; wy = w*y; wz = w*z

        return write_array((
            1-2*(yy+zz),  2*(xy+wz),    2*(xz-wy),    0.0,
            2*(xy-wz),    1-2*(xx+zz),  2*(yz+wx),    0.0,
            2*(xz+wy),    2*(yz-wx),    1-2*(xx+yy),  0.0,
            0.0,          0.0,          0.0,          1.0
        ), array, index)

    # -------------------------------------------------------------------------
    # Copy / in-place
    # -------------------------------------------------------------------------

    def equals(self, q: Quaternion) -> bool:
        return self.x == q.x and self.y == q.y and self.z == q.z and self.w == q.w

    def clone(self) -> Quaternion:
        return Quaternion(self.x, self.y, self.z, self.w)

    def copy(self, dest: Quaternion) -> Quaternion:
        """Write components into ``dest`` and return it. ``dest`` must not be ``self``."""
        dest.x = self.x
        dest.y = self.y
        dest.z = self.z
        dest.w = self.w
        return dest

    def set(self, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 1.0) -> Quaternion:
        self.x = x
        self.y = y
        self.z = z
        self.w = w
        return self

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_array(self, array: Optional[Any] = None, index: int = 0) -> Any:
        return write_array((self.x, self.y, self.z, self.w), array, index)

    def from_array(self, array: Sequence[float], index: int = 0) -> Quaternion:
        self.x, self.y, self.z, self.w = read_array(array, index, 4)
        return self

    def to_buffer(self, buffer: Any, dtype: Any, offset: int = 0) -> int:
        return write_buffer(buffer, dtype, offset, (self.x, self.y, self.z, self.w))

    def from_buffer(self, buffer: Any, dtype: Any, offset: int = 0) -> int:
        (self.x, self.y, self.z, self.w), offset = read_buffer(buffer, dtype, offset, 4)
        return offset

    def to_numpy(self, dtype: Any = None) -> np.ndarray:
        return np.array((self.x, self.y, self.z, self.w), dtype=DEFAULT_LAYOUT.resolve(dtype))

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @staticmethod
    def identity() -> Quaternion:
        return Quaternion(0.0, 0.0, 0.0, 1.0)

    @staticmethod
    def from_axis_angle(axis: Vec3, angle: float) -> Quaternion:
        axis = axis.normalize()
        half = angle / 2.0
        s = math.sin(half)
        return Quaternion(axis.x * s, axis.y * s, axis.z * s, math.cos(half))

    @staticmethod
    def from_euler(x: float, y: float, z: float) -> Quaternion:
        """Rotation about X, then Y, then Z (radians)."""
        cx = math.cos(x / 2); sx = math.sin(x / 2)
        cy = math.cos(y / 2); sy = math.sin(y / 2)
        cz = math.cos(z / 2); sz = math.sin(z / 2)

        return Quaternion(
            sx*cy*cz - cx*sy*sz,
            cx*sy*cz + sx*cy*sz,
            cx*cy*sz - sx*sy*cz,
            cx*cy*cz + sx*sy*sz
        )

    @staticmethod
    def from_matrix(m: Sequence[float]) -> Quaternion:
        """Rotation from the upper 3x3 block of a column-major 4x4 matrix."""
        # r_ij = row i, column j
        r00, r10, r20 = m[0], m[1], m[2]
        r01, r11, r21 = m[4], m[5], m[6]
        r02, r12, r22 = m[8], m[9], m[10]
        trace = r00 + r11 + r22
        if trace > 0.0:
            s = math.sqrt(trace + 1.0) * 2.0
            q = Quaternion((r21 - r12) / s, (r02 - r20) / s, (r10 - r01) / s, 0.25 * s)
        elif r00 > r11 and r00 > r22:
            s = math.sqrt(1.0 + r00 - r11 - r22) * 2.0
            q = Quaternion(0.25 * s, (r01 + r10) / s, (r02 + r20) / s, (r21 - r12) / s)
        elif r11 > r22:
            s = math.sqrt(1.0 + r11 - r00 - r22) * 2.0
            q = Quaternion((r01 + r10) / s, 0.25 * s, (r12 + r21) / s, (r02 - r20) / s)
        else:
            s = math.sqrt(1.0 + r22 - r00 - r11) * 2.0
            q = Quaternion((r02 + r20) / s, (r12 + r21) / s, 0.25 * s, (r10 - r01) / s)
        return q.normalize()
