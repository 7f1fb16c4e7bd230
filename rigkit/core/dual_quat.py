# rigkit/core/dual_quat.py
"""
DualQuaternion - rigid transform (rotation + translation) as a pair of
quaternions.

``real`` holds the rotation. ``dual`` holds ``0.5 * t ⊗ real`` for a
translation t, so ``real.dot(dual) == 0`` for any valid rigid transform.
Arithmetic does not maintain that invariant; it is established by
from_translation_rotation() and normalize().

Composition order: ``a.mul(b)`` is the transform that applies ``a`` first and
``b`` second, so a chain of local transforms reads left to right::

    world = local.mul(parent)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Sequence
import logging

import numpy as np

from .config import DEFAULT_LAYOUT
from .layout import read_array, read_buffer, write_array, write_buffer
from .quat import Quaternion
from .scalar import EPSILON
from .vec3 import Vec3

logger = logging.getLogger(__name__)


@dataclass(init=False)
class DualQuaternion:
    """Rigid transform. ``DualQuaternion()`` is the identity.

    The eight-argument form sets ``real = (x, y, z, w)`` and
    ``dual = (dx, dy, dz, dw)`` as given, without normalizing.
    """
    real: Quaternion
    dual: Quaternion

    SIZE: ClassVar[int] = 8

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 1.0,
                 dx: float = 0.0, dy: float = 0.0, dz: float = 0.0, dw: float = 0.0):
        self.real = Quaternion(x, y, z, w)
        self.dual = Quaternion(dx, dy, dz, dw)

    def __mul__(self, other: DualQuaternion) -> DualQuaternion:
        return self.mul(other)

    def __add__(self, other: DualQuaternion) -> DualQuaternion:
        return self.add(other)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def from_real_dual(self, real: Quaternion, dual: Quaternion) -> DualQuaternion:
        """Copy ``real`` and ``dual`` into this instance."""
        real.copy(self.real)
        dual.copy(self.dual)
        return self

    def from_translation_rotation(self, t: Vec3, r: Quaternion) -> DualQuaternion:
        """In place: rotate by ``r`` then translate by ``t``.

        ``dual = 0.5 * (t.x, t.y, t.z, 0) ⊗ real``, expanded.
        """
        real = r.normalize()
        real.copy(self.real)
        x, y, z, w = real.x, real.y, real.z, real.w
        self.dual.x = 0.5 * ( t.x * w + t.y * z - t.z * y)
        self.dual.y = 0.5 * ( t.y * w + t.z * x - t.x * z)
        self.dual.z = 0.5 * ( t.z * w + t.x * y - t.y * x)
        self.dual.w = 0.5 * (-t.x * x - t.y * y - t.z * z)
        return self

    @staticmethod
    def identity() -> DualQuaternion:
        return DualQuaternion()

    # -------------------------------------------------------------------------
    # Decomposition
    # -------------------------------------------------------------------------

    def get_translation(self) -> Vec3:
        """Vector part of ``2 * dual ⊗ conjugate(real)``."""
        rx, ry, rz, rw = self.real.x, self.real.y, self.real.z, self.real.w
        dx, dy, dz, dw = self.dual.x, self.dual.y, self.dual.z, self.dual.w
        return Vec3(
            2.0 * (-dw * rx + dx * rw - dy * rz + dz * ry),
            2.0 * (-dw * ry + dy * rw - dz * rx + dx * rz),
            2.0 * (-dw * rz + dz * rw - dx * ry + dy * rx)
        )

    def get_rotation(self) -> Quaternion:
        return self.real.clone()

    # -------------------------------------------------------------------------
    # Algebra
    # -------------------------------------------------------------------------

    def add(self, dq: DualQuaternion) -> DualQuaternion:
        return DualQuaternion().from_real_dual(self.real.add(dq.real), self.dual.add(dq.dual))

    def scale(self, s: float) -> DualQuaternion:
        return DualQuaternion().from_real_dual(self.real.scale(s), self.dual.scale(s))

    def dot(self, dq: DualQuaternion) -> float:
        """Dot product of the real parts."""
        return self.real.dot(dq.real)

    def mul(self, dq: DualQuaternion) -> DualQuaternion:
        """Transform that applies ``self`` first and then ``dq``."""
        real = dq.real.mul(self.real)
        dual = dq.dual.mul(self.real).add(dq.real.mul(self.dual))
        return DualQuaternion().from_real_dual(real, dual)

    def conjugate(self) -> DualQuaternion:
        return DualQuaternion().from_real_dual(self.real.conjugate(), self.dual.conjugate())

    def normalize(self) -> DualQuaternion:
        """Divide both parts by ``real.dot(real)``.

        This is the squared magnitude, not its square root, so a real part
        of length 2 comes back with length 0.5. Unit transforms pass through
        unchanged. When the squared magnitude is not above EPSILON an
        unscaled copy is returned.
        """
        mag = self.real.dot(self.real)
        if mag > EPSILON:
            inv = 1.0 / mag
            return DualQuaternion().from_real_dual(self.real.scale(inv), self.dual.scale(inv))
        logger.debug(f"DualQuaternion.normalize: degenerate real part {mag}, returning unscaled")
        return self.clone()

    def exp(self) -> DualQuaternion:
        real = self.real.exp()
        return DualQuaternion().from_real_dual(real, real.mul(self.dual))

    def log(self) -> DualQuaternion:
        length = self.real.length()
        if length > 0.0:
            scale = 1.0 / length
        else:
            logger.debug("DualQuaternion.log: zero real part")
            scale = 0.0
        real = self.real.log()
        dual = self.real.conjugate().mul(self.dual.scale(scale * scale))
        return DualQuaternion().from_real_dual(real, dual)

    def pow(self, p: float) -> DualQuaternion:
        return self.log().scale(p).exp()

    def sclerp(self, dq: DualQuaternion, s: float) -> DualQuaternion:
        """Screw linear interpolation from ``self`` (s = 0) to ``dq`` (s = 1)."""
        return dq.mul(self.conjugate()).pow(s).mul(self).normalize()

    # -------------------------------------------------------------------------
    # Application
    # -------------------------------------------------------------------------

    def rotate(self, v: Vec3) -> Vec3:
        """Rotate ``v`` without translating it."""
        return self.real.rotate(v)

    def transform(self, v: Vec3) -> Vec3:
        """Rotate ``v``, then translate it."""
        return self.get_translation().add(self.real.rotate(v))

    def to_matrix(self, array: Optional[Any] = None, index: int = 0) -> Any:
        """16-element column-major matrix, translation in elements 12-14."""
        matrix = self.real.to_matrix(array, index)
        t = self.get_translation()
        offset = 0 if array is None else index
        matrix[offset + 12] = t.x
        matrix[offset + 13] = t.y
        matrix[offset + 14] = t.z
        return matrix

    # -------------------------------------------------------------------------
    # Copy / in-place
    # -------------------------------------------------------------------------

    def equals(self, dq: DualQuaternion) -> bool:
        return self.real.equals(dq.real) and self.dual.equals(dq.dual)

    def clone(self) -> DualQuaternion:
        return DualQuaternion().from_real_dual(self.real, self.dual)

    def copy(self, dest: DualQuaternion) -> DualQuaternion:
        """Write both parts into ``dest`` and return it. ``dest`` must not be ``self``."""
        self.real.copy(dest.real)
        self.dual.copy(dest.dual)
        return dest

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def _components(self):
        r, d = self.real, self.dual
        return (r.x, r.y, r.z, r.w, d.x, d.y, d.z, d.w)

    def _assign(self, values: Sequence[float]) -> None:
        r, d = self.real, self.dual
        r.x, r.y, r.z, r.w, d.x, d.y, d.z, d.w = values

    def to_array(self, array: Optional[Any] = None, index: int = 0) -> Any:
        """``[rx, ry, rz, rw, dx, dy, dz, dw]``."""
        return write_array(self._components(), array, index)

    def from_array(self, array: Sequence[float], index: int = 0) -> DualQuaternion:
        self._assign(read_array(array, index, 8))
        return self

    def to_buffer(self, buffer: Any, dtype: Any, offset: int = 0) -> int:
        return write_buffer(buffer, dtype, offset, self._components())

    def from_buffer(self, buffer: Any, dtype: Any, offset: int = 0) -> int:
        values, offset = read_buffer(buffer, dtype, offset, 8)
        self._assign(values)
        return offset

    def to_numpy(self, dtype: Any = None) -> np.ndarray:
        return np.array(self._components(), dtype=DEFAULT_LAYOUT.resolve(dtype))
