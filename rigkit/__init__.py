# rigkit/__init__.py
"""
rigkit - rigid transform algebra for animation and skinning.

Core components:
- Vec3, Vec4: component vectors
- Quaternion: rotations, Log/Exp, slerp
- DualQuaternion: rigid transforms, composition, ScLERP
- pack / unpack: batch layout for buffer uploads
"""

from .core import (
    # Math
    Vec3, Vec4,
    Quaternion,
    DualQuaternion,
    EPSILON,
    clamp, lerp,

    # Layout
    LayoutConfig,
    pack, unpack,
)

__version__ = '0.1.0'

__all__ = [
    # Math
    'Vec3', 'Vec4',
    'Quaternion',
    'DualQuaternion',
    'EPSILON',
    'clamp', 'lerp',

    # Layout
    'LayoutConfig',
    'pack', 'unpack',
]
