"""
Core transform algebra

Components:
- vec3 / vec4: component vectors
- quat: rotations
- dual_quat: rigid transforms, ScLERP
- layout: flat array / buffer / numpy I/O shared by all of the above
- scalar: thresholds and scalar helpers

Example usage:

    from rigkit.core import DualQuaternion, Quaternion, Vec3

    a = DualQuaternion().from_translation_rotation(Vec3(0, 0, 0), Quaternion())
    b = DualQuaternion().from_translation_rotation(
        Vec3(2, 0, 0), Quaternion.from_axis_angle(Vec3.unit_z(), 1.57))

    halfway = a.sclerp(b, 0.5)
    matrix = halfway.to_matrix()        # column-major, ready for upload
"""

from .scalar import EPSILON, SLERP_LINEAR_THRESHOLD, clamp, lerp
from .config import LayoutConfig, DEFAULT_LAYOUT
from .layout import pack, unpack, read_buffer, write_buffer
from .vec3 import Vec3
from .vec4 import Vec4
from .quat import Quaternion
from .dual_quat import DualQuaternion

__all__ = [
    'EPSILON', 'SLERP_LINEAR_THRESHOLD', 'clamp', 'lerp',
    'LayoutConfig', 'DEFAULT_LAYOUT',
    'pack', 'unpack', 'read_buffer', 'write_buffer',
    'Vec3', 'Vec4', 'Quaternion', 'DualQuaternion',
]
