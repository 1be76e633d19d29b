"""Vector and rotation helpers built on the Blender mathutils types.

All generators work in a right handed, Z up space.  A rotation describes a
local frame whose +Z axis is the forward direction of a branch or loop."""

from mathutils import Euler, Matrix, Quaternion, Vector

UNIT_X = Vector((1.0, 0.0, 0.0)).freeze()
UNIT_Z = Vector((0.0, 0.0, 1.0)).freeze()
WORLD_DOWN = Vector((0.0, 0.0, -1.0)).freeze()

# Smallest radius used as a divisor, anything thinner is invisible anyway
MIN_RADIUS = 0.0001


def forward(rotation):
    """Direction of the local +Z axis of rotation"""
    return rotation @ UNIT_Z


def axis_angle(axis, angle):
    return Quaternion(axis, angle)


def from_angles(x_angle, y_angle, z_angle):
    """Rotation about X, then Y, then Z by the given radians"""
    return Euler((x_angle, y_angle, z_angle), 'XYZ').to_quaternion()


def from_axes(x_axis, y_axis, z_axis):
    """Rotation whose local axes map onto the given (orthonormal) world axes"""
    return Matrix((x_axis, y_axis, z_axis)).transposed().to_quaternion()


def look_rotation(direction):
    """Rotation pointing local +Z along direction, keeping local +Y as close to
    world +Y as possible"""
    if direction.length_squared == 0:
        return Quaternion()
    return direction.to_track_quat('Z', 'Y')


def perpendicular(vec):
    """Any unit vector perpendicular to vec"""
    return vec.orthogonal().normalized()
