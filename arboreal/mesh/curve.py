"""Curved transitions between a segment's end cross section and a child's
differently oriented, differently sized start cross section"""

from math import acos, ceil, radians, sin

from mathutils import Vector

from ..geometry import MIN_RADIUS, UNIT_Z, from_axes, perpendicular
from ..utilities import clamp

# Directions closer than this are treated as identical
PARALLEL_EPSILON = 1e-6


class CurveStep(object):
    """One bridging step.  center accumulates from the start of the curve and v
    is the absolute texture coordinate at the end of the step."""

    __slots__ = ('dir', 'distance', 'radius', 'center', 'offset', 'v')

    def __init__(self, dir, distance, radius, center, offset, v):
        self.dir = dir
        self.distance = distance
        self.radius = radius
        self.center = center
        self.offset = offset
        self.v = v

    def __repr__(self):
        return 'CurveStep[dir=%s, distance=%s, radius=%s, center=%s, v=%s]' % (
            tuple(self.dir), self.distance, self.radius, tuple(self.center), self.v)


class CurveGenerator(object):
    """Splits the turn between two directions into corners no sharper than
    min_angle, tapering the radius along the way"""

    MIN_ANGLE = radians(15)
    # 5:1 slope
    MIN_SLOPE = 5

    def __init__(self, min_angle=MIN_ANGLE, min_slope=MIN_SLOPE):
        self.min_angle = min_angle
        self.min_slope = min_slope

    def generate_curve(self, start_dir, start_radius, end_dir, end_radius, v_base, v_scale):
        start_dir = Vector(start_dir).normalized()
        end_dir = Vector(end_dir).normalized()

        dot = clamp(start_dir.dot(end_dir), -1.0, 1.0)
        tilt_angle = acos(dot)

        # How many corners it takes to not exceed the minimum angle
        corners = max(1, int(ceil(tilt_angle / self.min_angle)))

        # Keep a minimum distance between slices when the radius changes a lot
        radius_gap_step = abs(end_radius - start_radius) / corners
        min_dist = self.min_slope * radius_gap_step * dot

        angle_delta = tilt_angle / corners

        # The v scale follows the radius so texture density stays even
        v_scale_start = v_scale / max(start_radius, MIN_RADIUS)
        v_scale_end = v_scale / max(end_radius, MIN_RADIUS)

        q1 = q2 = None
        if dot < 1 - PARALLEL_EPSILON:
            left = start_dir.cross(end_dir)
            if left.length_squared == 0:
                # Opposite directions, any axis will do
                left = perpendicular(start_dir)
            else:
                left.normalize()
            q1 = from_axes(left, start_dir.cross(left), start_dir)
            q2 = from_axes(left, end_dir.cross(left), end_dir)

        result = []
        center = Vector((0.0, 0.0, 0.0))
        v = v_base
        for i in range(corners):
            t = (i + 1) / corners
            if i == corners - 1:
                radius = end_radius
            else:
                radius = start_radius * (1 - t) + end_radius * t

            dist = start_radius * sin(angle_delta) * 1.4
            dist = max(dist, min_dist)

            if q1 is None:
                dir = end_dir.copy()
            else:
                dir = (q1.slerp(q2, t) @ UNIT_Z).normalized()

            v += dist * (v_scale_start * (1 - t) + v_scale_end * t)
            center = center + dir * dist
            result.append(CurveStep(dir, dist, radius, center, Vector((0.0, 0.0, 0.0)), v))

        return result


DEFAULT = CurveGenerator()
