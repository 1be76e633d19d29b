"""A utility for building up a mesh from triangles, loops and extrusions,
including automatic calculation of smooth normals, vertex groups and so on."""

from math import pi

import numpy as np
from mathutils import Quaternion, Vector

from .. import utilities
from ..geometry import axis_angle, from_axes, look_rotation, perpendicular, UNIT_Z
from .vertex import Triangle, Vertex

__console_logging__ = True

update_log = utilities.get_logger(__console_logging__)

DEFAULT_EPSILON = 0.001
EXACT_EPSILON = 0.0

# Largest vertex count addressable by 16 bit indices
MAX_SHORT_INDEX = 0xffff


class Mesh(object):
    """Renderer agnostic mesh buffers.  Optional buffers are None when absent."""

    TRIANGLES = 'triangles'
    LINES = 'lines'

    __slots__ = ('mode', 'positions', 'normals', 'uvs', 'tangents', 'sizes', 'indices', 'bound')

    def __init__(self, positions, mode=TRIANGLES):
        self.mode = mode
        self.positions = positions
        self.normals = None
        self.uvs = None
        self.tangents = None
        self.sizes = None
        self.indices = None
        self.bound = None
        self.update_bound()

    @property
    def vertex_count(self):
        return len(self.positions)

    @property
    def triangle_count(self):
        if self.mode != Mesh.TRIANGLES:
            return 0
        if self.indices is None:
            return len(self.positions) // 3
        return len(self.indices) // 3

    def update_bound(self):
        """Recalculate the axis aligned (min, max) bounding box"""
        if len(self.positions) == 0:
            self.bound = None
        else:
            self.bound = (self.positions.min(axis=0), self.positions.max(axis=0))

    def __repr__(self):
        return 'Mesh[%s, %i vertexes, %i triangles]' % (self.mode, self.vertex_count, self.triangle_count)


class NormalLinks(object):
    """Set of vertexes that must end up with the same smoothed normal"""

    __slots__ = ('members',)

    def __init__(self):
        # insertion ordered so the combined sum is reproducible
        self.members = {}

    def add(self, vert):
        self.members[vert] = None

    def __iter__(self):
        return iter(self.members)

    def __len__(self):
        return len(self.members)

    def combine_normals(self):
        normal = Vector((0.0, 0.0, 0.0))
        total = 0.0
        for v in self.members:
            if v.normal is not None:
                normal += v.normal
            total += max(v.weight, 0.0)
        for v in self.members:
            if v.weight == -1:
                continue
            v.normal = normal.copy()
            v.weight = total


class MeshBuilder(object):
    """Accumulates vertexes and triangles and flattens them into a Mesh"""

    def __init__(self):
        self.vertexes = []
        self.triangles = []
        self.links_map = {}
        self.links = []

    def new_vertex(self, pos, uv=None, group=0):
        """Always allocate a vertex, never welding it to an existing one"""
        result = Vertex(pos, uv)
        result.index = len(self.vertexes)
        result.group = group
        self.vertexes.append(result)
        return result

    def create_vertex(self, pos, uv=None, group=0, epsilon=DEFAULT_EPSILON):
        """Return an existing vertex in the same group (any group when group < 0)
        within epsilon of pos and uv, or a new one.  Negative epsilon never welds."""
        pos = Vector(pos)
        if epsilon >= 0:
            for vert in self.vertexes:
                if group >= 0 and vert.group != group:
                    continue
                if vert.is_same(pos, uv, epsilon):
                    return vert
        return self.new_vertex(pos, uv, group)

    def add_triangle(self, v1, v2, v3):
        self.triangles.append(Triangle(v1, v2, v3))

    def link_normals(self, v1, v2):
        """Links two vertexes together such that they will share the same smooth
        normal in smoothing calculations."""
        nl1 = self.links_map.get(v1)
        nl2 = self.links_map.get(v2)
        if nl1 is not None and nl1 is nl2:
            return

        if nl1 is not None and nl2 is not None:
            # Keep the bigger set
            if len(nl2) > len(nl1):
                nl1, nl2 = nl2, nl1
            for v in nl2:
                nl1.add(v)
                self.links_map[v] = nl1
            self.links.remove(nl2)
        elif nl1 is not None:
            nl1.add(v2)
            self.links_map[v2] = nl1
        elif nl2 is not None:
            nl2.add(v1)
            self.links_map[v1] = nl2
        else:
            nl = NormalLinks()
            nl.add(v1)
            nl.add(v2)
            self.links_map[v1] = nl
            self.links_map[v2] = nl
            self.links.append(nl)

    def smooth(self):
        """Smooths the vertex normals by creating a weighted average of the
        triangle normals shared by a particular vertex or linked vertex.  The
        weighting is the angle between the adjacent edges at the vertex."""
        for vert in self.vertexes:
            if vert.weight != -1:
                vert.weight = 0.0
                vert.normal = None

        for tri in self.triangles:
            normal = tri.calculate_normal()
            for vert in tri.vertexes():
                if vert.weight == -1:
                    continue
                # For a continuous surface the weights around an inner vertex
                # add up to a full circle, each triangle contributing its slice
                weight = tri.angle(vert)
                if vert.normal is None:
                    vert.normal = normal * weight
                else:
                    vert.normal += normal * weight
                vert.weight += weight

        for nl in self.links:
            nl.combine_normals()

        for vert in self.vertexes:
            if vert.normal is None or vert.weight <= 0:
                continue
            vert.normal = vert.normal.normalized()

    def connect(self, loop1, loop2):
        """Connects two vertex loops together by intermediate triangles.  Each
        loop is assumed to have an extra joining vertex and to be aligned such
        that vertex 0 of both loops can form the starting edge."""
        if not loop1 or not loop2:
            raise ValueError('Loops cannot be empty.')

        same_size = len(loop1) == len(loop2)
        last_index1 = len(loop1) - 1
        last_index2 = len(loop2) - 1

        i = 0
        j = 0
        while True:
            last1 = loop1[i]
            last2 = loop2[j]
            next1 = loop1[i + 1] if i < last_index1 else None
            next2 = loop2[j + 1] if j < last_index2 else None

            if next1 is None and next2 is None:
                break

            # At the end of one loop the candidate is already chosen, otherwise
            # go with the shorter diagonal
            if next1 is None:
                nxt = next2
                j += 1
            elif next2 is None:
                nxt = next1
                i += 1
            else:
                if same_size:
                    # Distances are unreliable when both loops are tilted,
                    # same size loops just alternate
                    dist1 = j
                    dist2 = i
                else:
                    dist1 = (last1.pos - next2.pos).length_squared
                    dist2 = (last2.pos - next1.pos).length_squared
                if dist1 < dist2:
                    nxt = next2
                    j += 1
                else:
                    nxt = next1
                    i += 1

            self.add_triangle(last2, last1, nxt)

    def texture_loop(self, loop, base, span):
        """Sets the texture coordinates of a vertex loop: the first vertex gets
        base and the last base + span.  A negative u span runs from
        base + |span| down to base so coordinates stay in the same cell."""
        count = len(loop)
        steps = max(1, count - 1)
        u_delta = span[0] / steps
        v_delta = span[1] / steps
        u_base = base[0]
        if u_delta < 0:
            u_base = base[0] - span[0]

        for i, vert in enumerate(loop):
            vert.uv = Vector((u_base + i * u_delta, base[1] + i * v_delta))

    def find_center(self, loop):
        """Finds the geometric center of a vertex loop"""
        # The last vertex duplicates the first
        count = len(loop) - 1
        if count < 1:
            raise ValueError('Loop needs at least two vertexes, got %i' % len(loop))
        center = Vector((0.0, 0.0, 0.0))
        for vert in loop[:count]:
            center += vert.pos
        return center / count

    def extrude(self, loop, dir, distance, segments, radius, twist, offset=None):
        """Extrudes a vertex loop out to a new loop of segments + 1 vertexes,
        connects both loops and returns the new one.  The new loop's center is
        distance along dir from the old center.  offset, when given, is applied
        after the loops are connected so it cannot disturb the connection."""
        center = self.find_center(loop)
        first = loop[0]

        look = dir.normalized()
        base = center + look * distance

        # Build 'loop space' axes so that angle 0 of the new loop lands as close
        # as possible to the first vertex of the old loop.  z is the new loop's
        # normal, x is derived from the first vertex.
        right = first.pos - center
        right -= look * right.dot(look)
        if right.length_squared == 0:
            right = perpendicular(look)
        else:
            right.normalize()
        left = -right
        up = look.cross(left).normalized()
        loop_rotation = from_axes(left, up, look)

        # x points left and we start from the right
        new_loop = self.create_loop(base, loop_rotation, radius, segments, twist + pi, 0)

        self.connect(loop, new_loop)

        if offset is not None:
            # New loops never weld to existing vertexes so moving them is safe
            for v in new_loop:
                v.pos += offset

        return new_loop

    def create_loop(self, center, orientation, radius, segments, twist, group=0):
        """Creates a new loop of segments + 1 vertexes around center.  orientation
        is either a quaternion, whose local x axis is angle 0, or the loop's axis
        direction.  twist adds to the angle of every vertex."""
        if not isinstance(orientation, Quaternion):
            orientation = look_rotation(Vector(orientation))
        segments = max(1, segments)
        center = Vector(center)

        new_loop = []
        angle_delta = 2 * pi / segments
        for i in range(segments + 1):
            local = orientation @ axis_angle(UNIT_Z, i * angle_delta + twist)
            pos = local @ Vector((radius, 0.0, 0.0))
            new_loop.append(self.new_vertex(pos + center, None, group))

        # No seam between the first and last vertex
        self.link_normals(new_loop[0], new_loop[segments])

        return new_loop

    def build(self, sizes=False):
        """Flatten into a Mesh, or None if nothing was built.  Normal, uv and
        tangent buffers exist when the first vertex has that attribute.  sizes
        exports each vertex weight as a size buffer."""
        if not self.vertexes or not self.triangles:
            return None

        update_log('Creating a mesh with: %i vertexes and %i triangles\n' % (len(self.vertexes),
                                                                           len(self.triangles)))

        first = self.vertexes[0]
        positions = np.array([tuple(v.pos) for v in self.vertexes], dtype=np.float32)
        mesh = Mesh(positions)

        if first.normal is not None:
            mesh.normals = np.array([tuple(v.normal) if v.normal is not None else (0.0, 0.0, 0.0)
                                     for v in self.vertexes], dtype=np.float32)
        if first.uv is not None:
            mesh.uvs = np.array([tuple(v.uv) if v.uv is not None else (0.0, 0.0)
                                 for v in self.vertexes], dtype=np.float32)
        if first.tangent is not None:
            mesh.tangents = np.array([tuple(v.tangent) + (1.0,) if v.tangent is not None else (0.0, 0.0, 0.0, 1.0)
                                      for v in self.vertexes], dtype=np.float32)
        if sizes:
            mesh.sizes = np.array([v.weight for v in self.vertexes], dtype=np.float32)

        index_type = np.uint16 if len(self.vertexes) <= MAX_SHORT_INDEX else np.uint32
        mesh.indices = np.array([v.index for tri in self.triangles for v in tri.vertexes()], dtype=index_type)

        return mesh
