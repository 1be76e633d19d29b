"""Vertex and triangle records used while building meshes"""

from mathutils import Vector


class Vertex(object):
    """A mesh vertex.  weight accumulates smoothing angles (-1 pins the normal)
    and doubles as the per-vertex size for flat poly meshes."""

    __slots__ = ('pos', 'normal', 'uv', 'tangent', 'weight', 'group', 'index')

    def __init__(self, pos, uv=None):
        self.pos = Vector(pos)
        self.normal = None
        self.uv = None if uv is None else Vector(uv)
        self.tangent = None
        self.weight = 0.0
        self.group = 0
        self.index = -1

    def is_same(self, pos, uv=None, epsilon=0.0):
        """Test whether pos (and uv, when given) are within epsilon of this vertex"""
        if epsilon < 0:
            return False
        if (self.pos - Vector(pos)).length > epsilon:
            return False
        if uv is not None:
            if self.uv is None:
                return False
            if abs(self.uv[0] - uv[0]) > epsilon or abs(self.uv[1] - uv[1]) > epsilon:
                return False
        return True

    def clone(self):
        result = Vertex(self.pos, self.uv)
        if self.normal is not None:
            result.normal = self.normal.copy()
        if self.tangent is not None:
            result.tangent = self.tangent.copy()
        result.weight = self.weight
        result.group = self.group
        result.index = self.index
        return result

    def __repr__(self):
        return 'Vertex[%i, %s]' % (self.index, tuple(self.pos))


class Triangle(object):
    __slots__ = ('v1', 'v2', 'v3')

    def __init__(self, v1, v2, v3):
        self.v1 = v1
        self.v2 = v2
        self.v3 = v3

    def vertexes(self):
        return self.v1, self.v2, self.v3

    def calculate_normal(self):
        """Unit face normal following the v1, v2, v3 winding"""
        normal = (self.v2.pos - self.v1.pos).cross(self.v3.pos - self.v1.pos)
        return normal.normalized()

    def angle(self, vert):
        """Angle between the two edges meeting at vert, 0 for degenerate edges"""
        if vert is self.v1:
            a, b = self.v2, self.v3
        elif vert is self.v2:
            a, b = self.v3, self.v1
        elif vert is self.v3:
            a, b = self.v1, self.v2
        else:
            raise ValueError('Vertex is not part of this triangle: %r' % (vert,))
        return (a.pos - vert.pos).angle(b.pos - vert.pos, 0.0)
