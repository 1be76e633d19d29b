"""Skeleton data model: segments of a trunk, branch or root and the tree holding them"""

from enum import Enum

from mathutils import Vector


class ConnectionType(Enum):
    """How a segment joins its parent"""
    CURVE = 1
    EXTRUDE = 2
    ABUT = 3


class Segment(object):
    """One tapering cylindrical section of a trunk, branch or root.  end_radius
    and v_end are only valid once generation of the segment has finished."""

    __slots__ = (
        'start_radius', 'end_radius', 'length', 'u_scale', 'v_start', 'v_end', 'twist', 'radials', 'dir',
        'parent_connection', 'children'
    )

    def __init__(self, dir=None, start_radius=0.0, parent_connection=ConnectionType.EXTRUDE):
        self.start_radius = start_radius
        self.end_radius = 0.0
        self.length = 0.0
        self.u_scale = 0.0
        self.v_start = 0.0
        self.v_end = 0.0
        self.twist = 0.0
        self.radials = 3
        self.dir = Vector((0.0, 0.0, 1.0)) if dir is None else dir.copy()
        self.parent_connection = parent_connection
        self.children = []

    @property
    def is_inverted(self):
        return self.v_start > self.v_end

    @property
    def has_children(self):
        return len(self.children) > 0

    def extend(self, connection_type):
        """Make the single child continuing this segment"""
        result = Segment(self.dir, self.end_radius, connection_type)
        result.u_scale = self.u_scale
        result.v_start = self.v_end

        self.children = [result]
        return result

    def __iter__(self):
        return iter(self.children)

    def walk(self):
        """Depth first, pre-order iteration over this segment and its descendants"""
        stack = [self]
        while stack:
            seg = stack.pop()
            yield seg
            stack.extend(reversed(seg.children))

    def __str__(self):
        return 'Segment[%s -> %s, length %s, dir %s, %s]' % (
            self.start_radius, self.end_radius, self.length, tuple(self.dir), self.parent_connection.name)


class Tree(object):
    """Container for the generated skeleton: trunk at index 0, roots at index 1"""

    TRUNK_INDEX = 0
    ROOTS_INDEX = 1

    __slots__ = ('segments',)

    def __init__(self, trunk=None, roots=None):
        self.segments = [trunk, roots]

    @property
    def trunk(self):
        return self.segments[self.TRUNK_INDEX]

    @trunk.setter
    def trunk(self, segment):
        self.segments[self.TRUNK_INDEX] = segment

    @property
    def roots(self):
        return self.segments[self.ROOTS_INDEX]

    @roots.setter
    def roots(self, segment):
        self.segments[self.ROOTS_INDEX] = segment

    def __iter__(self):
        return iter(self.segments)

    def __len__(self):
        return len(self.segments)

    def __getitem__(self, index):
        return self.segments[index]

    def __str__(self):
        return 'Tree[%s]' % ', '.join(str(s) for s in self.segments)
