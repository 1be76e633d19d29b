"""Distance based selection between the level of detail meshes of a tree"""

import bisect


class LodRange(object):
    """Squared distance range [near_sq, far_sq] in which child is shown"""

    __slots__ = ('near_sq', 'far_sq', 'child')

    def __init__(self, far, child):
        self.near_sq = 0.0
        self.far_sq = far * far
        self.child = child

    def contains(self, distance_sq):
        return self.near_sq <= distance_sq <= self.far_sq

    def __lt__(self, other):
        return self.far_sq < other.far_sq

    def __repr__(self):
        return 'LodRange[%s, %s, %r]' % (self.near_sq, self.far_sq, self.child)


class LodSwitch(object):
    """Keeps a sorted list of ranges and tracks which child is currently active.
    The caller supplies the viewer distance, there is no scene or camera here."""

    def __init__(self):
        self.ranges = []
        self.current = None

    def add_level(self, far, child):
        """Show child up to distance far.  Its near distance is the far distance of
        the level before it."""
        r = LodRange(far, child)
        index = bisect.bisect_right(self.ranges, r)
        self.ranges.insert(index, r)

        if index + 1 < len(self.ranges):
            self.ranges[index + 1].near_sq = r.far_sq
        if index > 0:
            r.near_sq = self.ranges[index - 1].far_sq
        return r

    def remove_level(self, child):
        """Remove every range showing child, returning how many were removed"""
        before = len(self.ranges)
        self.ranges = [r for r in self.ranges if r.child is not child]
        if self.current is not None and self.current.child is child:
            self.current = None
        return before - len(self.ranges)

    def clear_levels(self):
        self.ranges = []
        self.current = None

    def find_level(self, distance_sq):
        for r in self.ranges:
            if r.contains(distance_sq):
                return r
        return None

    def update(self, distance, scale=1.0):
        """Select the level for a viewer at distance from a tree with the given
        world scale and return its child, or None when out of every range"""
        if scale != 1:
            distance = distance / scale
        distance_sq = distance * distance

        if self.current is None or not self.current.contains(distance_sq):
            self.current = self.find_level(distance_sq)
        return self.active

    @property
    def active(self):
        return None if self.current is None else self.current.child

    def __len__(self):
        return len(self.ranges)

    def __repr__(self):
        return 'LodSwitch[%s]' % self.ranges
