"""Wireframe of a tree skeleton, one line per segment"""

import numpy as np
from mathutils import Vector

from .builder import Mesh


class LineMeshGenerator(object):

    def generate_mesh(self, tree, z_offset=0.0):
        points = []
        base = Vector((0.0, 0.0, z_offset))
        for seg in tree:
            if seg is None:
                continue
            self.add_branches(base, seg, points)

        positions = np.array([tuple(p) for p in points], dtype=np.float32).reshape(-1, 3)
        return Mesh(positions, Mesh.LINES)

    def add_branches(self, start, seg, points):
        end = start + seg.dir * seg.length
        points.append(start)
        points.append(end)
        for child in seg:
            self.add_branches(end, child, points)
