import unittest

import numpy as np
from mathutils import Vector

from arboreal.mesh import BillboardedLeavesMeshGenerator, Vertex
from arboreal.mesh.leaves import atlas_cell


def make_tip(pos, normal):
    tip = Vertex(pos)
    tip.normal = Vector(normal)
    return tip


class LeavesTesting(unittest.TestCase):

    def test_quads(self):
        tips = [make_tip((0, 0, 1), (0, 0, 1)), make_tip((1, 0, 2), (1, 0, 0)), make_tip((0, 2, 3), (0, 1, 0))]
        mesh = BillboardedLeavesMeshGenerator().generate_mesh(tips, 0.5)

        self.assertEqual(mesh.positions.shape, (12, 3))
        self.assertEqual(mesh.uvs.shape, (12, 4))
        self.assertEqual(mesh.triangle_count, 6)
        self.assertTrue(np.allclose(mesh.sizes, 0.5))
        self.assertEqual(list(mesh.indices[:6]), [0, 1, 2, 2, 3, 0])
        self.assertEqual(list(mesh.indices[6:12]), [4, 5, 6, 6, 7, 4])

        # Every corner shares the tip position and normal
        for i in range(4, 8):
            self.assertEqual(tuple(mesh.positions[i]), (1.0, 0.0, 2.0))
            self.assertEqual(tuple(mesh.normals[i]), (1.0, 0.0, 0.0))

        corners = [tuple(uv[:2]) for uv in mesh.uvs[:4]]
        self.assertEqual(corners, [(0, 0), (1, 0), (1, 1), (0, 1)])

    def test_padded_bound(self):
        mesh = BillboardedLeavesMeshGenerator().generate_mesh([make_tip((0, 0, 1), (0, 0, 1))], 1.0)
        lower, upper = mesh.bound
        self.assertTrue(np.allclose(lower, (-0.6, -0.6, 0.4)))
        self.assertTrue(np.allclose(upper, (0.6, 0.6, 1.6)))

    def test_no_tips(self):
        self.assertIsNone(BillboardedLeavesMeshGenerator().generate_mesh([], 1.0))

    def test_atlas_cells(self):
        # Mirrored cells come first
        self.assertEqual(atlas_cell(0), (-0.75, -1.0, -0.75, -1.0))
        self.assertEqual(atlas_cell(1), (-0.75, -1.0, -0.5, -0.75))
        self.assertEqual(atlas_cell(4), (-0.75, -1.0, 0.0, 0.25))
        self.assertEqual(atlas_cell(8), (0.0, 0.25, -0.75, -1.0))
        # and the sequence repeats
        self.assertEqual(atlas_cell(16), atlas_cell(0))


if __name__ == '__main__':
    unittest.main()
