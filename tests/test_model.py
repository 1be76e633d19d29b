import unittest

from arboreal import build_tree_model
from arboreal.tree_params import LevelOfDetailParameters, ReductionType, load_params


class TreeModelTesting(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.params = load_params('sapling')
        cls.model = build_tree_model(cls.params)

    def test_levels(self):
        levels = self.model.levels
        self.assertEqual(len(levels), 3)
        self.assertIsNone(levels[0].mesh.sizes)
        self.assertIsNotNone(levels[2].mesh.sizes)
        self.assertGreater(levels[0].mesh.triangle_count, levels[2].mesh.triangle_count)

    def test_tips_and_leaves(self):
        for level in self.model.levels:
            self.assertEqual(len(level.tips), len(self.model.tips))
            self.assertEqual(level.leaves.vertex_count, len(level.tips) * 4)
        self.assertGreater(len(self.model.tips), 0)

    def test_switch(self):
        levels = self.model.levels
        self.assertIs(self.model.update(5), levels[0])
        self.assertIs(self.model.update(30), levels[1])
        self.assertIs(self.model.update(500), levels[2])

    def test_deterministic(self):
        again = build_tree_model(self.params)
        for a, b in zip(self.model.levels, again.levels):
            self.assertEqual(a.mesh.positions.tobytes(), b.mesh.positions.tobytes())

    def test_tree_sits_on_the_ground(self):
        lower, upper = self.model.levels[0].mesh.bound
        self.assertAlmostEqual(float(lower[2]), 0.0, places=3)
        self.assertGreater(float(upper[2]), self.params.trunk_height * 0.9)

    def test_no_leaves(self):
        params = self.params.copy()
        params.generate_leaves = False
        model = build_tree_model(params, [LevelOfDetailParameters()])
        self.assertEqual(len(model.levels), 1)
        self.assertIsNone(model.levels[0].leaves)

    def test_impostor_unsupported(self):
        with self.assertRaises(NotImplementedError):
            build_tree_model(self.params, [LevelOfDetailParameters(0, ReductionType.IMPOSTOR)])


if __name__ == '__main__':
    unittest.main()
