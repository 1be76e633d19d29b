from math import acos, asin, cos, pi
import random
import unittest

from mathutils import Quaternion, Vector

from arboreal.gen import TreeGenerator, construct
from arboreal.geometry import UNIT_X, UNIT_Z, axis_angle
from arboreal.segment import ConnectionType, Segment, Tree
from arboreal.tree_params import BranchParameters, TreeParameters


def snapshot(seg):
    return [(s.start_radius, s.end_radius, s.length, tuple(s.dir), s.v_start, s.v_end, s.twist, s.radials,
             s.parent_connection, len(s.children)) for s in seg.walk()]


def chain(seg):
    """The length segment chain of a branch, following EXTRUDE children"""
    result = [seg]
    while len(seg.children) == 1 and seg.children[0].parent_connection is ConnectionType.EXTRUDE:
        seg = seg.children[0]
        result.append(seg)
    return result


def trunk_only_params():
    params = TreeParameters(depth=1)
    params.branches[0].from_dict({'side_joint_count': 0, 'has_end_joint': False, 'segment_variation': 0})
    params.roots[0].enabled = False
    return params


class TreeGeneratorTesting(unittest.TestCase):

    def test_determinism(self):
        params = TreeParameters()
        tree1 = TreeGenerator().generate(params, 42)
        tree2 = TreeGenerator().generate(params, 42)

        self.assertEqual(snapshot(tree1.trunk), snapshot(tree2.trunk))
        self.assertEqual(snapshot(tree1.roots), snapshot(tree2.roots))

    def test_seed_changes_tree(self):
        params = TreeParameters()
        tree1 = TreeGenerator().generate(params, 1)
        tree2 = TreeGenerator().generate(params, 2)

        self.assertNotEqual(snapshot(tree1.trunk), snapshot(tree2.trunk))

    def test_seed_defaults_to_params(self):
        params = TreeParameters()
        params.seed = 7
        self.assertEqual(snapshot(construct(params).trunk), snapshot(construct(params, 7).trunk))

    def test_trunk_only(self):
        params = trunk_only_params()
        tree = TreeGenerator().generate_tree(0.15, 1.8, 0.3, 0, params)

        self.assertIsNone(tree.roots)
        parts = chain(tree.trunk)
        self.assertEqual(len(parts), params.branches[0].length_segments)
        self.assertFalse(parts[-1].has_children)

        last = 0.15
        for seg in parts:
            self.assertLess(seg.end_radius, last)
            last = seg.end_radius
            # Straight up, no variation and gravity has nothing to pull on
            for a, b in zip(seg.dir, (0.0, 0.0, 1.0)):
                self.assertAlmostEqual(a, b, places=6)
            self.assertAlmostEqual(seg.length, (1.8 - 0.3) / len(parts))

        self.assertAlmostEqual(parts[-1].end_radius, 0.15 * 0.7)

    def test_taper_monotonic_with_variation(self):
        params = TreeParameters()
        tree = TreeGenerator().generate(params, 3)

        parts = chain(tree.trunk)
        for a, b in zip(parts, parts[1:]):
            self.assertGreater(a.end_radius, b.end_radius)
            self.assertEqual(a.end_radius, b.start_radius)
        self.assertAlmostEqual(parts[-1].end_radius, params.trunk_radius * params.branches[0].taper)

    def test_side_joints(self):
        params = TreeParameters()
        tree = TreeGenerator().generate(params, 0)

        tip = chain(tree.trunk)[-1]
        self.assertEqual(len(tip.children), 4)
        for child in tip.children:
            self.assertIs(child.parent_connection, ConnectionType.CURVE)
            # Area split four ways gives half the radius
            self.assertAlmostEqual(child.start_radius, params.trunk_radius / 2)

    def test_single_side_joint_sized_as_two(self):
        params = TreeParameters(depth=2)
        params.branches[0].side_joint_count = 1
        tree = TreeGenerator().generate(params, 0)

        tip = chain(tree.trunk)[-1]
        self.assertEqual(len(tip.children), 1)
        self.assertAlmostEqual(tip.children[0].start_radius, (params.trunk_radius ** 2 / 2) ** 0.5)

    def test_end_joint(self):
        params = TreeParameters(depth=2)
        params.branches[0].from_dict({'side_joint_count': 0, 'has_end_joint': True})
        tree = TreeGenerator().generate(params, 0)

        tip = chain(tree.trunk)[-1]
        self.assertEqual(len(tip.children), 1)
        end = tip.children[0]
        self.assertIs(end.parent_connection, ConnectionType.CURVE)
        self.assertEqual(end.start_radius, tip.end_radius)

    def test_roots_point_down(self):
        tree = TreeGenerator().generate(TreeParameters(), 0)

        self.assertIsNotNone(tree.roots)
        self.assertAlmostEqual(tree.roots.dir.z, -1.0, places=6)
        self.assertTrue(tree.roots.is_inverted)
        # Taper 1 on the first root level keeps the radius
        self.assertAlmostEqual(tree.roots.end_radius, tree.roots.start_radius)

    def test_zero_effective_length(self):
        params = TreeParameters(depth=2)
        tree = TreeGenerator().generate_tree(0.15, 0.3, 0.3, 0, params)

        trunk = tree.trunk
        self.assertEqual(trunk.length, 0)
        self.assertEqual(trunk.start_radius, trunk.end_radius)
        self.assertEqual(trunk.v_start, trunk.v_end)
        # Children are still sized from the full length
        self.assertEqual(len(trunk.children), 4)
        self.assertGreater(trunk.children[0].length, 0)

    def test_depth_overflow(self):
        gen = TreeGenerator()
        with self.assertRaises(ValueError):
            gen.create_branch(random.Random(0), 1, [BranchParameters()], Quaternion(), 0.1, 1.0, 0, 0, 0, 4,
                              0.45)

    def test_segment_count(self):
        gen = TreeGenerator()
        tree = gen.generate(TreeParameters(), 0)

        total = sum(len(list(seg.walk())) for seg in tree if seg is not None)
        self.assertEqual(gen.segment_count, total)

    def test_construct_from_dict(self):
        tree = construct({'trunk_height': 3.0, 'branches': [{'inherit': False, 'side_joint_count': 0}]})
        self.assertEqual(len(chain(tree.trunk)), 4)


class BranchShapeTesting(unittest.TestCase):

    def grow(self, rotation, *levels):
        b_params = [BranchParameters(dict(level, inherit=False)) for level in levels]
        return TreeGenerator().create_branch(random.Random(0), 0, b_params, rotation, 1.0, 1.0, 0, 0, 0, 4, 0.45)

    def test_gravity_bends_horizontal_branch_down(self):
        branch = self.grow(axis_angle(UNIT_X, pi / 2),
                           {'gravity': 0.5, 'segment_variation': 0, 'side_joint_count': 0})

        heights = [seg.dir.z for seg in chain(branch)]
        self.assertEqual(len(heights), 4)
        self.assertLess(heights[0], 0)
        for a, b in zip(heights, heights[1:]):
            self.assertGreater(a, b)

    def test_gravity_leaves_vertical_branch(self):
        branch = self.grow(Quaternion(), {'gravity': 1.0, 'segment_variation': 0, 'side_joint_count': 0})

        for seg in chain(branch):
            for a, b in zip(seg.dir, (0.0, 0.0, 1.0)):
                self.assertAlmostEqual(a, b, places=6)

    def test_variation_is_clamped(self):
        branch = self.grow(Quaternion(), {'gravity': 0, 'segment_variation': 1.0, 'side_joint_count': 0,
                                          'taper': 0.7, 'length_segments': 4})

        # Part length 0.25 against an end radius of 0.7
        limit = min(asin(0.25 / (2 * 0.7)), pi / 2 * 0.33 * 0.5)
        # Both Euler angles are clamped so cos(angle) = cos(x) * cos(y) >= cos(limit) ** 2
        max_angle = acos(cos(limit) ** 2)

        angles = [seg.dir.angle(UNIT_Z) for seg in chain(branch)]
        for angle in angles:
            self.assertLessEqual(angle, max_angle + 1e-6)
        self.assertGreaterEqual(max(angles), limit - 1e-6)

    def test_side_joint_inclination(self):
        inclination = 0.5
        branch = self.grow(Quaternion(),
                           {'gravity': 0, 'segment_variation': 0, 'side_joint_count': 3,
                            'inclination': inclination},
                           {'gravity': 0, 'segment_variation': 0, 'side_joint_count': 0})

        children = chain(branch)[-1].children
        self.assertEqual(len(children), 3)
        for child in children:
            self.assertAlmostEqual(child.dir.angle(UNIT_Z), pi / 2 - inclination, places=5)


class SegmentTesting(unittest.TestCase):

    def test_extend(self):
        seg = Segment(Vector((0.0, 1.0, 0.0)), 0.5)
        seg.end_radius = 0.4
        seg.u_scale = 3
        seg.v_end = 2.0

        child = seg.extend(ConnectionType.EXTRUDE)
        self.assertEqual(seg.children, [child])
        self.assertEqual(child.start_radius, 0.4)
        self.assertEqual(child.u_scale, 3)
        self.assertEqual(child.v_start, 2.0)
        self.assertEqual(child.dir, seg.dir)
        self.assertIsNot(child.dir, seg.dir)

    def test_inverted(self):
        seg = Segment()
        seg.v_start = 0
        seg.v_end = -1
        self.assertTrue(seg.is_inverted)
        seg.v_end = 1
        self.assertFalse(seg.is_inverted)

    def test_tree_indexing(self):
        trunk = Segment()
        tree = Tree(trunk)
        self.assertIs(tree[Tree.TRUNK_INDEX], trunk)
        self.assertIsNone(tree.roots)
        self.assertEqual(list(tree), [trunk, None])


if __name__ == '__main__':
    unittest.main()
