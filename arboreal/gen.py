""" Parameterized tree skeleton generation: recursive branching driven by
per-depth BranchParameters and a seeded random stream """

# standard imports
from math import asin, sqrt, pi
import random
import time

from mathutils import Quaternion

from . import utilities
from .geometry import MIN_RADIUS, UNIT_X, UNIT_Z, WORLD_DOWN, axis_angle, forward, from_angles
from .segment import ConnectionType, Segment, Tree
from .tree_params import TreeParameters

__console_logging__ = True

update_log = utilities.get_logger(__console_logging__)

HALF_PI = pi / 2
TWO_PI = pi * 2

# Unnormalized variation scale, found through experimentation (not really pi)
VARIATION_SCALE = 3.14

# A branch pointing straight up can almost, but not quite, do a full 180
MAX_GRAVITY = HALF_PI * 1.95

# Upper bound for the random bend between two consecutive length segments
MAX_VARIATION_ANGLE = HALF_PI * 0.33 * 0.5


class TreeGenerator(object):
    """Generates a Tree skeleton from TreeParameters.

    The random source is handed explicitly through every create_branch call and
    consumed depth first, left to right: the parts of a branch, then its side
    joints in order, then its end joint.  The trunk is generated before the
    roots.  Keeping that order is what makes a seed reproduce a tree exactly."""

    def __init__(self):
        self.segment_count = 0

    def generate_tree(self, radius, trunk_height, root_height, seed, tree_params):
        """Generate trunk and roots for the given dimensions and seed"""
        update_log('\nMaking Segments\nUsing seed: {}\n'.format(seed))
        start_time = time.time()
        self.segment_count = 0

        rng = random.Random(seed)
        result = Tree()

        # Straight up for the trunk.  The trunk is shortened by the root height
        # but its children are sized from the full trunk height.
        result.trunk = self.create_branch(rng, 0, tree_params.effective_branches(), Quaternion(), radius,
                                          trunk_height, root_height, 0, 0, tree_params.u_repeat,
                                          tree_params.v_scale)

        roots = tree_params.effective_roots()
        if roots:
            # Straight down for the roots, with the v direction reversed
            rotation = axis_angle(UNIT_X, pi)
            result.roots = self.create_branch(rng, 0, roots, rotation, radius, root_height, 0, 0, 0,
                                              tree_params.u_repeat, -tree_params.v_scale)
        else:
            update_log('No enabled root levels, tree has no roots\n')

        update_log('Segments made: %i in %f seconds\n' % (self.segment_count, time.time() - start_time))
        return result

    def generate(self, tree_params, seed=None):
        """Generate using the dimensions (and, unless given, the seed) stored in tree_params"""
        if seed is None:
            seed = tree_params.seed
        return self.generate_tree(tree_params.trunk_radius, tree_params.trunk_height, tree_params.root_height,
                                  seed, tree_params)

    def new_segment(self, direction, radius, connection_type=ConnectionType.EXTRUDE):
        self.segment_count += 1
        return Segment(direction, radius, connection_type)

    def create_branch(self, rng, depth, b_params, rotation, radius, length, length_offset, base_angle,
                      v_base, u_repeat, v_scale_tree):
        """Create the segments of one branch starting with the given orientation
        and radius, then recurse into its side and end joints"""

        if depth >= len(b_params):
            raise ValueError('Depth exceeds parameters: depth %i with %i levels' % (depth, len(b_params)))

        params = b_params[depth]

        result = self.new_segment(forward(rotation), radius)
        result.u_scale = u_repeat
        result.v_start = v_base

        length_segments = max(1, params.length_segments)
        radials = max(3, params.radial_segments)

        # Base the 'v' scale on what the 'u' will do as the tree expands
        # but the length doesn't, ie: a ratio of length to radius.  Negative
        # for branches growing down from the base of the tree (roots).
        v_scale = v_scale_tree * (1 / max(radius, MIN_RADIUS))

        variation = params.segment_variation
        variation = variation * variation * VARIATION_SCALE

        effective_gravity = params.gravity * MAX_GRAVITY

        # lengthOffset lets very short parents still hand a nice length
        # to their children
        effective_length = max(0, length - length_offset)
        effective_taper = params.taper

        # Growing down: invert the taper of the first level so that it keeps
        # expanding at the same rate.  x * taper = 1, x = 1 / taper
        if v_scale < 0 and depth == 0 and params.taper > 0:
            effective_taper = 1 / params.taper

        original_rotation = rotation

        if effective_length <= 0:
            result.length = 0
            result.end_radius = result.start_radius
            result.v_end = result.v_start
            result.radials = radials
            tip = result
        else:
            # Divide things up into their per-segment parts
            length_part = effective_length / length_segments
            taper_part = (1 - effective_taper) / length_segments
            twist_part = params.twist / length_segments
            gravity_part = effective_gravity / length_segments

            # Keep a typical bend from folding over the previous part.  Two
            # similar triangles with the radius as base and the part length as
            # a side: sin = (length_part / 2) / radius.
            end_radius = radius * effective_taper
            if end_radius > 0:
                angle_limit = asin(min(1.0, length_part / (2 * end_radius)))
            else:
                angle_limit = MAX_VARIATION_ANGLE
            angle_limit = min(angle_limit, MAX_VARIATION_ANGLE)

            tip = result
            for i in range(length_segments):
                index = i + 1
                direction = forward(original_rotation)

                # World down in branch space tells us which way to bend.
                # Straight up or down gets no gravity, sideways gets all of it.
                down = original_rotation.inverted() @ WORLD_DOWN
                down_amount = 1 - abs(UNIT_Z.dot(down))
                if down_amount > 1e-9:
                    side = UNIT_Z.cross(down).normalized()
                    grav_rot = axis_angle(side, gravity_part * down_amount)
                    original_rotation = original_rotation @ grav_rot
                    direction = forward(original_rotation)

                if variation != 0:
                    # z is unused but still drawn to keep the random sequence stable
                    x = utilities.rand_in_range(rng, -variation, variation)
                    y = utilities.rand_in_range(rng, -variation, variation)
                    rng.random()

                    x = utilities.clamp(x, -angle_limit, angle_limit)
                    y = utilities.clamp(y, -angle_limit, angle_limit)

                    # Only this part is bent, the branch keeps its overall
                    # heading so that it doesn't sprawl in odd directions
                    direction = forward(original_rotation @ from_angles(y, x, 0))

                tip.dir = direction
                tip.end_radius = radius * (1 - taper_part * index)
                tip.v_end = v_base + (index * length_part) * v_scale
                tip.length = length_part
                tip.radials = radials
                tip.twist = twist_part

                if index < length_segments:
                    tip = tip.extend(ConnectionType.EXTRUDE)
                    self.segment_count += 1

        if depth + 1 >= len(b_params):
            # Deepest configured level
            return result

        # Joints ignore the per-part variation
        rotation = original_rotation

        v_base += effective_length * v_scale

        # inclination is measured from the plane orthogonal to the branch,
        # the tilt from the branch axis itself
        tilt_angle = HALF_PI - params.inclination

        # Split the parent's cross section area among the side joints, a
        # single joint is sized as if there were two
        side_count = max(0, params.side_joint_count)
        root_area = pi * radius * radius
        branch_area = root_area / max(2, side_count)
        base_branch_radius = sqrt(branch_area / pi)
        branch_radius = params.radius_scale * base_branch_radius
        branch_length = params.length_scale * length

        start_angle = params.side_joint_start_angle + params.twist + base_angle
        joint_angle_delta = TWO_PI / side_count if side_count else 0

        tilt_rotation = axis_angle(UNIT_X, tilt_angle)
        for b in range(side_count):
            joint_angle = start_angle + joint_angle_delta * b
            branch_rotation = rotation @ axis_angle(UNIT_Z, joint_angle) @ tilt_rotation

            child = self.create_branch(rng, depth + 1, b_params, branch_rotation, branch_radius, branch_length,
                                       0, 0, v_base, u_repeat, v_scale_tree)
            child.parent_connection = ConnectionType.CURVE
            tip.children.append(child)

        if params.has_end_joint:
            child = self.create_branch(rng, depth + 1, b_params, rotation, tip.end_radius, length * params.taper,
                                       0, base_angle + params.twist + params.tip_rotation, v_base, u_repeat,
                                       v_scale_tree)
            child.parent_connection = ConnectionType.CURVE
            tip.children.append(child)

        return result


def construct(params=None, seed=None):
    """Construct the tree skeleton.  params may be TreeParameters, a dictionary
    representation of them or None for the defaults."""

    if params is None:
        params = TreeParameters()
    elif isinstance(params, dict):
        params = TreeParameters.from_dict(params)

    return TreeGenerator().generate(params, seed)
