"""Full tubular tree meshes: every rendered segment is an extruded loop, joints
are bridged by curves and unrendered depths are capped off"""

from mathutils import Quaternion, Vector

from ..geometry import MIN_RADIUS
from ..segment import ConnectionType
from .builder import MeshBuilder
from .tree_mesh import ABUT_ERROR, TIP_ERROR, TreeMeshGenerator
from .vertex import Vertex

# Loops closing off a branch end are all but a point
CAP_RADIUS = 0.001
CAP_SEGMENTS = 3
CAP_GROUP = 1


class SkinnedTreeMeshGenerator(TreeMeshGenerator):
    """Builds the smooth shaded tube mesh of a Tree for one level of detail"""

    def generate_mesh(self, tree, lod, z_offset=0.0, u_repeat=4, v_scale=0.45, tips=None):
        """Mesh for tree at lod.  The trunk tips are appended to tips when given."""
        mb = MeshBuilder()

        # Create the base loop for the main trunk, every other segment
        # branches off of that one
        trunk = tree.trunk
        center = Vector((0.0, 0.0, z_offset))
        effective_radials = min(trunk.radials, lod.max_radial_segments)
        base_loop = mb.create_loop(center, Quaternion(), trunk.start_radius, effective_radials, 0, 0)
        mb.texture_loop(base_loop, (0, 0), (u_repeat, 0))
        self.apply_tangents(base_loop, False)
        inverted_loop = None

        for seg, inverted in self.top_segments(tree):
            if inverted:
                if inverted_loop is None:
                    inverted_loop = self.invert_loop(base_loop)
                self.add_branches(inverted_loop, seg, 0, -u_repeat, -v_scale, lod, 0, mb, None, True)
            else:
                self.add_branches(base_loop, seg, 0, u_repeat, v_scale, lod, 0, mb, tips, False)

        mb.smooth()
        return mb.build()

    def add_cap(self, loop, seg, v_base, u_repeat, v_scale_local, mb, inverted):
        """Close loop with a near zero radius loop and return the vertex at its center"""
        tip = mb.extrude(loop, seg.dir, 0, CAP_SEGMENTS, CAP_RADIUS, 0)
        mb.texture_loop(tip, (0, v_base + v_scale_local), (u_repeat, 0))
        self.apply_tangents(tip, inverted)
        for v in tip:
            v.group = CAP_GROUP

        tip_center = Vertex(mb.find_center(tip))
        tip_center.normal = seg.dir.copy()
        return tip_center

    def add_branches(self, base, seg, v_base, u_repeat, v_scale, lod, depth, mb, tips, inverted):
        # Base the 'v' scale on what the 'u' will do as the tree expands
        # but the length doesn't, ie: a ratio of length to radius
        v_scale_local = v_scale / max(seg.end_radius, MIN_RADIUS)
        effective_radials = min(seg.radials, lod.max_radial_segments)
        render = self.render_depth(depth, inverted, lod)

        tip = base
        if render:
            tip = mb.extrude(tip, seg.dir, seg.length, effective_radials, seg.end_radius, seg.twist)
            v_base += seg.length * v_scale_local
            mb.texture_loop(tip, (0, v_base), (u_repeat, 0))
            self.apply_tangents(tip, inverted)
        else:
            # Not rendered but the tip still has to travel for the leaves
            if len(tip) > 1:
                tip_center = self.add_cap(tip, seg, v_base, u_repeat, v_scale_local, mb, inverted)
                tip = [tip_center]
            elif len(tip) == 1:
                tip_center = tip[0]
            else:
                raise RuntimeError(TIP_ERROR)

            tip_center.pos += seg.dir * seg.length
            tip_center.normal = seg.dir.copy()
            v_base += seg.length * v_scale_local

        if not seg.has_children:
            if render:
                tip_center = self.add_cap(tip, seg, v_base, u_repeat, v_scale_local, mb, inverted)
            else:
                if len(tip) > 1:
                    raise RuntimeError(TIP_ERROR)
                tip_center = tip[0]
            if tips is not None:
                tips.append(tip_center)
            return

        render_next = render and self.render_depth(depth + 1, inverted, lod)
        capped = len(tip) == 1

        for child in seg:
            if child.parent_connection is ConnectionType.EXTRUDE:
                self.add_branches(tip, child, v_base, u_repeat, v_scale, lod, depth, mb, tips, inverted)
            elif child.parent_connection is ConnectionType.ABUT:
                raise NotImplementedError(ABUT_ERROR)
            else:
                new_tip = tip
                if not render_next:
                    if not capped:
                        # Only the first child has to close off this level
                        capped = True
                        tip = [self.add_cap(tip, seg, v_base, u_repeat, v_scale_local, mb, inverted)]
                    elif len(tip) != 1:
                        raise RuntimeError(TIP_ERROR)
                    # Every child moves its own copy of the tip
                    new_tip = [tip[0].clone()]

                steps = self.curve_gen.generate_curve(seg.dir, seg.end_radius, child.dir, child.start_radius,
                                                      v_base, v_scale)
                if render_next:
                    for step in steps:
                        new_tip = mb.extrude(new_tip, step.dir, step.distance, effective_radials, step.radius, 0,
                                             step.offset)
                        mb.texture_loop(new_tip, (0, step.v), (u_repeat, 0))
                        self.apply_tangents(new_tip, inverted)
                else:
                    step = steps[-1]
                    tip_center = new_tip[0]
                    tip_center.pos += step.center
                    tip_center.normal = step.dir.copy()

                self.add_branches(new_tip, child, steps[-1].v, u_repeat, v_scale, lod, depth + 1, mb, tips,
                                  inverted)

    @staticmethod
    def invert_loop(loop):
        return list(reversed(loop))

    @staticmethod
    def apply_tangents(loop, invert):
        """Point each vertex tangent at the next vertex around the loop"""
        for last, nxt in zip(loop, loop[1:]):
            tangent = (nxt.pos - last.pos).normalized()
            if invert:
                tangent.negate()
            last.tangent = tangent
        # and match up the ends
        if loop[0].tangent is not None:
            loop[-1].tangent = loop[0].tangent.copy()
