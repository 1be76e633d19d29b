"""Cheap far distance tree meshes made of axis oriented billboard strips.

Each cross section is a pair of vertexes offset to either side of the branch
center.  The normal carries the branch axis the pair rotates about and the
vertex weight carries the radius, exported as the size buffer.  Extrusions
continue the strip, curves start a new one since a single pair cannot face
several child branches at once."""

from mathutils import Vector

from ..geometry import MIN_RADIUS, UNIT_X, UNIT_Z
from ..segment import ConnectionType
from .builder import MeshBuilder
from .tree_mesh import ABUT_ERROR, TreeMeshGenerator
from .vertex import Vertex

# Strips never weld
NO_WELD = -1


class FlatPolyTreeMeshGenerator(TreeMeshGenerator):

    def generate_mesh(self, tree, lod, z_offset=0.0, u_repeat=4, v_scale=0.45, tips=None):
        mb = MeshBuilder()
        trunk = tree.trunk
        center = Vector((0.0, 0.0, z_offset))

        base1, base2 = self.create_pair(mb, center, trunk.start_radius, 0, u_repeat)
        base1.normal = UNIT_Z.copy()
        base2.normal = UNIT_Z.copy()

        for seg, inverted in self.top_segments(tree):
            if inverted:
                self.render_segment(center, base1, base2, seg, 0, u_repeat, -v_scale, lod, 0, mb, None, True)
            else:
                self.render_segment(center, base1, base2, seg, 0, u_repeat, v_scale, lod, 0, mb, tips, False)

        return mb.build(sizes=True)

    @staticmethod
    def create_pair(mb, center, radius, v, u_repeat):
        """Two unwelded vertexes radius either side of center along X"""
        offset = UNIT_X * radius
        v1 = mb.create_vertex(center - offset, (0, v), 0, NO_WELD)
        v2 = mb.create_vertex(center + offset, (u_repeat * 0.5, v), 0, NO_WELD)
        v1.weight = radius
        v2.weight = radius
        return v1, v2

    def render_segment(self, center, base1, base2, seg, v_base, u_repeat, v_scale, lod, depth, mb, tips,
                       inverted):
        # The next center is needed for the tips even when nothing is rendered
        nxt = center + seg.dir * seg.length
        tip1 = tip2 = None

        v_scale_local = v_scale / max(seg.end_radius, MIN_RADIUS)
        v_base += seg.length * v_scale_local

        render = self.render_depth(depth, inverted, lod)
        if render:
            # An extruded child shares this end pair so the axis is averaged
            tip_dir = seg.dir
            for child in seg:
                if child.parent_connection is ConnectionType.EXTRUDE:
                    tip_dir = ((seg.dir + child.dir) * 0.5).normalized()
                    break

            tip1, tip2 = self.create_pair(mb, nxt, seg.end_radius, v_base, u_repeat)
            if inverted:
                # Growing down
                mb.add_triangle(tip1, tip2, base2)
                mb.add_triangle(tip1, base2, base1)
                tip1.normal = -tip_dir
                tip2.normal = -tip_dir
            else:
                mb.add_triangle(base1, base2, tip2)
                mb.add_triangle(base1, tip2, tip1)
                tip1.normal = tip_dir.copy()
                tip2.normal = tip_dir.copy()

        if not seg.has_children:
            if tips is not None:
                branch_tip = Vertex(nxt)
                branch_tip.normal = seg.dir.copy()
                tips.append(branch_tip)
            return

        render_next = render and self.render_depth(depth + 1, inverted, lod)

        for child in seg:
            if child.parent_connection is ConnectionType.EXTRUDE:
                self.render_segment(nxt, tip1, tip2, child, v_base, u_repeat, v_scale, lod, depth, mb, tips,
                                    inverted)
            elif child.parent_connection is ConnectionType.ABUT:
                raise NotImplementedError(ABUT_ERROR)
            else:
                steps = self.curve_gen.generate_curve(seg.dir, seg.end_radius, child.dir, child.start_radius,
                                                      v_base, v_scale)
                last = steps[-1]
                child_center = nxt + last.center
                v = last.v
                if not render_next:
                    # Just push through to the tips
                    self.render_segment(child_center, None, None, child, v, u_repeat, v_scale, lod, depth + 1,
                                        mb, tips, inverted)
                else:
                    c_base1, c_base2 = self.create_pair(mb, child_center, child.start_radius, v, u_repeat)
                    normal = -child.dir if inverted else child.dir.copy()
                    c_base1.normal = normal
                    c_base2.normal = normal.copy()
                    self.render_segment(child_center, c_base1, c_base2, child, v, u_repeat, v_scale, lod,
                                        depth + 1, mb, tips, inverted)
