"""Leaf billboards placed at the branch tips"""

import numpy as np

from .builder import MAX_SHORT_INDEX, Mesh

# Atlas layout, only one column is used but the texture really has four
U_CELLS = 1
U_CELL_SIZE = 1 / 4
V_CELLS = 4
V_CELL_SIZE = 1 / V_CELLS

# Bounds grow by this fraction of the quad size so leaves don't clip early
BOUND_PADDING = 0.6


def atlas_cell(index):
    """Return (u_base, u_top, v_base, v_top) of the index-th atlas cell.  Cells
    alternate between negative (mirrored) and positive coordinates."""
    v_cell = index % (V_CELLS * 2)
    u_cell = (index // (V_CELLS * 2)) % (U_CELLS * 2)

    if u_cell < U_CELLS:
        u_top = -1.0 + u_cell * U_CELL_SIZE
        u_base = u_top + U_CELL_SIZE
    else:
        u_base = (u_cell - U_CELLS) * U_CELL_SIZE
        u_top = u_base + U_CELL_SIZE

    if v_cell < V_CELLS:
        v_top = -1.0 + v_cell * V_CELL_SIZE
        v_base = v_top + V_CELL_SIZE
    else:
        v_base = (v_cell - V_CELLS) * V_CELL_SIZE
        v_top = v_base + V_CELL_SIZE

    return u_base, u_top, v_base, v_top


class BillboardedLeavesMeshGenerator(object):
    """One camera facing quad per tip.  All four corners share the tip position,
    the corner is encoded in the first two texture coordinates and the atlas
    cell in the last two."""

    def generate_mesh(self, locations, quad_size):
        if not locations:
            return None

        count = len(locations)
        positions = np.empty((count * 4, 3), dtype=np.float32)
        normals = np.zeros((count * 4, 3), dtype=np.float32)
        uvs = np.empty((count * 4, 4), dtype=np.float32)
        index_type = np.uint16 if count * 4 <= MAX_SHORT_INDEX else np.uint32
        indices = np.empty(count * 6, dtype=index_type)

        for i, vert in enumerate(locations):
            base = i * 4
            positions[base:base + 4] = tuple(vert.pos)
            if vert.normal is not None:
                normals[base:base + 4] = tuple(vert.normal)

            u_base, u_top, v_base, v_top = atlas_cell(i)
            uvs[base + 0] = (0, 0, u_base, v_base)
            uvs[base + 1] = (1, 0, u_top, v_base)
            uvs[base + 2] = (1, 1, u_top, v_top)
            uvs[base + 3] = (0, 1, u_base, v_top)

            indices[i * 6:i * 6 + 6] = (base, base + 1, base + 2, base + 2, base + 3, base)

        mesh = Mesh(positions)
        mesh.normals = normals
        mesh.uvs = uvs
        mesh.sizes = np.full(count * 4, quad_size, dtype=np.float32)
        mesh.indices = indices

        pad = quad_size * BOUND_PADDING
        lower, upper = mesh.bound
        mesh.bound = (lower - pad, upper + pad)
        return mesh
