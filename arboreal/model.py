"""Builds the complete set of level of detail meshes for a tree"""

import time

from . import utilities
from .gen import TreeGenerator
from .lod import LodSwitch
from .mesh import BillboardedLeavesMeshGenerator, FlatPolyTreeMeshGenerator, SkinnedTreeMeshGenerator
from .tree_params import ReductionType, TreeParameters, default_lods

__console_logging__ = True

update_log = utilities.get_logger(__console_logging__)


class LodLevel(object):
    """Meshes of one level of detail: the tree mesh, its branch tips and the
    optional leaf billboards placed on them"""

    __slots__ = ('params', 'mesh', 'tips', 'leaves')

    def __init__(self, params, mesh, tips, leaves=None):
        self.params = params
        self.mesh = mesh
        self.tips = tips
        self.leaves = leaves

    def __repr__(self):
        return 'LodLevel[%r, %r, %i tips]' % (self.params, self.mesh, len(self.tips))


class TreeModel(object):
    """A generated tree with every level of detail registered in a LodSwitch"""

    def __init__(self, params, tree, levels, switch):
        self.params = params
        self.tree = tree
        self.levels = levels
        self.switch = switch

    @property
    def tips(self):
        """Tips of the most detailed level"""
        return self.levels[0].tips if self.levels else []

    def update(self, distance):
        """Level of detail for a viewer at distance, scaled by the tree's base scale"""
        return self.switch.update(distance, self.params.base_scale)


def mesh_generator(reduction):
    """The tree mesh generator implementing a reduction type"""
    if reduction is ReductionType.NONE:
        return SkinnedTreeMeshGenerator()
    if reduction is ReductionType.FLAT_POLY:
        return FlatPolyTreeMeshGenerator()
    raise NotImplementedError('Reduction type not supported: %s' % reduction)


def build_tree_model(params=None, lods=None, seed=None):
    """Generate a tree and a mesh for every level of detail.  params may be
    TreeParameters, their dictionary form or None for the defaults.  lods
    defaults to default_lods() and is used in distance order."""
    if params is None:
        params = TreeParameters()
    elif isinstance(params, dict):
        params = TreeParameters.from_dict(params)
    if lods is None:
        lods = default_lods()
    lods = sorted(lods, key=lambda lod: lod.distance)

    tree = TreeGenerator().generate(params, seed)

    start_time = time.time()
    leaf_gen = BillboardedLeavesMeshGenerator()
    levels = []
    for lod in lods:
        update_log('Building level of detail: {}\n'.format(lod))
        tips = []
        mesh = mesh_generator(lod.reduction).generate_mesh(tree, lod, params.root_height, params.u_repeat,
                                                           params.v_scale, tips)
        leaves = None
        if params.generate_leaves:
            leaves = leaf_gen.generate_mesh(tips, params.leaf_scale)
        levels.append(LodLevel(lod, mesh, tips, leaves))

    # Each level is shown until the next one takes over
    switch = LodSwitch()
    for i, level in enumerate(levels):
        far = levels[i + 1].params.distance if i + 1 < len(levels) else float('inf')
        switch.add_level(far, level)

    update_log('Levels of detail built: %i in %f seconds\n' % (len(levels), time.time() - start_time))
    return TreeModel(params, tree, levels, switch)
