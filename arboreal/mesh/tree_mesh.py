"""Traversal shared by the LOD aware tree mesh generators"""

from ..segment import Tree
from . import curve

TIP_ERROR = 'Tip state not properly passed through'

ABUT_ERROR = 'Abutment not yet supported.'


class TreeMeshGenerator(object):
    """Base for generators that walk a Tree under LevelOfDetailParameters"""

    def __init__(self, curve_gen=None):
        self.curve_gen = curve.DEFAULT if curve_gen is None else curve_gen

    @staticmethod
    def render_depth(depth, inverted, lod):
        """Whether segments at this depth get geometry for the given LOD"""
        if inverted:
            return depth < lod.root_depth
        return depth < lod.branch_depth

    @staticmethod
    def top_segments(tree):
        """Yield (segment, inverted) for the trunk then the roots, skipping absent ones"""
        for index, seg in enumerate(tree):
            if seg is None:
                continue
            yield seg, index == Tree.ROOTS_INDEX
