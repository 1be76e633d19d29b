"""Arboreal: procedural tree skeletons and their level of detail meshes"""

from .gen import TreeGenerator, construct
from .model import TreeModel, build_tree_model
from .segment import ConnectionType, Segment, Tree
