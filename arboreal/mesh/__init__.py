"""Mesh construction: the generic builder and the tree mesh generators"""

from .builder import DEFAULT_EPSILON, EXACT_EPSILON, Mesh, MeshBuilder, NormalLinks
from .curve import CurveGenerator, CurveStep
from .flat_poly import FlatPolyTreeMeshGenerator
from .leaves import BillboardedLeavesMeshGenerator
from .line import LineMeshGenerator
from .skinned import SkinnedTreeMeshGenerator
from .vertex import Triangle, Vertex
