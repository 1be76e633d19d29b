""" Level of detail parameters """

from enum import Enum

from .tree_param import apply_fields, fields_to_dict, _to_int

# Stand-in for "every depth" since depth caps are compared with <
UNLIMITED_DEPTH = 2 ** 31 - 1


class ReductionType(Enum):
    """Mesh reduction strategy used at a level of detail"""
    NONE = 'None'
    FLAT_POLY = 'Flat-poly'
    IMPOSTOR = 'Impostor'

    def __str__(self):
        return self.value


def _to_reduction(value):
    if isinstance(value, ReductionType):
        return value
    try:
        return ReductionType[value]
    except KeyError:
        return ReductionType(value)


LOD_FIELDS = (
    ('distance', float),
    ('reduction', _to_reduction),
    ('branch_depth', _to_int),
    ('root_depth', _to_int),
    ('max_radial_segments', _to_int),
)


class LevelOfDetailParameters(object):
    """Settings for one level of detail of a tree model.

    distance: the distance from the tree at which this level takes effect
    reduction: the ReductionType used for the mesh
    branch_depth: number of branch levels rendered
    root_depth: number of root levels rendered
    max_radial_segments: upper bound on the radials of any rendered loop
    """

    __slots__ = tuple(name for name, _ in LOD_FIELDS)

    def __init__(self, distance=0, reduction=ReductionType.NONE, branch_depth=UNLIMITED_DEPTH,
                 root_depth=UNLIMITED_DEPTH, max_radial_segments=6):
        self.distance = float(distance)
        self.reduction = _to_reduction(reduction)
        self.branch_depth = branch_depth
        self.root_depth = root_depth
        self.max_radial_segments = max_radial_segments

    def to_dict(self):
        result = fields_to_dict(self, LOD_FIELDS)
        result['reduction'] = self.reduction.name
        return result

    @classmethod
    def from_dict(cls, params):
        result = cls()
        apply_fields(result, LOD_FIELDS, params, 'level of detail')
        return result

    def __eq__(self, other):
        if not isinstance(other, LevelOfDetailParameters):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return 'LOD[distance=%s, reduction=%s, branchDepth=%s, rootDepth=%s]' % (
            self.distance, self.reduction, self.branch_depth, self.root_depth)


def default_lods():
    """The standard three tiers: full detail, reduced skinned, flat poly"""
    return [LevelOfDetailParameters(0, ReductionType.NONE),
            LevelOfDetailParameters(20, ReductionType.NONE, 2, 1, 4),
            LevelOfDetailParameters(60, ReductionType.FLAT_POLY, 3, 0, 4)]
