""" Default tree parameters """

import sys

FORMAT_VERSION_KEY = 'format_version'
FORMAT_VERSION = 1
BRANCHES_KEY = 'branches'
ROOTS_KEY = 'roots'


def _to_bool(value):
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ('true', 'yes', '1'):
            return True
        if lowered in ('false', 'no', '0'):
            return False
        raise ValueError('Not a boolean: "{}"'.format(value))
    return bool(value)


def _to_int(value):
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, float) and not value.is_integer():
        raise ValueError('Not an integer: {}'.format(value))
    return int(value)


# Explicit field tables, name -> converter.  Order is the serialization order.
BRANCH_FIELDS = (
    ('enabled', _to_bool),
    ('inherit', _to_bool),
    ('radius_scale', float),
    ('length_scale', float),
    ('radial_segments', _to_int),
    ('length_segments', _to_int),
    ('taper', float),
    ('inclination', float),
    ('twist', float),
    ('tip_rotation', float),
    ('segment_variation', float),
    ('gravity', float),
    ('has_end_joint', _to_bool),
    ('side_joint_count', _to_int),
    ('side_joint_start_angle', float),
)

TREE_FIELDS = (
    ('base_scale', float),
    ('trunk_radius', float),
    ('trunk_height', float),
    ('root_height', float),
    ('u_repeat', _to_int),
    ('v_scale', float),
    ('leaf_scale', float),
    ('seed', _to_int),
    ('generate_leaves', _to_bool),
)

branch_defaults = {
    'enabled': True,
    'inherit': True,
    'radius_scale': 1.0,
    'length_scale': 0.6,
    'radial_segments': 6,
    'length_segments': 4,
    'taper': 0.7,
    'inclination': 0.872,
    'twist': 0.0,
    'tip_rotation': 0.0,
    'segment_variation': 0.4,
    'gravity': 0.1,
    'has_end_joint': False,
    'side_joint_count': 4,
    'side_joint_start_angle': 0.0,
}

defaults = {
    'base_scale': 1.0,
    'trunk_radius': 0.5 * 0.3,
    'trunk_height': 6 * 0.3,
    'root_height': 1 * 0.3,
    'u_repeat': 4,
    'v_scale': 0.45,
    'leaf_scale': 1.0,
    'seed': 0,
    'generate_leaves': False,
}


def warn(msg):
    sys.stdout.write('Arboreal :: Warning: {}\n'.format(msg))
    sys.stdout.flush()


def apply_fields(target, fields, values, what):
    """Convert and copy every recognized entry of values onto target"""
    names = dict(fields)
    for k, v in values.items():
        if k == FORMAT_VERSION_KEY:
            if v is not None and _to_int(v) > FORMAT_VERSION:
                warn('{} format version {} is newer than {}'.format(what, v, FORMAT_VERSION))
            continue
        if k not in names:
            warn('Unrecognized name in {} configuration "{}"'.format(what, k))
            continue
        try:
            setattr(target, k, names[k](v))
        except (TypeError, ValueError) as e:
            raise ValueError('Error processing {} field "{}": {!r}'.format(what, k, v)) from e


def fields_to_dict(source, fields):
    result = {FORMAT_VERSION_KEY: FORMAT_VERSION}
    for name, _ in fields:
        result[name] = getattr(source, name)
    return result


class BranchParameters(object):
    """Generation settings for one depth level of the trunk or the roots"""

    __slots__ = tuple(name for name, _ in BRANCH_FIELDS)

    def __init__(self, params=None):
        for name, value in branch_defaults.items():
            setattr(self, name, value)
        if params:
            apply_fields(self, BRANCH_FIELDS, params, 'branch')

    def copy(self):
        return BranchParameters(self.to_dict())

    def to_dict(self):
        return fields_to_dict(self, BRANCH_FIELDS)

    def from_dict(self, params):
        apply_fields(self, BRANCH_FIELDS, params, 'branch')

    def __eq__(self, other):
        if not isinstance(other, BranchParameters):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return 'BranchParameters(%s)' % ', '.join('%s=%r' % (n, getattr(self, n)) for n, _ in BRANCH_FIELDS)


def effective_levels(levels):
    """Walk levels in order until the first disabled one, substituting the last
    concrete (non-inherited) parameters for every inherited level"""
    if not levels:
        return []
    result = []
    last = levels[0]
    for level in levels:
        if not level.enabled:
            break
        if level.inherit:
            level = last
        else:
            last = level
        result.append(level)
    return result


class TreeParameters(object):
    """Parameter set for a whole tree: trunk levels, root levels and global knobs"""

    __slots__ = tuple(name for name, _ in TREE_FIELDS) + ('branches', 'roots')

    def __init__(self, depth=4):
        for name, value in defaults.items():
            setattr(self, name, value)

        self.branches = [BranchParameters() for _ in range(depth)]
        # For any branch greater than depth 3, we disable it by default
        for branch in self.branches[4:]:
            branch.enabled = False
        if depth > 0:
            self.branches[0].inherit = False

        self.roots = [BranchParameters({'enabled': False}) for _ in range(depth)]
        if depth > 0:
            self.roots[0].from_dict({
                'inherit': False,
                'enabled': True,
                'length_segments': 1,
                'segment_variation': 0,
                'taper': 1,
                'side_joint_count': 5,
                'inclination': 0.5,
                'length_scale': 1.1,
            })
        if depth > 1:
            self.roots[1].from_dict({
                'inherit': False,
                'enabled': True,
                'taper': 0.5,
                'gravity': 0.1,
                'length_scale': 1.0,
            })
        if depth > 2:
            self.roots[2].enabled = True

    @property
    def depth(self):
        return len(self.branches)

    def effective_branches(self):
        return effective_levels(self.branches)

    def effective_roots(self):
        return effective_levels(self.roots)

    def __iter__(self):
        return iter(self.effective_branches())

    def copy(self):
        return TreeParameters.from_dict(self.to_dict())

    def to_dict(self):
        result = fields_to_dict(self, TREE_FIELDS)
        result[BRANCHES_KEY] = [b.to_dict() for b in self.branches]
        result[ROOTS_KEY] = [r.to_dict() for r in self.roots]
        return result

    def update(self, params):
        """Apply a (possibly partial) dictionary representation to this instance"""
        filtered = {}
        for k, v in params.items():
            if k == BRANCHES_KEY:
                self.branches = _resize_levels(self.branches, v)
            elif k == ROOTS_KEY:
                self.roots = _resize_levels(self.roots, v)
            else:
                filtered[k] = v
        apply_fields(self, TREE_FIELDS, filtered, 'tree')

    @classmethod
    def from_dict(cls, params):
        """initialize parameters from dictionary representation"""
        depth = 4
        if BRANCHES_KEY in params:
            depth = len(params[BRANCHES_KEY])
        result = cls(depth)
        result.update(params)
        return result

    def __eq__(self, other):
        if not isinstance(other, TreeParameters):
            return NotImplemented
        return self.to_dict() == other.to_dict()


def _resize_levels(levels, values):
    result = [levels[i] if i < len(levels) else BranchParameters() for i in range(len(values))]
    for level, value in zip(result, values):
        level.from_dict(value)
    return result
