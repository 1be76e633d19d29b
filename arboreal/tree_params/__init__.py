"""Tree parameter presets.

Each preset is a module in this package defining a ``params`` dictionary in the
format produced by TreeParameters.to_dict (partial dictionaries are allowed)."""

import importlib
import os
import pkgutil
import pprint

from .tree_param import BranchParameters, TreeParameters, effective_levels
from .lod_param import LevelOfDetailParameters, ReductionType, default_lods

_NOT_PRESETS = ('tree_param', 'lod_param')


def preset_names():
    """Names of the preset modules shipped in this package"""
    path = os.path.dirname(__file__)
    return sorted(m.name for m in pkgutil.iter_modules([path]) if m.name not in _NOT_PRESETS)


def load_params(name):
    """Load a preset by module name (short name or fully qualified) as TreeParameters"""
    if '.' not in name:
        name = '{}.{}'.format(__name__, name)
    mod = importlib.import_module(name)
    importlib.reload(mod)
    return TreeParameters.from_dict(mod.params)


def save_params(params, save_location):
    """Write params (TreeParameters or dict) as an importable preset module"""
    if isinstance(params, TreeParameters):
        params = params.to_dict()
    with open(save_location, 'w') as output_file:
        print('params = ' + pprint.pformat(params), file=output_file)
