"""Young, sparse tree: a trunk with a single ring of thin branches"""

params = {
    'format_version': 1,
    'trunk_radius': 0.05,
    'trunk_height': 1.2,
    'root_height': 0.1,
    'u_repeat': 2,
    'v_scale': 0.3,
    'leaf_scale': 0.4,
    'generate_leaves': True,
    'branches': [
        {'inherit': False, 'radial_segments': 5, 'length_segments': 5, 'taper': 0.5,
         'segment_variation': 0.2, 'gravity': 0.0, 'side_joint_count': 4, 'inclination': 1.0,
         'length_scale': 0.5},
        {'inherit': False, 'radial_segments': 3, 'length_segments': 2, 'taper': 0.4,
         'segment_variation': 0.3, 'gravity': 0.3, 'side_joint_count': 0},
    ],
    'roots': [
        {'inherit': False, 'length_segments': 1, 'segment_variation': 0, 'taper': 1,
         'side_joint_count': 3, 'inclination': 0.4, 'length_scale': 1.5},
        {'enabled': False},
    ],
}
