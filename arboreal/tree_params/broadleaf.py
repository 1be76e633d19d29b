"""Broad, spreading deciduous tree with a forked crown"""

params = {
    'format_version': 1,
    'trunk_radius': 0.2,
    'trunk_height': 2.4,
    'root_height': 0.3,
    'u_repeat': 4,
    'v_scale': 0.45,
    'leaf_scale': 1.2,
    'generate_leaves': True,
    'seed': 17,
    'branches': [
        {'inherit': False, 'radial_segments': 8, 'length_segments': 4, 'taper': 0.7,
         'segment_variation': 0.3, 'gravity': 0.05, 'side_joint_count': 3, 'inclination': 0.9,
         'has_end_joint': True, 'tip_rotation': 0.6, 'length_scale': 0.7},
        {'inherit': False, 'radial_segments': 6, 'length_segments': 3, 'taper': 0.65,
         'segment_variation': 0.45, 'gravity': 0.15, 'side_joint_count': 2, 'inclination': 0.8,
         'has_end_joint': True, 'tip_rotation': 1.2, 'length_scale': 0.6},
        {'inherit': True},
        {'inherit': False, 'radial_segments': 4, 'length_segments': 2, 'taper': 0.5,
         'segment_variation': 0.5, 'gravity': 0.2, 'side_joint_count': 2, 'inclination': 0.7,
         'length_scale': 0.5},
    ],
    'roots': [
        {'inherit': False, 'length_segments': 1, 'segment_variation': 0, 'taper': 1,
         'side_joint_count': 5, 'inclination': 0.5, 'length_scale': 1.1},
        {'inherit': False, 'taper': 0.5, 'gravity': 0.1, 'length_scale': 1.0},
        {'inherit': True},
        {'enabled': False},
    ],
}
