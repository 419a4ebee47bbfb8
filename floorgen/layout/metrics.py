from typing import Dict


def init_metrics() -> Dict[str, object]:
    return {
        'partitions': 0,
        'leaves': 0,
        'roomless_leaves': 0,
        'rooms': 0,
        'candidate_pairs': 0,
        'candidate_corridors': 0,
        'unroutable_pairs': 0,
        'corridors': 0,
        'corridor_tiles': 0,
        'tiles_floor': 0,
        'tiles_wall': 0,
        'tiles_empty': 0,
        'spawn_points': 0,
        'runtime_ms': 0,
        'phase_ms': {},
    }
