from route_matching.calculation.distance_methods import dtw_distance, round_half_up
from route_matching.models import to_points


def ordered_projection(points):
    """holds sorted top to bottom (y ascending), return their x positions"""
    return [p.x for p in sorted(to_points(points), key=lambda p: p.y)]


def min_max_normalize(seq):
    """scale a sequence into 0-1. a constant sequence maps to 0.5"""
    if len(seq) == 0:
        return []
    low, high = min(seq), max(seq)
    if high == low:
        return [0.5 for _ in seq]
    return [(v - low) / (high - low) for v in seq]


def relative_order_similarity(points_a, points_b):
    """
    Similarity of the left-right arrangement of holds visited top to bottom.
    Works on raw points, each side is rescaled to 0-1 on its own, so this is
    more forgiving of perspective than the set distance.

    :param points_a: raw points
    :param points_b: raw points
    :return: similarity 0-100
    """
    points_a = to_points(points_a)
    points_b = to_points(points_b)

    if len(points_a) == 0 or len(points_b) == 0:
        return 0
    if len(points_a) == 1 and len(points_b) == 1:
        return 100

    seq_a = min_max_normalize(ordered_projection(points_a))
    seq_b = min_max_normalize(ordered_projection(points_b))

    distance = dtw_distance(seq_a, seq_b)

    # both sequences live in 0-1, so the max distance is 1
    max_distance = 1.0
    if distance >= max_distance:
        return 0
    return round_half_up((1 - distance / max_distance) * 100)
