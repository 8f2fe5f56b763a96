import math

import numpy as np
from scipy.spatial.distance import cdist

from route_matching.geometry import points_to_array

DEFAULT_MAX_DISTANCE = 0.6


def round_half_up(value):
    """round to the nearest int, halves always go up"""
    return int(math.floor(value + 0.5))


def modified_hausdorff_distance(a, b):
    """
    Modified Hausdorff Distance between two normalized point sets.

    Mean of the nearest neighbour distances instead of the max, so a few missed or
    extra taps only move the result a little. Both directions are computed and the
    larger one is returned, a strict subset does not count as a perfect match.

    :param a: normalized points
    :param b: normalized points
    :return: distance, inf if one of the sets is empty
    """
    pts_a = points_to_array(a)
    pts_b = points_to_array(b)
    if len(pts_a) == 0 or len(pts_b) == 0:
        return float("inf")

    # |A| x |B| pairwise distances
    pairwise = cdist(pts_a, pts_b)
    forward = pairwise.min(axis=1).mean()
    reverse = pairwise.min(axis=0).mean()
    return float(max(forward, reverse))


def distance_to_similarity(distance, max_distance=DEFAULT_MAX_DISTANCE):
    """
    Linear decay from distance 0 (100) to max_distance (0).

    :param distance: set distance, may be inf
    :param max_distance: distance beyond which two routes count as unrelated
    :return: similarity 0-100
    """
    if distance >= max_distance:
        return 0
    similarity = max(0.0, 1 - distance / max_distance)
    return round_half_up(similarity * 100)


def dtw_distance(a, b):
    """
    DTW distance of two 1D sequences, normalized by the length of the longer one.
    Sequences may differ in length (missed or extra taps).

    :return: distance, inf if one of the sequences is empty
    """
    n, m = len(a), len(b)
    if n == 0 or m == 0:
        return float("inf")

    dtw = np.full((n + 1, m + 1), np.inf)
    dtw[0, 0] = 0

    for i in range(1, n + 1):
        for j in range(1, m + 1):
            cost = abs(a[i - 1] - b[j - 1])
            dtw[i, j] = cost + min(
                dtw[i - 1, j],      # insertion
                dtw[i, j - 1],      # deletion
                dtw[i - 1, j - 1]   # match
            )
    return float(dtw[n, m] / max(n, m))
