import numpy as np

from route_matching.models import Point, to_points


def euclidean_distance(a, b):
    """distance between two points"""
    return float(np.linalg.norm(np.asarray(a, dtype=float) - np.asarray(b, dtype=float)))


def mean(values):
    """mean of a list, 0 for an empty list"""
    if len(values) == 0:
        return 0.0
    return float(np.mean(values))


def points_to_array(points):
    """list of points -> (n, 2) float array"""
    return np.array([(p.x, p.y) for p in to_points(points)], dtype=float).reshape(-1, 2)


def normalize_points(points):
    """
    Move the point set to its centroid and scale it to RMS radius 1.
    The result does not change under translation or uniform scaling of the input.

    A single point has no scale and ends up at the origin.
    If all points coincide the centered (all zero) points are returned unscaled.

    :param points: raw points
    :return: list of normalized Point
    """
    pts = points_to_array(points)

    if len(pts) == 0:
        return []
    if len(pts) == 1:
        return [Point(0.0, 0.0)]

    # center on centroid
    centered = pts - pts.mean(axis=0)

    # rms radius
    rms = np.sqrt(np.mean(np.sum(centered ** 2, axis=1)))
    if rms == 0:
        return [Point(float(x), float(y)) for x, y in centered]

    scaled = centered / rms
    return [Point(float(x), float(y)) for x, y in scaled]
