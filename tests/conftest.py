import pytest

from route_matching.geometry import normalize_points
from route_matching.models import Point, Route, RouteImage


def make_route(route_id, name, *point_lists):
    """route with one image per point list"""
    images = []
    for n, pts in enumerate(point_lists):
        pts = [Point(x, y) for x, y in pts]
        images.append(RouteImage(
            id=f"img-{route_id}-{n}",
            filename=f"{route_id}-{n}.jpg",
            points=pts,
            normalized_points=normalize_points(pts),
        ))
    return Route(id=route_id, name=name, images=images, created_at=f"2026-01-01T00:00:{len(route_id):02d}")


@pytest.fixture
def triangle_points():
    return [(0.2, 0.2), (0.8, 0.2), (0.5, 0.8)]


@pytest.fixture
def square_points():
    return [(0.2, 0.2), (0.8, 0.2), (0.8, 0.8), (0.2, 0.8)]


@pytest.fixture
def route_factory():
    return make_route
