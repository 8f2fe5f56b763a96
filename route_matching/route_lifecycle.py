import uuid
from dataclasses import replace
from datetime import datetime, timezone

from route_matching.geometry import normalize_points
from route_matching.models import Route, RouteImage, to_points


def new_image(points, extension="jpg"):
    """
    build a reference image from tapped points. the normalized points are
    computed once here and stored with the image

    :param points: raw points (image-relative)
    :param extension: file extension of the stored photo
    :return: RouteImage
    """
    points = to_points(points)
    image_id = str(uuid.uuid4())
    return RouteImage(
        id=image_id,
        filename=f"{image_id}.{extension}",
        points=points,
        normalized_points=normalize_points(points),
    )


def create_route(name, points, extension="jpg"):
    """new route with a single reference image"""
    if name is None or not str(name).strip():
        raise ValueError("Route name must not be empty.")

    return Route(
        id=str(uuid.uuid4()),
        name=str(name).strip(),
        images=[new_image(points, extension)],
        created_at=datetime.now(timezone.utc).isoformat(),
    )


def add_image_to_route(route, points, extension="jpg"):
    """return a copy of the route with one more reference image"""
    return replace(route, images=[*route.images, new_image(points, extension)])


def remove_route(routes, route_id):
    """
    :return: (remaining routes, removed route or None)
    """
    remaining = []
    removed = None
    for route in routes:
        if removed is None and route.id == route_id:
            removed = route
        else:
            remaining.append(route)
    return remaining, removed
