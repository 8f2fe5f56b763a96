from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional


class Point(NamedTuple):
    """a tapped hold position. raw points are image-relative (0-1), normalized points are not bounded"""
    x: float
    y: float


def to_point(raw):
    """
    accept a Point, a (x, y) pair or a {"x": .., "y": ..} dict as stored in the database

    :param raw:
    :return: Point
    """
    if isinstance(raw, Point):
        return raw
    if isinstance(raw, dict):
        return Point(float(raw["x"]), float(raw["y"]))
    x, y = raw
    return Point(float(x), float(y))


def to_points(raw_points):
    """convert any point list into a list of Point"""
    if raw_points is None:
        return []
    return [to_point(p) for p in raw_points]


def points_to_docs(points):
    """list of Point -> list of {"x", "y"} for storage"""
    return [{"x": float(p.x), "y": float(p.y)} for p in points]


@dataclass(frozen=True)
class RouteImage:
    """one reference photo of a route with its tapped holds"""
    id: str
    filename: str
    points: List[Point] = field(default_factory=list)
    normalized_points: List[Point] = field(default_factory=list)

    @classmethod
    def from_doc(cls, doc):
        return cls(
            id=str(doc["id"]),
            filename=doc.get("filename", ""),
            points=to_points(doc.get("points")),
            # exports of the browser version use camelCase keys
            normalized_points=to_points(doc.get("normalized_points", doc.get("normalizedPoints"))),
        )

    def to_doc(self):
        return {
            "id": self.id,
            "filename": self.filename,
            "points": points_to_docs(self.points),
            "normalized_points": points_to_docs(self.normalized_points),
        }


@dataclass(frozen=True)
class Route:
    """a named climbing route, represented by one or more reference images"""
    id: str
    name: str
    images: List[RouteImage] = field(default_factory=list)
    created_at: str = ""

    @classmethod
    def from_doc(cls, doc):
        route_id = doc.get("route_id", doc.get("id"))
        if route_id is None:
            raise ValueError(f"Route document without id: {doc.get('name', '?')}")
        return cls(
            id=str(route_id),
            name=doc.get("name", ""),
            images=[RouteImage.from_doc(image_doc) for image_doc in doc.get("images", [])],
            created_at=doc.get("created_at", doc.get("createdAt", "")),
        )

    def to_doc(self):
        return {
            "route_id": self.id,
            "name": self.name,
            "images": [image.to_doc() for image in self.images],
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class SearchResult:
    route: Route
    similarity: int
    # None when the route has no images
    matched_image_id: Optional[str] = None

    def matched_image(self):
        """the RouteImage behind matched_image_id, None if the route has no such image"""
        if self.matched_image_id is None:
            return None
        return next((img for img in self.route.images if img.id == self.matched_image_id), None)
