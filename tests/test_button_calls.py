from types import SimpleNamespace

import pytest
from PIL import Image

from route_matching.models import points_to_docs, Point
from web_interface.button_calls import button_search_routes, button_mark_point, button_add_image, button_show_route
from web_interface.formating_functions.format_points import click_to_point, draw_points_on_image
from web_interface.other_gradio_components import dropdown


class FakeHandler:
    def __init__(self, routes, photos=None):
        self.routes = routes
        self.photos = photos or {}
        self.loaded = []
        self.deleted = []

    def load_routes(self):
        return list(self.routes)

    def get_route(self, route_id):
        route = next((r for r in self.routes if r.id == route_id), None)
        if route is None:
            return None, f"❌ No route found with id {route_id}."
        return route, None

    def load_image(self, filename):
        self.loaded.append(filename)
        return self.photos.get(filename)

    def save_image(self, data, filename):
        self.photos[filename] = data

    def delete_image(self, filename):
        self.deleted.append(filename)
        self.photos.pop(filename, None)

    def add_image(self, route_id, image):
        # the route was deleted in the meantime
        return f"❌ No route found with id {route_id}"


@pytest.fixture
def stored_routes(route_factory, triangle_points, square_points):
    return [
        route_factory("sq", "Square", square_points),
        route_factory("tri", "Triangle", triangle_points),
    ]


def test_search_button_ranks_routes(monkeypatch, stored_routes, triangle_points):
    monkeypatch.setattr(button_search_routes, "get_db_handler", lambda: FakeHandler(stored_routes))

    table, overlay, photo, status = button_search_routes.click_search_routes(
        points_to_docs([Point(x, y) for x, y in triangle_points]), 0.6, 0.6, 0.4, 10)

    assert list(table["route"]) == ["Triangle", "Square"]
    assert table["similarity"].iloc[0] == 100
    assert overlay is not None
    assert "Best match: Triangle (100%)" in status


def test_search_button_without_points(monkeypatch, stored_routes):
    monkeypatch.setattr(button_search_routes, "get_db_handler", lambda: FakeHandler(stored_routes))

    table, overlay, photo, status = button_search_routes.click_search_routes([], 0.6, 0.6, 0.4, 10)

    assert table.empty
    assert overlay is None
    assert photo is None
    assert status.startswith("⚠️")


def test_search_button_without_routes(monkeypatch, triangle_points):
    monkeypatch.setattr(button_search_routes, "get_db_handler", lambda: FakeHandler([]))

    _, _, _, status = button_search_routes.click_search_routes(
        points_to_docs([Point(x, y) for x, y in triangle_points]), 0.6, 0.6, 0.4, 10)

    assert "No routes stored" in status


def test_click_to_point_is_image_relative():
    image = Image.new("RGB", (200, 100))
    assert click_to_point(image, [50, 25]) == Point(0.25, 0.25)
    assert click_to_point(image, [250, -5]) == Point(1.0, 0.0)


def test_marking_points():
    photo = Image.new("RGB", (100, 100), "white")

    marked, points, _ = button_mark_point.click_mark_point(photo, [], SimpleNamespace(index=[10, 20]))
    marked, points, text = button_mark_point.click_mark_point(photo, points, SimpleNamespace(index=[50, 80]))

    assert points == [{"x": 0.1, "y": 0.2}, {"x": 0.5, "y": 0.8}]
    assert text.startswith("2 holds")
    assert marked.size == photo.size
    # original photo stays clean
    assert photo.getpixel((10, 20)) == (255, 255, 255)

    _, points, _ = button_mark_point.click_undo_point(photo, points)
    assert points == [{"x": 0.1, "y": 0.2}]


def test_draw_points_without_image():
    assert draw_points_on_image(None, [(0.1, 0.1)]) is None


def test_search_button_shows_stored_photo_of_best_match(monkeypatch, stored_routes, triangle_points):
    photo = Image.new("RGB", (100, 100), "white")
    handler = FakeHandler(stored_routes, photos={"tri-0.jpg": photo})
    monkeypatch.setattr(button_search_routes, "get_db_handler", lambda: handler)

    _, _, matched_photo, status = button_search_routes.click_search_routes(
        points_to_docs([Point(x, y) for x, y in triangle_points]), 0.6, 0.6, 0.4, 10)

    assert handler.loaded == ["tri-0.jpg"]
    assert matched_photo.size == photo.size
    # hold markers drawn on a copy
    assert matched_photo.tobytes() != photo.tobytes()
    assert photo.getcolors() == [(100 * 100, (255, 255, 255))]
    assert "tri-0.jpg" in status


def test_search_button_with_missing_photo(monkeypatch, stored_routes, triangle_points):
    monkeypatch.setattr(button_search_routes, "get_db_handler", lambda: FakeHandler(stored_routes))

    table, _, matched_photo, status = button_search_routes.click_search_routes(
        points_to_docs([Point(x, y) for x, y in triangle_points]), 0.6, 0.6, 0.4, 10)

    assert list(table["route"]) == ["Triangle", "Square"]
    assert matched_photo is None
    assert "not found" in status


def test_show_route_gallery(monkeypatch, stored_routes):
    handler = FakeHandler(stored_routes, photos={"sq-0.jpg": Image.new("RGB", (50, 50), "white")})
    monkeypatch.setattr(button_show_route, "get_db_handler", lambda: handler)

    gallery, info = button_show_route.click_show_route("sq")

    assert len(gallery) == 1
    assert gallery[0][1] == "sq-0.jpg (4 holds)"
    assert "Square" in info

    gallery, info = button_show_route.click_show_route("missing")
    assert gallery == []
    assert info.startswith("❌")

    assert button_show_route.click_show_route(None) == ([], "")


def test_add_image_to_deleted_route_removes_photo(monkeypatch, stored_routes, triangle_points):
    handler = FakeHandler(stored_routes)
    monkeypatch.setattr(button_add_image, "get_db_handler", lambda: handler)

    status = button_add_image.click_add_image(
        "tri", Image.new("RGB", (20, 20)), points_to_docs([Point(x, y) for x, y in triangle_points]))

    assert status.startswith("❌")
    assert len(handler.deleted) == 1
    assert handler.photos == {}


def test_route_dropdown_shows_current_image_counts(monkeypatch, route_factory, triangle_points):
    routes = [route_factory("tri", "Triangle", triangle_points)]
    handler = SimpleNamespace(list_route_choices=lambda: [(f"{r.name} ({len(r.images)} img)", r.id) for r in routes])
    monkeypatch.setattr(dropdown, "get_db_handler", lambda: handler)

    assert dropdown.update_route_dropdown()["choices"] == [("Triangle (1 img)", "tri")]

    routes[0] = route_factory("tri", "Triangle", triangle_points, triangle_points)
    assert dropdown.update_route_dropdown()["choices"] == [("Triangle (2 img)", "tri")]
