import io

import pandas as pd
from PIL import ImageDraw

from route_matching.models import Point, to_points

MARKER_COLOR = (255, 64, 0)


def click_to_point(image, index):
    """
    convert a click position in pixels into image-relative coordinates

    :param image: PIL image that was clicked
    :param index: [x, y] in pixels as reported by gradio
    :return: Point in 0-1
    """
    width, height = image.size
    x, y = index
    x = min(max(x / width, 0.0), 1.0)
    y = min(max(y / height, 0.0), 1.0)
    return Point(x, y)


def draw_points_on_image(image, points):
    """
    Draw numbered hold markers on a copy of the photo.

    :param image: PIL image, not modified
    :param points: image-relative points
    :return: annotated PIL image
    """
    if image is None:
        return None

    annotated = image.convert("RGB")
    draw = ImageDraw.Draw(annotated)

    width, height = annotated.size
    radius = max(4, int(min(width, height) * 0.015))

    for number, p in enumerate(to_points(points), start=1):
        cx, cy = p.x * width, p.y * height
        draw.ellipse((cx - radius, cy - radius, cx + radius, cy + radius),
                     outline=MARKER_COLOR, width=max(2, radius // 3))
        draw.text((cx + radius + 2, cy - radius), str(number), fill=MARKER_COLOR)

    return annotated


def format_points_for_display(points):
    """short text for the status box, e.g. '3 holds: (0.20, 0.31) ...'"""
    points = to_points(points)
    if not points:
        return "No holds marked yet."
    coords = " ".join(f"({p.x:.2f}, {p.y:.2f})" for p in points)
    return f"{len(points)} holds: {coords}"


def results_to_dataframe(results):
    """search results as a table for gr.Dataframe"""
    rows = []
    for rank, result in enumerate(results, start=1):
        rows.append({
            "rank": rank,
            "route": result.route.name,
            "similarity": result.similarity,
            "images": len(result.route.images),
            "matched image": result.matched_image_id or "-",
            "route id": result.route.id,
        })
    return pd.DataFrame(rows, columns=["rank", "route", "similarity", "images", "matched image", "route id"])


def image_to_bytes(image, image_format="JPEG"):
    """encode a PIL image for storage"""
    buf = io.BytesIO()
    image.convert("RGB").save(buf, format=image_format, quality=90)
    return buf.getvalue()
