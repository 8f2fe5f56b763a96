import io

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from PIL import Image

from route_matching.geometry import normalize_points
from route_matching.models import to_points


def generate_match_overlay(query_points, result):
    """
    Plot the normalized query on top of the normalized points of the matched image.

    :param query_points: raw query points
    :param result: SearchResult of the route to show
    :return: PIL image, status message
    """
    if result is None or result.matched_image_id is None:
        return None, "⚠️ No matched image to plot."

    image = result.matched_image()
    if image is None:
        return None, f"❌ Image {result.matched_image_id} not found in route {result.route.name}."

    query = normalize_points(query_points)
    reference = to_points(image.normalized_points)

    buf = io.BytesIO()
    fig, ax = plt.subplots(figsize=(5, 5))
    if reference:
        ax.scatter([p.x for p in reference], [p.y for p in reference], s=120,
                   facecolors="none", edgecolors="tab:blue", linewidths=2, label=f"{result.route.name}")
    if query:
        ax.scatter([p.x for p in query], [p.y for p in query], s=40, color="tab:red", label="Query")
        for number, p in enumerate(query, start=1):
            ax.annotate(str(number), (p.x, p.y), textcoords="offset points", xytext=(5, 5), fontsize=8)

    # image y axis points down
    ax.invert_yaxis()
    ax.set_aspect("equal")
    ax.axhline(0, color="gray", linestyle="--", linewidth=0.5)
    ax.axvline(0, color="gray", linestyle="--", linewidth=0.5)
    ax.set_title(f"Normalized holds (similarity {result.similarity}%)")
    ax.legend(loc="upper right")
    ax.grid(True)
    plt.tight_layout()
    plt.savefig(buf, format="png")
    plt.close(fig)
    buf.seek(0)
    return Image.open(buf), f"✅ Overlay generated for route {result.route.name}"
