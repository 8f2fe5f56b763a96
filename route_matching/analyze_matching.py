"""Offline check of how well the matcher separates routes.

Reads an exported dataset (``routes.json`` or the export ``.zip``) and reports

- similarity between photos of the same route taken from different angles,
- best similarity between different routes,
- leave-one-out search: each photo of a multi-photo route is used as a query
  against the catalog with that photo removed, and the rank of its own route
  is recorded.

Example::

    python -m route_matching.analyze_matching --dataset route-dataset.zip --max-distance 0.6
"""

import argparse
import json
import zipfile
from dataclasses import replace
from pathlib import Path

import pandas as pd

from route_matching.calculation.get_closest_routes_list import score_image, search_routes
from route_matching.config import MatchingOptions, load_matching_options
from route_matching.geometry import normalize_points
from route_matching.models import Route


def load_exported_routes(path):
    """
    read routes from routes.json or an export zip. images without stored
    normalized points get them computed here

    :return: list of Route
    """
    path = Path(path)
    if path.suffix.lower() == ".zip":
        with zipfile.ZipFile(path) as zf:
            data = json.loads(zf.read("routes.json").decode("utf-8"))
    else:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    if not isinstance(data, dict) or "routes" not in data:
        raise RuntimeError(f"{path} does not contain a 'routes' list")

    routes = []
    for doc in data["routes"]:
        route = Route.from_doc(doc)
        images = [
            image if image.normalized_points or not image.points
            else replace(image, normalized_points=normalize_points(image.points))
            for image in route.images
        ]
        routes.append(replace(route, images=images))
    return routes


def intra_route_similarities(routes, options):
    """pairwise similarity of the photos inside each route"""
    rows = []
    for route in routes:
        for i, image_a in enumerate(route.images):
            for j in range(i + 1, len(route.images)):
                image_b = route.images[j]
                similarity = score_image(image_b, image_a.points, image_a.normalized_points, options)
                rows.append({
                    "route": route.name,
                    "image_a": i + 1,
                    "image_b": j + 1,
                    "points_a": len(image_a.points),
                    "points_b": len(image_b.points),
                    "similarity": similarity,
                })
    return pd.DataFrame(rows, columns=["route", "image_a", "image_b", "points_a", "points_b", "similarity"])


def inter_route_similarities(routes, options):
    """best similarity over all photo pairs of two different routes"""
    rows = []
    for i, route_a in enumerate(routes):
        for route_b in routes[i + 1:]:
            if not route_a.images or not route_b.images:
                continue
            best = max(
                score_image(image_b, image_a.points, image_a.normalized_points, options)
                for image_a in route_a.images
                for image_b in route_b.images
            )
            rows.append({"route_a": route_a.name, "route_b": route_b.name, "similarity": best})

    df = pd.DataFrame(rows, columns=["route_a", "route_b", "similarity"])
    return df.sort_values("similarity", ascending=False, kind="stable").reset_index(drop=True)


def leave_one_out_ranking(routes, options):
    """
    use every photo of a multi-photo route as a query against the catalog
    without that photo

    :return: DataFrame, one row per query photo
    """
    rows = []
    for route in routes:
        if len(route.images) < 2:
            continue

        for query_image in route.images:
            catalog = [
                replace(r, images=[img for img in r.images if img.id != query_image.id]) if r.id == route.id else r
                for r in routes
            ]
            results = search_routes(query_image.points, catalog, max_results=len(catalog), options=options)

            rank = next(n for n, result in enumerate(results, start=1) if result.route.id == route.id)
            own = results[rank - 1]
            wrong = next((result for result in results if result.route.id != route.id), None)

            rows.append({
                "route": route.name,
                "query_image": query_image.id,
                "rank": rank,
                "similarity": own.similarity,
                "best_wrong_route": wrong.route.name if wrong else None,
                "best_wrong_similarity": wrong.similarity if wrong else None,
            })

    return pd.DataFrame(rows, columns=["route", "query_image", "rank", "similarity",
                                       "best_wrong_route", "best_wrong_similarity"])


def summarize(intra, inter, ranking):
    """numbers for the end of the report"""
    intra_mean = float(intra["similarity"].mean()) if len(intra) else float("nan")
    inter_mean = float(inter["similarity"].mean()) if len(inter) else float("nan")
    gap = intra_mean - inter_mean

    if gap > 30:
        verdict = "✅ good separation"
    elif gap > 15:
        verdict = "⚠️ moderate separation"
    else:
        # also hit when one side has no samples (nan)
        verdict = "❌ weak separation"

    return {
        "intra_mean": intra_mean,
        "inter_mean": inter_mean,
        "gap": gap,
        "top1_rate": float((ranking["rank"] == 1).mean()) if len(ranking) else float("nan"),
        "verdict": verdict,
    }


def build_parser():
    parser = argparse.ArgumentParser(description="Analyse route matching quality on an exported dataset")
    parser.add_argument("--dataset", type=str, required=True, help="routes.json or export .zip")
    parser.add_argument("--options", type=str, default=None, help="JSON file with matching options")
    parser.add_argument("--max-distance", type=float, default=None)
    parser.add_argument("--mhd-weight", type=float, default=None)
    parser.add_argument("--order-weight", type=float, default=None)
    parser.add_argument("--top", type=int, default=10, help="rows of the cross-route table to show")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    options = load_matching_options(args.options) if args.options else MatchingOptions()
    overrides = {
        "max_distance": args.max_distance,
        "mhd_weight": args.mhd_weight,
        "order_weight": args.order_weight,
    }
    options = replace(options, **{k: v for k, v in overrides.items() if v is not None})

    routes = load_exported_routes(args.dataset)
    print(f"Loaded {len(routes)} route(s) from {args.dataset}")
    print(f"Options: {options}")

    intra = intra_route_similarities(routes, options)
    inter = inter_route_similarities(routes, options)
    ranking = leave_one_out_ranking(routes, options)

    print("\n=== Same route, different photos ===")
    print(intra.to_string(index=False) if len(intra) else "no route with more than one photo")

    print(f"\n=== Different routes (top {args.top}) ===")
    print(inter.head(args.top).to_string(index=False) if len(inter) else "less than two routes with photos")

    print("\n=== Leave-one-out search ===")
    print(ranking.to_string(index=False) if len(ranking) else "no route with more than one photo")

    summary = summarize(intra, inter, ranking)
    print("\n=== Summary ===")
    print(f"same route mean:      {summary['intra_mean']:.1f}%")
    print(f"different route mean: {summary['inter_mean']:.1f}%")
    print(f"gap:                  {summary['gap']:.1f}%  {summary['verdict']}")
    print(f"top-1 rate:           {summary['top1_rate']:.2f}")

    return summary


if __name__ == "__main__":
    main()
