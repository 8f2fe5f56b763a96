import os
from concurrent.futures import ProcessPoolExecutor

from route_matching.calculation.combine import combined_similarity
from route_matching.calculation.distance_methods import modified_hausdorff_distance, distance_to_similarity
from route_matching.calculation.order_similarity import relative_order_similarity
from route_matching.config import MatchingOptions
from route_matching.geometry import normalize_points
from route_matching.models import SearchResult, to_points

DEFAULT_MAX_RESULTS = 10
# below this many routes the process pool costs more than it saves
PARALLEL_MIN_ROUTES = 200


def score_image(image, query_points, normalized_query, options):
    """combined similarity of the query against one reference image"""
    mhd = modified_hausdorff_distance(normalized_query, image.normalized_points)
    mhd_similarity = distance_to_similarity(mhd, options.max_distance)

    # order similarity runs on raw points, it rescales internally
    order_similarity = relative_order_similarity(query_points, image.points)

    return combined_similarity(mhd_similarity, order_similarity, options.weights)


def score_route(route, query_points, normalized_query, options):
    """
    score all images of a route and keep the best one.
    a route without images scores 0 with no matched image

    :return: SearchResult
    """
    best_similarity = 0
    best_image_id = None

    for image in route.images:
        similarity = score_image(image, query_points, normalized_query, options)
        # first image wins on ties
        if best_image_id is None or similarity > best_similarity:
            best_similarity = similarity
            best_image_id = image.id

    return SearchResult(route=route, similarity=best_similarity, matched_image_id=best_image_id)


def _score_route_process(args):
    route, query_points, normalized_query, options = args
    return score_route(route, query_points, normalized_query, options)


def search_routes(query_points, routes, max_results=DEFAULT_MAX_RESULTS, options=None, max_workers=None):
    """
    rank routes by similarity to the tapped query points

    :param query_points: raw query points (image-relative)
    :param routes: snapshot of stored routes, not modified
    :param max_results: number of results to return
    :param options: MatchingOptions or a partial dict, defaults if None
    :param max_workers: score routes in a process pool if > 1 and the catalog is large
    :return: list of SearchResult, best first
    """
    if not isinstance(options, MatchingOptions):
        options = MatchingOptions.from_config(options)

    query_points = to_points(query_points)
    normalized_query = normalize_points(query_points)
    routes = list(routes)

    if max_workers is not None and max_workers > 1 and len(routes) >= PARALLEL_MIN_ROUTES:
        # parallel, map keeps input order so ties rank the same as sequential
        with ProcessPoolExecutor(
            max_workers=min(os.cpu_count() or 1, max_workers)
        ) as executor:
            jobs = ((route, query_points, normalized_query, options) for route in routes)
            results = list(executor.map(_score_route_process, jobs, chunksize=32))
    else:
        # sequential
        results = [score_route(route, query_points, normalized_query, options) for route in routes]

    # stable sort, equal scores keep input order
    results.sort(key=lambda r: r.similarity, reverse=True)

    return results[:max_results]
