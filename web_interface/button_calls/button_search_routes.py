from database_handler import get_db_handler
from route_matching.calculation.get_closest_routes_list import search_routes
from route_matching.config import MatchingOptions
from route_matching.models import to_points
from web_interface.formating_functions.format_points import results_to_dataframe, draw_points_on_image
from web_interface.graph_generation.generate_graph import generate_match_overlay


def show_matched_photo(db_handler, result):
    """
    stored reference photo of a search result with its holds drawn on

    :return: PIL image, status message
    """
    image = result.matched_image()
    if image is None:
        return None, "⚠️ Route has no reference photo."

    photo = db_handler.load_image(image.filename)
    if photo is None:
        return None, f"⚠️ Photo {image.filename} not found."

    return draw_points_on_image(photo, image.points), f"✅ Showing photo {image.filename}"


def click_search_routes(points_state, max_distance, mhd_weight, order_weight, max_results):
    """
    called by button
    ranks the stored routes against the tapped holds

    :param points_state: tapped holds as list of {"x", "y"}
    :param max_distance: slider value
    :param mhd_weight: slider value
    :param order_weight: slider value
    :param max_results: slider value
    :return: result table, overlay of the best match, photo of the best match, status message
    """
    query_points = to_points(points_state)
    if not query_points:
        return results_to_dataframe([]), None, None, "⚠️ Mark at least one hold before searching."

    options = MatchingOptions.from_config({
        "max_distance": max_distance,
        "mhd_weight": mhd_weight,
        "order_weight": order_weight,
    })

    db_handler = get_db_handler()
    try:
        routes = db_handler.load_routes()
    except Exception as e:
        return results_to_dataframe([]), None, None, f"❌ Could not load routes: {e}"

    if not routes:
        return results_to_dataframe([]), None, None, "⚠️ No routes stored yet."

    results = search_routes(query_points, routes, max_results=int(max_results), options=options)

    best = results[0]
    overlay, overlay_msg = generate_match_overlay(query_points, best)
    try:
        photo, photo_msg = show_matched_photo(db_handler, best)
    except Exception as e:
        photo, photo_msg = None, f"❌ Could not load photo: {e}"

    status = (f"Searched {len(routes)} route(s) with {len(query_points)} hold(s). "
              f"Best match: {best.route.name} ({best.similarity}%)\n{overlay_msg}\n{photo_msg}")

    return results_to_dataframe(results), overlay, photo, status
