from database_handler import get_db_handler
from web_interface.formating_functions.format_points import draw_points_on_image


def click_show_route(route_id):
    """
    called when a route is picked in the manage tab
    shows every reference photo of the route with its tapped holds

    :return: gallery items [(image, caption)], route info text
    """
    if not route_id:
        return [], ""

    db_handler = get_db_handler()
    route, error = db_handler.get_route(route_id)
    if error:
        return [], error

    gallery = []
    missing = 0
    for image in route.images:
        photo = db_handler.load_image(image.filename)
        if photo is None:
            missing += 1
            continue
        gallery.append((draw_points_on_image(photo, image.points), f"{image.filename} ({len(image.points)} holds)"))

    info = f"**{route.name}**, {len(route.images)} image(s), created {route.created_at}"
    if missing:
        info += f"\n\n⚠️ {missing} photo(s) not found."
    return gallery, info
