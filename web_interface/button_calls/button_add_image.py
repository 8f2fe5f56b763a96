from database_handler import get_db_handler
from route_matching.models import to_points
from route_matching.route_lifecycle import add_image_to_route
from web_interface.formating_functions.format_points import image_to_bytes


def click_add_image(route_id, photo, points_state):
    """
    called by button
    adds another reference photo with its tapped holds to an existing route

    :return: status message
    """
    if not route_id:
        return "⚠️ Select a route first."
    points = to_points(points_state)
    if photo is None or not points:
        return "⚠️ Upload a photo and mark the holds first."

    db_handler = get_db_handler()
    route, error = db_handler.get_route(route_id)
    if error:
        return error

    image = add_image_to_route(route, points).images[-1]
    db_handler.save_image(image_to_bytes(photo), image.filename)
    message = db_handler.add_image(route.id, image)

    # route is gone, do not keep the photo around
    if message.startswith("❌"):
        db_handler.delete_image(image.filename)
    return message
