import gradio as gr

from database_handler import get_db_handler
from route_matching.models import to_points
from route_matching.route_lifecycle import create_route
from web_interface.formating_functions.format_points import image_to_bytes


def click_create_route(name, photo, points_state):
    """
    called by button
    creates a route from the photo and tapped holds and stores both

    :param name: route name
    :param photo: PIL image
    :param points_state: tapped holds
    :return: status message, dropdown update
    """
    points = to_points(points_state)
    if photo is None:
        return "⚠️ Upload a photo first.", gr.update()
    if not points:
        return "⚠️ Mark at least one hold.", gr.update()

    try:
        route = create_route(name, points)
    except ValueError as e:
        return f"❌ {e}", gr.update()

    db_handler = get_db_handler()
    image = route.images[0]
    db_handler.save_image(image_to_bytes(photo), image.filename)
    message = db_handler.insert_route(route)

    return message, gr.update(choices=db_handler.list_route_choices(), value=route.id)
