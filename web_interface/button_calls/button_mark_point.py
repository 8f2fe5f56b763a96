import gradio as gr

from route_matching.models import points_to_docs, to_points
from web_interface.formating_functions.format_points import click_to_point, draw_points_on_image, \
    format_points_for_display


def click_photo_upload(photo):
    """
    called when a photo is uploaded
    resets the tapped holds

    :param photo: PIL image
    :return: marked image, empty point list, status
    """
    if photo is None:
        return None, [], "No photo loaded."
    return draw_points_on_image(photo, []), [], "Photo loaded. Tap the holds of the route."


def click_mark_point(photo, points_state, evt: gr.SelectData):
    """
    called by a tap on the marked image
    appends the tapped position as image-relative point

    :param photo: original PIL image
    :param points_state: list of {"x", "y"}
    :param evt: select event, evt.index is [x, y] in pixels
    :return: marked image, new point list, status
    """
    if photo is None:
        return None, points_state or [], "⚠️ Upload a photo first."

    points = to_points(points_state)
    points.append(click_to_point(photo, evt.index))

    return draw_points_on_image(photo, points), points_to_docs(points), format_points_for_display(points)


def click_undo_point(photo, points_state):
    """remove the last tapped hold"""
    points = to_points(points_state)[:-1]
    return draw_points_on_image(photo, points), points_to_docs(points), format_points_for_display(points)


def click_clear_points(photo):
    """remove all tapped holds"""
    return draw_points_on_image(photo, []), [], format_points_for_display([])
