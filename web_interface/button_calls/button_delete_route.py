import gradio as gr

from database_handler import get_db_handler


def click_delete_route(route_id):
    """
    called by button
    deletes the route and its photos

    :return: status message, dropdown update
    """
    if not route_id:
        return "⚠️ Select a route first.", gr.update()

    db_handler = get_db_handler()
    message = db_handler.delete_route(route_id)
    return message, gr.update(choices=db_handler.list_route_choices(), value=None)


def click_clear_all_data(confirm):
    """delete every route and photo, only when the confirm box is ticked"""
    if not confirm:
        return "⚠️ Tick the confirm box to delete all data.", gr.update()

    db_handler = get_db_handler()
    message = db_handler.clear_all_data()
    return message, gr.update(choices=[], value=None)
