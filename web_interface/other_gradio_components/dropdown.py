from database_handler import get_db_handler
import gradio as gr


def update_route_dropdown():
    route_choices = get_db_handler().list_route_choices()
    dropdown_update = gr.update(choices=route_choices)

    return dropdown_update
