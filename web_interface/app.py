import gradio as gr

from database_handler import get_db_handler
from route_matching.calculation.distance_methods import DEFAULT_MAX_DISTANCE
from route_matching.calculation.get_closest_routes_list import DEFAULT_MAX_RESULTS
from web_interface.button_calls.button_add_image import click_add_image
from web_interface.button_calls.button_create_route import click_create_route
from web_interface.button_calls.button_delete_route import click_delete_route, click_clear_all_data
from web_interface.button_calls.button_export_dataset import click_export_dataset
from web_interface.button_calls.button_mark_point import click_photo_upload, click_mark_point, click_undo_point, \
    click_clear_points
from web_interface.button_calls.button_search_routes import click_search_routes
from web_interface.button_calls.button_show_route import click_show_route
from web_interface.other_gradio_components.dropdown import update_route_dropdown


def marking_area(label):
    """photo upload + tappable preview + undo/clear, used by several tabs"""
    with gr.Row():
        photo_input = gr.Image(label=label, type="pil", sources=["upload", "webcam"])
        marked_output = gr.Image(label="Tap the holds", type="pil", interactive=False)
    with gr.Row():
        undo_button = gr.Button("Undo last hold")
        clear_button = gr.Button("Clear holds")
    points_text = gr.Textbox(label="Holds", interactive=False)

    # states work like a variable
    points_state = gr.State([])

    photo_input.change(
        fn=click_photo_upload,
        inputs=[photo_input],
        outputs=[marked_output, points_state, points_text]
    )
    marked_output.select(
        fn=click_mark_point,
        inputs=[photo_input, points_state],
        outputs=[marked_output, points_state, points_text]
    )
    undo_button.click(
        fn=click_undo_point,
        inputs=[photo_input, points_state],
        outputs=[marked_output, points_state, points_text]
    )
    clear_button.click(
        fn=click_clear_points,
        inputs=[photo_input],
        outputs=[marked_output, points_state, points_text]
    )

    return photo_input, points_state


# main webpage code
with gr.Blocks(title="Route Finder") as demo:
    db_handler = get_db_handler()

    with gr.Tabs():
        # Tab for searching routes by tapped holds
        with gr.Tab("Search"):
            gr.Markdown("## 🧗 Route search\nUpload a photo of the wall and tap the holds of the route.")

            search_photo, search_points_state = marking_area("Photo of the route")

            # settings for matching
            with gr.Row():
                max_distance_slider = gr.Slider(0.1, 2.0, value=DEFAULT_MAX_DISTANCE, step=0.05,
                                                label="Max distance (MHD)")
                mhd_weight_slider = gr.Slider(0, 1, value=0.6, step=0.05, label="Set weight (MHD)")
                order_weight_slider = gr.Slider(0, 1, value=0.4, step=0.05, label="Order weight (DTW)")
                max_results_slider = gr.Slider(1, 50, value=DEFAULT_MAX_RESULTS, step=1, label="Results")

            search_button = gr.Button("🔍 Search")

            with gr.Row():
                results_table = gr.Dataframe(label="Matches", interactive=False)
                overlay_output = gr.Image(label="Best match overlay")
                matched_photo_output = gr.Image(label="Best match photo")
            search_status = gr.Textbox(label="Status", interactive=False)

        # Tab for creating routes and adding reference photos
        with gr.Tab("New route"):
            gr.Markdown("## ➕ New route\nTap the holds on a photo and save it as a new route, "
                        "or add the photo to an existing route.")

            create_photo, create_points_state = marking_area("Reference photo")

            with gr.Row():
                route_name_input = gr.Textbox(label="Route name")
                create_route_button = gr.Button("Save as new route")

            with gr.Row():
                add_image_dropdown = gr.Dropdown(choices=db_handler.list_route_choices(), label="Existing route")
                add_image_button = gr.Button("Add photo to route")

            create_status = gr.Textbox(label="Status", interactive=False)

        # Tab for everything else
        with gr.Tab("Manage routes"):
            gr.Markdown("## 🗂️ Manage routes")

            with gr.Row():
                manage_dropdown = gr.Dropdown(choices=db_handler.list_route_choices(), label="Route")
                refresh_button = gr.Button("Refresh")
                delete_route_button = gr.Button("Delete route")

            route_info = gr.Markdown()
            route_gallery = gr.Gallery(label="Reference photos", columns=3)

            with gr.Row():
                export_button = gr.Button("Export dataset (.zip)")
                export_file = gr.File(label="Download")

            with gr.Row():
                confirm_clear = gr.Checkbox(label="I really want to delete all routes and photos")
                clear_all_button = gr.Button("Clear all data")

            manage_status = gr.Textbox(label="Status", interactive=False)

    # Button logic:
    search_button.click(
        fn=click_search_routes,
        inputs=[search_points_state, max_distance_slider, mhd_weight_slider, order_weight_slider,
                max_results_slider],
        outputs=[results_table, overlay_output, matched_photo_output, search_status]
    )

    create_route_button.click(
        fn=click_create_route,
        inputs=[route_name_input, create_photo, create_points_state],
        outputs=[create_status, add_image_dropdown]
    ).then(
        fn=update_route_dropdown,
        inputs=[],
        outputs=[manage_dropdown]
    )

    add_image_button.click(
        fn=click_add_image,
        inputs=[add_image_dropdown, create_photo, create_points_state],
        outputs=[create_status]
    ).then(
        fn=update_route_dropdown,
        inputs=[],
        outputs=[add_image_dropdown]
    ).then(
        fn=update_route_dropdown,
        inputs=[],
        outputs=[manage_dropdown]
    )

    manage_dropdown.change(
        fn=click_show_route,
        inputs=[manage_dropdown],
        outputs=[route_gallery, route_info]
    )

    refresh_button.click(
        fn=update_route_dropdown,
        inputs=[],
        outputs=[manage_dropdown]
    )

    delete_route_button.click(
        fn=click_delete_route,
        inputs=[manage_dropdown],
        outputs=[manage_status, manage_dropdown]
    ).then(
        fn=update_route_dropdown,
        inputs=[],
        outputs=[add_image_dropdown]
    )

    export_button.click(
        fn=click_export_dataset,
        inputs=[],
        outputs=[export_file, manage_status]
    )

    clear_all_button.click(
        fn=click_clear_all_data,
        inputs=[confirm_clear],
        outputs=[manage_status, manage_dropdown]
    ).then(
        fn=update_route_dropdown,
        inputs=[],
        outputs=[add_image_dropdown]
    )
