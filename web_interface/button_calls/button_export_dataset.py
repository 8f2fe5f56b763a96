from database_handler import get_db_handler


def click_export_dataset():
    """
    called by button
    :return: path of the exported zip for the download component, status message
    """
    db_handler = get_db_handler()
    routes = db_handler.load_routes()
    if not routes:
        return None, "⚠️ Nothing to export."

    path = db_handler.export_dataset()
    n_images = sum(len(r.images) for r in routes)
    return path, f"✅ Exported {len(routes)} route(s) with {n_images} image(s)."
