from database_handler import get_db_handler, ROUTES_COLLECTION
from web_interface.app import demo


def main():
    """main function of project. Run this file to start the program"""

    # connect to database
    db = get_db_handler()
    db.use_collection(ROUTES_COLLECTION)
    print("routes count:", db.count())

    # launch web ui (http://127.0.0.1:7860/)
    demo.launch()

    db.close()


if __name__ == "__main__":
    main()
