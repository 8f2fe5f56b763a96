import io
import json
import tempfile
import zipfile

import gridfs
from PIL import Image
from pymongo import MongoClient

from route_matching.models import Route

DB_NAME = "route_data"
ROUTES_COLLECTION = "routes"
IMAGES_BUCKET = "route_images"


class MongoDBHandler:
    """MongoDB handler class to manage routes and their photos."""

    def __init__(self, db_name=DB_NAME, uri="mongodb://localhost:27017/"):
        """initialise the MongoDB handler object.
        mongodb://localhost:27017/ is standard path"""
        self.client = MongoClient(uri)
        self.db = self.client[db_name]
        self.collection = None  # will be set when needed
        self._fs = None
        # photos already loaded, keyed by filename. evicted on delete
        self._image_cache = {}


    def use_collection(self, collection_name):
        """set or use collection."""
        self.collection = self.db[collection_name]


    @property
    def fs(self):
        """GridFS bucket holding the route photos"""
        if self._fs is None:
            self._fs = gridfs.GridFS(self.db, collection=IMAGES_BUCKET)
        return self._fs


    def count(self, filter_query=None):
        """Count documents in the current collection."""
        if self.collection is None:
            raise ValueError("No collection selected.")
        return self.collection.count_documents(filter_query or {})


    def insert(self, document):
        """insert document into current collection."""
        if self.collection is None:
            raise ValueError("No collection selected.")
        return self.collection.insert_one(document)


    def find(self, filter_query=None):
        """find all documents matching the provided filter."""
        if self.collection is None:
            raise ValueError("No collection selected.")
        return self.collection.find(filter_query or {})


    def close(self):
        """close the connection to the database."""
        self.client.close()


    def insert_route(self, route):
        """store a new route document"""
        self.use_collection(ROUTES_COLLECTION)
        if self.collection.find_one({"route_id": route.id}):
            return f"⚠️ Route {route.id} already exists."
        self.insert(route.to_doc())
        return f"✅ Route '{route.name}' saved with {len(route.images)} image(s)."


    def add_image(self, route_id, image):
        """append a reference image to an existing route"""
        self.use_collection(ROUTES_COLLECTION)
        result = self.collection.update_one(
            {"route_id": route_id},
            {"$push": {"images": image.to_doc()}}
        )
        if result.matched_count == 0:
            return f"❌ No route found with id {route_id}"
        return f"✅ Image {image.id} added to route {route_id}"


    def get_route(self, route_id):
        """
        :return: (Route, None) or (None, error message)
        """
        self.use_collection(ROUTES_COLLECTION)
        doc = self.collection.find_one({"route_id": route_id})
        if not doc:
            return None, f"❌ No route found with id {route_id}."
        return Route.from_doc(doc), None


    def load_routes(self):
        """snapshot of all routes, oldest first. the search works on this list only"""
        self.use_collection(ROUTES_COLLECTION)
        docs = self.find()
        routes = [Route.from_doc(doc) for doc in docs if "route_id" in doc]
        return sorted(routes, key=lambda r: r.created_at)


    def list_route_choices(self):
        """(label, route_id) pairs for dropdowns"""
        return [(f"{route.name} ({len(route.images)} img)", route.id) for route in self.load_routes()]


    def delete_route(self, route_id):
        """delete the route document and all of its photos"""
        route, error = self.get_route(route_id)
        if error:
            return error

        for image in route.images:
            self.delete_image(image.filename)

        self.use_collection(ROUTES_COLLECTION)
        self.collection.delete_one({"route_id": route_id})
        return f"✅ Route '{route.name}' deleted ({len(route.images)} image(s) removed)."


    def save_image(self, data, filename):
        """store photo bytes under filename, replacing an older file of the same name"""
        self.delete_image(filename)
        self.fs.put(data, filename=filename)


    def load_image(self, filename):
        """
        :return: PIL image or None if the photo is not stored
        """
        cached = self._image_cache.get(filename)
        if cached is not None:
            return cached

        grid_out = self.fs.find_one({"filename": filename})
        if grid_out is None:
            return None

        image = Image.open(io.BytesIO(grid_out.read()))
        image.load()
        self._image_cache[filename] = image
        return image


    def delete_image(self, filename):
        """remove a photo. a missing file is ignored"""
        self._image_cache.pop(filename, None)
        for grid_out in self.fs.find({"filename": filename}):
            self.fs.delete(grid_out._id)


    def export_dataset(self):
        """
        write all routes and photos into a zip file

        :return: path of the zip file
        """
        routes = self.load_routes()

        tmp = tempfile.NamedTemporaryFile(suffix=".zip", delete=False)
        tmp.close()

        with zipfile.ZipFile(tmp.name, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            zf.writestr("routes.json", json.dumps({"routes": [r.to_doc() for r in routes]}, indent=2))

            skipped = 0
            for route in routes:
                for image in route.images:
                    grid_out = self.fs.find_one({"filename": image.filename})
                    if grid_out is None:
                        skipped += 1
                        continue
                    zf.writestr(f"images/{image.filename}", grid_out.read())

        if skipped:
            print(f"⚠️ Export: {skipped} photo(s) not found in storage, skipped.")

        return tmp.name


    def clear_all_data(self):
        """drop every route and photo"""
        self.use_collection(ROUTES_COLLECTION)
        deleted = self.collection.delete_many({}).deleted_count

        for grid_out in self.fs.find():
            self.fs.delete(grid_out._id)
        self._image_cache.clear()

        return f"✅ Removed {deleted} route(s) and all photos."


_shared_handler = None


def get_db_handler():
    """one handler for the whole web app, so the photo cache is shared between button calls"""
    global _shared_handler
    if _shared_handler is None:
        _shared_handler = MongoDBHandler(DB_NAME)
    return _shared_handler
