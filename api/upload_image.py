"""Listing photo upload endpoint (POST /api/upload-image)."""

from sharpchoice.services.image_upload import upload_image
from sharpchoice.utils.http import JsonRequestHandler, run_async


class handler(JsonRequestHandler):
    """Admin-only: store a base64 image in Supabase Storage."""

    def do_POST(self):
        def operation():
            self.require_auth()
            url = run_async(upload_image(self.read_json()))
            return {"url": url}

        self.dispatch(operation, "Failed to upload image")
