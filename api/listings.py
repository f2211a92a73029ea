"""Listings endpoint (GET/POST /api/listings, GET/PATCH /api/listings/:id).

``vercel.json`` rewrites ``/api/listings/:id`` to ``/api/listings?id=:id``;
the id is also accepted as a trailing path segment for local servers.
"""

from typing import Optional

from sharpchoice.services.submissions import (
    create_listing,
    fetch_listing,
    fetch_listings,
    update_listing,
)
from sharpchoice.utils.errors import InvalidInputError
from sharpchoice.utils.http import JsonRequestHandler, run_async

COLLECTION_PATH = "/api/listings"


class handler(JsonRequestHandler):
    """Public listing reads; admin create, single read and patch."""

    def listing_id(self) -> Optional[str]:
        route = self.route
        if route.startswith(COLLECTION_PATH + "/"):
            return route[len(COLLECTION_PATH) + 1:] or None
        return self.query.get("id") or None

    def do_GET(self):
        listing_id = self.listing_id()
        if listing_id is None:
            self.dispatch(
                lambda: run_async(fetch_listings(self.query.get("status"))),
                "Failed to fetch listings",
            )
            return

        def operation():
            self.require_auth()
            return run_async(fetch_listing(listing_id))

        self.dispatch(operation, "Failed to fetch listing")

    def do_POST(self):
        def operation():
            self.require_auth()
            row = run_async(create_listing(self.read_json()))
            return {"success": True, "id": row["id"]}

        self.dispatch(operation, "Failed to add listing")

    def do_PATCH(self):
        def operation():
            self.require_auth()
            listing_id = self.listing_id()
            if listing_id is None:
                raise InvalidInputError("Listing id is required")
            run_async(update_listing(listing_id, self.read_json()))
            return {"success": True}

        self.dispatch(operation, "Failed to update listing")
