"""Reviews endpoint (GET/POST /api/reviews)."""

from sharpchoice.services.submissions import fetch_reviews, submit_review
from sharpchoice.utils.http import JsonRequestHandler, run_async


class handler(JsonRequestHandler):
    """Public review list; admins add reviews."""

    def do_GET(self):
        self.dispatch(lambda: run_async(fetch_reviews()), "Failed to fetch reviews")

    def do_POST(self):
        def operation():
            self.require_auth()
            run_async(submit_review(self.read_json()))
            return {"success": True}

        self.dispatch(operation, "Failed to add review")
