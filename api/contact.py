"""Contact form endpoint (POST /api/contact)."""

from sharpchoice.services.submissions import submit_contact
from sharpchoice.utils.http import JsonRequestHandler, run_async


class handler(JsonRequestHandler):
    """Public contact form: store the message, notify the business, auto-reply."""

    def do_POST(self):
        def operation():
            run_async(submit_contact(self.read_json()))
            return {"success": True}

        self.dispatch(operation, "Failed to send message")
