"""Health check endpoint (GET /healthz)."""

from datetime import datetime, timezone
from http.server import BaseHTTPRequestHandler
import json

from sharpchoice.config import AppConfig


class handler(BaseHTTPRequestHandler):
    """Health check handler for Vercel serverless function."""

    def do_GET(self):
        """Handle GET request."""
        self.send_response(200)
        self.send_header('Content-Type', 'application/json')
        self.end_headers()
        response = json.dumps({
            "status": "ok",
            "service": AppConfig.SERVICE_NAME,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })
        self.wfile.write(response.encode('utf-8'))

    def do_HEAD(self):
        """Handle HEAD request (uptime monitors)."""
        self.send_response(200)
        self.send_header('Content-Type', 'application/json')
        self.end_headers()
