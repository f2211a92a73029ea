"""Local development server.

Serves the Vercel functions in ``api/`` behind the same routes as
``vercel.json`` plus the static site from ``public/`` with an
``index.html`` fallback for client-side routes.

    python -m sharpchoice.devserver --port 3000
"""

import argparse
import functools
import os
import socket
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional, Type

from api import contact, health, listings, reviews, upload_image
from sharpchoice.utils.logging import get_structured_logger
from sharpchoice.utils.logging_config import LoggingConfig

logger = get_structured_logger(__name__)

ROUTES = {
    "/healthz": health.handler,
    "/api/health": health.handler,
    "/api/contact": contact.handler,
    "/api/reviews": reviews.handler,
    "/api/listings": listings.handler,
    "/api/upload-image": upload_image.handler,
}


def resolve_handler(path: str) -> Optional[Type]:
    """Map a request path to the api handler class that owns it."""
    path = path.split("?", 1)[0].rstrip("/") or "/"
    if path in ROUTES:
        return ROUTES[path]
    if path.startswith("/api/listings/"):
        return listings.handler
    return None


class StaticSiteHandler(SimpleHTTPRequestHandler):
    """Static files with index.html fallback for unknown non-API paths."""

    def send_head(self):
        path = self.translate_path(self.path)
        if not os.path.exists(path) and not self.path.startswith("/api/"):
            self.path = "/index.html"
        return super().send_head()


class DevServer(ThreadingHTTPServer):
    """Peeks at the request line to pick the api handler or the static site."""

    def __init__(self, address, public_dir: str):
        self.static_handler = functools.partial(StaticSiteHandler, directory=public_dir)
        super().__init__(address, self.static_handler)

    def finish_request(self, request, client_address):
        head = request.recv(2048, socket.MSG_PEEK).decode("latin-1", errors="replace")
        parts = head.split("\r\n", 1)[0].split()
        handler_class = resolve_handler(parts[1]) if len(parts) >= 2 else None
        (handler_class or self.static_handler)(request, client_address, self)


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Run the site and API locally")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "3000")))
    parser.add_argument("--public-dir", default=os.path.join(os.getcwd(), "public"))
    args = parser.parse_args(argv)

    LoggingConfig.setup_logging()
    server = DevServer((args.host, args.port), args.public_dir)
    logger.info(f"Server running on http://{args.host}:{args.port}", public_dir=args.public_dir)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.server_close()


if __name__ == "__main__":
    main()
