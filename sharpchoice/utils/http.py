"""Shared JSON request handling for the Vercel serverless functions in ``api/``."""

from http.server import BaseHTTPRequestHandler
from typing import Any, Awaitable, Callable, Optional
from urllib.parse import parse_qs, urlparse
import asyncio
import json

from sharpchoice.config import AppConfig
from sharpchoice.services.auth_gate import authenticate
from sharpchoice.utils.errors import AuthError, InvalidInputError, NotFoundError
from sharpchoice.utils.logging import correlation_context, get_structured_logger, mask_sensitive_data
from sharpchoice.utils.logging_config import LoggingConfig

LoggingConfig.setup_logging()
_logger = get_structured_logger(__name__)


def run_async(coro: Awaitable[Any]) -> Any:
    """Run a coroutine to completion from a synchronous handler."""
    try:
        loop = asyncio.get_event_loop()
        if loop.is_closed():
            raise RuntimeError("event loop is closed")
    except RuntimeError:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)

    return loop.run_until_complete(coro)


class JsonRequestHandler(BaseHTTPRequestHandler):
    """Base handler: JSON bodies, bearer auth, and error-to-status mapping."""

    user: Optional[dict] = None
    correlation_id: Optional[str] = None

    def log_message(self, format, *args):
        """Route http.server's access log through structured logging."""
        _logger.debug(mask_sensitive_data(format % args), client=self.address_string())

    @property
    def query(self) -> dict[str, str]:
        parsed = parse_qs(urlparse(self.path).query)
        return {key: values[0] for key, values in parsed.items() if values}

    @property
    def route(self) -> str:
        return urlparse(self.path).path.rstrip("/")

    def read_json(self) -> Any:
        """Parse the request body as JSON (empty body is ``{}``)."""
        try:
            content_length = int(self.headers.get('Content-Length', 0) or 0)
        except ValueError:
            content_length = -1
        if content_length < 0:
            raise InvalidInputError("Invalid Content-Length header")
        if content_length > AppConfig.MAX_BODY_BYTES:
            raise InvalidInputError("Request body too large")
        raw_body = self.rfile.read(content_length).decode('utf-8') if content_length > 0 else ""
        if not raw_body:
            return {}
        try:
            return json.loads(raw_body)
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise InvalidInputError("Request body must be valid JSON")

    def send_json(self, status: int, payload: Any) -> None:
        body = json.dumps(payload, default=str).encode('utf-8')
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Content-Length', str(len(body)))
        if self.correlation_id:
            self.send_header(LoggingConfig.LOG_CORRELATION_ID_HEADER, self.correlation_id)
        self.end_headers()
        self.wfile.write(body)

    def require_auth(self) -> dict:
        """Auth gate: resolve the bearer token and attach the user to the request."""
        self.user = run_async(authenticate(self.headers.get("Authorization")))
        return self.user

    def dispatch(self, operation: Callable[[], Any], failure_message: str, status: int = 200) -> None:
        """
        Run ``operation`` and write its return value as JSON.

        Client errors map to 400/401/404 with their own message; anything else
        is logged and answered with a 500 carrying ``failure_message``.
        """
        incoming_id = self.headers.get(LoggingConfig.LOG_CORRELATION_ID_HEADER)
        with correlation_context(incoming_id) as correlation_id:
            self.correlation_id = correlation_id
            try:
                result = operation()
            except InvalidInputError as e:
                _logger.info("Rejected invalid request", path=self.route, error=str(e))
                self.send_json(400, {"error": str(e)})
                return
            except AuthError as e:
                _logger.warning("Unauthorized request", path=self.route, error=str(e))
                self.send_json(401, {"error": str(e)})
                return
            except NotFoundError as e:
                self.send_json(404, {"error": str(e)})
                return
            except Exception as e:
                _logger.error(
                    f"{failure_message}: {mask_sensitive_data(str(e))}",
                    exc_info=True,
                    path=self.route,
                    error_type=type(e).__name__,
                )
                self.send_json(500, {"error": failure_message})
                return

            self.send_json(status, result)
