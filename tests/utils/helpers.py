"""Test helper functions."""

import json
from io import BytesIO
from typing import Any, Dict, Optional


class MockSocket:
    """Socket stand-in: feeds a raw request to the handler and captures the response."""

    def __init__(self, raw_request: bytes):
        self.raw_request = raw_request
        self.sent = BytesIO()

    def makefile(self, *args, **kwargs):
        return BytesIO(self.raw_request)

    def sendall(self, data):
        self.sent.write(data)

    def close(self):
        pass


def build_raw_request(
    method: str,
    path: str,
    body: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> bytes:
    """Serialize an HTTP/1.0 request with an optional JSON body."""
    if body is None:
        payload = b""
    elif isinstance(body, bytes):
        payload = body
    elif isinstance(body, str):
        payload = body.encode("utf-8")
    else:
        payload = json.dumps(body).encode("utf-8")

    lines = [f"{method} {path} HTTP/1.0"]
    all_headers = {"Host": "localhost"}
    if payload:
        all_headers["Content-Type"] = "application/json"
        all_headers["Content-Length"] = str(len(payload))
    all_headers.update(headers or {})
    lines.extend(f"{key}: {value}" for key, value in all_headers.items())
    return ("\r\n".join(lines) + "\r\n\r\n").encode("utf-8") + payload


def call_handler(
    handler_class,
    method: str,
    path: str,
    body: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """Drive a BaseHTTPRequestHandler subclass end to end and parse its response."""
    sock = MockSocket(build_raw_request(method, path, body, headers))
    handler_class(sock, ("127.0.0.1", 8000), None)

    raw = sock.sent.getvalue().decode("utf-8")
    head, _, response_body = raw.partition("\r\n\r\n")
    status_line, *header_lines = head.split("\r\n")
    response_headers = {}
    for line in header_lines:
        key, _, value = line.partition(":")
        response_headers[key.strip()] = value.strip()

    return {
        "statusCode": int(status_line.split()[1]),
        "headers": response_headers,
        "body": response_body,
        "json": json.loads(response_body) if response_body else None,
    }


def auth_headers(token: str = "valid-token") -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
