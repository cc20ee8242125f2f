"""Local HTTP server exposing the wallpaper image endpoint."""

from __future__ import annotations

from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import urlsplit

from lifecal_core import AppConfig, handle_render
from lifecal_core.logging_setup import get_logger

RENDER_PATHS = ("/api/render", "/render")


def make_handler(config: AppConfig) -> type[BaseHTTPRequestHandler]:
    logger = get_logger("server")

    class RenderHandler(BaseHTTPRequestHandler):
        server_version = "LifeCal/0.1"

        def do_GET(self) -> None:  # noqa: N802
            url = urlsplit(self.path)
            if url.path.rstrip("/") not in RENDER_PATHS:
                self._send(404, {"Content-Type": "text/plain; charset=utf-8"}, b"Not found")
                return
            response = handle_render(url.query, config=config)
            self._send(response.status, response.headers, response.body)

        def _send(self, status: int, headers: dict[str, str], body: bytes) -> None:
            self.send_response(status)
            for name, value in headers.items():
                self.send_header(name, value)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, format: str, *args) -> None:  # noqa: A002
            logger.info(f"{self.address_string()} {format % args}", extra={"event": "http_request"})

    return RenderHandler


def create_server(config: AppConfig, host: str | None = None, port: int | None = None) -> ThreadingHTTPServer:
    address = (host or config.server.host, config.server.port if port is None else port)
    return ThreadingHTTPServer(address, make_handler(config))


def serve(config: AppConfig, host: str | None = None, port: int | None = None) -> int:
    logger = get_logger("server")
    server = create_server(config, host, port)
    bound_host, bound_port = server.server_address[:2]
    logger.info(f"serving on http://{bound_host}:{bound_port}/api/render", extra={"event": "server_started"})
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("server interrupted", extra={"event": "server_stopped"})
    finally:
        server.server_close()
    return 0
