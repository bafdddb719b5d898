"""
HTTP front end.

Two read endpoints trigger a poll cycle on demand and return its result as
JSON; every other GET is served from the public directory.
"""

import functools
import json
import logging
import threading
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional
from urllib.parse import urlparse

from . import config
from .monitor import StockMonitor

logger = logging.getLogger(__name__)


class StockRequestHandler(SimpleHTTPRequestHandler):
    """Routes /api/stock/* to the monitor and falls back to static files."""

    routes = {
        "/api/stock/check": "check_stock_changes",
        "/api/stock/get": "get_current_stock",
    }

    def log_message(self, format, *args):
        """Override to use Python logging instead of stderr."""
        logger.info("%s - %s", self.address_string(), format % args)

    def do_GET(self):
        path = urlparse(self.path).path
        action = self.routes.get(path)
        if action is None:
            super().do_GET()
            return
        result = getattr(self.server.monitor, action)()
        self._send_json(result)

    def _send_json(self, payload: dict):
        # Always 200; failures are reported in the body's "success" field.
        body = json.dumps(payload).encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)


class StockHTTPServer:
    """Threaded HTTP server bound to one :class:`StockMonitor`."""

    def __init__(
        self,
        monitor: StockMonitor,
        host: str = config.HOST,
        port: int = config.PORT,
        public_dir: str = config.PUBLIC_DIR,
    ):
        self.monitor = monitor
        self.host = host
        self.port = port
        self.public_dir = public_dir
        self.server: Optional[ThreadingHTTPServer] = None
        self.server_thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self.server is not None

    def start(self) -> str:
        """Start serving in a daemon thread and return the base URL."""
        if self.server is not None:
            return self.base_url
        handler = functools.partial(StockRequestHandler, directory=self.public_dir)
        self.server = ThreadingHTTPServer((self.host, self.port), handler)
        self.server.daemon_threads = True
        self.server.monitor = self.monitor
        # Port 0 asks the OS for a free port; report the real one.
        self.port = self.server.server_address[1]
        self.server_thread = threading.Thread(
            target=self.server.serve_forever, name="http-server", daemon=True
        )
        self.server_thread.start()
        logger.info("Server running on port %d", self.port)
        return self.base_url

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def stop(self):
        """Stop the server."""
        if self.server is not None:
            self.server.shutdown()
            self.server.server_close()
            self.server = None
            logger.info("Server stopped")


__all__ = ["StockHTTPServer", "StockRequestHandler"]
