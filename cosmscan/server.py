"""The HTTP API server."""

import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import urlsplit

from cosmscan import handlers
from cosmscan.api_responses import ResponseBuilder
from cosmscan.db import Database
from cosmscan.router import Request, Router, route
from cosmscan.storage import PersistenceStorage

log = logging.getLogger(__name__)


class ApiServer:
    """Serves indexed chain data over HTTP as JSON."""

    def __init__(self, config, storage=None):
        self.config = config
        self.storage = storage
        self.resp_builder = ResponseBuilder(config.server.allowed_host)
        self._router = self.router()

    def router(self):
        """The routes of the API."""
        router = Router()
        router.get("/api/chains/all", handlers.all_chains)
        router.get("/api/block/latest_block/:chain_id", handlers.latest_block)
        router.get("/api/block/list/:chain_id", handlers.block_list)
        router.get("/api/block/:chain_id/:block_height", handlers.get_block)
        router.get("/api/tx/:tx_hash", handlers.transaction_by_hash)
        router.get(
            "/api/tx/list/:chain_id/at/:block_height",
            handlers.transaction_list_in_block,
        )
        return router

    def dispatch(self, method, target):
        """Answer one request; any failure becomes a 500 response."""
        parts = urlsplit(target)
        request = Request(method.upper(), parts.path or "/", parts.query)
        try:
            return route(request, self._router, self.storage, self.resp_builder)
        except Exception as exc:
            log.error("Internal Server Error: %s", exc)
            return self.resp_builder.internal_error()

    def run(self):
        """Connect to the database and serve until interrupted."""
        if self.storage is None:
            self.storage = PersistenceStorage(Database(self.config.db))
        api = self

        class _Handler(BaseHTTPRequestHandler):
            def _serve(self):
                resp = api.dispatch(self.command, self.path)
                body = resp.body.encode("utf-8")
                self.send_response(resp.status)
                for name, value in resp.headers.items():
                    self.send_header(name, value)
                self.send_header("Content-Length", str(len(body)))
                self.end_headers()
                if self.command != "HEAD":
                    self.wfile.write(body)

            do_GET = do_POST = do_PUT = do_DELETE = _serve
            do_PATCH = do_HEAD = do_OPTIONS = _serve

            def log_message(self, format, *args):
                log.debug("%s - %s", self.address_string(), format % args)

        server = self.config.server
        httpd = ThreadingHTTPServer((server.host, server.port), _Handler)
        log.info("Server listening on http://%s:%s", server.host, server.port)
        try:
            httpd.serve_forever()
        finally:
            httpd.server_close()