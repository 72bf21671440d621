"""Health and readiness endpoints served next to the Prometheus metrics."""

from __future__ import annotations

import threading
from typing import Any

from prometheus_client import make_wsgi_app
from werkzeug.serving import make_server
from werkzeug.wrappers import Response

_ready = threading.Event()


def mark_ready() -> None:
    """Report the operator as ready once startup has finished."""
    _ready.set()


def mark_not_ready() -> None:
    _ready.clear()


def is_ready() -> bool:
    return _ready.is_set()


def create_combined_wsgi_app() -> Any:
    """Create a WSGI app that combines metrics and health check endpoints.

    ``/healthz`` always answers 200 while the process is serving.
    ``/readyz`` answers 503 until :func:`mark_ready` has been called.
    Every other path is delegated to the Prometheus exposition app.

    Returns:
        Combined WSGI application
    """
    metrics_app = make_wsgi_app()

    def combined_app(environ: dict[str, Any], start_response: Any) -> list[bytes]:
        path = environ.get("PATH_INFO", "")

        if path == "/healthz":
            response = Response('{"status":"ok"}', mimetype="application/json", status=200)
            return response(environ, start_response)
        if path == "/readyz":
            if is_ready():
                response = Response('{"status":"ready"}', mimetype="application/json", status=200)
            else:
                response = Response('{"status":"starting"}', mimetype="application/json", status=503)
            return response(environ, start_response)
        return metrics_app(environ, start_response)

    return combined_app


def start_metrics_server(port: int) -> threading.Thread:
    """Serve metrics and health endpoints from a daemon thread."""
    server = make_server("", port, create_combined_wsgi_app(), threaded=True)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    return thread
