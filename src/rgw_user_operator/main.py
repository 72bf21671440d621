"""Main entry point for the RGW User Operator."""

from __future__ import annotations

import logging
import os
from typing import Any

import kopf

from . import handlers  # noqa: F401
from . import health
from . import logging as structured_logging
from .tracing import initialize_tracing

logger = logging.getLogger(__name__)


@kopf.on.startup()
def configure(settings: kopf.OperatorSettings, **_: Any) -> None:
    """Configure the operator."""
    structured_logging.setup_structured_logging()
    initialize_tracing()

    # Annotations keep kopf's bookkeeping out of the status we report
    settings.persistence.progress_storage = kopf.AnnotationsProgressStorage()
    settings.persistence.diffbase_storage = kopf.AnnotationsDiffBaseStorage()

    settings.posting.level = logging.INFO
    settings.networking.request_timeout = float(os.getenv("K8S_REQUEST_TIMEOUT_SECONDS", "30"))
    settings.execution.max_workers = int(os.getenv("MAX_WORKERS", "4"))

    metrics_port = int(os.getenv("METRICS_PORT", "8080"))
    health.start_metrics_server(metrics_port)
    health.mark_ready()
    logger.info(f"Operator configured, metrics and health endpoints on port {metrics_port}")


@kopf.on.cleanup()
def shutdown(**_: Any) -> None:
    """Stop reporting ready while the operator shuts down."""
    health.mark_not_ready()
