# tests/conftest.py
import os
import logging
import pytest

from hinge.core import log
from hinge.core import metrics
from hinge.core.metrics import start_exporter, stop_exporter


@pytest.fixture(scope="session", autouse=True)
def _bootstrap_logging_and_metrics():
    # LOG_LEVEL / LOG_JSON / .env are honoured here
    log.setup()

    interval = float(os.getenv("METRICS_INTERVAL_TEST", "1.0"))
    start_exporter(interval_sec=interval,
                   logger=logging.getLogger("hinge.metrics"))
    yield
    stop_exporter()


@pytest.fixture
def fresh_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def calls():
    """Recorder usable as a handler: stores (resource, args) and returns 'handled'."""
    seen = []

    def handler(resource, *args):
        seen.append((resource, args))
        return "handled"

    handler.seen = seen
    return handler
