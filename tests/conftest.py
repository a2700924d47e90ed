"""Shared fixtures: isolate ambient context and structlog configuration."""
from __future__ import annotations

from typing import Any, Iterator

import pytest
import structlog
from structlog.testing import LogCapture

from guard4j.kernel.security import SecurityContext
from guard4j.observability.context import RequestContextHolder


@pytest.fixture(autouse=True)
def _clean_ambient_context() -> Iterator[None]:
    structlog.contextvars.clear_contextvars()
    SecurityContext.clear()
    RequestContextHolder.clear()
    yield
    structlog.contextvars.clear_contextvars()
    SecurityContext.clear()
    RequestContextHolder.clear()


@pytest.fixture
def captured_logs() -> Iterator[list[dict[str, Any]]]:
    """Log entries as seen by the backend, with the diagnostic context merged in."""
    capture = LogCapture()
    structlog.configure(
        processors=[structlog.contextvars.merge_contextvars, capture],
        cache_logger_on_first_use=False,
    )
    yield capture.entries
    structlog.reset_defaults()
