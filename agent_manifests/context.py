"""Tracing of nested asset resolution."""

import contextvars
from contextlib import contextmanager
import logging
from time import perf_counter
from typing import Generator


_LOGGER = logging.getLogger(__name__)

# No public API
__all__: list[str] = []


resolving: contextvars.ContextVar[tuple[str, ...]] = contextvars.ContextVar(
    "resolving"
)


@contextmanager
def trace_asset(name: str) -> Generator[None, None, None]:
    """Log entry and exit of an asset along with the assets that need it."""
    chain = resolving.get(()) + (name,)
    token = resolving.set(chain)
    label = " > ".join(chain)
    start = perf_counter()
    _LOGGER.debug("[Trace] > %s", label)
    try:
        yield
    finally:
        resolving.reset(token)
        _LOGGER.debug("[Trace] < %s (%0.2fs)", label, perf_counter() - start)
