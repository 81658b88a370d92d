import logging
import os
import time
from functools import wraps

LOGGER_ROOT = "press_sync"
_TRACE_LOGGER = logging.getLogger(f"{LOGGER_ROOT}.trace")


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under ``press_sync``."""
    return logging.getLogger(f"{LOGGER_ROOT}.{name}")


def configure_logger(level: int = logging.WARNING) -> None:
    """
    Attach a console handler to the ``press_sync`` logger tree and set its level.

    The CLI calls this once per command: WARNING by default, DEBUG with
    ``--verbose`` so remote paths and stage timings show up. Library callers
    that configure logging themselves never need it. Repeated calls only
    change the level.
    """
    logger = logging.getLogger(LOGGER_ROOT)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level)


def trace_enabled() -> bool:
    """True when ``PRESS_SYNC_TRACE`` is set to anything but an off value."""
    val = os.getenv("PRESS_SYNC_TRACE", "0")
    return str(val).lower() not in {"", "0", "false", "no", "off"}


def trace_stage(func):
    """Log entry, exit and duration of a validation stage.

    Used on the reader and validator stage methods. The record names the
    owning validator or reader when the first argument has a ``name`` or
    ``kind``; a stage that raises is logged as failed and the error propagates.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        if not trace_enabled():
            return func(*args, **kwargs)

        owner = args[0] if args else None
        subject = getattr(owner, "name", None) or getattr(getattr(owner, "kind", None), "name", None)
        stage = f"{func.__qualname__}[{subject}]" if subject else func.__qualname__
        _TRACE_LOGGER.debug("Entering %s", stage)
        started = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as exc:
            _TRACE_LOGGER.debug("Failed %s after %.3fs: %s", stage, time.perf_counter() - started, exc)
            raise
        _TRACE_LOGGER.debug("Exiting %s after %.3fs", stage, time.perf_counter() - started)
        return result

    return wrapper
