from __future__ import annotations

"""
Logging Lifecycle.

Records are routed through a QueueHandler on the root logger to a
QueueListener thread that owns the real handlers. Configuration is
idempotent per process, and shutdown_logging() restores the root logger
to its unconfigured state.
"""

import atexit
import logging
import queue
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from vcxgen.infra.logging.config import LoggingConfig
from vcxgen.infra.logging.handlers import (
    _create_console_handler,
    _create_rotating_file_handler,
    _is_our_handler,
    _tag_handler,
)

_CONFIGURED_FLAG_ATTR: str = "_vcxgen_configured"
_QUEUE_LISTENER_ATTR: str = "_vcxgen_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Install the queue-based handlers on the root logger.

    Repeated calls are no-ops unless force is set, in which case the
    handlers installed by a previous call are replaced.

    Args:
        cfg: Logging settings for this run.
        force: Replace an existing configuration.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    root.setLevel(cfg.level_number())
    _remove_our_handlers(root)
    _stop_existing_listener(root)

    targets: List[logging.Handler] = []
    if cfg.console:
        targets.append(_create_console_handler(cfg))
    if cfg.log_file:
        file_handler = _create_rotating_file_handler(cfg)
        if file_handler is not None:
            targets.append(file_handler)

    if not targets:
        return root

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    listener = QueueListener(log_queue, *targets, respect_handler_level=True)
    listener.start()

    root.addHandler(_tag_handler(QueueHandler(log_queue)))
    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)

    # Flush pending records on interpreter shutdown
    atexit.register(_safe_stop_listener, listener)
    return root


def shutdown_logging() -> None:
    """Stop the listener and detach our handlers, flushing queued records."""
    root = logging.getLogger()
    _stop_existing_listener(root)
    _remove_our_handlers(root)
    setattr(root, _CONFIGURED_FLAG_ATTR, False)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _remove_our_handlers(root: logging.Logger) -> None:
    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
            h.close()


def _stop_existing_listener(root: logging.Logger) -> None:
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener:
        _safe_stop_listener(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """
    Stop a QueueListener, tolerating listeners that were already stopped.

    QueueListener.stop() fails once its thread has been joined, which
    happens when both an explicit shutdown and the atexit hook run.
    """
    if listener is None:
        return
    if getattr(listener, "_thread", None) is not None:
        listener.stop()
    # Handlers belong to the listener; close them once it has drained
    for handler in listener.handlers:
        handler.close()
