"""
Cancellation support for the spaloyer application.

The upload pipeline checks a CancellationToken between file visits.
``cancel_on_interrupt`` wires SIGINT and SIGTERM to that token.
"""

import logging
import signal
import threading
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)


class CancellationToken:
    """Thread-safe flag telling a running upload to stop at the next file."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@contextmanager
def cancel_on_interrupt(token: CancellationToken) -> Iterator[CancellationToken]:
    """
    Cancel ``token`` when SIGINT or SIGTERM is received.

    The previous signal handlers are restored on exit.

    Args:
        token (CancellationToken): Token to cancel

    Yields:
        CancellationToken: The same token
    """
    def handle_interrupt(signum, frame):
        logger.warning(f"Received signal {signal.Signals(signum).name}, stopping after the current file")
        token.cancel()

    previous = {
        signal.SIGINT: signal.signal(signal.SIGINT, handle_interrupt),
        signal.SIGTERM: signal.signal(signal.SIGTERM, handle_interrupt),
    }
    try:
        yield token
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)
