"""Future/callback dual dispatch.

Every operation returns a ``concurrent.futures.Future``. A caller that prefers
callbacks passes ``cb(error, result)``, which is registered on that same
future, so both paths observe one outcome and the callback runs exactly once.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import CancelledError, Future
from typing import Any, Optional

__all__ = ["Callback", "attach_callback", "resolved", "rejected"]

logger = logging.getLogger(__name__)

Callback = Callable[[Optional[BaseException], Any], None]


def attach_callback(future: Future, cb: Callback | None) -> Future:
    """Register ``cb`` on ``future`` and return the future unchanged."""
    if cb is None:
        return future

    def _deliver(done: Future) -> None:
        if done.cancelled():
            error: BaseException | None = CancelledError()
        else:
            error = done.exception()
        try:
            if error is not None:
                cb(error, None)
            else:
                cb(None, done.result())
        except Exception:
            #the future already holds the outcome, a broken callback must not change it
            logger.exception("Completion callback %r raised", cb)

    future.add_done_callback(_deliver)
    return future


def resolved(value: Any, cb: Callback | None = None) -> Future:
    """Return an already-fulfilled future."""
    future: Future = Future()
    future.set_result(value)
    return attach_callback(future, cb)


def rejected(error: BaseException, cb: Callback | None = None) -> Future:
    """Return an already-failed future."""
    future: Future = Future()
    future.set_exception(error)
    return attach_callback(future, cb)
