"""Fetch lifecycle of one mounted view.

Independent fetches run concurrently and settle independently. Once the view
is unmounted, results that arrive late are discarded and pending fetches are
cancelled; nothing is written into the state of a view that is gone.
"""

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, TypeVar

from django.db import close_old_connections

logger = logging.getLogger(__name__)

T = TypeVar("T")

_shared_executor: ThreadPoolExecutor | None = None
_shared_lock = threading.Lock()


def _default_executor() -> ThreadPoolExecutor:
    global _shared_executor
    with _shared_lock:
        if _shared_executor is None:
            _shared_executor = ThreadPoolExecutor(
                max_workers=8, thread_name_prefix="eventhub-fetch"
            )
        return _shared_executor


def _run_loader(loader: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    # Worker threads open their own DB connections; release them per fetch.
    try:
        return loader(*args, **kwargs)
    finally:
        close_old_connections()


class ViewScope:
    """Owns the in-flight fetches of a view.

    Usage::

        with ViewScope() as scope:
            scope.fetch(events.get_event, event_id, on_result=state.set_event)
            scope.fetch(registrations.is_registered, event_id, user_id,
                        on_result=state.set_registered)
    """

    def __init__(self, executor: Executor | None = None) -> None:
        self._executor = executor or _default_executor()
        self._lock = threading.RLock()
        self._mounted = True
        self._pending: set[Future] = set()

    @property
    def mounted(self) -> bool:
        return self._mounted

    @property
    def is_loading(self) -> bool:
        with self._lock:
            return bool(self._pending)

    def fetch(
        self,
        loader: Callable[..., T],
        *args: Any,
        on_result: Callable[[T], None],
        on_error: Callable[[BaseException], None] | None = None,
        **kwargs: Any,
    ) -> Future:
        """Run ``loader`` and hand its outcome to the callbacks while mounted."""
        with self._lock:
            if not self._mounted:
                raise RuntimeError("Cannot fetch from an unmounted view")
            future = self._executor.submit(_run_loader, loader, *args, **kwargs)
            self._pending.add(future)
        future.add_done_callback(
            lambda done: self._settle(done, on_result, on_error)
        )
        return future

    def unmount(self) -> None:
        with self._lock:
            self._mounted = False
            pending = list(self._pending)
            self._pending.clear()
        for future in pending:
            future.cancel()

    def _settle(
        self,
        future: Future,
        on_result: Callable[[Any], None],
        on_error: Callable[[BaseException], None] | None,
    ) -> None:
        with self._lock:
            self._pending.discard(future)
            if not self._mounted or future.cancelled():
                logger.debug("Discarding fetch result for unmounted view")
                return
            error = future.exception()
            if error is None:
                on_result(future.result())
            elif on_error is not None:
                on_error(error)
            else:
                logger.error("Unhandled fetch error", exc_info=error)

    def __enter__(self) -> "ViewScope":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.unmount()
