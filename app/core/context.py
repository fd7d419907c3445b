import threading

from app.core.exceptions import RequestCancelled


class RequestContext:
    """
    Per-request cancellation signal shared between the event loop and the
    worker thread running the handler.
    """

    def __init__(self) -> None:
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def raise_if_cancelled(self) -> None:
        if self._cancelled.is_set():
            raise RequestCancelled("request was cancelled")
