# devflow/core/revalidation.py
"""
Cache revalidation signal.
Write operations call `revalidate(path)` once they succeed; the rendering
layer subscribes listeners to learn which cached paths went stale.
"""
import datetime as dt
import inspect
import logging
from typing import Awaitable, Callable, Dict, List, Union

logger = logging.getLogger("uvicorn.error")

Listener = Callable[[str], Union[None, Awaitable[None]]]

class RevalidationChannel:
    """
    Broadcasts "this path is stale" to every subscribed listener.

    Listeners may be plain functions or coroutine functions taking the path.
    A listener that raises is logged and skipped; the remaining listeners
    still get the signal.

    Data structure:
    - _listeners: list of callables, notified in subscription order
    - _stale: path -> time of the last revalidation
    """
    def __init__(self):
        self._listeners: List[Listener] = []
        self._stale: Dict[str, dt.datetime] = {}

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def revalidate(self, path: str) -> None:
        """
        Mark a path as stale and notify all listeners.

        Args:
            path: Rendered path whose cached output is no longer valid (e.g. "/question/12")
        """
        self._stale[path] = dt.datetime.now(dt.timezone.utc)
        for listener in list(self._listeners):
            try:
                result = listener(path)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("[revalidate] listener %r failed for path=%s", listener, path)

    def last_revalidated(self, path: str) -> dt.datetime | None:
        """Time of the last revalidation of `path`, None if never revalidated."""
        return self._stale.get(path)

    @property
    def stale_paths(self) -> list[str]:
        return list(self._stale)
