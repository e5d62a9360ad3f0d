from __future__ import annotations
import itertools
import logging
import threading
from dataclasses import dataclass, field
from typing import Hashable

logger = logging.getLogger(__name__)

_ids = itertools.count(1)


class ActionInProgress(Exception):
    """Raised when the same action is started again before the first one finished."""

    def __init__(self, action: str, key: Hashable):
        super().__init__(f"{action} already in progress")
        self.action = action
        self.key = key


@dataclass(eq=False)
class ActionToken:
    action: str
    key: Hashable
    id: int = field(default_factory=lambda: next(_ids))
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def is_live(self) -> bool:
        return not self.cancelled


class InFlightRegistry:
    """
    Single-slot handle per (action, key).
    - claim() hands out a token or raises ActionInProgress
    - release() frees the slot only if the token still owns it
    - supersede() cancels the owner so its late result is discarded
    """

    def __init__(self):
        self._inflight: dict[tuple[str, Hashable], ActionToken] = {}
        self._lock = threading.Lock()

    def claim(self, action: str, key: Hashable = None) -> ActionToken:
        with self._lock:
            current = self._inflight.get((action, key))
            if current is not None and current.is_live:
                raise ActionInProgress(action, key)
            token = ActionToken(action=action, key=key)
            self._inflight[(action, key)] = token
            return token

    def release(self, token: ActionToken) -> None:
        with self._lock:
            if self._inflight.get((token.action, token.key)) is token:
                del self._inflight[(token.action, token.key)]

    def supersede(self, action: str, key: Hashable = None) -> None:
        with self._lock:
            token = self._inflight.pop((action, key), None)
        if token is not None:
            token.cancel()
            logger.debug("superseded %s for %r", action, key)

    def is_current(self, token: ActionToken) -> bool:
        with self._lock:
            return token.is_live and self._inflight.get((token.action, token.key)) is token

    def in_flight(self, action: str, key: Hashable = None) -> bool:
        with self._lock:
            token = self._inflight.get((action, key))
            return token is not None and token.is_live


# process-wide registry used by the routers
registry = InFlightRegistry()
