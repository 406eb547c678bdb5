"""Deferred queue — strict FIFO re-submission of requests that could not be admitted.

``drain`` stops at the first failed attempt: a blocked request blocks
everything behind it for that pass.  Nothing is skipped or reordered.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable

from ev_station.models.records import DeferredBookingRequest
from ev_station.models.results import AdmissionResult

logger = logging.getLogger(__name__)


class DeferredQueue:
    def __init__(self) -> None:
        self._items: deque[DeferredBookingRequest] = deque()

    def __len__(self) -> int:
        return len(self._items)

    def enqueue(self, request: DeferredBookingRequest) -> None:
        self._items.append(request)

    def pending(self) -> list[DeferredBookingRequest]:
        return list(self._items)

    def drain(
        self, admit: Callable[[DeferredBookingRequest], AdmissionResult],
    ) -> list[AdmissionResult]:
        """Re-attempt queued requests front to back until one is rejected.

        The rejected request stays at the front.  Returns every attempt made.
        """
        results: list[AdmissionResult] = []
        while self._items:
            result = admit(self._items[0])
            results.append(result)
            if not result.admitted:
                logger.info(
                    "Queue drain stopped: %s (%d request(s) still queued)",
                    result.reason.value if result.reason else "rejected", len(self._items),
                )
                break
            self._items.popleft()
        return results
