"""In-memory statistics counters."""

import threading
from collections import Counter


class InMemoryStatistics:
    """Thread safe named counters."""

    def __init__(self):
        self._counts: Counter[str] = Counter()
        self._lock = threading.Lock()

    def increment(self, statistic: str, amount: int = 1) -> None:
        with self._lock:
            self._counts[statistic] += amount

    def get(self, statistic: str) -> int:
        with self._lock:
            return self._counts[statistic]

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return dict(self._counts)
