"""Progress reporting shared between extraction workers"""

import threading
import time

from .console import display_progress, IS_INTERACTIVE


class ProgressSink:
    """Receives byte counts from extraction workers. The default does nothing."""

    def begin(self, name: str, total: int):
        pass

    def update(self, name: str, nbytes: int):
        pass

    def end(self, name: str):
        pass


class ProgressTracker(ProgressSink):
    """Thread-safe per-partition byte counters"""

    def __init__(self):
        self._lock = threading.Lock()
        self._totals = {}
        self._done = {}

    def begin(self, name: str, total: int):
        with self._lock:
            self._totals[name] = total
            self._done[name] = 0

    def update(self, name: str, nbytes: int):
        with self._lock:
            self._done[name] = self._done.get(name, 0) + nbytes

    def snapshot(self) -> tuple[int, int]:
        """(bytes written, bytes expected) over all partitions seen so far"""
        with self._lock:
            return sum(self._done.values()), sum(self._totals.values())


class ProgressDisplay(threading.Thread):
    """Background thread rendering a ProgressTracker until stopped"""

    def __init__(self, tracker: ProgressTracker, total: int, interval: float = 0.2):
        super().__init__(daemon=True)
        self.tracker = tracker
        self.total = total
        self.interval = interval
        self._stop_event = threading.Event()

    def run(self):
        last_percent_reported = -10.0
        while not self._stop_event.wait(self.interval):
            written, _ = self.tracker.snapshot()
            last_percent_reported = display_progress(
                min(written, self.total), self.total, last_percent_reported)

        written, _ = self.tracker.snapshot()
        display_progress(min(written, self.total), self.total, last_percent_reported)
        if IS_INTERACTIVE:
            print()  # New line after progress bar

    def stop(self):
        self._stop_event.set()
        self.join()

    def __enter__(self) -> 'ProgressDisplay':
        self.start()
        return self

    def __exit__(self, *exc):
        self.stop()
