"""
Progress tracker — periodic status lines while files are indexed.

A daemon thread wakes up every ``interval`` seconds and reports how many
files were processed so far. The traversal thread advances the shared
counter; the timer thread only reads it.
"""

import threading
import time

import structlog

from ..logging.human import HumanLog

logger = structlog.get_logger()

DEFAULT_INTERVAL_SECONDS = 10.0


class AtomicCounter:
    """Integer counter safe to increment and read from several threads."""

    def __init__(self, value: int = 0) -> None:
        self._value = value
        self._lock = threading.Lock()

    def increment(self, delta: int = 1) -> int:
        """Add ``delta`` and return the new value."""
        with self._lock:
            self._value += delta
            return self._value

    def get(self) -> int:
        with self._lock:
            return self._value

    def __repr__(self) -> str:
        return f"AtomicCounter({self.get()})"


class ProgressTracker:
    """Reports indexing progress at a fixed interval.

    Usage:
        tracker = ProgressTracker(interval=10)
        tracker.start("Indexing files...")
        tracker.advance(last_path="src/main.py")
        tracker.stop("12 files indexed")

    stop() emits its message exactly once; later calls do nothing.
    """

    def __init__(
        self,
        interval: float = DEFAULT_INTERVAL_SECONDS,
        description: str = "Report about progress of file indexation",
        log=None,
    ) -> None:
        self.interval = interval
        self.description = description
        self.processed = AtomicCounter()
        self.started_at: float | None = None
        self._log = log or logger.bind(component="progress")
        self._hlog = HumanLog(self._log)
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._last_path: str | None = None
        self._stopped = False

    @property
    def running(self) -> bool:
        return self._thread is not None and not self._stopped

    def start(self, message: str) -> None:
        """Log ``message`` and start the timer thread."""
        if self._thread is not None:
            raise RuntimeError("Progress tracker already started")
        self.started_at = time.monotonic()
        self._hlog.progress_start(message)
        self._thread = threading.Thread(
            target=self._run,
            name=self.description,
            daemon=True,
        )
        self._thread.start()

    def advance(self, last_path: str | None = None) -> int:
        """Count one more processed file and return the new total."""
        if last_path is not None:
            self._last_path = last_path
        return self.processed.increment()

    def stop(self, message: str | None = None) -> None:
        """Stop the timer and log the final ``message``.

        Args:
            message: Final line. None stops silently (failed runs).
        """
        if self._stopped:
            return
        self._stopped = True
        self._stop_event.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()
        elapsed = time.monotonic() - self.started_at if self.started_at is not None else 0.0
        self._log.debug(
            "progress.stopped",
            processed=self.processed.get(),
            elapsed_s=round(elapsed, 3),
        )
        if message is not None:
            self._hlog.progress_stop(message)

    def _run(self) -> None:
        # Event.wait returns True once stop() was called
        while not self._stop_event.wait(self.interval):
            self._hlog.progress_tick(self.processed.get(), self._last_path)

    def __enter__(self) -> "ProgressTracker":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.stop()
        return False
