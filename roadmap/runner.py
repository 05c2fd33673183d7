"""Background asyncio loop for the Flask server.

Flask handlers run on worker threads; every coroutine is submitted to
one loop in a daemon thread, so store operations stay single-threaded
and interleave only at await points.
"""

import asyncio
import concurrent.futures
import threading
from typing import Optional

from .errors import SyncError


class BackgroundLoop:
    """Event loop running in its own daemon thread."""

    def __init__(self):
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        with self._lock:
            if self.running:
                return
            self._loop = asyncio.new_event_loop()
            self._thread = threading.Thread(target=self._run, daemon=True)
            self._thread.start()

    def _run(self):
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()

    def run(self, coro, timeout: Optional[float] = None):
        """
        Run a coroutine on the loop and wait for its result.

        Raises:
            SyncError: no result within timeout seconds; the coroutine is cancelled
        """
        self.start()
        future = asyncio.run_coroutine_threadsafe(coro, self._loop)
        try:
            return future.result(timeout)
        except concurrent.futures.TimeoutError as e:
            if future.done():
                raise
            future.cancel()
            raise SyncError(f"Timed out after {timeout}s") from e

    def stop(self):
        with self._lock:
            if not self.running:
                return
            self._loop.call_soon_threadsafe(self._loop.stop)
            self._thread.join(timeout=5)
            self._loop.close()
            self._loop = None
            self._thread = None
