"""Interrupt/quit signal listener"""

import logging
import queue
import signal
import threading
from typing import Callable, Dict, Iterable, Optional

logger = logging.getLogger(__name__)

DEFAULT_SIGNALS = (signal.SIGINT, signal.SIGQUIT)


class SignalListener:
    """Invoke a callback once per received interrupt or quit signal.

    OS handlers only enqueue the signal number; ``listen`` drains the queue
    and runs the callback until ``stop`` is called. ``deliver`` enqueues a
    signal directly, which is how tests simulate delivery.
    """

    def __init__(self, signals: Iterable[int] = DEFAULT_SIGNALS, poll_interval: float = 0.2):
        self.signals = tuple(signals)
        self.poll_interval = poll_interval
        self._queue: "queue.Queue[int]" = queue.Queue()
        self._stopped = threading.Event()
        self._previous: Dict[int, object] = {}
        self._thread: Optional[threading.Thread] = None

    def install(self) -> 'SignalListener':
        """Register OS handlers; must be called from the main thread"""
        for signum in self.signals:
            self._previous[signum] = signal.signal(signum, self._handle)
        return self

    def restore(self):
        for signum, handler in self._previous.items():
            signal.signal(signum, handler)
        self._previous.clear()

    def _handle(self, signum, frame):
        self._queue.put(signum)

    def deliver(self, signum: int):
        self._queue.put(signum)

    def stop(self):
        self._stopped.set()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    def listen(self, callback: Callable[[int], None]):
        """Block, running callback for each signal until stopped"""
        while not self._stopped.is_set():
            try:
                signum = self._queue.get(timeout=self.poll_interval)
            except queue.Empty:
                continue
            logger.info(f"Received signal {signal.Signals(signum).name}")
            callback(signum)

    def start(self, callback: Callable[[int], None]) -> threading.Thread:
        """Run listen on a daemon thread"""
        self._thread = threading.Thread(target=self.listen, args=(callback,), name="signal-listener", daemon=True)
        self._thread.start()
        return self._thread

    def join(self, timeout: Optional[float] = None):
        if self._thread is not None:
            self._thread.join(timeout)

    def __enter__(self):
        return self.install()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        self.restore()
