# utils/dispatcher.py
"""
File: dispatcher.py
Description:
  Single-owner work queue for the controller.
  GPIO callbacks and timers run on their own threads; they only post work
  here. The main thread drains the queue, so session state is only ever
  touched from one place.
"""

import logging
import queue
import threading

logger = logging.getLogger("dispatcher")


class EventDispatcher:
    def __init__(self):
        self._queue = queue.Queue()
        self._stop = threading.Event()

    def post(self, fn, *args):
        self._queue.put((fn, args))

    def call_later(self, delay, fn, *args):
        timer = threading.Timer(delay, self.post, args=(fn,) + args)
        timer.daemon = True
        timer.start()
        return timer

    def run_pending(self, timeout=None):
        """Run one queued item. Returns False if nothing arrived in time."""
        try:
            fn, args = self._queue.get(timeout=timeout)
        except queue.Empty:
            return False

        try:
            fn(*args)
        except Exception:
            logger.exception(f"[DISPATCH] {getattr(fn, '__name__', fn)} failed")
        return True

    def run_forever(self, poll_interval=0.5):
        while not self._stop.is_set():
            self.run_pending(timeout=poll_interval)

    def stop(self):
        self._stop.set()
