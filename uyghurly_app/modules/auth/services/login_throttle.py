"""In-process counter of failed password logins, keyed by email."""
import threading
import time


class LoginThrottle:
    def __init__(self, max_failures=5, window_seconds=900, clock=time.monotonic):
        self.max_failures = max_failures
        self.window_seconds = window_seconds
        self.clock = clock
        self._failures = {}
        self._lock = threading.Lock()

    def _recent(self, key):
        cutoff = self.clock() - self.window_seconds
        stamps = [t for t in self._failures.get(key, []) if t > cutoff]
        if stamps:
            self._failures[key] = stamps
        else:
            self._failures.pop(key, None)
        return stamps

    def is_blocked(self, key):
        with self._lock:
            return len(self._recent(key)) >= self.max_failures

    def _sweep(self):
        for key in list(self._failures):
            self._recent(key)

    def record_failure(self, key):
        with self._lock:
            self._sweep()
            self._failures[key] = self._failures.get(key, []) + [self.clock()]

    def __len__(self):
        with self._lock:
            return len(self._failures)

    def reset(self, key):
        with self._lock:
            self._failures.pop(key, None)
