"""
Interpolation cache for tuifade.

Memoizes interpolation results keyed by (background, foreground, factor) so
repeated fades of similar content skip the colour maths. Safe to share
between threads: each missing key is computed once, and concurrent callers
asking for the same key wait for that computation.
"""

import logging
import threading
from concurrent.futures import Future
from typing import Callable, Optional

from .conversions import Colour
from .interpolate import clamp_factor, interpolate_colour

logger = logging.getLogger(__name__)

Interpolator = Callable[[str, str, float], Colour]


class InterpolationCache:
    """Thread-safe compute-once cache of interpolated colours."""

    def __init__(self, compute: Interpolator = interpolate_colour, max_entries: Optional[int] = 4096):
        self._compute = compute
        self._max_entries = max_entries
        self._entries: dict[tuple[str, str, float], Future] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __call__(self, bg_hex: str, fg_hex: str, factor: float) -> Colour:
        return self.get(bg_hex, fg_hex, factor)

    def get(self, bg_hex: str, fg_hex: str, factor: float) -> Colour:
        """Return the cached interpolation, computing it on first request."""
        # Case and out-of-range factors collapse onto the same entry
        key = (
            bg_hex.lower() if isinstance(bg_hex, str) else bg_hex,
            fg_hex.lower() if isinstance(fg_hex, str) else fg_hex,
            clamp_factor(factor),
        )

        with self._lock:
            future = self._entries.get(key)
            owner = future is None
            if owner:
                if self._max_entries is not None and len(self._entries) >= self._max_entries:
                    self._entries.clear()
                future = Future()
                self._entries[key] = future
                self.misses += 1
            else:
                self.hits += 1

        if not owner:
            return future.result()

        logger.debug("interpolation cache miss: %s -> %s @ %s", *key)
        try:
            colour = self._compute(*key)
        except BaseException as e:
            # Errors are not cached; later callers retry
            with self._lock:
                if self._entries.get(key) is future:
                    del self._entries[key]
            future.set_exception(e)
            raise
        future.set_result(colour)
        return colour

    def clear(self):
        """Drop all cached entries and reset the counters."""
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0


# Global cache instance
_cache = InterpolationCache()


def get_cache() -> InterpolationCache:
    """Get the global interpolation cache."""
    return _cache


def clear_cache():
    """Clear the global interpolation cache."""
    _cache.clear()
