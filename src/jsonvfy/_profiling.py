"""
Opt-in hot path profiling for the lexer.

Enabled by setting ``JSONVFY_PROFILE`` in the environment before import.
Disabled, every helper here is a no-op. Statistics are shared by all
threads and updated under a lock.
"""

import os
import threading
import time
from dataclasses import dataclass
from dataclasses import replace
from typing import Any

PROFILE_HOT_PATHS = __debug__ and "JSONVFY_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Statistics for one scanning function."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    bytes_scanned: int = 0

    def record_call(self, duration_ns: int, nbytes: int = 0) -> None:
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.bytes_scanned += nbytes

    @property
    def mean_time_ns(self) -> float:
        return self.total_time_ns / self.call_count if self.call_count else 0.0


if PROFILE_HOT_PATHS:
    _hot_path_stats: dict[str, HotPathStats] = {}
    _stats_lock = threading.Lock()

    class ProfileContext:
        """
        Times one call of a scanning function.

        The scanner reports how many bytes it consumed through ``scanned``
        once it knows, since token lengths are not known up front.
        """

        def __init__(self, func_name: str) -> None:
            self.func_name = func_name
            self.nbytes = 0
            self.start_time = 0

        def scanned(self, nbytes: int) -> None:
            self.nbytes = nbytes

        def __enter__(self) -> "ProfileContext":
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            with _stats_lock:
                stats = _hot_path_stats.get(self.func_name)
                if stats is None:
                    stats = _hot_path_stats[self.func_name] = HotPathStats(
                        self.func_name
                    )
                stats.record_call(duration, self.nbytes)

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        """Returns a snapshot of the collected statistics."""
        with _stats_lock:
            return {
                name: replace(stats)
                for name, stats in _hot_path_stats.items()
            }

    def clear_hot_path_stats() -> None:
        with _stats_lock:
            _hot_path_stats.clear()

else:
    # No-op stand-in so call sites need no branching
    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, func_name: str) -> None:
            pass

        def scanned(self, nbytes: int) -> None:
            pass

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return {}

    def clear_hot_path_stats() -> None:
        pass
