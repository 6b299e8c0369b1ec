import time
from typing import Optional


def format_elapsed(seconds: float) -> str:
    """Short duration such as ``412.07ms`` or ``3.18s``."""
    if seconds < 1:
        return f"{seconds * 1000:.2f}ms"
    return f"{seconds:.2f}s"


class StageTimer:
    """Wall-clock timer for one pipeline stage."""

    def __init__(self):
        self._started: Optional[float] = None
        self._stopped: Optional[float] = None

    def __enter__(self) -> "StageTimer":
        self._started = time.perf_counter()
        self._stopped = None
        return self

    def __exit__(self, *exc_info) -> None:
        self._stopped = time.perf_counter()

    @property
    def elapsed(self) -> float:
        if self._started is None:
            return 0.0
        end = self._stopped if self._stopped is not None else time.perf_counter()
        return end - self._started
