from typing import Protocol


class ProgressSink(Protocol):
    """Receives one line per completed pipeline stage."""

    def stage_completed(self, message: str, elapsed: float) -> None:
        ...


class NullProgress:
    def stage_completed(self, message: str, elapsed: float) -> None:
        pass
