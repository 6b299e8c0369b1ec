from rich.console import Console

from gitlabctl.utils import format_elapsed

_MESSAGE_WIDTH = 30


class ConsoleProgress:
    """Prints one aligned ``message [elapsed]`` line per completed stage."""

    def __init__(self, console: Console):
        self.console = console

    def stage_completed(self, message: str, elapsed: float) -> None:
        self.console.print(
            f"{message:<{_MESSAGE_WIDTH}} [{format_elapsed(elapsed)}]",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
