from gitlabctl.utils.concurrency import Outcome, fan_out
from gitlabctl.utils.humanize import humanize_delta
from gitlabctl.utils.timing import StageTimer, format_elapsed

__all__ = ["Outcome", "StageTimer", "fan_out", "format_elapsed", "humanize_delta"]
