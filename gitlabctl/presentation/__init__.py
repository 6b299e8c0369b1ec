from gitlabctl.presentation.colors import COLOR_RULES, DriftColors, EnvironmentColors, NoColors
from gitlabctl.presentation.progress import ConsoleProgress
from gitlabctl.presentation.table import HEADERS, TableRenderer

__all__ = [
    "COLOR_RULES",
    "ConsoleProgress",
    "DriftColors",
    "EnvironmentColors",
    "HEADERS",
    "NoColors",
    "TableRenderer",
]
