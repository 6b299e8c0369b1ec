"""
Color rules for the environments table.

A rule maps the final rows to one style per cell (``None`` for plain
text). Rules only decide styles; whether styles reach the terminal is up
to the rich ``Console`` doing the printing.
"""
from collections import defaultdict
from fnmatch import fnmatchcase
from typing import Dict, List, Optional, Protocol, Sequence, Set, Tuple

from gitlabctl.domain.entities import DisplayRow

CellStyles = Tuple[Optional[str], ...]

COLUMN_COUNT = 5
ENVIRONMENT_COLUMN = 1

# First matching group wins; patterns are matched case-insensitively
DEFAULT_ENVIRONMENT_PALETTE: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("preprod*", "stag*", "qa*", "uat*", "stable*"), "yellow"),
    (("prod*", "live*", "prd*"), "bold red"),
    (("dev*", "master", "main", "review/*", "test*"), "green"),
)


class ColorRule(Protocol):
    def styles(self, rows: Sequence[DisplayRow]) -> List[CellStyles]:
        ...


class NoColors:
    def styles(self, rows: Sequence[DisplayRow]) -> List[CellStyles]:
        return [(None,) * COLUMN_COUNT for _ in rows]


class EnvironmentColors:
    """Colors the environment cell by matching its name against a palette."""

    def __init__(self, palette: Tuple[Tuple[Tuple[str, ...], str], ...] = DEFAULT_ENVIRONMENT_PALETTE):
        self.palette = palette

    def style_for(self, environment: str) -> Optional[str]:
        name = environment.lower()
        for patterns, style in self.palette:
            if any(fnmatchcase(name, pattern) for pattern in patterns):
                return style
        return None

    def styles(self, rows: Sequence[DisplayRow]) -> List[CellStyles]:
        result = []
        for row in rows:
            cells: List[Optional[str]] = [None] * COLUMN_COUNT
            cells[ENVIRONMENT_COLUMN] = self.style_for(row.environment)
            result.append(tuple(cells))
        return result


class DriftColors:
    """Whole rows green when all deployed environments of the project run one commit, red otherwise."""

    def __init__(self, in_sync: str = "green", drifted: str = "red"):
        self.in_sync = in_sync
        self.drifted = drifted

    def styles(self, rows: Sequence[DisplayRow]) -> List[CellStyles]:
        commits: Dict[str, Set[str]] = defaultdict(set)
        for row in rows:
            if row.commit:
                commits[row.project].add(row.commit)

        result = []
        for row in rows:
            style = self.in_sync if len(commits[row.project]) <= 1 else self.drifted
            result.append((style,) * COLUMN_COUNT)
        return result


COLOR_RULES = {
    "environment": EnvironmentColors,
    "drift": DriftColors,
    "none": NoColors,
}
