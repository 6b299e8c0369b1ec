"""Aligned, colorized rendering of the environments table."""
from typing import List, Optional, Sequence, Tuple

from rich.cells import cell_len
from rich.console import Console
from rich.text import Text

from gitlabctl.domain.entities import DisplayRow
from gitlabctl.presentation.colors import ColorRule, EnvironmentColors

HEADERS = ("PROJECT", "ENVIRONMENT", "DEPLOYMENT", "COMMIT", "UPDATED")
COLUMN_SEPARATOR = "  "
EMPTY_MESSAGE = "There is nothing to show"


def _pad(cell: str, width: int) -> str:
    return cell + " " * (width - cell_len(cell))


class TableRenderer:
    def __init__(self, color_rule: Optional[ColorRule] = None):
        self.color_rule = color_rule or EnvironmentColors()

    def column_widths(self, rows: Sequence[DisplayRow]) -> Tuple[int, ...]:
        """Widest cell per column, header included, in terminal cells."""
        widths = [cell_len(header) for header in HEADERS]
        for row in rows:
            for index, cell in enumerate(row.cells()):
                widths[index] = max(widths[index], cell_len(cell))
        return tuple(widths)

    def render(self, rows: Sequence[DisplayRow]) -> Text:
        """
        Build the table as styled text: a header line then one line per row.

        Every cell is left-aligned and padded to its column width so the
        columns line up under a monospace font. Row order is kept as given.
        """
        widths = self.column_widths(rows)
        lines: List[Text] = [self._line(HEADERS, widths, (None,) * len(HEADERS))]
        for row, styles in zip(rows, self.color_rule.styles(rows)):
            lines.append(self._line(row.cells(), widths, styles))
        return Text("\n").join(lines)

    def _line(self, cells: Sequence[str], widths: Sequence[int], styles: Sequence[Optional[str]]) -> Text:
        line = Text()
        for index, (cell, width, style) in enumerate(zip(cells, widths, styles)):
            if index:
                line.append(COLUMN_SEPARATOR)
            line.append(_pad(cell, width), style=style or "")
        return line

    def write(self, rows: Sequence[DisplayRow], console: Console) -> None:
        """Print the table, or a notice when there are no rows."""
        if not rows:
            console.print(EMPTY_MESSAGE, markup=False, highlight=False)
            return
        console.print(self.render(rows), soft_wrap=True, highlight=False)
