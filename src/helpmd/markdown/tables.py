"""GFM pipe-table rendering for Table models.

Every column is padded to its widest cell (header included), measured in
code points after escaping.  Cell text is always left-justified; alignment
only changes the colon markers in the delimiter row, and the markdown
renderer does the rest.
"""

from helpmd.markdown.schema import Alignment, Column, Table

# Narrowest delimiter cell that still holds the alignment markers plus one dash
_MIN_WIDTH = {
    Alignment.LEFT: 2,
    Alignment.RIGHT: 2,
    Alignment.CENTRE: 3,
}


def escape_cell(text: str) -> str:
    """Escape pipes so cell text (e.g. a ``str | None`` type) stays inside its cell."""
    return text.replace("|", "\\|")


def column_widths(table: Table) -> list[int]:
    """Return the rendered width of each column."""
    widths = []
    for i, column in enumerate(table.columns):
        width = max([len(escape_cell(column.name))] + [len(escape_cell(row[i])) for row in table.rows])
        widths.append(max(width, _MIN_WIDTH[column.alignment]))
    return widths


def _delimiter_cell(column: Column, width: int) -> str:
    """Dash run of ``width`` with colons at the edges the alignment asks for."""
    if column.alignment is Alignment.LEFT:
        return ":" + "-" * (width - 1)
    if column.alignment is Alignment.RIGHT:
        return "-" * (width - 1) + ":"
    return ":" + "-" * (width - 2) + ":"


def _render_row(cells: tuple[str, ...] | list[str], widths: list[int]) -> str:
    return "| " + " | ".join(escape_cell(cell).ljust(width) for cell, width in zip(cells, widths)) + " |"


def render_table(table: Table) -> list[str]:
    """Render a table as GFM lines: header, delimiter, then one line per row."""
    widths = column_widths(table)
    lines = [_render_row([column.name for column in table.columns], widths)]
    lines.append("| " + " | ".join(_delimiter_cell(column, width) for column, width in zip(table.columns, widths)) + " |")
    for row in table.rows:
        lines.append(_render_row(row, widths))
    return lines
