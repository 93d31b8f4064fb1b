"""Convert a HelpRecord into a markdown documentation fragment.

Fragment layout (CRLF line endings):

    <a id="slug"></a>
    ## Display-Name
    ```
    single-line syntax
    ```

    synopsis

    ### Description
    description

    ### Parameters
    | Parameter | Type | Description |
    ...

The parameter section only appears when at least one parameter has a
non-blank description; parameters without one are left out of the table.
"""

import logging

from helpmd.config import LINE_ENDING, SCRIPT_EXTENSIONS, SWITCH_LABEL, SWITCH_TYPE_NAMES
from helpmd.markdown.patterns import LINE_BREAK_RE, NON_WORD_RUN_RE, PATH_SEPARATOR_RE
from helpmd.markdown.schema import Alignment, Column, Table
from helpmd.markdown.tables import render_table
from helpmd.providers.records import HelpRecord, ParameterInfo

logger = logging.getLogger(__name__)

PARAMETER_COLUMNS = [
    Column(name="Parameter"),
    Column(name="Type", alignment=Alignment.CENTRE),
    Column(name="Description"),
]


# ─── Names & Anchors ─────────────────────────────────────────────────────────


def is_script_path(name: str) -> bool:
    """Return True if the command name ends in a recognised script extension."""
    return name.lower().endswith(SCRIPT_EXTENSIONS)


def display_name(name: str) -> str:
    """Return the name shown in headings: a script's base name, otherwise the name unchanged."""
    if is_script_path(name):
        return PATH_SEPARATOR_RE.split(name)[-1]
    return name


def slugify(name: str) -> str:
    """Replace every run of non-word characters with a single '-' for use as an anchor id."""
    return NON_WORD_RUN_RE.sub("-", name)


# ─── Parameter Cells ─────────────────────────────────────────────────────────


def _type_label(type_name: str) -> str:
    type_name = type_name.strip()
    if type_name in SWITCH_TYPE_NAMES:
        return SWITCH_LABEL
    return type_name


def _collapse_lines(text: str) -> str:
    """Join a multi-line description into one line, trimming every line.

    Blank lines are dropped rather than joined, so paragraph breaks never
    leave double spaces in the table cell.
    """
    return " ".join(line.strip() for line in text.splitlines() if line.strip())


def _parameter_table(parameters: tuple[ParameterInfo, ...]) -> Table | None:
    """Build the parameter table, or None if no parameter has a description."""
    table = Table.build(PARAMETER_COLUMNS)
    for param in parameters:
        description = _collapse_lines(param.description)
        if not description:
            logger.debug("Skipping undocumented parameter %s", param.name)
            continue
        table = table.add_row([param.name.strip(), _type_label(param.type_name), description])
    return table if table.rows else None


# ─── Fragment ────────────────────────────────────────────────────────────────


def convert_help(record: HelpRecord) -> str:
    """Render one command's help as a markdown fragment."""
    name = display_name(record.name)
    syntax = record.syntax
    if name != record.name:
        syntax = syntax.replace(record.name, name)
    syntax = LINE_BREAK_RE.sub("", syntax).strip()

    lines = [
        f'<a id="{slugify(name)}"></a>',
        f"## {name}",
        "```",
        syntax,
        "```",
        "",
        record.synopsis.strip(),
        "",
        "### Description",
        record.description.strip(),
    ]

    table = _parameter_table(record.parameters)
    if table is not None:
        lines.extend(["", "### Parameters"])
        lines.extend(render_table(table))

    return LINE_ENDING.join(lines)
