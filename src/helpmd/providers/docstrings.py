"""Google-style docstring parsing.

Splits a docstring into its leading prose and named sections ("Args:",
"Usage:", "Returns:", ...).  The first prose paragraph is the summary, the
remaining prose is the long description, and entries of the "Args:" (or
"Arguments:"/"Options:") section become parameter descriptions:

    Args:
        name: The widget name.  Continuation lines are indented
            further and joined onto the entry.
        --reset (flag): Wipe existing data first.
"""

import inspect
import re
from dataclasses import dataclass, field

# Section header on a line of its own, e.g. "Args:" or "Usage:"
SECTION_HEADER_RE = re.compile(
    r"^(Args|Arguments|Parameters|Options|Returns|Yields|Raises|Usage|Examples?|Notes?|See Also):\s*$",
    re.IGNORECASE,
)

# One parameter entry: "name: text", "name (type): text", "--flag: text"
PARAM_ENTRY_RE = re.compile(r"^(-{0,2}[\w-]+)\s*(?:\(([^)]*)\))?\s*:\s*(.*)$")

PARAMETER_SECTIONS = ("args", "arguments", "parameters", "options")


@dataclass(frozen=True)
class ParamDoc:
    name: str
    type_name: str
    description: str


@dataclass
class ParsedDocstring:
    summary: str = ""
    description: str = ""
    params: dict[str, ParamDoc] = field(default_factory=dict)
    sections: dict[str, list[str]] = field(default_factory=dict)

    def section_text(self, name: str) -> str:
        """Return the dedented body of a section ('' if absent)."""
        return inspect.cleandoc("\n".join(self.sections.get(name.lower(), [])))


def _split_paragraphs(lines: list[str]) -> list[str]:
    text = "\n".join(lines).strip()
    if not text:
        return []
    return [para.strip() for para in re.split(r"\n\s*\n", text) if para.strip()]


def _parse_params(lines: list[str]) -> dict[str, ParamDoc]:
    """Parse parameter entries; deeper-indented lines continue the previous entry."""
    params: dict[str, ParamDoc] = {}
    entry_indent = None
    current: list[str] | None = None  # [name, type, description]

    def _flush():
        if current is not None:
            params[current[0]] = ParamDoc(name=current[0], type_name=current[1], description=current[2].strip())

    for line in lines:
        if not line.strip():
            continue
        indent = len(line) - len(line.lstrip())
        match = PARAM_ENTRY_RE.match(line.strip())
        if match and (entry_indent is None or indent <= entry_indent):
            _flush()
            entry_indent = indent
            current = [match.group(1), (match.group(2) or "").strip(), match.group(3)]
        elif current is not None:
            current[2] += "\n" + line.strip()
    _flush()
    return params


def parse_docstring(docstring: str | None) -> ParsedDocstring:
    """Parse a (possibly indented) docstring into summary, description, parameters and sections."""
    if not docstring:
        return ParsedDocstring()

    prose: list[str] = []
    sections: dict[str, list[str]] = {}
    current_section = None
    for line in inspect.cleandoc(docstring).splitlines():
        header = SECTION_HEADER_RE.match(line.strip())
        # Section headers are only recognised at the left margin
        if header and not line[:1].isspace():
            current_section = header.group(1).lower()
            sections.setdefault(current_section, [])
            continue
        if current_section is None:
            prose.append(line)
        else:
            sections[current_section].append(line)

    paragraphs = _split_paragraphs(prose)
    params: dict[str, ParamDoc] = {}
    for name in PARAMETER_SECTIONS:
        if name in sections:
            params.update(_parse_params(sections[name]))

    return ParsedDocstring(
        summary=paragraphs[0] if paragraphs else "",
        description="\n\n".join(paragraphs[1:]),
        params=params,
        sections=sections,
    )
