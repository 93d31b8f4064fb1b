"""Placeholder substitution for markdown templates.

Each template line is scanned on its own.  A line is split into literal text
and Tag segments; unescaped tags are resolved through a help lookup and the
markdown converter, escaped tags (``\\{% ... %}``) are emitted without their
backslash.  Generated fragments are never rescanned, so tags cannot nest.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from helpmd.markdown.convert import convert_help
from helpmd.markdown.patterns import TAG_RE
from helpmd.providers.records import HelpRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Tag:
    raw_match: str
    escaped: bool
    command_name: str

    @property
    def literal_text(self) -> str:
        """Text emitted for an escaped tag: the match without its leading backslash."""
        return self.raw_match[1:]


def tokenize_line(line: str) -> list[Literal | Tag]:
    """Split a line into literal text and Tag segments, in order."""
    segments: list[Literal | Tag] = []
    pos = 0
    for match in TAG_RE.finditer(line):
        if match.start() > pos:
            segments.append(Literal(line[pos : match.start()]))
        segments.append(Tag(raw_match=match.group(0), escaped=match.group(1) is not None, command_name=match.group(2)))
        pos = match.end()
    if pos < len(line):
        segments.append(Literal(line[pos:]))
    return segments


class TemplateEngine:
    """Substitutes ``{% CommandName %}`` tags with generated help fragments.

    ``lookup`` resolves a command name to a HelpRecord and raises
    CommandNotFound or AmbiguousCommand when it cannot; those errors propagate
    unchanged so a run aborts instead of producing a partial document.
    """

    def __init__(self, lookup: Callable[[str], HelpRecord], convert: Callable[[HelpRecord], str] = convert_help):
        self._lookup = lookup
        self._convert = convert

    def resolve(self, segment: Literal | Tag) -> str:
        if isinstance(segment, Literal):
            return segment.text
        if segment.escaped:
            return segment.literal_text
        logger.debug("Resolving tag for command %s", segment.command_name)
        return self._convert(self._lookup(segment.command_name))

    def render_line(self, line: str) -> str:
        return "".join(self.resolve(segment) for segment in tokenize_line(line))

    def render(self, lines: Iterable[str]) -> list[str]:
        """Render every template line and return the output lines."""
        output = [self.render_line(line) for line in lines]
        logger.info("Rendered %d template lines", len(output))
        return output
