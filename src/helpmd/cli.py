"""Generate markdown command documentation from a placeholder template.

Every ``{% CommandName %}`` in the template is replaced by that command's
help rendered as markdown; ``\\{% ... %}`` is kept as literal text.

Usage:
    helpmd docs/commands.template.md -o docs/commands.md -m tools/widgets.py
    helpmd docs/commands.template.md -m help/exported.json          # JSON help export
    helpmd docs/commands.template.md -m tools/widgets.py --verbose  # print to stdout
"""

import argparse
import logging
import sys
from pathlib import Path

from helpmd.config import LINE_ENDING, LOG_LEVEL, OUTPUT_ENCODING
from helpmd.errors import HelpMdError, OutputWriteFailure, TemplateNotFound
from helpmd.markdown.template import TemplateEngine
from helpmd.providers.loaders import load_sources

logger = logging.getLogger(__name__)


def read_template(path: Path) -> list[str]:
    """Read the template as a list of lines without line endings.

    Lines are split on LF (with a trailing CR dropped) only, so form feeds and
    Unicode line separators inside a line stay where they are.
    """
    try:
        with open(path, "r", encoding="utf-8-sig", newline="") as fopen:
            text = fopen.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise TemplateNotFound(path) from exc
    if text.endswith("\n"):
        text = text[:-1]
    if not text:
        return []
    return [line.removesuffix("\r") for line in text.split("\n")]


def write_output(lines: list[str], path: Path | None) -> None:
    """Write lines with CRLF endings to ``path`` (UTF-8, no BOM), or to stdout if no path is given."""
    content = "".join(line + LINE_ENDING for line in lines).encode(OUTPUT_ENCODING)
    if path is None:
        # Raw UTF-8 bytes, no locale encoding or newline translation
        sys.stdout.flush()
        sys.stdout.buffer.write(content)
        sys.stdout.buffer.flush()
        return
    try:
        with open(path, "wb") as fopen:
            fopen.write(content)
    except OSError as exc:
        raise OutputWriteFailure(path, str(exc)) from exc
    logger.info("Wrote %d lines to %s", len(lines), path)


def generate(template: Path, output: Path | None = None, modules: list[Path] | None = None) -> None:
    """Load help sources, render the template, and write the document.

    The whole document is rendered before anything is written, so a failed
    lookup never leaves a partial output file behind.
    """
    lines = read_template(template)
    registry = load_sources(modules or [])
    logger.info("Registered %d commands from %d sources", len(registry), len(modules or []))
    engine = TemplateEngine(registry.lookup)
    write_output(engine.render(lines), output)


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run the generator, and return the process exit status."""
    parser = argparse.ArgumentParser(description="Fill {% Command %} placeholders in a markdown template with command help")
    parser.add_argument("template", type=Path, help="Template file containing {% CommandName %} placeholders")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Output markdown file (default: standard output)")
    parser.add_argument(
        "-m",
        "--module",
        dest="modules",
        type=Path,
        action="append",
        default=[],
        help="Python module (.py) or JSON help export (.json) to load before resolving commands; repeatable",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    # Log to stderr so the document can go to stdout
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        generate(args.template, args.output, args.modules)
    except HelpMdError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
