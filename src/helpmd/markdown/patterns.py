"""Compiled regex patterns for template scanning and markdown generation."""

import re

# ─── Template Patterns ────────────────────────────────────────────────────────

# Placeholder such as "{% Get-Widget %}", optionally escaped as "\{% ... %}".
# Group 1 is the escape backslash, group 2 the command name without surrounding whitespace.
TAG_RE = re.compile(r"(\\)?\{%\s*(.*?)\s*%\}")


# ─── Fragment Patterns ────────────────────────────────────────────────────────

# Maximal run of characters that are not allowed in an anchor slug
NON_WORD_RUN_RE = re.compile(r"\W+")

# Any line-break character (syntax lines are collapsed onto one line)
LINE_BREAK_RE = re.compile(r"[\r\n]+")

# Path separators of either platform, used to take a script's base name
PATH_SEPARATOR_RE = re.compile(r"[\\/]")
