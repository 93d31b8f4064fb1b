"""Resolve phase: look up loaded HelpRecords by command name.

Names are matched case-insensitively.  When two different sources register
the same name the lookup fails with AmbiguousCommand instead of picking one.
A name that is a path to an existing script is read on lookup without
being registered, so lookups never change the registry.
"""

import logging
from pathlib import Path
from typing import Callable

from helpmd.errors import AmbiguousCommand, CommandNotFound
from helpmd.markdown.convert import is_script_path
from helpmd.providers.records import HelpRecord

logger = logging.getLogger(__name__)

ScriptLoader = Callable[[Path, str], HelpRecord]


class CommandRegistry:
    """Command name -> HelpRecord candidates, keyed by the source they came from."""

    def __init__(self, script_loader: ScriptLoader | None = None):
        if script_loader is None:
            from helpmd.providers.loaders import load_script_help  # pylint: disable=import-outside-toplevel

            script_loader = load_script_help
        self._script_loader = script_loader
        self._commands: dict[str, dict[str, HelpRecord]] = {}

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, name: str) -> bool:
        return name.strip().casefold() in self._commands

    def add(self, record: HelpRecord, source: str) -> None:
        """Register a record; the same source re-registering a name replaces its record."""
        candidates = self._commands.setdefault(record.name.casefold(), {})
        if candidates and source not in candidates:
            logger.warning("Command %s from %s is also defined by %s", record.name, source, ", ".join(candidates))
        candidates[source] = record

    def names(self) -> list[str]:
        """Registered command names, sorted case-insensitively."""
        names = [record.name for candidates in self._commands.values() for record in candidates.values()]
        return sorted(set(names), key=str.casefold)

    def lookup(self, name: str) -> HelpRecord:
        """Return the single HelpRecord registered for ``name``.

        An unregistered name that is a path to an existing script is read from
        the script each time; the registry itself is never modified here.
        Raises CommandNotFound if nothing matches and AmbiguousCommand if more
        than one source defines the name.
        """
        name = name.strip()
        candidates = self._commands.get(name.casefold())
        if not candidates:
            if is_script_path(name) and Path(name).is_file():
                logger.info("Reading script help for %s", name)
                return self._script_loader(Path(name), name)
            raise CommandNotFound(name)
        if len(candidates) > 1:
            raise AmbiguousCommand(name, sorted(candidates))
        return next(iter(candidates.values()))
