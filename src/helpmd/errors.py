"""Exception hierarchy for template rendering and help lookup."""


class HelpMdError(Exception):
    """Base class for failures that abort a documentation run."""


class TemplateNotFound(HelpMdError):
    def __init__(self, path):
        super().__init__(f"Template file not found or unreadable: {path}")
        self.path = path


class CommandNotFound(HelpMdError):
    def __init__(self, name: str):
        super().__init__(f"No command named '{name}' could be resolved")
        self.name = name


class AmbiguousCommand(HelpMdError):
    """More than one loaded source defines the same command name."""

    def __init__(self, name: str, sources: list[str]):
        super().__init__(f"Command '{name}' is defined by multiple sources: {', '.join(sources)}")
        self.name = name
        self.sources = sources


class HelpLoadError(HelpMdError):
    def __init__(self, path, reason: str):
        super().__init__(f"Could not load help from {path}: {reason}")
        self.path = path
        self.reason = reason


class OutputWriteFailure(HelpMdError):
    def __init__(self, path, reason: str):
        super().__init__(f"Could not write output file {path}: {reason}")
        self.path = path
        self.reason = reason


class ShapeMismatch(ValueError):
    """A table row does not have one cell per column."""
