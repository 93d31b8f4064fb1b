"""Load phase: turn Python modules, scripts and JSON help exports into HelpRecords.

Three sources are supported:
  - a Python module file, imported by path; each public function becomes a
    command documented from its signature and Google-style docstring
  - a Python script, read without executing it; the module docstring
    documents the script and the record is named by the script path
  - a JSON help export (a list of HelpRecord objects), for help produced
    by any other help system

Everything loaded is registered in a CommandRegistry; lookups after the load
phase never import or read anything except on-demand script help.
"""

import ast
import importlib.util
import inspect
import json
import logging
import re
import sys
from pathlib import Path
from types import FunctionType, ModuleType

from pydantic import TypeAdapter, ValidationError

from helpmd.config import SWITCH_TYPE_NAMES
from helpmd.errors import HelpLoadError
from helpmd.providers.docstrings import parse_docstring
from helpmd.providers.records import HelpRecord, ParameterInfo
from helpmd.providers.registry import CommandRegistry

logger = logging.getLogger(__name__)

# External type name reported for boolean flags (bool parameters defaulting to False)
FLAG_TYPE_NAME = SWITCH_TYPE_NAMES[0]

_HELP_RECORDS = TypeAdapter(list[HelpRecord])


# ---------------------------------------------------------------------------
# Python functions
# ---------------------------------------------------------------------------


def _annotation_name(annotation) -> str:
    """Readable type name for a parameter annotation ('Any' if unannotated)."""
    if annotation is inspect.Parameter.empty:
        return "Any"
    if isinstance(annotation, str):
        return annotation
    if isinstance(annotation, type):
        return annotation.__name__
    return str(annotation).replace("typing.", "")


def _is_flag(param: inspect.Parameter) -> bool:
    return param.annotation in (bool, "bool") and param.default is False


def _param_display_name(param: inspect.Parameter) -> str:
    if param.kind is inspect.Parameter.VAR_POSITIONAL:
        return f"*{param.name}"
    if param.kind is inspect.Parameter.VAR_KEYWORD:
        return f"**{param.name}"
    return param.name


def function_record(func: FunctionType) -> HelpRecord:
    """Build a HelpRecord from a function's signature and docstring."""
    signature = inspect.signature(func)
    doc = parse_docstring(inspect.getdoc(func))

    parameters = []
    for param in signature.parameters.values():
        param_doc = doc.params.get(param.name)
        parameters.append(
            ParameterInfo(
                name=_param_display_name(param),
                type_name=FLAG_TYPE_NAME if _is_flag(param) else _annotation_name(param.annotation),
                description=param_doc.description if param_doc else "",
            )
        )

    return HelpRecord(
        name=func.__name__,
        syntax=f"{func.__name__}{signature}",
        synopsis=doc.summary,
        description=doc.description,
        parameters=tuple(parameters),
    )


def public_functions(module: ModuleType) -> list[FunctionType]:
    """Functions defined in ``module`` that are public (honours ``__all__``), in definition order."""
    exported = getattr(module, "__all__", None)
    functions = []
    for name, value in vars(module).items():
        if not inspect.isfunction(value) or value.__module__ != module.__name__:
            continue
        if exported is not None:
            if name not in exported:
                continue
        elif name.startswith("_"):
            continue
        functions.append(value)
    return functions


def _import_file(path: Path) -> ModuleType:
    """Import a Python file by path under a name unique to that path."""
    module_name = "_helpmd_" + re.sub(r"\W", "_", str(path.resolve()))
    module_dir = str(path.resolve().parent)
    if module_dir not in sys.path:
        sys.path.insert(0, module_dir)
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise HelpLoadError(path, "not an importable Python file")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        del sys.modules[module_name]
        raise HelpLoadError(path, f"import failed: {exc}") from exc
    return module


def load_module_file(path: Path) -> list[HelpRecord]:
    """Import a Python module file and document each of its public functions."""
    if not path.is_file():
        raise HelpLoadError(path, "file does not exist")
    module = _import_file(path)
    records = [function_record(func) for func in public_functions(module)]
    logger.info("Loaded %d commands from module %s", len(records), path)
    return records


# ---------------------------------------------------------------------------
# Python scripts
# ---------------------------------------------------------------------------


def load_script_help(path: Path, name: str | None = None) -> HelpRecord:
    """Document a Python script from its module docstring, without running it.

    The record is named ``name`` (default: the path as given).  The first
    line of a "Usage:" section becomes the syntax; entries of an "Args:" or
    "Options:" section become parameters, with ``(flag)`` marking a switch.
    """
    name = name or str(path)
    if path.suffix.lower() != ".py":
        raise HelpLoadError(path, f"help can only be read from Python scripts, not '{path.suffix}' files")
    try:
        source = path.read_text(encoding="utf-8")
        docstring = ast.get_docstring(ast.parse(source, filename=str(path)))
    except (OSError, SyntaxError, UnicodeDecodeError) as exc:
        raise HelpLoadError(path, str(exc)) from exc

    doc = parse_docstring(docstring)
    usage_lines = [line.strip() for line in doc.section_text("usage").splitlines() if line.strip()]
    parameters = tuple(
        ParameterInfo(
            name=param.name,
            type_name=FLAG_TYPE_NAME if param.type_name.lower() == "flag" else (param.type_name or "String"),
            description=param.description,
        )
        for param in doc.params.values()
    )

    logger.debug("Read script help for %s (%d parameters)", name, len(parameters))
    return HelpRecord(
        name=name,
        syntax=usage_lines[0] if usage_lines else name,
        synopsis=doc.summary,
        description=doc.description,
        parameters=parameters,
    )


# ---------------------------------------------------------------------------
# JSON help exports
# ---------------------------------------------------------------------------


def load_help_file(path: Path) -> list[HelpRecord]:
    """Read HelpRecords from a JSON file holding one record or a list of records."""
    try:
        with open(path, "r", encoding="utf-8") as fopen:
            data = json.load(fopen)
    except (OSError, json.JSONDecodeError) as exc:
        raise HelpLoadError(path, str(exc)) from exc

    if isinstance(data, dict):
        data = [data]
    try:
        records = _HELP_RECORDS.validate_python(data)
    except ValidationError as exc:
        raise HelpLoadError(path, f"invalid help records: {exc}") from exc

    logger.info("Loaded %d commands from help file %s", len(records), path)
    return records


# ---------------------------------------------------------------------------
# Load phase entry point
# ---------------------------------------------------------------------------


def load_sources(paths: list[Path], registry: CommandRegistry | None = None) -> CommandRegistry:
    """Load every source into a registry (a new one unless given) and return it."""
    registry = registry if registry is not None else CommandRegistry()
    for path in paths:
        suffix = path.suffix.lower()
        if suffix == ".json":
            records = load_help_file(path)
        elif suffix == ".py":
            records = load_module_file(path)
        else:
            raise HelpLoadError(path, f"unsupported source type '{path.suffix}' (expected .py or .json)")
        for record in records:
            registry.add(record, source=str(path))
    return registry
