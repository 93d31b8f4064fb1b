"""Unit tests for the help loaders (Python modules, scripts, JSON exports)."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import json
import re
import textwrap

import pytest

from helpmd.errors import AmbiguousCommand, HelpLoadError
from helpmd.markdown.convert import convert_help
from helpmd.providers.loaders import load_help_file, load_module_file, load_script_help, load_sources

WIDGETS_MODULE = textwrap.dedent(
    '''\
    """Widget tools."""

    from os.path import join


    def get_widget(name: str, count: int = 1, force: bool = False, *tags, **options):
        """Gets a widget.

        Looks the widget up in the catalogue.

        Args:
            name: The widget name.
            force: Skip the cache.
        """


    def remove_widget(name):
        """Removes a widget."""


    def _helper():
        pass
    '''
)

BACKUP_SCRIPT = textwrap.dedent(
    '''\
    """Back up a folder to the archive.

    Copies every file and prunes old archives.

    Usage:
        python backup.py --target /srv/archive [--prune]

    Options:
        --target: Archive folder
            that receives the copy.
        --prune (flag): Delete archives older than 30 days.
    """

    raise SystemExit("scripts are never executed while reading help")
    '''
)


def write(path, text: str):
    path.write_text(text, encoding="utf-8")
    return path


# ===========================================================================
# load_module_file tests
# ===========================================================================


class TestLoadModuleFile:

    def test_public_functions_only(self, tmp_path):
        records = load_module_file(write(tmp_path / "widgets.py", WIDGETS_MODULE))
        assert [r.name for r in records] == ["get_widget", "remove_widget"]

    def test_record_contents(self, tmp_path):
        record = load_module_file(write(tmp_path / "widgets.py", WIDGETS_MODULE))[0]
        assert record.syntax == "get_widget(name: str, count: int = 1, force: bool = False, *tags, **options)"
        assert record.synopsis == "Gets a widget."
        assert record.description == "Looks the widget up in the catalogue."

    def test_parameter_types(self, tmp_path):
        record = load_module_file(write(tmp_path / "widgets.py", WIDGETS_MODULE))[0]
        assert [(p.name, p.type_name) for p in record.parameters] == [
            ("name", "str"),
            ("count", "int"),
            ("force", "SwitchParameter"),
            ("*tags", "Any"),
            ("**options", "Any"),
        ]

    def test_converted_table_keeps_documented_parameters(self, tmp_path):
        record = load_module_file(write(tmp_path / "widgets.py", WIDGETS_MODULE))[0]
        fragment = convert_help(record)
        assert "| name      | str    | The widget name. |" in fragment
        assert "| force     | Switch | Skip the cache.  |" in fragment
        assert "count" not in fragment.split("### Parameters")[1]

    def test_dunder_all_respected(self, tmp_path):
        source = '__all__ = ["_exported"]\n\ndef _exported():\n    """Exported."""\n\ndef hidden():\n    """Hidden."""\n'
        records = load_module_file(write(tmp_path / "exports.py", source))
        assert [r.name for r in records] == ["_exported"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(HelpLoadError):
            load_module_file(tmp_path / "missing.py")

    def test_import_error_wrapped(self, tmp_path):
        with pytest.raises(HelpLoadError, match="import failed"):
            load_module_file(write(tmp_path / "broken.py", "raise RuntimeError('boom')\n"))


# ===========================================================================
# load_script_help tests
# ===========================================================================


class TestLoadScriptHelp:

    def test_script_record(self, tmp_path):
        script = write(tmp_path / "backup.py", BACKUP_SCRIPT)
        record = load_script_help(script)
        assert record.name == str(script)
        assert record.syntax == "python backup.py --target /srv/archive [--prune]"
        assert record.synopsis == "Back up a folder to the archive."
        assert record.description == "Copies every file and prunes old archives."

    def test_script_parameters(self, tmp_path):
        record = load_script_help(write(tmp_path / "backup.py", BACKUP_SCRIPT))
        assert [(p.name, p.type_name) for p in record.parameters] == [("--target", "String"), ("--prune", "SwitchParameter")]
        assert record.parameters[0].description == "Archive folder\nthat receives the copy."

    def test_script_fragment_uses_base_name(self, tmp_path):
        script = write(tmp_path / "backup.py", BACKUP_SCRIPT)
        fragment = convert_help(load_script_help(script))
        assert "## backup.py\r\n" in fragment
        assert str(tmp_path) not in fragment
        assert "| --target  | String | Archive folder that receives the copy." in fragment

    def test_syntax_defaults_to_name(self, tmp_path):
        script = write(tmp_path / "tiny.py", '"""Does little."""\n')
        assert load_script_help(script, name="tiny.py").syntax == "tiny.py"

    def test_non_python_script_rejected(self, tmp_path):
        with pytest.raises(HelpLoadError):
            load_script_help(write(tmp_path / "backup.ps1", "Write-Host hi\n"))

    def test_syntax_error_wrapped(self, tmp_path):
        with pytest.raises(HelpLoadError):
            load_script_help(write(tmp_path / "bad.py", "def (:\n"))


# ===========================================================================
# load_help_file tests
# ===========================================================================


class TestLoadHelpFile:

    def test_list_of_records_with_alias(self, tmp_path):
        data = [
            {
                "name": "Get-Widget",
                "syntax": "Get-Widget [-Name] <String>",
                "synopsis": "Gets a widget.",
                "parameters": [{"name": "Name", "typeName": "String", "description": "The widget name."}],
            },
            {"name": "Remove-Widget"},
        ]
        path = tmp_path / "help.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        records = load_help_file(path)
        assert [r.name for r in records] == ["Get-Widget", "Remove-Widget"]
        assert records[0].parameters[0].type_name == "String"

    def test_single_record_object(self, tmp_path):
        path = tmp_path / "one.json"
        path.write_text(json.dumps({"name": "Solo"}), encoding="utf-8")
        assert load_help_file(path)[0].name == "Solo"

    def test_invalid_records(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"synopsis": "no name"}]), encoding="utf-8")
        with pytest.raises(HelpLoadError, match="invalid help records"):
            load_help_file(path)

    def test_invalid_json(self, tmp_path):
        path = write(tmp_path / "broken.json", "{not json")
        with pytest.raises(HelpLoadError):
            load_help_file(path)


# ===========================================================================
# load_sources tests
# ===========================================================================


class TestLoadSources:

    def test_dispatch_by_suffix(self, tmp_path):
        module = write(tmp_path / "widgets.py", WIDGETS_MODULE)
        help_file = write(tmp_path / "help.json", json.dumps([{"name": "Get-Widget"}]))
        registry = load_sources([module, help_file])
        assert registry.names() == ["Get-Widget", "get_widget", "remove_widget"]

    def test_duplicate_across_sources_is_ambiguous(self, tmp_path):
        first = write(tmp_path / "a.json", json.dumps([{"name": "Sync"}]))
        second = write(tmp_path / "b.json", json.dumps([{"name": "Sync"}]))
        registry = load_sources([first, second])
        with pytest.raises(AmbiguousCommand):
            registry.lookup("Sync")

    def test_unsupported_suffix(self, tmp_path):
        with pytest.raises(HelpLoadError, match="unsupported source type"):
            load_sources([write(tmp_path / "notes.txt", "hi")])


class TestUnionAnnotations:

    def test_union_type_escaped_in_table(self, tmp_path):
        source = 'def find(x: str | None = None):\n    """Find it.\n\n    Args:\n        x: What to find.\n    """\n'
        record = load_module_file(write(tmp_path / "finder.py", source))[0]
        assert record.parameters[0].type_name == "str | None"
        table_lines = [line for line in convert_help(record).split("\r\n") if line.startswith("|")]
        assert len({len(re.findall(r"(?<!\\)\|", line)) for line in table_lines}) == 1
        assert "str \\| None" in table_lines[2]
