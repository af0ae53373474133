import sys
import textwrap

import pytest

from utils.command.command_manager import CommandDiscoveryError, CommandManager, DuplicateCommandError

COMMAND_TEMPLATE = """
from utils.command.base_command import BaseCommand


class {class_name}(BaseCommand):
    @staticmethod
    def get_name():
        return "{command_name}"

    @staticmethod
    def get_arguments(parser):
        parser.add_argument("--input")

    @staticmethod
    def main(args):
        return "{class_name}"
"""


@pytest.fixture
def plugin_root(tmp_path, monkeypatch):
    """A ``reporting_plugins`` package with a ``reports`` domain on sys.path."""
    package = tmp_path / "reporting_plugins"
    domain = package / "reports"
    domain.mkdir(parents=True)
    (package / "__init__.py").write_text("")
    (domain / "__init__.py").write_text("")
    monkeypatch.syspath_prepend(str(tmp_path))
    yield package
    for name in [name for name in sys.modules if name.split(".")[0] == "reporting_plugins"]:
        del sys.modules[name]


def write_command(domain, module_name, class_name, command_name):
    source = COMMAND_TEMPLATE.format(class_name=class_name, command_name=command_name)
    (domain / f"{module_name}.py").write_text(textwrap.dedent(source))


def test_duplicate_command_keeps_first_registration(plugin_root):
    domain = plugin_root / "reports"
    write_command(domain, "alpha_command", "AlphaExport", "export")
    write_command(domain, "beta_command", "BetaExport", "export")
    manager = CommandManager(str(plugin_root), package="reporting_plugins")

    manager.load_commands()

    assert list(manager.hierarchy["reports"]) == ["export"]
    assert manager.hierarchy["reports"]["export"]["class"].__name__ == "AlphaExport"


def test_duplicate_command_error_names_domain(plugin_root):
    write_command(plugin_root / "reports", "alpha_command", "AlphaExport", "export")
    manager = CommandManager(str(plugin_root), package="reporting_plugins")
    manager.load_commands()
    command = manager.hierarchy["reports"]["export"]["class"]

    with pytest.raises(DuplicateCommandError) as error:
        manager._add_to_hierarchy(command)

    assert error.value.metadata["domain_path"] == ["reports"]
    assert "already registered under 'reports'" in str(error.value)


def test_broken_module_is_skipped(plugin_root):
    domain = plugin_root / "reports"
    (domain / "broken_command.py").write_text("raise RuntimeError('missing dependency')\n")
    write_command(domain, "summary_command", "SummaryCommand", "summary")
    manager = CommandManager(str(plugin_root), package="reporting_plugins")

    manager.load_commands()
    args = manager.build_parser().parse_args(["reports", "summary", "--input", "export.json"])

    assert list(manager.hierarchy["reports"]) == ["summary"]
    assert args.func(args) == "SummaryCommand"


def test_import_failure_carries_module_path(plugin_root):
    (plugin_root / "reports" / "broken_command.py").write_text("import not_a_real_module\n")
    manager = CommandManager(str(plugin_root), package="reporting_plugins")

    with pytest.raises(CommandDiscoveryError) as error:
        manager._import_module(str(plugin_root / "reports"), "broken_command")

    assert error.value.metadata["module_path"] == ".reports.broken_command"
    assert isinstance(error.value.metadata["original_error"], ModuleNotFoundError)
