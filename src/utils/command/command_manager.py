import importlib
import inspect
import os
import pkgutil
from argparse import ArgumentParser, _SubParsersAction
from types import ModuleType

from utils.command.base_command import BaseCommand
from utils.error.base_custom_error import BaseCustomError
from utils.file_manager import FileManager
from utils.logging.logging_manager import LogManager


class CommandManagerError(BaseCustomError):
    """Raised when commands under the domains package cannot be discovered or wired."""


class CommandDiscoveryError(CommandManagerError):
    """A domain module failed to import, or a command class in it could not be read."""

    def __init__(self, module_path: str, error: Exception):
        super().__init__(
            f"Skipping '{module_path}': {error}",
            module_path=module_path,
            original_error=error,
        )


class DuplicateCommandError(CommandManagerError):
    """Two commands claim the same name under the same domain path."""

    def __init__(self, command_name: str, domain_path: list[str], duplicate: type):
        super().__init__(
            f"Command '{command_name}' is already registered under '{' '.join(domain_path) or '<root>'}'",
            command_name=command_name,
            domain_path=domain_path,
            duplicate=f"{duplicate.__module__}.{duplicate.__name__}",
        )


class CommandManager:
    """Discovers BaseCommand subclasses under a package and builds the CLI parser tree.

    A command defined in ``domains/jira/issue_continuity_command.py`` is exposed
    as ``jira <command-name>``: every package between ``domains`` and the module
    becomes a subparser level.
    """

    _logger = LogManager.get_instance().get_logger("CommandManager")

    def __init__(self, base_path: str, package: str = "domains"):
        self.base_path = os.path.abspath(base_path)
        self.package = package
        self.hierarchy: dict[str, dict] = {}

    def load_commands(self) -> None:
        """Dynamically loads all commands inheriting BaseCommand and builds the hierarchy."""
        self._logger.debug(f"Starting to load commands from base path: {self.base_path}")

        for root, _, _ in os.walk(self.base_path):
            if not self.is_package(root):
                self._logger.debug(f"Skipping non-package directory: {root}")
                continue

            for _, module_name, is_package in pkgutil.iter_modules([root]):
                if is_package:
                    # Subpackages are visited by os.walk
                    continue
                try:
                    module = self._import_module(root, module_name)
                    self._process_module(module)
                except CommandManagerError as e:
                    self._logger.error(str(e), exc_info=True)

        self._logger.debug("Finished loading commands.")

    def _module_path_from_root(self, root: str, module_name: str) -> str:
        """Constructs the module path relative to the base package.

        Args:
            root (str): Current directory being processed.
            module_name (str): Name of the module.

        Returns:
            str: Relative module path for importlib (e.g. '.jira.issue_continuity_command').
        """
        relative_path = os.path.relpath(root, self.base_path)
        if relative_path == ".":
            return f".{module_name}"
        package_path = relative_path.replace(os.sep, ".")
        return f".{package_path}.{module_name}"

    def _import_module(self, root: str, module_name: str) -> ModuleType:
        relative_path = self._module_path_from_root(root, module_name)
        self._logger.debug(f"Importing module {relative_path}")
        try:
            return importlib.import_module(relative_path, package=self.package)
        except Exception as e:
            raise CommandDiscoveryError(module_path=relative_path, error=e) from e

    def _process_module(self, module: ModuleType) -> None:
        """Registers the BaseCommand subclasses defined in a module."""
        for name, obj in inspect.getmembers(module, inspect.isclass):
            if obj.__module__ != module.__name__:
                continue
            if not issubclass(obj, BaseCommand) or obj is BaseCommand:
                continue
            if inspect.isabstract(obj):
                self._logger.debug(f"Command {name} does not implement {sorted(obj.__abstractmethods__)}; skipped.")
                continue

            self._logger.debug(f"Found command class: {name}")
            self._add_to_hierarchy(obj)

    def _add_to_hierarchy(self, command: type[BaseCommand]) -> None:
        """Adds a command class to the hierarchy based on its package path."""
        try:
            name_parts = command.__module__.split(".")[1:-1]
            command_name = command.get_name()

            current_level = self.hierarchy
            for part in name_parts:
                current_level = current_level.setdefault(part, {})
        except Exception as e:
            raise CommandDiscoveryError(module_path=command.__module__, error=e) from e

        if command_name in current_level:
            raise DuplicateCommandError(command_name, name_parts, command)

        current_level[command_name] = {
            "name": command_name,
            "description": command.get_description(),
            "help": command.get_help(),
            "class": command,
        }
        self._logger.debug(f"Command {command_name} added successfully.")

    def build_parser(self) -> ArgumentParser:
        """Builds the ArgumentParser hierarchy from the loaded command structure."""
        self._logger.debug("Building argument parser hierarchy")
        try:
            parser = ArgumentParser(
                prog="continuity",
                description="Issue continuity toolkit - communication and momentum health for JIRA issues",
            )
            subparsers = parser.add_subparsers(dest="domain", help="Available domains")

            for domain_name, substructure in self.hierarchy.items():
                self._add_subparser(subparsers, domain_name, substructure)

            return parser
        except Exception as e:
            raise CommandManagerError("Failed to build argument parser hierarchy", error=e) from e

    def _add_subparser(self, subparsers: _SubParsersAction, name: str, substructure: dict) -> None:
        """Recursively adds subparsers for domains, subdomains, and commands."""
        if "class" in substructure:
            self._logger.debug(f"Registering command: {substructure['name']}")
            substructure["class"].register_command(subparsers)
            return

        parser = subparsers.add_parser(name, help=f"{name} commands")
        parser_subparsers = parser.add_subparsers(dest=f"{name}_command", help=f"{name} subcommands")
        for key, value in substructure.items():
            self._add_subparser(parser_subparsers, key, value)

    @staticmethod
    def is_package(path: str) -> bool:
        return FileManager.is_folder(path) and os.path.isfile(os.path.join(path, "__init__.py"))
