from abc import ABC, abstractmethod
from argparse import ArgumentParser, Namespace, _SubParsersAction


class BaseCommand(ABC):
    """Abstract base class for CLI commands discovered under ``domains``."""

    @staticmethod
    @abstractmethod
    def get_name() -> str:
        """Returns the name used to invoke the command.

        Returns:
            str: The name of the command.
        """
        pass

    @staticmethod
    def get_description() -> str:
        return "No description provided."

    @staticmethod
    def get_help() -> str:
        return "No help available."

    @classmethod
    def register_command(cls, subparsers: _SubParsersAction) -> ArgumentParser:
        """Registers the command in the given subparsers and wires ``main`` as its handler.

        Args:
            subparsers (_SubParsersAction): The subparsers of the command's domain.

        Returns:
            ArgumentParser: The parser created for the command.
        """
        parser = subparsers.add_parser(
            cls.get_name(),
            description=cls.get_description(),
            help=cls.get_help(),
        )
        cls.get_arguments(parser)
        parser.set_defaults(func=cls.main)
        return parser

    @staticmethod
    @abstractmethod
    def get_arguments(parser: ArgumentParser):
        """Adds arguments to the parser.

        Args:
            parser (ArgumentParser): The parser to which arguments are added.
        """
        pass

    @staticmethod
    @abstractmethod
    def main(args: Namespace):
        """Executes the main logic of the command.

        Args:
            args (Namespace): Parsed arguments from the CLI.
        """
        pass
