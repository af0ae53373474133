import os

from log_config import log_manager
from utils.command.command_manager import CommandManager
from utils.error.error_manager import handle_generic_exception

logger = log_manager.get_logger("CLI")


def main():
    """Entry point for the CLI application. Loads commands dynamically and executes
    the requested command.
    """
    command_manager = CommandManager(os.path.join(os.path.dirname(__file__), "domains"))
    command_manager.load_commands()
    parser = command_manager.build_parser()

    args = parser.parse_args()

    # No command given: show general help
    if not hasattr(args, "func") or args.func is None:
        parser.print_help()
        return

    try:
        args.func(args)
    except Exception as e:
        handle_generic_exception(e, "An error occurred during execution.")


if __name__ == "__main__":
    main()
