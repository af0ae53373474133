from log_config import log_manager
from utils.error.base_custom_error import BaseCustomError

logger = log_manager.get_logger("ErrorManager")


def handle_generic_exception(exception: Exception, context_message: str, metadata: dict | None = None):
    """Logs an exception with context and re-raises it wrapped in a BaseCustomError.

    :param exception: The exception raised.
    :param context_message: Custom message providing context for the error.
    :param metadata: Additional metadata (optional) for debugging purposes.
    :raises BaseCustomError: Always, chained to the original exception.
    """
    metadata = metadata or {}
    metadata_info = f" | Metadata: {metadata}" if metadata else ""
    logger.error(
        f"An error occurred: {context_message}{metadata_info} - {exception}",
        exc_info=True,
    )
    raise BaseCustomError(context_message, **metadata) from exception
