import logging
import os
from enum import Enum
from logging import Logger
from logging.handlers import TimedRotatingFileHandler
from typing import Dict, Optional

from utils.file_manager import FileManager

LOG_OUTPUTS = ("console", "file", "both")


class LogLevel(Enum):
    """
    Enum for log levels to improve readability and usability.

    Attributes:
        DEBUG: Debug log level.
        INFO: Info log level.
        WARNING: Warning log level.
        ERROR: Error log level.
        CRITICAL: Critical log level.
    """

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


class LevelFilter(logging.Filter):
    """
    A logging filter that only lets records of one exact level through.
    """

    def __init__(self, level: LogLevel):
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno == self.level.value


class ColorFormatter(logging.Formatter):
    """
    Colors console records by level, and the logger name by a per-logger index.
    """

    LEVEL_COLORS = {
        logging.DEBUG: "\033[94m",  # Blue
        logging.INFO: "\033[92m",  # Green
        logging.WARNING: "\033[93m",  # Yellow
        logging.ERROR: "\033[91m",  # Red
        logging.CRITICAL: "\033[91m\033[1m",  # Bold Red
    }
    RESET = "\033[0m"

    MODULE_COLORS = [
        "\033[95m",
        "\033[96m",
        "\033[93m",
        "\033[92m",
        "\033[94m",
        "\033[90m",
        "\033[36m",
        "\033[35m",
        "\033[34m",
        "\033[33m",
    ]

    def __init__(self, logger_number: int):
        """
        Args:
            logger_number (int): Unique identifier for assigning a color.
        """
        super().__init__()
        self.color = self.MODULE_COLORS[logger_number % len(self.MODULE_COLORS)]

    def format(self, record: logging.LogRecord) -> str:
        level_color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        log_fmt = (
            level_color
            + "[%(asctime)s][%(levelname)s]"
            + self.RESET
            + self.color
            + "[%(name)s]"
            + self.RESET
            + ": %(message)s"
        )
        formatter = logging.Formatter(log_fmt, datefmt="%Y-%m-%d %H:%M:%S")
        return formatter.format(record)


class LogManager:
    """
    Singleton LogManager to manage loggers for the CLI.
    """

    _instance = None

    @staticmethod
    def get_instance():
        """
        Returns the singleton instance of LogManager.
        """
        if LogManager._instance is None:
            raise RuntimeError("LogManager is not initialized. Import `log_config` first.")
        return LogManager._instance

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super(LogManager, cls).__new__(cls)
        return cls._instance

    def __init__(
        self,
        log_dir: str,
        log_file: str,
        log_retention_hours: int,
        default_level: LogLevel = LogLevel.INFO,
        use_filter: bool = False,
        log_output: str = "both",
    ):
        """
        Initializes the LogManager.

        Args:
            log_dir (str): Directory where log files are saved.
            log_file (str): Name of the log file.
            log_retention_hours (int): Hourly log files kept before rotation deletes them.
            default_level (LogLevel): Default logging level. Defaults to LogLevel.INFO.
            use_filter (bool): Whether to use level-based filtering. Defaults to False.
            log_output (str): 'console', 'file' or 'both'. Defaults to 'both'.

        Raises:
            TypeError: If the arguments have invalid types.
            ValueError: If log_output is not supported.
        """
        if hasattr(self, "_initialized") and self._initialized:
            return

        if not isinstance(log_dir, str):
            raise TypeError("log_dir must be a string")
        if not isinstance(log_file, str):
            raise TypeError("log_file must be a string")
        if not isinstance(log_retention_hours, int):
            raise TypeError("log_retention_hours must be an integer")
        if log_output not in LOG_OUTPUTS:
            raise ValueError(f"log_output must be one of {LOG_OUTPUTS}")

        self.main_name = "__main__"
        self.log_dir = log_dir
        self.log_file = log_file
        self.log_retention_hours = log_retention_hours
        self.default_level = default_level
        self.use_filter = use_filter
        self.log_output = log_output
        self.loggers: Dict[str, Logger] = {}

        if self.log_output != "console":
            FileManager.create_folder(self.log_dir)
        self._initialize_logger(self.main_name)
        self._initialized = True

    def _initialize_logger(self, name: str, module_index: int = 0):
        """
        Configures a logger with console and/or file handlers.

        Args:
            name (str): The name of the logger.
            module_index (int): Index for assigning module colors.
        """
        logger = logging.getLogger(name)

        # Disable propagation to prevent handler inheritance
        logger.propagate = False
        logger.setLevel(self.default_level.value)
        self.loggers[name] = logger

        if logger.hasHandlers():
            return

        handlers = []
        if self.log_output in ("console", "both"):
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(ColorFormatter(logger_number=module_index))
            handlers.append(console_handler)

        if self.log_output in ("file", "both"):
            log_file_path = os.path.join(self.log_dir, self.log_file)
            file_handler = TimedRotatingFileHandler(
                log_file_path,
                when="h",
                interval=1,
                backupCount=self.log_retention_hours,
                encoding="utf-8",
                delay=True,
            )
            file_handler.setFormatter(
                logging.Formatter(
                    "[%(asctime)s][%(levelname)s][%(name)s]: %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            handlers.append(file_handler)

        for handler in handlers:
            if self.use_filter:
                handler.addFilter(LevelFilter(self.default_level))
            logger.addHandler(handler)

    def get_logger(
        self,
        name: Optional[str] = None,
        module_name: Optional[str] = None,
    ) -> Logger:
        """
        Retrieves or creates a logger instance.

        Args:
            name (Optional[str]): The base name of the logger. Defaults to None, which uses the
                                  main logger name.
            module_name (Optional[str]): The name of the module for the logger. If provided,
                                         the logger will include the module name.

        Returns:
            Logger: The configured logger instance.
        """
        logger_name = name if isinstance(name, str) and name.strip() else self.main_name

        if module_name:
            logger_name = f"{logger_name}.{module_name}"

        if logger_name not in self.loggers:
            self._initialize_logger(logger_name, len(self.loggers))

        return self.loggers[logger_name]
