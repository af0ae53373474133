import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

load_dotenv()


def _positive_int(name: str, default: str) -> int:
    raw_value = os.getenv(name, default)
    try:
        value = int(raw_value)
    except ValueError:
        raise ValueError(f"Invalid {name}: {raw_value}. Must be a positive integer.")
    if value <= 0:
        raise ValueError(f"Invalid {name}: {raw_value}. Must be a positive integer.")
    return value


class Config:
    """
    Configuration class for loading environment variables with validation.
    """

    # Logging settings
    LOG_DIR = os.getenv("LOG_DIR", "./logs")
    LOG_FILE = os.getenv("LOG_FILE", "continuity.log")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    if LOG_LEVEL not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise ValueError(
            f"Invalid LOG_LEVEL: {LOG_LEVEL}. Must be one of 'DEBUG', 'INFO', "
            "'WARNING', 'ERROR', 'CRITICAL'."
        )
    LOG_OUTPUT = os.getenv("LOG_OUTPUT", "both").lower()
    if LOG_OUTPUT not in {"console", "file", "both"}:
        raise ValueError(
            f"Invalid LOG_OUTPUT: {LOG_OUTPUT}. Must be one of 'console', 'file', or 'both'."
        )

    LOG_RETENTION_HOURS = _positive_int("LOG_RETENTION_HOURS", "24")

    USE_FILTER = os.getenv("USE_FILTER", "false").lower()
    if USE_FILTER not in {"true", "false"}:
        raise ValueError(f"Invalid USE_FILTER: {USE_FILTER}. Must be 'true' or 'false'.")

    # Report settings
    OUTPUT_DIR = os.getenv("OUTPUT_DIR", "output")

    # Continuity analysis settings
    CONTINUITY_TIMEZONE = os.getenv("CONTINUITY_TIMEZONE") or None
    if CONTINUITY_TIMEZONE:
        try:
            ZoneInfo(CONTINUITY_TIMEZONE)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(
                f"Invalid CONTINUITY_TIMEZONE: {CONTINUITY_TIMEZONE}. Must be an IANA timezone name."
            )

    STAGNATION_THRESHOLD_DAYS = _positive_int("STAGNATION_THRESHOLD_DAYS", "3")
    COMMUNICATION_GAP_THRESHOLD_DAYS = _positive_int("COMMUNICATION_GAP_THRESHOLD_DAYS", "5")
