import json
import os
from typing import Any

from filelock import FileLock


class JSONManager:
    """
    JSON file operations for issue exports and continuity reports.

    Example Usage:
        >>> JSONManager.read_json("missing.json", default={})
        {}

        >>> JSONManager.write_json({"key": "value"}, "report.json")
        True
    """

    @staticmethod
    def read_json(file_path: str, default: Any = None) -> Any:
        """
        Reads and returns content from a JSON file. Returns a default value if file does not exist.

        Args:
            file_path (str): Path to the JSON file.
            default (Any): Value to return if the file is not found. Defaults to None.

        Returns:
            Any: Parsed content of the JSON file or the default value.

        Raises:
            FileNotFoundError: If the file is missing and no default is given.
            json.JSONDecodeError: If the file is not valid JSON.
        """
        if not os.path.exists(file_path):
            if default is not None:
                return default
            raise FileNotFoundError(f"JSON file not found: {file_path}")
        with open(file_path, "r", encoding="utf-8") as file:
            return json.load(file)

    @staticmethod
    def write_json(data: Any, file_path: str) -> bool:
        """
        Writes data to a JSON file. Creates a backup of the file if it already exists.

        Args:
            data (Any): Data to be written in JSON format.
            file_path (str): Path to save the JSON file.

        Returns:
            bool: True if the operation is successful.
        """
        lock = FileLock(f"{file_path}.lock")
        with lock:
            if os.path.exists(file_path):
                backup_path = f"{file_path}.bak"
                os.replace(file_path, backup_path)
            with open(file_path, "w", encoding="utf-8") as file:
                json.dump(data, file, indent=4, ensure_ascii=False)
        return True
