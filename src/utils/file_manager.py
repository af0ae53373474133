import os
from typing import List, Optional


class FileManager:
    """
    General file management operations used by the loggers and report writers.
    """

    @staticmethod
    def write_file(file_path: str, content: str) -> None:
        """
        Writes content to a file.

        Args:
            file_path (str): Path to the file.
            content (str): The content to write to the file.
        """
        with open(file_path, "w", encoding="utf-8") as file:
            file.write(content)

    @staticmethod
    def create_folder(folder_path: str, exist_ok: bool = True) -> None:
        """
        Creates a folder.

        Args:
            folder_path (str): Path of the folder to create.
            exist_ok (bool): If True, suppresses errors if the folder exists.

        Raises:
            OSError: If the folder cannot be created.
        """
        os.makedirs(folder_path, exist_ok=exist_ok)

    @staticmethod
    def validate_file(file_path: str, allowed_extensions: Optional[List[str]] = None) -> None:
        """
        Validates file existence and extension.

        Args:
            file_path (str): Path to the file.
            allowed_extensions (Optional[List[str]]): Valid extensions.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file extension is invalid.
        """
        if not os.path.isfile(file_path):
            raise FileNotFoundError(f"File not found: {file_path}")
        if allowed_extensions:
            _, ext = os.path.splitext(file_path)
            if ext.lower() not in allowed_extensions:
                raise ValueError(f"Invalid file extension: {ext}. Allowed: {allowed_extensions}")

    @staticmethod
    def is_folder(path: str) -> bool:
        return os.path.isdir(path)

    @staticmethod
    def get_file_name(file_name: str) -> str:
        """
        Extracts the base name of a file without its extension.

        Args:
            file_name (str): Name or path of the file.

        Returns:
            str: File name without directory or extension.
        """
        return os.path.splitext(os.path.basename(file_name))[0]
