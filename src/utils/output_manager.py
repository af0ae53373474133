import os
from datetime import datetime
from typing import Dict, Optional

from config import Config
from utils.data.json_manager import JSONManager
from utils.file_manager import FileManager


class OutputManager:
    _output_dir = Config.OUTPUT_DIR

    @staticmethod
    def get_output_path(sub_dir: str, file_name: str, extension: str = "json") -> str:
        """
        Constructs a standardized file path within the output directory,
        ensuring the subdirectory exists.

        Args:
            sub_dir (str): The subdirectory within the main output folder (e.g., 'issue-continuity').
            file_name (str): The base name of the file, without timestamp or extension.
            extension (str): The file extension (default: 'json').

        Returns:
            str: The full, standardized path to the output file.
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        full_file_name = f"{file_name}_{timestamp}.{extension}"

        target_dir = os.path.join(OutputManager._output_dir, sub_dir)
        FileManager.create_folder(target_dir)

        return os.path.join(target_dir, full_file_name)

    @staticmethod
    def save_json_report(data: Dict, sub_dir: str, file_basename: str, output_path: Optional[str] = None) -> str:
        """
        Saves a dictionary as a JSON report.

        Args:
            data (Dict): The dictionary data to save.
            sub_dir (str): The subdirectory for the report.
            file_basename (str): The base name for the file.
            output_path (Optional[str]): Optional custom full path to save the file.

        Returns:
            str: The path where the file was saved.
        """
        path = output_path or OutputManager.get_output_path(sub_dir, file_basename, "json")
        FileManager.create_folder(os.path.dirname(path) or ".")

        JSONManager.write_json(data, path)
        return path

    @staticmethod
    def save_markdown_report(
        content: str,
        sub_dir: str,
        file_basename: str,
        output_path: Optional[str] = None,
    ) -> str:
        """
        Saves a string as a Markdown report.

        Args:
            content (str): The Markdown content to save.
            sub_dir (str): The subdirectory for the report.
            file_basename (str): The base name for the file.
            output_path (Optional[str]): Optional custom full path to save the file.

        Returns:
            str: The path where the file was saved.
        """
        path = output_path or OutputManager.get_output_path(sub_dir, file_basename, "md")
        FileManager.create_folder(os.path.dirname(path) or ".")

        FileManager.write_file(path, content)
        return path
