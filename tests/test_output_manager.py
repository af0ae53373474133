import os
import re

from config import Config
from utils.data.json_manager import JSONManager
from utils.output_manager import OutputManager


def test_output_path_is_timestamped_under_configured_dir():
    path = OutputManager.get_output_path("issue-continuity", "issue_continuity_export", "md")

    assert os.path.dirname(path) == os.path.join(Config.OUTPUT_DIR, "issue-continuity")
    assert os.path.isdir(os.path.dirname(path))
    assert re.fullmatch(r"issue_continuity_export_\d{8}_\d{6}\.md", os.path.basename(path))


def test_json_report_defaults_to_output_dir():
    path = OutputManager.save_json_report({"issues": []}, "issue-continuity", "batch")

    assert path.startswith(os.path.join(Config.OUTPUT_DIR, "issue-continuity"))
    assert JSONManager.read_json(path) == {"issues": []}


def test_custom_path_creates_parent_folders(tmp_path):
    output_file = str(tmp_path / "nested" / "report.md")

    path = OutputManager.save_markdown_report("# Report\n", "issue-continuity", "batch", output_file)

    assert path == output_file
    with open(output_file, encoding="utf-8") as file:
        assert file.read() == "# Report\n"
