"""
JIRA Issue Continuity Service

Runs the continuity analysis over exported JIRA issues (REST payloads fetched
with ``expand=changelog``) and produces per-issue reports plus a batch
summary: stagnation periods, communication gaps, question response times,
momentum scores, flow efficiency, context switches, work fragmentation and
late-stage changes.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo

from config import Config
from domains.jira.continuity import ContinuityReport, get_continuity_analysis, summarize_reports
from domains.jira.error import IssueExportError
from utils.data.json_manager import JSONManager
from utils.file_manager import FileManager
from utils.logging.logging_manager import LogManager
from utils.output_manager import OutputManager


class IssueContinuityService:
    """Service class for issue continuity analysis."""

    OUTPUT_SUB_DIR = "issue-continuity"

    def __init__(
        self,
        timezone_name: Optional[str] = None,
        stagnation_threshold_days: Optional[int] = None,
        communication_gap_threshold_days: Optional[int] = None,
        now: Optional[datetime] = None,
    ):
        self.logger = LogManager.get_instance().get_logger("IssueContinuityService")

        timezone_name = timezone_name or Config.CONTINUITY_TIMEZONE
        self.timezone_name = timezone_name
        self.tz = ZoneInfo(timezone_name) if timezone_name else None
        self.stagnation_threshold_days = self._threshold(
            "stagnation_threshold_days", stagnation_threshold_days, Config.STAGNATION_THRESHOLD_DAYS
        )
        self.communication_gap_threshold_days = self._threshold(
            "communication_gap_threshold_days",
            communication_gap_threshold_days,
            Config.COMMUNICATION_GAP_THRESHOLD_DAYS,
        )
        self.now = now or datetime.now(timezone.utc)

    @staticmethod
    def _threshold(name: str, value: Optional[int], default: int) -> int:
        """Returns ``value`` when given, else ``default``; a given value must be a positive integer."""
        if value is None:
            return default
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValueError(f"Invalid {name}: {value}. Must be a positive integer.")
        return value

    def load_issues(self, input_path: str) -> List[Dict[str, Any]]:
        """
        Loads issues from an export file.

        The file may hold a single issue, a list of issues or a search response
        (``{"issues": [...]}``).

        Args:
            input_path (str): Path to the JSON export.

        Returns:
            List[Dict[str, Any]]: The issue payloads.

        Raises:
            IssueExportError: If the file is missing, not JSON, or holds no issues.
        """
        try:
            FileManager.validate_file(input_path, allowed_extensions=[".json"])
            data = JSONManager.read_json(input_path)
        except (FileNotFoundError, ValueError) as e:
            # json.JSONDecodeError is a ValueError
            raise IssueExportError("Could not read issue export", input_path=input_path, original_error=e) from e

        if isinstance(data, dict) and isinstance(data.get("issues"), list):
            issues = data["issues"]
        elif isinstance(data, list):
            issues = data
        elif isinstance(data, dict) and ("fields" in data or "key" in data):
            issues = [data]
        else:
            raise IssueExportError("Issue export holds no issues", input_path=input_path)

        valid_issues = [issue for issue in issues if isinstance(issue, dict)]
        skipped = len(issues) - len(valid_issues)
        if skipped:
            self.logger.warning(f"Skipped {skipped} malformed issue entries in {input_path}")

        self.logger.info(f"Loaded {len(valid_issues)} issues from {input_path}")
        return valid_issues

    def analyze_issue(self, issue: Dict[str, Any]) -> ContinuityReport:
        """Analyzes one issue; a top-level ``comments`` entry overrides ``fields.comment``."""
        return get_continuity_analysis(
            issue,
            issue.get("comments"),
            now=self.now,
            tz=self.tz,
            stagnation_threshold_days=self.stagnation_threshold_days,
            communication_gap_threshold_days=self.communication_gap_threshold_days,
        )

    def analyze_issues(self, issues: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Analyzes a batch of issues.

        Args:
            issues (List[Dict[str, Any]]): JIRA issue payloads.

        Returns:
            Dict[str, Any]: ``metadata``, ``summary`` and per-issue ``issues`` reports.
        """
        reports = []
        for issue in issues:
            report = self.analyze_issue(issue)
            self.logger.debug(
                f"{report.issue_key}: momentum={report.momentum_score}, "
                f"stagnation_periods={len(report.stagnation_periods)}, "
                f"answered_questions={len(report.question_response_pairs)}"
            )
            reports.append(report)

        return {
            "metadata": {
                "analysis_date": self.now.isoformat(),
                "timezone": self.timezone_name or "local",
                "stagnation_threshold_days": self.stagnation_threshold_days,
                "communication_gap_threshold_days": self.communication_gap_threshold_days,
            },
            "summary": summarize_reports(reports),
            "issues": [report.to_dict() for report in reports],
        }

    def run_analysis(
        self,
        input_path: str,
        output_format: str = "console",
        output_file: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Loads an export, analyzes it and saves the report in the requested format.

        Args:
            input_path (str): Path to the JSON export.
            output_format (str): 'console', 'json' or 'md'.
            output_file (Optional[str]): Custom output path for json/md reports.

        Returns:
            Dict[str, Any]: The analysis results; ``output_path`` is set when a report was saved.
        """
        self.logger.info(f"Starting continuity analysis for {input_path}")
        results = self.analyze_issues(self.load_issues(input_path))

        base_name = f"issue_continuity_{FileManager.get_file_name(input_path)}"
        if output_format == "json":
            results["output_path"] = OutputManager.save_json_report(
                results, self.OUTPUT_SUB_DIR, base_name, output_file
            )
            self.logger.info(f"Continuity report saved as JSON: {results['output_path']}")
        elif output_format == "md":
            results["output_path"] = OutputManager.save_markdown_report(
                self.format_as_markdown(results), self.OUTPUT_SUB_DIR, base_name, output_file
            )
            self.logger.info(f"Continuity report saved as Markdown: {results['output_path']}")

        self.logger.info("Continuity analysis completed successfully.")
        return results

    @staticmethod
    def _format_hours(hours: Optional[float]) -> str:
        return "n/a" if hours is None else f"{hours:.1f}h"

    @staticmethod
    def _format_percent(value: Optional[float]) -> str:
        return "n/a" if value is None else f"{value:.1f}%"

    def format_as_markdown(self, results: Dict[str, Any]) -> str:
        """Renders the analysis results as a Markdown report."""
        metadata = results.get("metadata", {})
        summary = results.get("summary", {})

        lines = [
            "# Issue Continuity Report",
            "",
            f"- Analysis date: {metadata.get('analysis_date', '')}",
            f"- Timezone: {metadata.get('timezone', 'local')}",
            f"- Stagnation threshold: {metadata.get('stagnation_threshold_days')} business days",
            "",
            "## Summary",
            "",
            "| Metric | Value |",
            "|---|---|",
            f"| Issues analyzed | {summary.get('total_issues', 0)} |",
            f"| Issues with stagnation | {summary.get('issues_with_stagnation', 0)} |",
            f"| Issues with communication gaps | {summary.get('issues_with_communication_gaps', 0)} |",
            f"| Answered questions | {summary.get('answered_questions', 0)} |",
            f"| Avg feedback response time | {self._format_hours(summary.get('average_feedback_response_time'))} |",
            f"| Avg momentum score | {summary.get('average_momentum_score') or 'n/a'} |",
            f"| Avg flow efficiency | {self._format_percent(summary.get('average_flow_efficiency'))} |",
            "",
            "## Issues",
            "",
            "| Issue | Momentum | Stagnation periods | Longest stagnation (days) | Avg response "
            "| Flow efficiency | Context switches | Fragmentation |",
            "|---|---|---|---|---|---|---|---|",
        ]

        for issue in results.get("issues", []):
            lines.append(
                f"| {issue.get('issue_key') or '-'} "
                f"| {issue.get('momentum_score')} "
                f"| {len(issue.get('stagnation_periods', []))} "
                f"| {issue.get('longest_stagnation_period')} "
                f"| {self._format_hours(issue.get('feedback_response_time'))} "
                f"| {self._format_percent(issue.get('flow_efficiency'))} "
                f"| {issue.get('context_switches', {}).get('count', 0)} "
                f"| {issue.get('work_fragmentation', {}).get('fragmentationScore')} |"
            )

        return "\n".join(lines) + "\n"
