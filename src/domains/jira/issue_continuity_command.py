from argparse import ArgumentParser, Namespace

from domains.jira.issue_continuity_service import IssueContinuityService
from utils.command.base_command import BaseCommand
from utils.logging.logging_manager import LogManager


class IssueContinuityCommand(BaseCommand):
    @staticmethod
    def get_name() -> str:
        return "issue-continuity"

    @staticmethod
    def get_description() -> str:
        return "Analyze communication continuity and momentum of exported JIRA issues."

    @staticmethod
    def get_help() -> str:
        return (
            "This command reads issues exported from JIRA (fetched with expand=changelog), "
            "detects stagnation periods and communication gaps, pairs questions with their "
            "answers to measure feedback response time, and scores issue momentum from 1 to 10.\n\n"
            "Examples:\n"
            "  python src/main.py jira issue-continuity --input export.json\n"
            "  python src/main.py jira issue-continuity --input export.json --timezone America/Sao_Paulo --verbose\n"
            "  python src/main.py jira issue-continuity --input export.json --output-format md --output-file report.md"
        )

    @staticmethod
    def get_arguments(parser: ArgumentParser):
        parser.add_argument(
            "--input",
            required=True,
            help="Path to a JSON export: one issue, a list of issues or a search response",
        )
        parser.add_argument(
            "--output-format",
            type=str,
            required=False,
            help="Optional output format: 'json' or 'md' (default: console only).",
            choices=["console", "json", "md"],
            default="console",
        )
        parser.add_argument("--output-file", help="Save the report to a specific file")
        parser.add_argument(
            "--timezone",
            help="IANA timezone used for business-hour calculations (default: CONTINUITY_TIMEZONE or host local time)",
        )
        parser.add_argument(
            "--stagnation-threshold",
            type=int,
            help="Business days without activity that count as stagnation (default: STAGNATION_THRESHOLD_DAYS)",
        )
        parser.add_argument(
            "--gap-threshold",
            type=int,
            help="Business days without comments that count as a communication gap "
            "(default: COMMUNICATION_GAP_THRESHOLD_DAYS)",
        )
        parser.add_argument("--verbose", action="store_true", help="Enable detailed issue-level output")

    @staticmethod
    def main(args: Namespace):
        logger = LogManager.get_instance().get_logger("IssueContinuityCommand")

        try:
            service = IssueContinuityService(
                timezone_name=args.timezone,
                stagnation_threshold_days=args.stagnation_threshold,
                communication_gap_threshold_days=args.gap_threshold,
            )
            results = service.run_analysis(
                input_path=args.input,
                output_format=args.output_format,
                output_file=args.output_file,
            )

            IssueContinuityCommand._print_continuity_report(results, args)
            if results.get("output_path"):
                print(f"\nDetailed report saved in {args.output_format.upper()} format: {results['output_path']}")

            logger.info("Issue continuity analysis completed successfully")

        except Exception as e:
            logger.error(f"Issue continuity analysis failed: {e}")
            exit(1)

    @staticmethod
    def _print_continuity_report(results: dict, args: Namespace):
        """Print the continuity report to the console."""
        metadata = results.get("metadata", {})
        summary = results.get("summary", {})
        issues = results.get("issues", [])

        header = "ISSUE CONTINUITY REPORT"
        print("\n" + "=" * len(header))
        print(header)
        print("=" * len(header))
        print(f"Timezone: {metadata.get('timezone', 'local')}")
        print(
            f"Thresholds: stagnation {metadata.get('stagnation_threshold_days')}d, "
            f"communication gap {metadata.get('communication_gap_threshold_days')}d"
        )

        avg_response = summary.get("average_feedback_response_time")
        avg_momentum = summary.get("average_momentum_score")
        print("\nSUMMARY:")
        print(f"- Issues analyzed:        {summary.get('total_issues', 0)}")
        print(f"- With stagnation:        {summary.get('issues_with_stagnation', 0)}")
        print(f"- With communication gaps: {summary.get('issues_with_communication_gaps', 0)}")
        print(f"- Answered questions:     {summary.get('answered_questions', 0)}")
        print(f"- Avg response time:      {'n/a' if avg_response is None else f'{avg_response:.1f}h'}")
        print(f"- Avg momentum score:     {'n/a' if avg_momentum is None else avg_momentum}")
        avg_flow = summary.get("average_flow_efficiency")
        print(f"- Avg flow efficiency:    {'n/a' if avg_flow is None else f'{avg_flow:.1f}%'}")

        low_momentum = [issue for issue in issues if (issue.get("momentum_score") or 0) <= 4]
        if low_momentum:
            print(f"\nLOW MOMENTUM ({len(low_momentum)} issues):")
            for issue in low_momentum[:8]:
                print(
                    f"- {issue.get('issue_key') or 'N/A'}: score {issue.get('momentum_score')}, "
                    f"longest stagnation {issue.get('longest_stagnation_period')}d"
                )
            if len(low_momentum) > 8:
                print(f"  ... and {len(low_momentum) - 8} more issues")

        if args.verbose and issues:
            print(f"\nALL ISSUES ({len(issues)}):")
            for issue in issues:
                momentum = issue.get("momentum", {})
                response = issue.get("feedback_response_time")
                print(
                    f"  {issue.get('issue_key') or 'N/A'}: momentum {momentum.get('momentum_score')} "
                    f"(progress {momentum.get('progress_consistency')}, "
                    f"communication {momentum.get('communication_frequency')}, "
                    f"stagnation {momentum.get('stagnation_impact')}, "
                    f"context {momentum.get('context_switching')}), "
                    f"response {'n/a' if response is None else f'{response:.1f}h'}"
                )
                switches = issue.get("context_switches", {})
                fragmentation = issue.get("work_fragmentation", {})
                print(
                    f"    flow efficiency {issue.get('flow_efficiency')}%, "
                    f"{switches.get('count', 0)} context switches ({switches.get('impact')}), "
                    f"fragmentation {fragmentation.get('fragmentationScore')} "
                    f"over {fragmentation.get('activeWorkPeriods', 0)} active periods, "
                    f"{len(issue.get('late_stage_changes', []))} late-stage changes"
                )

        print("\n" + "=" * len(header))
