from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from .config import get_config
from .errors import LoadError
from .models.types import AnalysisResult
from .pipeline import WorkoutAnalysis
from .reporting import print_category_report, print_rejected_rows, result_to_dict


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workout-analysis",
        description="Summarize sessions per workout category from a CSV workout export.",
        epilog="Example: workout-analysis data/workouts.csv --category Squash --category Hiking",
    )
    parser.add_argument("input", help="Path to the workout export CSV")
    parser.add_argument(
        "--category",
        action="append",
        help="Category to analyse; repeat for several (default: configured categories)",
    )
    parser.add_argument("--strict", action="store_true", help="Fail the load on the first malformed row")
    parser.add_argument("--json", action="store_true", help="Print the analysis as JSON instead of text")
    parser.add_argument("--show-rejected", action="store_true", help="List rows skipped as malformed")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = create_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    cfg = get_config()
    if args.category:
        cfg.set_categories(*args.category)
    if args.strict:
        cfg.update_settings(strict=True)

    analysis = WorkoutAnalysis(cfg)
    try:
        result = analysis.load(args.input)
        exit_code = 0
    except LoadError as e:
        print(f"Load Error: {e}", file=sys.stderr, flush=True)
        result = analysis.result
        exit_code = 1

    if args.json:
        print(json.dumps(result_to_dict(result), indent=2))
        return exit_code

    _print_text_report(result, show_rejected=args.show_rejected)
    return exit_code


def _print_text_report(result: AnalysisResult, show_rejected: bool = False) -> None:
    print("\nWORKOUT ANALYSIS")
    print(f"  {len(result.records)} sessions in {', '.join(result.categories)} ({result.total_rows} rows read)")
    for report in result.reports.values():
        print_category_report(report)
    if show_rejected:
        print_rejected_rows(result)
    elif result.rejected:
        print(f"\n{len(result.rejected)} malformed row(s) skipped; use --show-rejected for details.")


if __name__ == "__main__":
    sys.exit(main())
