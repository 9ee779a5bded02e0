#!/usr/bin/env python3
"""CLI for the sprint planner."""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        description="Plan a sprint from a folder of agent task files"
    )
    parser.add_argument(
        "task_folder",
        help="Path to folder containing task .json files",
    )
    parser.add_argument(
        "--config",
        "-c",
        default=None,
        help="Planner config file (default: $SPRINT_PLANNER_CONFIG or .sprint.yml)",
    )
    parser.add_argument(
        "--max-engineers",
        "-e",
        type=int,
        default=None,
        help="Cap on recommended engineers (overrides config)",
    )
    parser.add_argument(
        "--no-infer",
        action="store_true",
        help="Plan with declared dependencies only",
    )
    parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Also write the plan to this file (.json, otherwise Markdown)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the plan as JSON",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug logging",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    task_folder = Path(args.task_folder).resolve()
    if not task_folder.is_dir():
        print(f"Error: Task folder not found: {task_folder}")
        sys.exit(1)

    from .config import load_config
    from .planner import dry_run, plan_task_folder
    from .report import report_to_dict, write_plan_report

    try:
        config = load_config(args.config)
    except ValueError as e:
        print(f"Error: Invalid planner config: {e}")
        sys.exit(1)

    if args.max_engineers is not None:
        if args.max_engineers < 1:
            print("Error: --max-engineers must be at least 1")
            sys.exit(1)
        config.max_engineers = args.max_engineers

    infer = not args.no_infer
    if args.json:
        report = plan_task_folder(str(task_folder), config, infer=infer)
        print(json.dumps(report_to_dict(report), indent=2))
    else:
        report = dry_run(str(task_folder), config, infer=infer)

    if args.output:
        written = write_plan_report(args.output, report)
        logger.info("Wrote plan to %s", written)

    sys.exit(0)


if __name__ == "__main__":
    main()
