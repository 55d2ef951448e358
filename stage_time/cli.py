"""Command-line interface for stage_time.

Run:
    python -m stage_time            # same as: python -m stage_time report --dir gpx
    python -m stage_time report --dir tracks --csv-out report.csv
"""

from __future__ import annotations

import argparse
import logging
import sys

from stage_time.attribution import attribute_directory
from stage_time.errors import StageTimeError
from stage_time.models import DEFAULT_GPX_DIR
from stage_time.report import print_report, write_report_csv

logger = logging.getLogger(__name__)


def _cmd_report(args: argparse.Namespace) -> int:
    durations = attribute_directory(args.dir)
    if args.csv_out:
        write_report_csv(durations, args.csv_out)
    print_report(durations, bold_header=not args.no_bold)
    if args.csv_out:
        print(f"exported: {args.csv_out}", file=sys.stderr)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""

    p = argparse.ArgumentParser(
        prog="stage_time",
        description="Attribute time between GPX track points to the nearest stage.",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    # running without a subcommand behaves like a bare "report"
    p.set_defaults(func=_cmd_report, dir=DEFAULT_GPX_DIR, csv_out=None, no_bold=False)
    sub = p.add_subparsers(dest="cmd")

    p_rep = sub.add_parser("report", help="print time spent per stage, longest first")
    p_rep.add_argument("--dir", type=str, default=DEFAULT_GPX_DIR, help="directory of GPX files")
    p_rep.add_argument("--csv-out", type=str, default=None, help="also write the report to this CSV file")
    p_rep.add_argument("--no-bold", action="store_true", help="plain header row (no ANSI bold)")
    p_rep.set_defaults(func=_cmd_report)

    return p


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""

    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return int(args.func(args))
    except StageTimeError as exc:
        logger.debug("run aborted", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
