import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import AggregatorSettings
from .file_selector import DirectoryReadError
from .pipeline import run


class _UsageParser(argparse.ArgumentParser):
    """Usage errors exit with status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _days_back(value: str) -> int:
    try:
        days = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"<days_back> must be a number, got {value!r}")
    if days < 0:
        raise argparse.ArgumentTypeError("<days_back> must be a non-negative number.")
    return days


def build_parser() -> argparse.ArgumentParser:
    parser = _UsageParser(
        prog="dashboard-aggregator",
        description="Aggregate recent fwddmp log files into events.json and threat_sources.json.",
    )
    parser.add_argument("path_to_log_files", type=Path, help="Directory holding the rotated log files.")
    parser.add_argument("days_back", type=_days_back, help="Only count files and events newer than this many days.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = AggregatorSettings.from_env()

    try:
        run(args.path_to_log_files, args.days_back, settings=settings)
    except DirectoryReadError as exc:
        print(f"[!] {exc.strerror}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
