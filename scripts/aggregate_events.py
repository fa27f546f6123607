#!/usr/bin/env python3
"""Build the SOC dashboard JSON files from recent fwddmp log files.

Usage: aggregate_events.py <path_to_log_files> <days_back>
"""

import sys

from dotenv import load_dotenv

load_dotenv()

from dashboard_aggregator.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
