import csv
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .aggregates import AggregatedData
from .config import AggregatorSettings
from .file_selector import cutoff_from


def _field(row: List[str], index: int) -> str:
    return row[index] if index < len(row) else ""


def _parse_timestamp(value: str, fmt: str) -> Optional[datetime]:
    try:
        return datetime.strptime(value, fmt)
    except ValueError:
        return None


def aware_bucket(event_time: datetime) -> str:
    """`YYYY-MM-DD AM` for hours 00-11, `YYYY-MM-DD PM` for 12-23."""
    period = "AM" if event_time.hour < 12 else "PM"
    return f"{event_time.date().isoformat()} {period}"


def count_row(row: List[str], cutoff: datetime, settings: AggregatorSettings, data: AggregatedData) -> None:
    """Add one row to `data` if its event time is after `cutoff`."""
    cols = settings.columns
    event_time = _parse_timestamp(_field(row, cols.timestamp), settings.timestamp_format)
    if event_time is None or event_time <= cutoff:
        return

    data.priorities_count[_field(row, cols.priority)] += 1
    data.threat_sources[_field(row, cols.source_ip)] += 1
    data.threat_destinations[_field(row, cols.destination_ip)] += 1

    if settings.aware_marker in _field(row, cols.flags):
        data.aware_threats[aware_bucket(event_time)] += 1


def _undecodable(row: List[str]) -> bool:
    """True when the row carries bytes that were not valid UTF-8 (kept as lone surrogates)."""
    try:
        "".join(row).encode("utf-8")
    except UnicodeEncodeError:
        return True
    return False


def extract_aggregates(
    path: Path,
    days_back: int,
    now: Optional[datetime] = None,
    settings: Optional[AggregatorSettings] = None,
) -> AggregatedData:
    """Count priorities, sources, destinations and AWARE buckets for one log file.

    Only rows whose event timestamp is strictly after `now - days_back` are
    counted. Rows that are not valid UTF-8, or whose field count differs from
    the first row, are reported and skipped; rows with an unparsable
    timestamp are skipped silently. Failing to open or read the file raises
    to the caller.
    """
    settings = settings or AggregatorSettings()
    cutoff = cutoff_from(now, days_back)
    data = AggregatedData()
    expected_fields = None

    with open(path, "r", encoding="utf-8", errors="surrogateescape", newline="") as f:
        reader = csv.reader(f)
        while True:
            try:
                row = next(reader)
            except StopIteration:
                break
            except csv.Error as exc:
                print(f"Failed to read record: line {reader.line_num}: {exc}")
                continue

            if not row:
                continue
            if _undecodable(row):
                print(f"Failed to read record: line {reader.line_num}: invalid UTF-8 in record")
                continue
            if expected_fields is None:
                expected_fields = len(row)
                if settings.has_header:
                    continue
            elif len(row) != expected_fields:
                print(
                    f"Failed to read record: line {reader.line_num}: found record with "
                    f"{len(row)} fields, but the previous record has {expected_fields} fields"
                )
                continue

            count_row(row, cutoff, settings, data)

    return data
