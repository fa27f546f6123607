import os
from dataclasses import dataclass, field, fields
from typing import Dict, Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_FILE_PREFIX = "fwddmp.log.tmp"
DEFAULT_TOP_N = 10
DEFAULT_EVENTS_FILE = "events.json"
DEFAULT_THREAT_SOURCES_FILE = "threat_sources.json"
DEFAULT_TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S"
DEFAULT_AWARE_MARKER = "AWARE"
PRIORITY_SORT_MODES = ("lexical", "numeric")

# Priorities always reported, even when never observed.
SEEDED_PRIORITIES = [str(p) for p in range(0, 6)]


def _flag_from_env(name: str, default: str) -> bool:
    val = os.getenv(name, default).strip().lower()
    return val in {"1", "true", "yes", "on"}


def _int_from_env(name: str, default: int, minimum: int = 0) -> int:
    try:
        value = int(os.getenv(name, str(default)))
    except ValueError:
        return default
    return value if value >= minimum else default


@dataclass(frozen=True)
class ColumnSchema:
    """Zero-based column positions of the fields read from each log row."""

    priority: int = 1
    flags: int = 3
    timestamp: int = 4
    source_ip: int = 6
    destination_ip: int = 12

    @classmethod
    def parse(cls, raw: str) -> "ColumnSchema":
        """Build a schema from `name=index` pairs; unknown or bad pairs are ignored."""
        known = {f.name for f in fields(cls)}
        overrides: Dict[str, int] = {}
        for part in (raw or "").split(","):
            name, sep, index = part.partition("=")
            name = name.strip()
            if not sep or name not in known:
                continue
            try:
                value = int(index)
            except ValueError:
                continue
            if value >= 0:
                overrides[name] = value
        return cls(**overrides)

    def width(self) -> int:
        return max(getattr(self, f.name) for f in fields(self)) + 1


@dataclass(frozen=True)
class AggregatorSettings:
    file_prefix: str = DEFAULT_FILE_PREFIX
    top_n: int = DEFAULT_TOP_N
    output_dir: str = "."
    events_file: str = DEFAULT_EVENTS_FILE
    threat_sources_file: str = DEFAULT_THREAT_SOURCES_FILE
    priority_sort: str = "lexical"
    fail_fast: bool = False
    has_header: bool = True
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT
    aware_marker: str = DEFAULT_AWARE_MARKER
    columns: ColumnSchema = field(default_factory=ColumnSchema)

    @classmethod
    def from_env(cls, output_dir: Optional[str] = None) -> "AggregatorSettings":
        """Read every tunable from the environment (and `.env`), falling back to defaults."""
        priority_sort = os.getenv("PRIORITY_SORT", "lexical").strip().lower()
        if priority_sort not in PRIORITY_SORT_MODES:
            priority_sort = "lexical"

        return cls(
            file_prefix=os.getenv("LOG_FILE_PREFIX", DEFAULT_FILE_PREFIX) or DEFAULT_FILE_PREFIX,
            top_n=_int_from_env("TOP_N", DEFAULT_TOP_N),
            output_dir=output_dir or os.getenv("OUTPUT_DIR", "."),
            events_file=os.getenv("EVENTS_FILE", DEFAULT_EVENTS_FILE),
            threat_sources_file=os.getenv("THREAT_SOURCES_FILE", DEFAULT_THREAT_SOURCES_FILE),
            priority_sort=priority_sort,
            fail_fast=_flag_from_env("FAIL_FAST", "off"),
            has_header=_flag_from_env("CSV_HAS_HEADER", "on"),
            timestamp_format=os.getenv("TIMESTAMP_FORMAT", DEFAULT_TIMESTAMP_FORMAT),
            aware_marker=os.getenv("AWARE_MARKER", DEFAULT_AWARE_MARKER) or DEFAULT_AWARE_MARKER,
            columns=ColumnSchema.parse(os.getenv("COLUMN_MAP", "")),
        )
