"""Aggregate rotated security-event logs into dashboard JSON reports."""

from .aggregates import AggregatedData, merge_into
from .config import AggregatorSettings, ColumnSchema
from .extractor import extract_aggregates
from .file_selector import DirectoryReadError, FileCandidate, select_files
from .pipeline import RunReport, run
from .ranker import write_reports

__all__ = [
    "AggregatedData",
    "AggregatorSettings",
    "ColumnSchema",
    "DirectoryReadError",
    "FileCandidate",
    "RunReport",
    "extract_aggregates",
    "merge_into",
    "run",
    "select_files",
    "write_reports",
]
