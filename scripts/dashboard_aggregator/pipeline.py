import csv
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from .aggregates import AggregatedData, merge_into
from .config import AggregatorSettings
from .extractor import extract_aggregates
from .file_selector import select_files
from .ranker import write_reports

# Errors confined to a single file; anything else still aborts the run.
FILE_ERRORS = (OSError, UnicodeDecodeError, csv.Error)


@dataclass
class RunReport:
    totals: AggregatedData
    processed: List[Path] = field(default_factory=list)
    failed: List[Tuple[Path, str]] = field(default_factory=list)
    events_path: Optional[Path] = None
    threat_sources_path: Optional[Path] = None


def aggregate_directory(
    directory: Path,
    days_back: int,
    now: datetime,
    settings: AggregatorSettings,
) -> RunReport:
    """Select recent log files and fold each file's counts into run-wide totals."""
    report = RunReport(totals=AggregatedData.seeded())

    for candidate in select_files(directory, days_back, now=now, prefix=settings.file_prefix):
        print(f"[+] Processing file: {candidate.path}")
        try:
            partial = extract_aggregates(candidate.path, days_back, now=now, settings=settings)
        except FILE_ERRORS as exc:
            if settings.fail_fast:
                raise
            print(f"[!] Failed to process {candidate.path}: {exc}")
            report.failed.append((candidate.path, str(exc)))
            continue
        merge_into(report.totals, partial)
        report.processed.append(candidate.path)

    return report


def run(
    directory: Path,
    days_back: int,
    now: Optional[datetime] = None,
    settings: Optional[AggregatorSettings] = None,
) -> RunReport:
    """Aggregate `directory` and write both JSON reports. `now` is captured once for the whole run."""
    settings = settings or AggregatorSettings.from_env()
    if now is None:
        now = datetime.now()

    report = aggregate_directory(Path(directory), days_back, now, settings)
    failed_names = [str(path) for path, _ in report.failed]
    report.events_path, report.threat_sources_path = write_reports(report.totals, settings, failed_names)

    if report.failed:
        print(f"[!] {len(report.failed)} file(s) could not be processed")
    print(
        f"[+] Finished processing files. Output saved to "
        f"{report.events_path} and {report.threat_sources_path}"
    )
    return report
