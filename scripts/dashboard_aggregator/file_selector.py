import os
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional

from .config import DEFAULT_FILE_PREFIX


class DirectoryReadError(OSError):
    """The log directory could not be listed."""


@dataclass(frozen=True)
class FileCandidate:
    path: Path
    modified: float


def cutoff_from(now: Optional[datetime], days_back: int) -> datetime:
    if now is None:
        now = datetime.now()
    return now - timedelta(days=days_back)


def select_files(
    directory: Path,
    days_back: int,
    now: Optional[datetime] = None,
    prefix: str = DEFAULT_FILE_PREFIX,
) -> List[FileCandidate]:
    """List rotated log files named `prefix*` modified strictly after `now - days_back`.

    Entries whose metadata cannot be read are skipped. Order is whatever the
    directory listing yields.
    """
    threshold = cutoff_from(now, days_back).timestamp()
    try:
        entries = list(os.scandir(directory))
    except OSError as exc:
        raise DirectoryReadError(exc.errno, f"Error reading directory {directory}: {exc.strerror}") from exc

    selected: List[FileCandidate] = []
    for entry in entries:
        if not entry.name.startswith(prefix):
            continue
        try:
            modified = entry.stat().st_mtime
        except OSError:
            continue
        if modified > threshold:
            selected.append(FileCandidate(path=Path(entry.path), modified=modified))
    return selected
