import json
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .aggregates import AggregatedData
from .config import AggregatorSettings

Ranked = List[Tuple[str, int]]


def _numeric_priority_key(item: Tuple[str, int]):
    label = item[0]
    if label.isdecimal():
        return (1, int(label), label)
    return (0, 0, label)


def rank_priorities(counts: Counter, mode: str = "lexical") -> Ranked:
    """Labels in descending order; `lexical` compares strings, `numeric` compares integer labels first."""
    if mode == "numeric":
        return sorted(counts.items(), key=_numeric_priority_key, reverse=True)
    return sorted(counts.items(), key=lambda item: item[0], reverse=True)


def top_n(counts: Counter, n: int) -> Ranked:
    """Highest counts first, ties broken by label ascending."""
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))[:n]


def by_label(counts: Counter) -> Ranked:
    return sorted(counts.items(), key=lambda item: item[0])


def _columns(ranked: Ranked, label: str) -> Dict[str, list]:
    return {
        label: [name for name, _ in ranked],
        "Count": [count for _, count in ranked],
    }


def build_events_document(
    data: AggregatedData,
    settings: Optional[AggregatorSettings] = None,
    failed_files: Sequence[str] = (),
) -> Dict[str, Any]:
    settings = settings or AggregatorSettings()
    doc: Dict[str, Any] = {
        "Priorities": _columns(rank_priorities(data.priorities_count, settings.priority_sort), "Priority"),
        "Threat Sources": _columns(top_n(data.threat_sources, settings.top_n), "Source"),
        "Threat Destinations": _columns(top_n(data.threat_destinations, settings.top_n), "Destination"),
        "AWARE Threats": _columns(by_label(data.aware_threats), "Date"),
    }
    if failed_files:
        doc["Failed Files"] = list(failed_files)
    return doc


def build_threat_sources_document(data: AggregatedData) -> Dict[str, Any]:
    """Every observed source with its total, not truncated."""
    return {"Threat Sources": _columns(by_label(data.threat_sources), "Source")}


def write_json(path: Path, payload: Dict[str, Any]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)


def write_reports(
    data: AggregatedData,
    settings: Optional[AggregatorSettings] = None,
    failed_files: Sequence[str] = (),
) -> Tuple[Path, Path]:
    """Write the ranked events document and the full threat-sources document, overwriting both."""
    settings = settings or AggregatorSettings()
    out_dir = Path(settings.output_dir)
    events_path = out_dir / settings.events_file
    sources_path = out_dir / settings.threat_sources_file

    write_json(events_path, build_events_document(data, settings, failed_files))
    write_json(sources_path, build_threat_sources_document(data))
    return events_path, sources_path
