from collections import Counter
from dataclasses import dataclass, field, fields

from .config import SEEDED_PRIORITIES


@dataclass
class AggregatedData:
    """Counts collected from one log file, or from a whole run once folded."""

    priorities_count: Counter = field(default_factory=Counter)
    threat_sources: Counter = field(default_factory=Counter)
    threat_destinations: Counter = field(default_factory=Counter)
    aware_threats: Counter = field(default_factory=Counter)

    @classmethod
    def seeded(cls) -> "AggregatedData":
        """Run-wide totals: priorities 0..5 start at zero so they always surface."""
        return cls(priorities_count=Counter({p: 0 for p in SEEDED_PRIORITIES}))

    def merge(self, partial: "AggregatedData") -> "AggregatedData":
        merge_into(self, partial)
        return self


def merge_into(total: AggregatedData, partial: AggregatedData) -> None:
    """Fold `partial` into `total` in place, summing counts key by key."""
    for f in fields(AggregatedData):
        # Counter.update adds and keeps zero-count keys (unlike `+=`).
        getattr(total, f.name).update(getattr(partial, f.name))
