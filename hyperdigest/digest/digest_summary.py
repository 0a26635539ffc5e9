from __future__ import annotations

from dataclasses import dataclass
from time import monotonic


@dataclass(slots=True)
class DigestSummary:
    """Percentiles of a digest aggregated over a span of time windows."""

    name: str
    p50: float
    p95: float
    p99: float
    count: float
    window_start: float
    window_end: float

    def is_stale(self, max_age_seconds: float, now: float | None = None) -> bool:
        """Return True when the summary is older than max_age_seconds."""
        reference_time = now if now is not None else monotonic()
        return (reference_time - self.window_end) > max_age_seconds
