from __future__ import annotations

from time import monotonic

from .digest import Digest
from .digest_config import DigestConfig
from .digest_summary import DigestSummary


class TimeWindowedDigest:
    """Maintains one digest per fixed time window and combines recent ones."""

    def __init__(
        self,
        max_size: int | None = None,
        config: DigestConfig | None = None,
    ) -> None:
        self._config = config or DigestConfig.from_env()
        self._max_size = max_size or self._config.default_max_size
        self._window_duration_seconds = self._config.window_duration_seconds
        self._max_windows = self._config.max_windows
        self._windows: dict[float, Digest] = {}
        self._window_order: list[float] = []

    @property
    def window_starts(self) -> list[float]:
        return list(self._window_order)

    def _window_start_for_timestamp(self, timestamp: float) -> float:
        bucket_index = int(timestamp // self._window_duration_seconds)
        return bucket_index * self._window_duration_seconds

    def _window_end(self, window_start: float) -> float:
        return window_start + self._window_duration_seconds

    def _register_window(self, window_start: float) -> None:
        if window_start not in self._windows:
            self._windows[window_start] = Digest.with_size(
                self._max_size,
                config=self._config,
            )
            self._window_order.append(window_start)
            self._window_order.sort()

    def _prune_windows(self, reference_time: float) -> None:
        cutoff_time = reference_time - self._window_duration_seconds * self._max_windows
        retained_windows: list[float] = []
        for window_start in self._window_order:
            if self._window_end(window_start) >= cutoff_time:
                retained_windows.append(window_start)
            else:
                self._windows.pop(window_start, None)
        self._window_order = retained_windows

        while len(self._window_order) > self._max_windows:
            oldest_start = self._window_order.pop(0)
            self._windows.pop(oldest_start, None)

    def add(
        self, value: float, weight: float = 1.0, timestamp: float | None = None
    ) -> None:
        """Add a value to the window containing timestamp."""
        event_time = timestamp if timestamp is not None else monotonic()
        window_start = self._window_start_for_timestamp(event_time)
        self._register_window(window_start)
        self._windows[window_start].add(value, weight)
        self._prune_windows(event_time)

    def add_batch(self, values: list[float], timestamp: float | None = None) -> None:
        """Add multiple values into the same time window."""
        event_time = timestamp if timestamp is not None else monotonic()
        for value in values:
            self.add(value, timestamp=event_time)

    def aggregate(self, now: float | None = None) -> Digest:
        """Merge every retained window into a single digest."""
        reference_time = now if now is not None else monotonic()
        self._prune_windows(reference_time)

        return Digest.merge_digests(
            [self._windows[window_start] for window_start in self._window_order],
            max_size=self._max_size,
            config=self._config,
        )

    def get_recent_summary(
        self,
        name: str,
        now: float | None = None,
    ) -> DigestSummary | None:
        """Aggregate recent windows into a percentile summary."""
        aggregated_digest = self.aggregate(now=now)
        if aggregated_digest.is_empty():
            return None

        window_start = min(self._window_order)
        window_end = max(self._window_order) + self._window_duration_seconds

        return DigestSummary(
            name=name,
            p50=aggregated_digest.p50(),
            p95=aggregated_digest.p95(),
            p99=aggregated_digest.p99(),
            count=aggregated_digest.count(),
            window_start=window_start,
            window_end=window_end,
        )
