from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from hyperdigest.errors import InvalidInputError
from hyperdigest.logging import DigestSelfHealWarning, LoggerStream

from .centroid import Centroid
from .digest_config import DigestConfig
from .merge_engine import MergeResult, compress_centroids, merge_digests
from .quantile_estimator import estimate_quantile, estimate_rank


_logger = LoggerStream(name="hyperdigest.digest")


def _absent_if_undefined(value: float | None) -> float | None:
    if value is None or math.isnan(value):
        return None
    return value


def _validate_quantile(quantile: float) -> None:
    if not 0.0 <= quantile <= 1.0:
        raise InvalidInputError(f"Quantile must be in [0, 1], got {quantile}")


@dataclass(slots=True)
class Digest:
    """
    T-Digest: a bounded, mergeable summary of a stream of observations.

    Centroids stay sorted by mean and their weights sum to count(). Points
    added through add() are buffered and folded into the centroids once the
    buffer fills, or before any query or read of centroids. An empty digest
    reports mean, min, max, quantile and rank as None.
    """

    _max_size: int | None = None
    _config: DigestConfig = field(default_factory=DigestConfig.from_env)
    _centroids: list[Centroid] = field(default_factory=list)
    _sum: float = 0.0
    _count: float = 0.0
    _min: float | None = None
    _max: float | None = None
    _unmerged: list[Centroid] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        if self._max_size is None:
            self._max_size = self._config.default_max_size

        if self._max_size < 1:
            raise InvalidInputError(
                f"Digest max_size must be at least 1, got {self._max_size}"
            )

    @classmethod
    def with_size(
        cls,
        max_size: int,
        config: DigestConfig | None = None,
    ) -> Digest:
        """Empty digest bounded near max_size centroids."""
        return cls(
            _max_size=max_size,
            _config=config or DigestConfig.from_env(),
        )

    @classmethod
    def from_trusted_parts(
        cls,
        centroids: Sequence[Centroid],
        max_size: int,
        sum: float,
        count: float,
        max: float | None,
        min: float | None,
        config: DigestConfig | None = None,
    ) -> Digest:
        """
        Build a digest directly from caller-maintained state.

        This is an unchecked entry point: the centroids are trusted to be
        sorted by mean and to sum to count, and the statistics to match.
        Use from_centroids() for untrusted input.

        A centroid list longer than max_size is never rejected. Instead the
        constructor runs a full compression, merging the oversized digest
        into an empty one of the default size, and returns a digest bounded
        near max_size.
        """
        config = config or DigestConfig.from_env()

        if count == 0:
            minimum = None
            maximum = None
        else:
            minimum = _absent_if_undefined(min)
            maximum = _absent_if_undefined(max)

        if len(centroids) <= max_size:
            return cls(
                _max_size=max_size,
                _config=config,
                _centroids=list(centroids),
                _sum=sum,
                _count=count,
                _min=minimum,
                _max=maximum,
            )

        _logger.log(
            DigestSelfHealWarning(
                message="Compressing oversized centroid list on construction",
                supplied_centroids=len(centroids),
                max_size=max_size,
            )
        )

        oversized = cls(
            _max_size=len(centroids),
            _config=config,
            _centroids=list(centroids),
            _sum=sum,
            _count=count,
            _min=minimum,
            _max=maximum,
        )

        return cls.merge_digests(
            [
                cls.with_size(config.default_max_size, config=config),
                oversized,
            ],
            max_size=max_size,
        )

    @classmethod
    def from_centroids(
        cls,
        centroids: Iterable[Centroid],
        max_size: int,
        config: DigestConfig | None = None,
    ) -> Digest:
        """
        Build a digest from untrusted centroids.

        Every centroid is re-validated and copied, the list is sorted and
        the statistics are derived from it. Oversized input is compressed.
        """
        validated = sorted(
            (Centroid(centroid.mean, centroid.weight) for centroid in centroids),
            key=Centroid.order_key,
        )

        digest = cls.with_size(max_size, config=config)
        if not validated:
            return digest

        digest._count = sum(centroid.weight for centroid in validated)
        digest._sum = sum(centroid.mean * centroid.weight for centroid in validated)
        digest._min = validated[0].mean
        digest._max = validated[-1].mean

        if len(validated) > max_size:
            validated = compress_centroids(validated, max_size)

        digest._centroids = validated
        return digest

    @classmethod
    def from_values(
        cls,
        values: Iterable[float],
        max_size: int | None = None,
        config: DigestConfig | None = None,
    ) -> Digest:
        """Digest of unit-weight observations."""
        config = config or DigestConfig.from_env()
        digest = cls(_max_size=max_size, _config=config)
        digest.add_batch(values)
        return digest

    @classmethod
    def merge_digests(
        cls,
        digests: Sequence[Digest],
        max_size: int | None = None,
        config: DigestConfig | None = None,
    ) -> Digest:
        """New digest combining every input; inputs are left unchanged."""
        if config is None:
            config = digests[0]._config if digests else DigestConfig.from_env()

        if max_size is None and not digests:
            max_size = config.default_max_size

        return cls._from_merge_result(
            merge_digests(digests, max_size=max_size),
            config,
        )

    @classmethod
    def _from_merge_result(
        cls,
        result: MergeResult,
        config: DigestConfig,
    ) -> Digest:
        return cls(
            _max_size=result.max_size,
            _config=config,
            _centroids=result.centroids,
            _sum=result.sum,
            _count=result.count,
            _min=result.min,
            _max=result.max,
        )

    @property
    def centroids(self) -> list[Centroid]:
        """Sorted, compressed centroids."""
        self._compress()
        return list(self._centroids)

    def max_size(self) -> int:
        return self._max_size

    def count(self) -> float:
        """Total weight (count if weights are 1)."""
        return self._count

    def sum(self) -> float:
        return self._sum

    def min(self) -> float | None:
        return self._min

    def max(self) -> float | None:
        return self._max

    def mean(self) -> float | None:
        if self._count == 0:
            return None
        return self._sum / self._count

    def is_empty(self) -> bool:
        return self._count == 0

    def add(self, value: float, weight: float = 1.0) -> None:
        """Add a value to the digest."""
        point = Centroid(value, weight)

        self._unmerged.append(point)
        self._count += weight
        self._sum += value * weight

        if self._min is None or value < self._min:
            self._min = value

        if self._max is None or value > self._max:
            self._max = value

        if len(self._unmerged) >= self._config.max_unmerged:
            self._compress()

    def add_batch(self, values: Iterable[float]) -> None:
        """Add multiple values efficiently."""
        for value in values:
            self.add(value)

    def _compress(self) -> None:
        """Compress unmerged points into centroids."""
        if not self._unmerged:
            return

        points = self._centroids + self._unmerged
        self._centroids = compress_centroids(points, self._max_size)
        self._unmerged.clear()

    def merge(self, other: Digest) -> Digest:
        """Merge another digest into this one."""
        result = merge_digests([self, other], max_size=self._max_size)

        self._centroids = result.centroids
        self._sum = result.sum
        self._count = result.count
        self._min = result.min
        self._max = result.max
        return self

    def merge_sorted(self, values: Sequence[float]) -> Digest:
        """New digest with ascending values added as unit-weight points."""
        incoming = Digest.with_size(max(len(values), 1), config=self._config)
        incoming._centroids = [Centroid(value, 1.0) for value in values]

        if incoming._centroids:
            incoming._count = float(len(values))
            incoming._sum = float(sum(values))
            incoming._min = values[0]
            incoming._max = values[-1]

        return Digest.merge_digests(
            [self, incoming],
            max_size=self._max_size,
            config=self._config,
        )

    def merge_unsorted(self, values: Iterable[float]) -> Digest:
        """New digest with values added as unit-weight points."""
        return self.merge_sorted(sorted(values))

    def quantile(self, quantile: float) -> float | None:
        """Get the value at quantile q (0 <= q <= 1), None when empty."""
        _validate_quantile(quantile)

        if self.is_empty():
            return None

        return estimate_quantile(
            self.centroids,
            quantile,
            self._min,
            self._max,
        )

    def rank(self, value: float) -> float | None:
        """Fraction of observations at or below value, None when empty."""
        if not math.isfinite(value):
            raise InvalidInputError(f"Rank value must be finite, got {value}")

        if self.is_empty():
            return None

        return estimate_rank(
            self.centroids,
            value,
            self._min,
            self._max,
        )

    def p50(self) -> float | None:
        """Median."""
        return self.quantile(0.50)

    def p95(self) -> float | None:
        """95th percentile."""
        return self.quantile(0.95)

    def p99(self) -> float | None:
        """99th percentile."""
        return self.quantile(0.99)
