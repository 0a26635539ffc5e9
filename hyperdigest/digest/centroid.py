from __future__ import annotations

import math
from dataclasses import dataclass

from hyperdigest.errors import InvalidInputError


def _validate_point(mean: float, weight: float) -> None:
    if not math.isfinite(mean):
        raise InvalidInputError(f"Centroid mean must be finite, got {mean}")
    if not math.isfinite(weight) or weight <= 0:
        raise InvalidInputError(
            f"Centroid weight must be finite and positive, got {weight}"
        )


@dataclass(slots=True)
class Centroid:
    """
    A weighted mean representing one cluster of observations.

    Centroids carry two separate comparison contracts. Sorting and clustering
    order centroids by mean alone (order_key, compare_by_mean, precedes),
    while ==, is_identical and hash() use both mean and weight, so sets and
    dicts deduplicate on the full fields. No rich ordering operators are
    defined so the two contracts never share one.
    """

    mean: float
    weight: float

    def __post_init__(self) -> None:
        _validate_point(self.mean, self.weight)

    @staticmethod
    def order_key(centroid: Centroid) -> float:
        """Sort key ordering centroids by mean only."""
        return centroid.mean

    def compare_by_mean(self, other: Centroid) -> int:
        """Three-way comparison on mean, ignoring weight."""
        if self.mean < other.mean:
            return -1
        if self.mean > other.mean:
            return 1
        return 0

    def precedes(self, other: Centroid) -> bool:
        return self.mean < other.mean

    def is_identical(self, other: Centroid) -> bool:
        """Strict equality on both mean and weight."""
        return self.mean == other.mean and self.weight == other.weight

    def __hash__(self) -> int:
        # Hashes the current fields; a centroid must not be updated while it
        # is held in a set or used as a dict key.
        return hash((self.mean, self.weight))

    def update(self, value: float, weight: float) -> tuple[float, float]:
        """
        Absorb a weighted contribution into this centroid in place.

        value is the incoming weighted total and enters the numerator
        unscaled: new_mean = (mean * weight + value) / (weight + incoming).
        Merging another centroid therefore passes its mean * weight.
        """
        _validate_point(value, weight)

        current_weight = self.weight
        current_mean = self.mean

        self.weight = current_weight + weight
        self.mean = (current_mean * current_weight + value) / self.weight

        return self.mean, self.weight

    def copy(self) -> Centroid:
        return Centroid(self.mean, self.weight)
