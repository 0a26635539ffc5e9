from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from hyperdigest.errors import EmptyDigestQueryError, InvalidInputError

from .centroid import Centroid


def _interpolation_knots(
    centroids: Sequence[Centroid],
    minimum: float,
    maximum: float,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Knots (cumulative weight, value) running from (0, min) through each
    centroid's weight midpoint to (total weight, max).
    """
    weights = np.fromiter(
        (centroid.weight for centroid in centroids),
        dtype=np.float64,
        count=len(centroids),
    )
    means = np.fromiter(
        (centroid.mean for centroid in centroids),
        dtype=np.float64,
        count=len(centroids),
    )

    cumulative = np.cumsum(weights)
    total_weight = cumulative[-1]
    midpoints = cumulative - weights / 2.0

    positions = np.concatenate(([0.0], midpoints, [total_weight]))
    values = np.concatenate(([minimum], means, [maximum]))
    return positions, values


def estimate_quantile(
    centroids: Sequence[Centroid],
    quantile: float,
    minimum: float,
    maximum: float,
) -> float:
    """
    Value below which the given fraction of the weight falls.

    Interpolates linearly between the weight midpoints of adjacent centroids,
    and toward the exact min and max beyond the first and last midpoints.
    """
    if not 0.0 <= quantile <= 1.0:
        raise InvalidInputError(f"Quantile must be in [0, 1], got {quantile}")

    if not centroids:
        raise EmptyDigestQueryError("Cannot estimate a quantile of an empty digest")

    if quantile == 0.0:
        return minimum
    if quantile == 1.0:
        return maximum

    positions, values = _interpolation_knots(centroids, minimum, maximum)
    target_weight = quantile * positions[-1]

    return float(np.interp(target_weight, positions, values))


def estimate_rank(
    centroids: Sequence[Centroid],
    value: float,
    minimum: float,
    maximum: float,
) -> float:
    """Fraction of the weight at or below value."""
    if not math.isfinite(value):
        raise InvalidInputError(f"Rank value must be finite, got {value}")

    if not centroids:
        raise EmptyDigestQueryError("Cannot estimate a rank in an empty digest")

    if value >= maximum:
        return 1.0
    if value <= minimum:
        return 0.0

    positions, values = _interpolation_knots(centroids, minimum, maximum)

    # Rightmost knot at or below value; equal means resolve to the last one.
    upper = int(np.searchsorted(values, value, side="right"))
    upper = min(max(upper, 1), len(values) - 1)
    lower = upper - 1

    span = values[upper] - values[lower]
    if span <= 0.0:
        return float(positions[upper] / positions[-1])

    ratio = (value - values[lower]) / span
    weight = positions[lower] + ratio * (positions[upper] - positions[lower])

    return float(weight / positions[-1])
