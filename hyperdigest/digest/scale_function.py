from __future__ import annotations

import math

import numpy as np


def _clamp(quantile: float) -> float:
    return min(1.0, max(0.0, quantile))


def k_scale(quantile: float, max_size: int) -> float:
    """Scaling function k(q) = δ/2 * (arcsin(2q-1)/π + 0.5)."""
    quantile = _clamp(quantile)
    return (max_size / 2.0) * float(np.arcsin(2.0 * quantile - 1.0) / np.pi + 0.5)


def k_inverse(scaled: float, max_size: int) -> float:
    """Inverse scaling function."""
    if scaled >= max_size / 2.0:
        return 1.0

    quantile = 0.5 * (float(np.sin((scaled / (max_size / 2.0) - 0.5) * np.pi)) + 1.0)
    return _clamp(quantile)


def cluster_weight_limit(
    weight_before: float,
    total_weight: float,
    max_size: int,
) -> float:
    """
    Largest cumulative weight a cluster opened after weight_before may reach
    while spanning at most one unit of k.

    Equivalent to k(q1) - k(q0) <= 1 since k is monotone.
    """
    lower_quantile = weight_before / total_weight
    upper_quantile = k_inverse(k_scale(lower_quantile, max_size) + 1.0, max_size)
    if upper_quantile >= 1.0:
        return math.inf

    return total_weight * upper_quantile
