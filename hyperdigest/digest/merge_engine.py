from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Sequence

from hyperdigest.logging import (
    CompressionTrace,
    DigestMergeDebug,
    LoggerStream,
    LogLevel,
)

from .centroid import Centroid
from .scale_function import cluster_weight_limit

if TYPE_CHECKING:
    from .digest import Digest


_logger = LoggerStream(name="hyperdigest.merge_engine")


@dataclass(slots=True)
class MergeResult:
    """Compressed centroids plus the statistics recomputed from every input."""

    centroids: list[Centroid] = field(default_factory=list)
    max_size: int = 100
    sum: float = 0.0
    count: float = 0.0
    min: float | None = None
    max: float | None = None


def compress_centroids(
    centroids: Iterable[Centroid],
    max_size: int,
) -> list[Centroid]:
    """
    Cluster centroids so the result holds at most max_size + 1 entries.

    Centroids are stable-sorted by mean, so equal means keep their input
    order. A candidate joins the open cluster while the cluster's quantile
    span stays within one unit of the scale function, which keeps clusters
    small near q=0 and q=1 and lets them grow around the median. Input
    centroids are never mutated.
    """
    ordered = sorted(centroids, key=Centroid.order_key)
    if not ordered:
        return []

    total_weight = sum(centroid.weight for centroid in ordered)

    compressed: list[Centroid] = []
    cluster = ordered[0].copy()
    weight_before = 0.0
    weight_limit = cluster_weight_limit(weight_before, total_weight, max_size)

    for candidate in ordered[1:]:
        if weight_before + cluster.weight + candidate.weight <= weight_limit:
            cluster.update(candidate.mean * candidate.weight, candidate.weight)
            continue

        compressed.append(cluster)
        weight_before += cluster.weight
        cluster = candidate.copy()
        weight_limit = cluster_weight_limit(weight_before, total_weight, max_size)

    compressed.append(cluster)

    if _logger.enabled(LogLevel.TRACE):
        _logger.log(
            CompressionTrace(
                message="Compressed centroids",
                input_centroids=len(ordered),
                output_centroids=len(compressed),
                total_weight=total_weight,
                max_size=max_size,
            )
        )

    return compressed


def merge_digests(
    digests: Sequence[Digest],
    max_size: int | None = None,
) -> MergeResult:
    """
    Combine digests into one compressed centroid list with merged statistics.

    max_size defaults to the first digest's. Count and sum are the sums of
    each input's own; min and max ignore empty inputs. Inputs are trusted
    and not re-validated.
    """
    if max_size is None:
        max_size = digests[0].max_size() if digests else 100

    result = MergeResult(max_size=max_size)
    combined: list[Centroid] = []

    for digest in digests:
        combined.extend(digest.centroids)

        if digest.is_empty():
            continue

        result.count += digest.count()
        result.sum += digest.sum()

        digest_min = digest.min()
        digest_max = digest.max()

        if result.min is None or digest_min < result.min:
            result.min = digest_min

        if result.max is None or digest_max > result.max:
            result.max = digest_max

    result.centroids = compress_centroids(combined, max_size)

    if _logger.enabled(LogLevel.DEBUG):
        _logger.log(
            DigestMergeDebug(
                message="Merged digests",
                digests=len(digests),
                total_weight=result.count,
                max_size=max_size,
            )
        )

    return result
