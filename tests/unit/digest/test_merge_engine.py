"""
Unit tests for the merge engine.

These tests verify that:
1. Compression conserves weight exactly and returns sorted centroids
2. The centroid count stays within max_size + 1
3. Tail clusters stay small while middle clusters grow
4. Merging recomputes count, sum, min and max from the inputs
5. Inputs are never mutated and identical inputs give identical output
"""

import random

import pytest

from hyperdigest.digest import (
    Centroid,
    Digest,
    DigestConfig,
    compress_centroids,
    merge_digests,
)


def unit_centroids(values):
    return [Centroid(float(value), 1.0) for value in values]


class TestCompressCentroids:
    """Test compress_centroids()."""

    def test_empty_input(self):
        """Compressing nothing yields nothing."""
        assert compress_centroids([], 100) == []

    def test_single_centroid_is_copied(self):
        """A lone centroid survives unchanged but as a new object."""
        centroid = Centroid(3.0, 2.0)
        compressed = compress_centroids([centroid], 100)

        assert compressed == [centroid]
        assert compressed[0] is not centroid

    def test_weight_conservation(self):
        """The output weight should equal the input weight."""
        rng = random.Random(11)
        centroids = [
            Centroid(rng.gauss(0.0, 10.0), rng.uniform(0.1, 5.0))
            for _ in range(5000)
        ]
        total_weight = sum(centroid.weight for centroid in centroids)

        compressed = compress_centroids(centroids, 100)

        assert sum(centroid.weight for centroid in compressed) == pytest.approx(total_weight)

    def test_output_is_sorted(self):
        """Output means should be non-decreasing."""
        rng = random.Random(5)
        centroids = unit_centroids(rng.expovariate(1.0) for _ in range(3000))

        compressed = compress_centroids(centroids, 50)
        means = [centroid.mean for centroid in compressed]

        assert means == sorted(means)

    @pytest.mark.parametrize("max_size", [1, 10, 50, 100, 300])
    def test_bounded_near_max_size(self, max_size):
        """Compression should leave at most max_size + 1 centroids."""
        compressed = compress_centroids(unit_centroids(range(5000)), max_size)
        assert len(compressed) <= max_size + 1

    def test_tail_clusters_are_small(self):
        """Clusters at the extremes hold far less weight than at the median."""
        compressed = compress_centroids(unit_centroids(range(1, 1001)), 100)
        heaviest = max(centroid.weight for centroid in compressed)

        assert compressed[0].weight == 1.0
        assert compressed[-1].weight <= 3.0
        assert heaviest > 10.0

    def test_inputs_are_not_mutated(self):
        """Merging clusters should not touch the caller's centroids."""
        centroids = unit_centroids(range(200))
        snapshot = [centroid.copy() for centroid in centroids]

        compress_centroids(centroids, 10)

        assert centroids == snapshot

    def test_deterministic(self):
        """Identical inputs should give identical output."""
        rng = random.Random(3)
        centroids = [
            Centroid(float(rng.randint(0, 20)), rng.uniform(0.5, 2.0))
            for _ in range(1000)
        ]

        assert compress_centroids(centroids, 20) == compress_centroids(list(centroids), 20)

    def test_recompression_is_stable(self):
        """Compressing an already compressed list should change nothing."""
        compressed = compress_centroids(unit_centroids(range(1, 1001)), 100)
        assert compress_centroids(compressed, 100) == compressed


class TestMergeDigests:
    """Test merge_digests()."""

    def test_recomputes_statistics(self):
        """Count and sum add up; min and max ignore empty inputs."""
        config = DigestConfig()
        low = Digest.from_values(range(1, 101), max_size=100, config=config)
        empty = Digest.with_size(100, config=config)
        high = Digest.from_values(range(200, 301), max_size=100, config=config)

        result = merge_digests([low, empty, high])

        assert result.count == 201.0
        assert result.sum == pytest.approx(5050.0 + 25250.0)
        assert result.min == 1.0
        assert result.max == 300.0
        assert sum(centroid.weight for centroid in result.centroids) == pytest.approx(201.0)

    def test_defaults_to_first_max_size(self):
        """Without max_size the first digest's bound applies."""
        config = DigestConfig()
        first = Digest.with_size(20, config=config)
        second = Digest.from_values(range(1000), max_size=200, config=config)

        result = merge_digests([first, second])

        assert result.max_size == 20
        assert len(result.centroids) <= 21

    def test_all_empty(self):
        """Merging empty digests yields an empty result."""
        config = DigestConfig()
        result = merge_digests(
            [Digest.with_size(10, config=config), Digest.with_size(10, config=config)]
        )

        assert result.centroids == []
        assert result.count == 0.0
        assert result.min is None
        assert result.max is None

    def test_no_digests(self):
        """An empty input list is a valid, empty merge."""
        result = merge_digests([], max_size=10)

        assert result.centroids == []
        assert result.max_size == 10
