from __future__ import annotations

import msgspec

from .centroid import Centroid
from .digest import Digest
from .digest_config import DigestConfig


class CentroidPayload(msgspec.Struct):
    mean: float
    weight: float


class DigestPayload(msgspec.Struct, kw_only=True):
    """Field-for-field encoding of a Digest. Absent extrema encode as null."""

    centroids: list[CentroidPayload] = msgspec.field(default_factory=list)
    max_size: int
    sum: float = 0.0
    count: float = 0.0
    max: float | None = None
    min: float | None = None


def to_payload(digest: Digest) -> DigestPayload:
    return DigestPayload(
        centroids=[
            CentroidPayload(mean=centroid.mean, weight=centroid.weight)
            for centroid in digest.centroids
        ],
        max_size=digest.max_size(),
        sum=digest.sum(),
        count=digest.count(),
        max=digest.max(),
        min=digest.min(),
    )


def from_payload(
    payload: DigestPayload,
    config: DigestConfig | None = None,
) -> Digest:
    """Rebuild a digest through the trusted constructor."""
    return Digest.from_trusted_parts(
        [Centroid(mean=entry.mean, weight=entry.weight) for entry in payload.centroids],
        max_size=payload.max_size,
        sum=payload.sum,
        count=payload.count,
        max=payload.max,
        min=payload.min,
        config=config,
    )


def encode_json(digest: Digest) -> bytes:
    return msgspec.json.encode(to_payload(digest))


def decode_json(data: bytes, config: DigestConfig | None = None) -> Digest:
    return from_payload(msgspec.json.decode(data, type=DigestPayload), config=config)


def encode_msgpack(digest: Digest) -> bytes:
    """Compact binary encoding for shipping shard digests."""
    return msgspec.msgpack.encode(to_payload(digest))


def decode_msgpack(data: bytes, config: DigestConfig | None = None) -> Digest:
    return from_payload(
        msgspec.msgpack.decode(data, type=DigestPayload),
        config=config,
    )
