from .centroid import Centroid as Centroid
from .digest import Digest as Digest
from .digest_codec import (
    CentroidPayload as CentroidPayload,
    DigestPayload as DigestPayload,
    decode_json as decode_json,
    decode_msgpack as decode_msgpack,
    encode_json as encode_json,
    encode_msgpack as encode_msgpack,
    from_payload as from_payload,
    to_payload as to_payload,
)
from .digest_config import DigestConfig as DigestConfig
from .digest_summary import DigestSummary as DigestSummary
from .merge_engine import (
    MergeResult as MergeResult,
    compress_centroids as compress_centroids,
    merge_digests as merge_digests,
)
from .quantile_estimator import (
    estimate_quantile as estimate_quantile,
    estimate_rank as estimate_rank,
)
from .scale_function import (
    cluster_weight_limit as cluster_weight_limit,
    k_inverse as k_inverse,
    k_scale as k_scale,
)
from .time_windowed_digest import TimeWindowedDigest as TimeWindowedDigest
