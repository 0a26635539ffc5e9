from .models import Entry, LogLevel


class CompressionTrace(Entry, kw_only=True):
    input_centroids: int
    output_centroids: int
    total_weight: float
    max_size: int
    level: LogLevel = LogLevel.TRACE

class DigestMergeDebug(Entry, kw_only=True):
    digests: int
    total_weight: float
    max_size: int
    level: LogLevel = LogLevel.DEBUG

class DigestSelfHealWarning(Entry, kw_only=True):
    supplied_centroids: int
    max_size: int
    level: LogLevel = LogLevel.WARN
