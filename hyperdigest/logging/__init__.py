from .config import LoggingConfig as LoggingConfig, StreamType as StreamType
from .digest_logging_models import (
    CompressionTrace as CompressionTrace,
    DigestMergeDebug as DigestMergeDebug,
    DigestSelfHealWarning as DigestSelfHealWarning,
)
from .models import Entry as Entry, LogLevel as LogLevel, LogLevelName as LogLevelName
from .streams import LoggerStream as LoggerStream
