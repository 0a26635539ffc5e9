from .digest import (
    Centroid as Centroid,
    Digest as Digest,
    DigestConfig as DigestConfig,
    DigestSummary as DigestSummary,
    TimeWindowedDigest as TimeWindowedDigest,
)
from .errors import (
    DigestError as DigestError,
    EmptyDigestQueryError as EmptyDigestQueryError,
    InvalidInputError as InvalidInputError,
)
