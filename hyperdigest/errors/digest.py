"""
Exceptions raised by digest construction, insertion and queries.

Validation happens at the boundary (centroid construction, point insertion,
the validating digest constructors). The merge engine trusts its inputs and
never raises these.
"""


class DigestError(Exception):
    """Base class for all digest errors."""

    pass


class InvalidInputError(DigestError, ValueError):
    """
    Raised when a caller supplies a value the digest cannot represent.

    Covers non-positive or non-finite centroid weights, non-finite means or
    observed values, and quantiles outside [0, 1].
    """

    pass


class EmptyDigestQueryError(DigestError):
    """
    Raised when a quantile or rank is estimated over an empty centroid list.

    Digest level queries report an empty digest as None instead; this error
    surfaces only when the estimator functions are called directly.
    """

    pass
