from .digest import (
    DigestError as DigestError,
    EmptyDigestQueryError as EmptyDigestQueryError,
    InvalidInputError as InvalidInputError,
)
