from __future__ import annotations
from pydantic import BaseModel, StrictInt, StrictFloat, StrictStr
from typing import Callable, Dict, Literal, Union

PrimaryType = Union[str, int, float, bytes, bool]


class Env(BaseModel):
    DIGEST_DEFAULT_MAX_SIZE: StrictInt = 100
    DIGEST_MAX_UNMERGED: StrictInt = 2048
    DIGEST_WINDOW_DURATION_SECONDS: StrictFloat = 60.0
    DIGEST_MAX_WINDOWS: StrictInt = 5
    DIGEST_LOG_LEVEL: StrictStr = "info"
    DIGEST_LOG_OUTPUT: Literal["stdout", "stderr"] = "stdout"
    DIGEST_LOG_FORMAT: Literal["template", "json"] = "template"

    @classmethod
    def types_map(cls) -> Dict[str, Callable[[str], PrimaryType]]:
        return {
            "DIGEST_DEFAULT_MAX_SIZE": int,
            "DIGEST_MAX_UNMERGED": int,
            "DIGEST_WINDOW_DURATION_SECONDS": float,
            "DIGEST_MAX_WINDOWS": int,
            "DIGEST_LOG_LEVEL": str,
            "DIGEST_LOG_OUTPUT": str,
            "DIGEST_LOG_FORMAT": str,
        }
