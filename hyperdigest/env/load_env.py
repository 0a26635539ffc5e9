import os
from typing import Dict

from dotenv import dotenv_values

from .env import Env, PrimaryType


def _cast_values(
    raw_values: Dict[str, str | None],
) -> Dict[str, PrimaryType]:
    envars = Env.types_map()

    return {
        envar_name: envars[envar_name](envar_value)
        for envar_name, envar_value in raw_values.items()
        if envar_name in envars and envar_value
    }


def load_env(
    default: type[Env] = Env,
    env_file: str | None = None,
    override: Env | None = None,
) -> Env:
    """
    Build an Env from, in increasing precedence, the process environment,
    the .env file and any explicitly set fields of override.
    """
    if env_file is None:
        env_file = ".env"

    values = _cast_values(
        {envar_name: os.getenv(envar_name) for envar_name in default.types_map()}
    )

    if env_file and os.path.exists(env_file):
        values.update(_cast_values(dotenv_values(dotenv_path=env_file)))

    if override:
        values.update(override.model_dump(exclude_unset=True))

    return default(**values)
