import contextvars
from typing import List, Literal

from hyperdigest.env import Env, load_env
from hyperdigest.logging.models import LogLevel, LogLevelName
from .stream_type import StreamType


LogOutput = Literal['stdout', 'stderr']
LogFormat = Literal['template', 'json']

_global_log_level = contextvars.ContextVar("_global_log_level", default=LogLevel.INFO)
_global_disabled_loggers = contextvars.ContextVar("_global_disabled_loggers", default=[])
_global_log_output_type = contextvars.ContextVar("_global_log_output_type", default=StreamType.STDOUT)
_global_log_format = contextvars.ContextVar("_global_log_format", default="template")
_global_configured = contextvars.ContextVar("_global_configured", default=False)


class LoggingConfig:
    """
    Process-wide logging settings held in context variables.

    Until update() is called, the first level check loads DIGEST_LOG_LEVEL,
    DIGEST_LOG_OUTPUT and DIGEST_LOG_FORMAT through load_env(). Explicit
    updates take precedence over the environment.
    """

    def __init__(self) -> None:
        self._log_level: contextvars.ContextVar[LogLevel] = _global_log_level
        self._log_output_type: contextvars.ContextVar[StreamType] = _global_log_output_type
        self._log_format: contextvars.ContextVar[LogFormat] = _global_log_format
        self._configured: contextvars.ContextVar[bool] = _global_configured

        self._disabled_loggers: contextvars.ContextVar[List[str]] = (
            _global_disabled_loggers
        )

    def update(
        self,
        log_level: LogLevelName | None = None,
        log_output: LogOutput | None = None,
        log_format: LogFormat | None = None,
        disabled_loggers: List[str] | None = None,
    ):
        self._configured.set(True)

        if log_level:
            self._log_level.set(
                LogLevel.to_level(log_level)
            )

        if log_output:
            self._log_output_type.set(
                StreamType.STDOUT if log_output == 'stdout' else StreamType.STDERR
            )

        if log_format:
            self._log_format.set(log_format)

        if disabled_loggers is not None:
            self._disabled_loggers.set(list(disabled_loggers))

    def update_from_env(self, env: Env | None = None):
        if env is None:
            env = load_env(Env)

        self.update(
            log_level=env.DIGEST_LOG_LEVEL,
            log_output=env.DIGEST_LOG_OUTPUT,
            log_format=env.DIGEST_LOG_FORMAT,
        )

    def reset(self):
        """Restore defaults and re-read the environment on next use."""
        self._log_level.set(LogLevel.INFO)
        self._log_output_type.set(StreamType.STDOUT)
        self._log_format.set("template")
        self._disabled_loggers.set([])
        self._configured.set(False)

    def _ensure_configured(self):
        if self._configured.get() is False:
            self.update_from_env()

    def enabled(self, logger_name: str, log_level: LogLevel) -> bool:
        self._ensure_configured()

        disabled_loggers = self._disabled_loggers.get()
        current_log_level = self._log_level.get()
        return logger_name not in disabled_loggers and (
            log_level.severity >= current_log_level.severity
        )

    @property
    def level(self):
        self._ensure_configured()
        return self._log_level.get()

    @property
    def output(self):
        self._ensure_configured()
        return self._log_output_type.get()

    @property
    def format(self):
        self._ensure_configured()
        return self._log_format.get()
