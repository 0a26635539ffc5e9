import datetime
import io
import sys
import threading
from typing import Callable, TypeVar

from hyperdigest.logging.config import LoggingConfig, StreamType
from hyperdigest.logging.models import Entry, LogLevel


T = TypeVar('T', bound=Entry)

DEFAULT_TEMPLATE = "{timestamp} - {level} - {thread_id} - {filename}:{function_name}.{line_number} - {message}"
ERROR_TEMPLATE = "{timestamp} - {level} - {thread_id}.{filename}:{function_name}.{line_number} - {error}"


class LoggerStream:
    def __init__(
        self,
        name: str | None = None,
        template: str | None = None,
    ) -> None:
        if name is None:
            name = "default"

        self._name = name
        self._default_template = template
        self._config = LoggingConfig()

    @property
    def name(self):
        return self._name

    def _stream_for(self, stream_type: StreamType) -> io.TextIOBase:
        # Resolved per write so redirected or captured streams are honored.
        if stream_type == StreamType.STDERR:
            return sys.stderr

        return sys.stdout

    def enabled(self, level: LogLevel) -> bool:
        return self._config.enabled(self._name, level)

    def log(
        self,
        entry: T,
        template: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        if self._config.enabled(self._name, entry.level) is False:
            return

        if filter and filter(entry) is False:
            return

        if template is None:
            template = self._default_template

        if template is None:
            template = DEFAULT_TEMPLATE

        log_file, line_number, function_name = self._find_caller()
        context = {
            "filename": log_file,
            "function_name": function_name,
            "line_number": line_number,
            "thread_id": threading.get_native_id(),
            "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
        }

        stream = self._stream_for(self._config.output)

        try:
            if self._config.format == "json":
                line = entry.to_json(context=context)

            else:
                line = entry.to_template(
                    template,
                    context=context,
                )

            stream.write(line + "\n")

        except (KeyError, IndexError, TypeError, ValueError, OSError) as err:
            stderr = sys.stderr
            if stderr.closed is False:
                stderr.write(
                    entry.to_template(
                        ERROR_TEMPLATE,
                        context={
                            **context,
                            "error": str(err),
                        },
                    )
                    + "\n"
                )

    def _find_caller(self):
        """
        Find the stack frame of the caller so that we can note the source
        file name, line number and function name.
        """
        frame = sys._getframe(2)
        code = frame.f_code

        return (
            code.co_filename,
            frame.f_lineno,
            code.co_name,
        )
