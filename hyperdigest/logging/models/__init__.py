from .entry import Entry as Entry
from .log_level import LogLevel as LogLevel, LogLevelName as LogLevelName
