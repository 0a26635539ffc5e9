from typing import Any, Dict

import msgspec

from .log_level import LogLevel


class Entry(msgspec.Struct, kw_only=True):
    message: str | None = None
    tags: set[str] = msgspec.field(
        default_factory=set,
    )
    level: LogLevel

    def _fields(self, context: Dict[str, Any] | None = None) -> Dict[str, Any]:
        fields: Dict[str, Any] = {
            field: getattr(self, field) for field in self.__struct_fields__
        }

        fields["level"] = self.level.value
        fields["tags"] = sorted(self.tags)

        if context:
            fields.update(context)

        return fields

    def to_template(
        self,
        template: str,
        context: Dict[str, Any] | None = None,
    ) -> str:
        return template.format(**self._fields(context))

    def to_json(
        self,
        context: Dict[str, Any] | None = None,
    ) -> str:
        """One JSON object holding every entry field plus the caller context."""
        return msgspec.json.encode(self._fields(context)).decode()
