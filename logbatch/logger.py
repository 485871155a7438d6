"""Named, context-bound logger handles."""

from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping, Optional

from logbatch.merge import merge

if TYPE_CHECKING:
    from logbatch.agent import LoggingAgent


class Logger:
    """Emits records into an agent under a fixed name.

    Bound fields are frozen when the logger is created and are merged into
    every record's context, with call-site fields winning on collision.
    ``bind`` returns a new logger and leaves this one untouched.
    """

    __slots__ = ("_agent", "_name", "_fields")

    def __init__(
        self,
        agent: "LoggingAgent",
        name: str,
        fields: Optional[Mapping[str, Any]] = None,
    ):
        self._agent = agent
        self._name = name
        self._fields = MappingProxyType(merge(fields))

    @property
    def name(self) -> str:
        return self._name

    @property
    def bound_fields(self) -> Mapping[str, Any]:
        return self._fields

    def debug(self, event: str, context: Optional[Mapping[str, Any]] = None, **fields: Any):
        self._agent.emit(self._name, "debug", event, self._fields, context, fields)

    def info(self, event: str, context: Optional[Mapping[str, Any]] = None, **fields: Any):
        self._agent.emit(self._name, "info", event, self._fields, context, fields)

    def warn(self, event: str, context: Optional[Mapping[str, Any]] = None, **fields: Any):
        self._agent.emit(self._name, "warn", event, self._fields, context, fields)

    warning = warn

    def error(self, event: str, context: Optional[Mapping[str, Any]] = None, **fields: Any):
        self._agent.emit(self._name, "error", event, self._fields, context, fields)

    def bind(self, context: Optional[Mapping[str, Any]] = None, **fields: Any) -> "Logger":
        """Return a child logger with *context* and *fields* added to the bound fields."""
        return Logger(self._agent, self._name, merge(self._fields, context, fields))

    def __repr__(self) -> str:
        return f"Logger(name={self._name!r}, fields={dict(self._fields)!r})"
