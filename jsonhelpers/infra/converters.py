from datetime import date, datetime
from enum import Enum
from typing import Any

from jsonhelpers.core.ports.converter import Converter


def _is_subclass(tp: Any, bases: type | tuple[type, ...]) -> bool:
    # parametrized generics such as list[int] are not classes
    try:
        return isinstance(tp, type) and issubclass(tp, bases)
    except TypeError:
        return False


class IsoDateTimeConverter(Converter):
    """
    Writes datetime and date values as strings.

    Without `fmt` values use ISO-8601 (datetime.isoformat). With `fmt`
    they are formatted with strftime and parsed back with strptime.
    """
    def __init__(self, fmt: str | None = None) -> None:
        self._fmt = fmt

    def can_convert(self, tp: type) -> bool:
        return _is_subclass(tp, (datetime, date))

    def write(self, value: date) -> str:
        if self._fmt is None:
            return value.isoformat()
        return value.strftime(self._fmt)

    def read(self, data: Any, tp: type) -> date:
        if not isinstance(data, str):
            raise TypeError(f"Expected a string for {tp.__name__}, got {type(data).__name__}")

        if self._fmt is None:
            return tp.fromisoformat(data)

        parsed = datetime.strptime(data, self._fmt)
        if _is_subclass(tp, datetime):
            return parsed
        return parsed.date()


class StringEnumConverter(Converter):
    """Writes enum members by name instead of by value."""

    def can_convert(self, tp: type) -> bool:
        return _is_subclass(tp, Enum)

    def write(self, value: Enum) -> str:
        return value.name

    def read(self, data: Any, tp: type) -> Enum:
        try:
            return tp[data]
        except KeyError:
            raise ValueError(f"'{data}' is not a member of {tp.__name__}") from None
