from typing import Protocol, Any


class Converter(Protocol):
    """
    Overrides the default encode/decode behavior for the types it claims.

    Converters are supplied as an ordered sequence: when several claim
    the same type, the first one wins. A converter takes precedence over
    every built-in rule, including embedded type metadata.
    """

    def can_convert(self, tp: type) -> bool:
        """Return True if this converter handles values of type `tp`."""

    def write(self, value: Any) -> Any:
        """
        Turn `value` into JSON-compatible data (dict, list, str, int,
        float, bool or None). The result is emitted as is.
        """

    def read(self, data: Any, tp: type) -> Any:
        """
        Rebuild a value of type `tp` from decoded JSON data. Must raise
        ValueError or TypeError when `data` cannot be converted.
        """
