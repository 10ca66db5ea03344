from typing import Protocol, Any, TypeVar

T = TypeVar("T")


class Serializer(Protocol):
    """
    Defines the interface for turning typed values into JSON text and
    back.

    Implementations must be:
    - pure (no I/O, the façade owns every handle)
    - all-or-nothing: either a fully constructed value is returned or
      an error is raised
    - safe against malformed input
    """

    def serialize(self, instance: Any) -> str:
        """Encode a Python object into JSON text."""

    def deserialize(self, data: str, target: type[T]) -> T:
        """Decode JSON text into an instance of `target`."""
