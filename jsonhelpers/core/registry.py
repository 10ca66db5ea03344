from collections.abc import Callable, Iterator
from typing import TypeVar, overload

C = TypeVar("C", bound=type)


class TypeRegistry:
    """
    Explicit mapping between type names and classes, used to read and
    write embedded type metadata.

    A payload can only ever name a class that was registered here:
    nothing is imported or instantiated from an arbitrary name found in
    the JSON text. Each class has exactly one name and each name
    designates exactly one class.

    The module-level `default_registry` (and its `register` shortcut) is
    shared by the whole process: every read or write that does not pass
    `registry=` sees all classes registered there. Callers that need
    isolation build their own TypeRegistry and pass it explicitly.
    """

    def __init__(self) -> None:
        self._by_name: dict[str, type] = {}
        self._by_type: dict[type, str] = {}

    @overload
    def register(self, cls: C, *, name: str | None = None) -> C: ...

    @overload
    def register(self, cls: None = None, *, name: str | None = None) -> Callable[[C], C]: ...

    def register(self, cls=None, *, name=None):
        """
        Register a class under `name` (default: its __qualname__).

        Works as a plain call, a bare decorator or a decorator factory:

            registry.register(Circle)

            @registry.register
            class Square(Shape): ...

            @registry.register(name="shapes.Triangle")
            class Triangle(Shape): ...
        """
        if cls is None:
            return lambda c: self.register(c, name=name)

        if not isinstance(cls, type):
            raise TypeError(f"Only classes can be registered, got {cls!r}")

        key = name or cls.__qualname__

        bound = self._by_name.get(key)
        if bound is not None and bound is not cls:
            raise ValueError(f"Type name '{key}' is already bound to {bound!r}")

        current = self._by_type.get(cls)
        if current is not None and current != key:
            raise ValueError(f"{cls!r} is already registered as '{current}'")

        self._by_name[key] = cls
        self._by_type[cls] = key
        return cls

    def resolve(self, name: str) -> type:
        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError(f"Type name '{name}' is not registered") from None

    def name_of(self, cls: type) -> str | None:
        return self._by_type.get(cls)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return item in self._by_name
        return item in self._by_type

    def __len__(self) -> int:
        return len(self._by_name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_name)


default_registry = TypeRegistry()
register = default_registry.register
