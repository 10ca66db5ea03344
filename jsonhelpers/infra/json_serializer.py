import dataclasses
import json
import logging
import types
from collections.abc import Mapping, Sequence, Set
from enum import Enum
from functools import lru_cache
from typing import Annotated, Any, TypeVar, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel, PydanticUserError, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from jsonhelpers.core.errors import DecodingError, EncodingError, InvalidArgumentError
from jsonhelpers.core.models.options import SerializerOptions, TypeNameHandling
from jsonhelpers.core.ports.converter import Converter
from jsonhelpers.core.ports.serializer import Serializer
from jsonhelpers.core.registry import TypeRegistry

T = TypeVar("T")


@lru_cache(maxsize=256)
def _adapter_for(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


class JsonSerializer(Serializer):
    """
    JSON implementation of the Serializer interface.

    Text is produced and parsed by the standard `json` module; turning
    decoded data into the requested type is delegated to pydantic's
    TypeAdapter. On top of both, this class applies the converters and
    the embedded type metadata policy described by SerializerOptions.
    """

    def __init__(
        self,
        options: SerializerOptions,
        registry: TypeRegistry,
        converters: Sequence[Converter] = (),
    ) -> None:
        self._options = options
        self._registry = registry
        self._converters = tuple(converters)
        self._logger = logging.getLogger("jsonhelpers.infra.json_serializer")

    def serialize(self, instance: Any) -> str:
        try:
            packed = self._pack(instance)
            if self._options.indented:
                return json.dumps(
                    packed,
                    indent=self._options.indent,
                    separators=(",", ": "),
                    ensure_ascii=self._options.ensure_ascii,
                )
            return json.dumps(
                packed,
                separators=(",", ":"),
                ensure_ascii=self._options.ensure_ascii,
            )
        except EncodingError:
            raise
        except RecursionError as ex:
            raise EncodingError(
                f"Circular reference detected while encoding {type(instance).__name__}"
            ) from ex
        except (TypeError, ValueError) as ex:
            raise EncodingError(f"Cannot encode {type(instance).__name__}: {ex}") from ex

    def deserialize(self, data: str, target: type[T]) -> T:
        hook = self._object_hook if self._uses_type_names else None

        try:
            raw = json.loads(data, object_hook=hook)
        except json.JSONDecodeError as ex:
            raise DecodingError(f"Malformed JSON: {ex}") from ex

        if self._converter_for(target) is not None:
            return self._read_converted(raw, target)

        adapter = self._adapter(target)
        try:
            return adapter.validate_python(self._read_converted(raw, target))
        except ValidationError as ex:
            raise DecodingError(f"Payload does not match {target!r}: {ex}") from ex

    @property
    def _uses_type_names(self) -> bool:
        return self._options.type_name_handling is TypeNameHandling.AUTO

    def _converter_for(self, tp: Any) -> Converter | None:
        for converter in self._converters:
            if converter.can_convert(tp):
                return converter
        return None

    @staticmethod
    def _adapter(target: Any) -> TypeAdapter:
        try:
            return _adapter_for(target)
        except (TypeError, PydanticUserError) as ex:
            # unhashable annotations and types pydantic has no schema for
            raise InvalidArgumentError(f"Unsupported target type {target!r}: {ex}") from ex

    def _object_hook(self, obj: dict[str, Any]) -> Any:
        key = self._options.type_key
        if key not in obj:
            return obj

        name = obj.pop(key)
        if not isinstance(name, str):
            raise DecodingError(f"Type metadata '{key}' must be a string, got {name!r}")

        try:
            cls = self._registry.resolve(name)
        except KeyError as ex:
            raise DecodingError(f"Unknown embedded type name '{name}'") from ex

        self._logger.debug(f"Resolved embedded type '{name}' to {cls!r}")
        try:
            return self._adapter(cls).validate_python(self._read_converted(obj, cls))
        except ValidationError as ex:
            raise DecodingError(f"Payload does not match embedded type '{name}': {ex}") from ex

    def _read_converted(self, data: Any, tp: Any) -> Any:
        """
        Walk decoded data alongside the target annotation and let the
        converters rebuild every value whose declared type they claim.
        Whatever no converter claims is left for pydantic to validate.
        """
        if not self._converters:
            return data

        converter = self._converter_for(tp)
        if converter is not None:
            try:
                return converter.read(data, tp)
            except (TypeError, ValueError) as ex:
                raise DecodingError(f"Converter failed to read {tp!r}: {ex}") from ex

        origin = get_origin(tp)
        args = get_args(tp)

        if origin is Annotated:
            return self._read_converted(data, args[0])

        if origin is Union or origin is types.UnionType:
            members = [arg for arg in args if arg is not type(None)]
            if data is None or len(members) != 1:
                return data
            return self._read_converted(data, members[0])

        if isinstance(origin, type) and args:
            if issubclass(origin, Mapping) and isinstance(data, dict) and len(args) == 2:
                return {k: self._read_converted(v, args[1]) for k, v in data.items()}

            if issubclass(origin, tuple) and isinstance(data, list):
                if len(args) == 2 and args[1] is Ellipsis:
                    return [self._read_converted(v, args[0]) for v in data]
                if len(args) == len(data):
                    return [self._read_converted(v, a) for v, a in zip(data, args)]
                return data

            if issubclass(origin, (Sequence, Set)) and isinstance(data, list):
                return [self._read_converted(v, args[0]) for v in data]

            return data

        if isinstance(data, dict) and isinstance(tp, type):
            annotations = self._field_annotations(tp)
            if annotations:
                return {
                    key: self._read_converted(value, annotations[key]) if key in annotations else value
                    for key, value in data.items()
                }

        return data

    @staticmethod
    def _field_annotations(tp: type) -> dict[str, Any]:
        """Declared field types keyed by their JSON member name."""
        if dataclasses.is_dataclass(tp):
            try:
                hints = get_type_hints(tp, include_extras=True)
            except NameError:
                hints = {}
            return {
                f.name: hints.get(f.name, f.type)
                for f in dataclasses.fields(tp)
                if f.init
            }

        if issubclass(tp, BaseModel):
            return {
                info.alias or name: info.annotation
                for name, info in tp.model_fields.items()
            }

        return {}

    def _pack(self, obj: Any) -> Any:
        converter = self._converter_for(type(obj))
        if converter is not None:
            return converter.write(obj)

        if isinstance(obj, Enum):
            return self._pack(obj.value)

        if obj is None or isinstance(obj, (bool, int, float, str)):
            return obj

        if isinstance(obj, Mapping):
            return {self._pack_key(k): self._pack(v) for k, v in obj.items()}

        if isinstance(obj, (list, tuple, set, frozenset)):
            return [self._pack(v) for v in obj]

        fields = self._fields_of(obj)
        if fields is not None:
            packed: dict[str, Any] = {}
            name = self._registry.name_of(type(obj)) if self._uses_type_names else None
            if name is not None:
                packed[self._options.type_key] = name
            for field, value in fields.items():
                packed[field] = self._pack(value)
            return packed

        try:
            return to_jsonable_python(obj)
        except PydanticSerializationError as ex:
            raise EncodingError(f"Type {type(obj).__name__} is not JSON serializable") from ex

    @staticmethod
    def _pack_key(key: Any) -> Any:
        if isinstance(key, Enum):
            return key.value
        return key

    @staticmethod
    def _fields_of(obj: Any) -> dict[str, Any] | None:
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return {
                f.name: getattr(obj, f.name)
                for f in dataclasses.fields(obj)
                if f.init
            }

        if isinstance(obj, BaseModel):
            fields = {
                info.alias or name: getattr(obj, name)
                for name, info in type(obj).model_fields.items()
            }
            if obj.model_extra:
                fields.update(obj.model_extra)
            return fields

        return None
