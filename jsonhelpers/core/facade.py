"""
Read and write typed values as JSON.

Readers:
    from_stream             -> closes the stream once decoding completes
    from_persistent_stream  -> leaves the stream open, the caller owns it
    from_string             -> in-memory text, encoded with `encoding` first
    from_file               -> opens, reads and closes a file

Writers:
    to_file                 -> creates or truncates a file
    to_string               -> returns the JSON text

Every reader either returns a fully constructed value of the target type
or raises a JsonHelpersError subclass. Handles opened here are always
closed, whatever the outcome.
"""
import codecs
import io
import logging
import os
from collections.abc import Sequence
from typing import Any, BinaryIO, TypeVar

from jsonhelpers.bootstrap.config.settings import JsonHelpersSettings
from jsonhelpers.bootstrap.deps import build_serializer, get_settings
from jsonhelpers.core.errors import (
    DecodingError,
    InvalidArgumentError,
    JsonIOError,
    JsonNotFoundError,
)
from jsonhelpers.core.ports.converter import Converter
from jsonhelpers.core.registry import TypeRegistry

T = TypeVar("T")

PathLike = str | os.PathLike[str]

_logger = logging.getLogger("jsonhelpers.core.facade")


def from_stream(
    stream: BinaryIO,
    target: type[T],
    *,
    encoding: str | None = None,
    converters: Sequence[Converter] = (),
    registry: TypeRegistry | None = None,
    settings: JsonHelpersSettings | None = None,
) -> T:
    """
    Read an instance of `target` from a JSON stream.

    The stream is closed by this function when decoding completes,
    successfully or not.
    """
    with stream:
        return _read(stream, target, encoding, converters, registry, settings)


def from_persistent_stream(
    stream: BinaryIO,
    target: type[T],
    *,
    encoding: str | None = None,
    converters: Sequence[Converter] = (),
    registry: TypeRegistry | None = None,
    settings: JsonHelpersSettings | None = None,
) -> T:
    """
    Read an instance of `target` from a JSON stream.

    Warning: the stream is NOT closed. Closing it remains the caller's
    responsibility, on success as well as on failure.
    """
    return _read(stream, target, encoding, converters, registry, settings)


def from_string(
    json: str,
    target: type[T],
    encoding: str = "utf-8",
    *,
    converters: Sequence[Converter] = (),
    registry: TypeRegistry | None = None,
    settings: JsonHelpersSettings | None = None,
) -> T:
    """
    Read an instance of `target` from a JSON string.

    The string is encoded with `encoding` and decoded back from an
    in-memory stream. The default is always UTF-8, never the platform
    encoding.
    """
    _check_encoding(encoding)
    try:
        data = json.encode(encoding)
    except UnicodeEncodeError as ex:
        raise InvalidArgumentError(f"JSON string cannot be encoded as {encoding}: {ex}") from ex
    except AttributeError:
        raise InvalidArgumentError(f"json must be a string, got {type(json).__name__}") from None

    return from_stream(
        io.BytesIO(data),
        target,
        encoding=encoding,
        converters=converters,
        registry=registry,
        settings=settings,
    )


def from_file(
    path: PathLike | None,
    target: type[T],
    *,
    converters: Sequence[Converter] = (),
    registry: TypeRegistry | None = None,
    settings: JsonHelpersSettings | None = None,
) -> T:
    """Read an instance of `target` from a JSON file."""
    _check_path(path)

    try:
        stream = open(path, "rb")
    except FileNotFoundError as ex:
        raise JsonNotFoundError(f"JSON file not found: {path}") from ex
    except OSError as ex:
        raise JsonIOError(f"Cannot open JSON file {path}: {ex}") from ex

    _logger.debug(f"Reading {_type_name(target)} from file {path}")
    return from_stream(
        stream,
        target,
        converters=converters,
        registry=registry,
        settings=settings,
    )


def to_file(
    instance: Any,
    path: PathLike | None,
    indented: bool = False,
    *,
    converters: Sequence[Converter] = (),
    registry: TypeRegistry | None = None,
    settings: JsonHelpersSettings | None = None,
) -> None:
    """
    Write `instance` to a JSON file, creating or truncating it.

    The value is encoded before the file is opened: a value that cannot
    be encoded leaves an existing file untouched.
    """
    _check_path(path)
    settings = settings or get_settings()

    text = to_string(
        instance,
        indented,
        converters,
        registry=registry,
        settings=settings,
    )

    try:
        with open(path, "w", encoding=settings.encoding, newline="") as fp:
            fp.write(text)
    except FileNotFoundError as ex:
        raise JsonNotFoundError(f"Cannot create JSON file {path}: {ex}") from ex
    except OSError as ex:
        raise JsonIOError(f"Cannot write JSON file {path}: {ex}") from ex

    _logger.debug(f"Wrote {type(instance).__name__} to file {path}")


def to_string(
    instance: Any,
    indented: bool = False,
    converters: Sequence[Converter] = (),
    *,
    registry: TypeRegistry | None = None,
    settings: JsonHelpersSettings | None = None,
) -> str:
    """Write `instance` to a JSON string."""
    serializer = build_serializer(settings, indented, registry, converters)
    return serializer.serialize(instance)


def _read(
    stream: BinaryIO,
    target: type[T],
    encoding: str | None,
    converters: Sequence[Converter],
    registry: TypeRegistry | None,
    settings: JsonHelpersSettings | None,
) -> T:
    settings = settings or get_settings()
    encoding = encoding or settings.encoding
    _check_encoding(encoding)

    try:
        raw = stream.read()
    except OSError as ex:
        _logger.warning(f"Failed to read JSON stream: {ex}")
        raise JsonIOError(f"Cannot read JSON stream: {ex}") from ex

    if isinstance(raw, bytes):
        # a leading UTF-8 byte order mark is skipped
        codec = "utf-8-sig" if codecs.lookup(encoding).name == "utf-8" else encoding
        try:
            text = raw.decode(codec)
        except UnicodeDecodeError as ex:
            raise DecodingError(f"JSON stream is not valid {encoding}: {ex}") from ex
    else:
        text = raw

    _logger.debug(f"Decoding {_type_name(target)} from {len(text)} characters")
    serializer = build_serializer(settings, registry=registry, converters=converters)
    return serializer.deserialize(text, target)


def _check_path(path: PathLike | None) -> None:
    if path is None:
        raise InvalidArgumentError("path must not be None")
    if not os.fspath(path):
        raise InvalidArgumentError("path must not be empty")


def _check_encoding(encoding: str) -> None:
    try:
        codecs.lookup(encoding)
    except LookupError:
        raise InvalidArgumentError(f"Unknown text encoding '{encoding}'") from None


def _type_name(target: Any) -> str:
    return getattr(target, "__name__", repr(target))
