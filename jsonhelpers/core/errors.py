class JsonHelpersError(Exception):
    """Base class for every error raised by jsonhelpers."""


class InvalidArgumentError(JsonHelpersError, ValueError):
    """
    A caller-supplied argument is unusable: missing or empty path,
    unknown text encoding, target type the serializer cannot handle.
    Raised before any I/O is attempted.
    """


class JsonIOError(JsonHelpersError, OSError):
    """A file or stream could not be opened, read or written."""


class JsonNotFoundError(JsonIOError, FileNotFoundError):
    """The file (or its parent directory) does not exist."""


class DecodingError(JsonHelpersError, ValueError):
    """
    The payload could not be turned into the requested type: malformed
    JSON, undecodable bytes, value not matching the target type, or an
    embedded type name missing from the registry.
    """


class EncodingError(JsonHelpersError, TypeError):
    """The value cannot be represented as JSON."""


class ConfigurationError(JsonHelpersError):
    """Settings read from the environment are invalid."""
