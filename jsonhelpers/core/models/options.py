from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jsonhelpers.bootstrap.config.settings import JsonHelpersSettings


class TypeNameHandling(str, Enum):
    """
    Controls embedded type metadata.

    NONE  -> metadata is neither written nor interpreted.
    AUTO  -> registered types carry their registry name under the type
             key when written; on read, objects carrying the type key are
             built as the registered class. Names missing from the
             registry are rejected.
    """
    NONE = "none"
    AUTO = "auto"


class Formatting(str, Enum):
    NONE = "none"
    INDENTED = "indented"


@dataclass(frozen=True)
class SerializerOptions:
    """
    Per-call serializer configuration, derived from the settings and the
    `indented` flag of the write operations.
    """
    type_name_handling: TypeNameHandling = TypeNameHandling.AUTO
    formatting: Formatting = Formatting.NONE
    indent: int = 2
    type_key: str = "$type"
    ensure_ascii: bool = False

    @property
    def indented(self) -> bool:
        return self.formatting is Formatting.INDENTED

    @classmethod
    def from_settings(cls, settings: "JsonHelpersSettings", indented: bool = False) -> "SerializerOptions":
        return cls(
            type_name_handling=settings.type_name_handling,
            formatting=Formatting.INDENTED if indented else Formatting.NONE,
            indent=settings.indent,
            type_key=settings.type_key,
            ensure_ascii=settings.ensure_ascii,
        )
