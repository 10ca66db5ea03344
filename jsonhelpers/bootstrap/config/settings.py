import codecs
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_core.core_schema import ValidationInfo
from pydantic_settings import BaseSettings, SettingsConfigDict

from jsonhelpers.core.models.options import TypeNameHandling


class JsonHelpersSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="JSONHELPERS_",
        extra="ignore"
    )

    encoding: Annotated[
        str,
        Field(
            description=(
                "Text encoding used to decode streams and files, to encode\n"
                "strings before parsing, and to write files.\n"
                "Pinned to UTF-8 by default instead of the platform encoding."
            ),
            default="utf-8"
        )
    ]

    indent: Annotated[
        int,
        Field(
            description="Number of spaces per nesting level for indented output.",
            default=2,
            ge=0
        )
    ]

    type_key: Annotated[
        str,
        Field(
            description=(
                "Name of the JSON member carrying embedded type metadata.\n"
                "Written first in every object whose class is registered."
            ),
            default="$type",
            min_length=1
        )
    ]

    type_name_handling: Annotated[
        TypeNameHandling,
        Field(
            description=(
                "Embedded type metadata policy.\n"
                "none → metadata is neither written nor interpreted.\n"
                "auto → registered types are written with their name and\n"
                "        rebuilt from it on read (default)."
            ),
            default=TypeNameHandling.AUTO
        )
    ]

    ensure_ascii: Annotated[
        bool,
        Field(
            description="Escape every non-ASCII character in the output.",
            default=False
        )
    ]

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str, _: ValidationInfo) -> str:
        try:
            return codecs.lookup(v).name
        except LookupError:
            raise ValueError(f"Unknown text encoding '{v}'") from None
