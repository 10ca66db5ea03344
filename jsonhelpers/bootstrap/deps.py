import json
from collections.abc import Sequence
from functools import lru_cache

from pydantic import ValidationError

from jsonhelpers.bootstrap.config.settings import JsonHelpersSettings
from jsonhelpers.core.errors import ConfigurationError
from jsonhelpers.core.models.options import SerializerOptions
from jsonhelpers.core.ports.converter import Converter
from jsonhelpers.core.registry import TypeRegistry, default_registry
from jsonhelpers.infra.json_serializer import JsonSerializer


@lru_cache
def get_settings() -> JsonHelpersSettings:
    try:
        return JsonHelpersSettings()
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}")
        raise ConfigurationError("\n".join(msg)) from ex


def build_serializer(
    settings: JsonHelpersSettings | None = None,
    indented: bool = False,
    registry: TypeRegistry | None = None,
    converters: Sequence[Converter] = (),
) -> JsonSerializer:
    settings = settings or get_settings()
    return JsonSerializer(
        options=SerializerOptions.from_settings(settings, indented),
        registry=default_registry if registry is None else registry,
        converters=converters,
    )
