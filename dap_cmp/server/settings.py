from logging import getLevelName
from re import error as RegexError
from re import compile
from typing import Any

from std2.configparser import hydrate
from std2.graphlib import merge
from std2.pickle.decoder import new_decoder

from ..shared.settings import Settings
from .trans import parse_kind


class ValidationError(Exception): ...


_DECODER = new_decoder[Settings](Settings)


def _validate(settings: Settings) -> None:
    if settings.completion.timeout <= 0:
        raise ValidationError("completion.timeout <= 0")

    if not isinstance(getLevelName(settings.logging.level.upper()), int):
        raise ValidationError(f"logging.level :: {settings.logging.level}")

    for dap_type, name in settings.kind_mapping.items():
        if not parse_kind(name):
            raise ValidationError(f"kind_mapping.{dap_type} :: {name}")

    for pattern in settings.buffers.name_patterns:
        try:
            compile(pattern)
        except RegexError as e:
            raise ValidationError(f"buffers.name_patterns :: {pattern} :: {e}")


def decode_settings(defaults: Any, user_config: Any) -> Settings:
    u_conf = hydrate(user_config or {})
    merged = merge(defaults, u_conf, replace=True)
    settings = _DECODER(merged)
    _validate(settings)
    return settings
