from dataclasses import dataclass

from ..shared.settings import Settings
from .source import Source


@dataclass(frozen=True)
class Stack:
    settings: Settings
    source: Source
