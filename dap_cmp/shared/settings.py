from dataclasses import dataclass
from typing import AbstractSet, Mapping, Sequence


@dataclass(frozen=True)
class LogOptions:
    enabled: bool
    level: str


@dataclass(frozen=True)
class CompletionOptions:
    timeout: float
    snippets: bool


@dataclass(frozen=True)
class FallbackOptions:
    enabled: bool
    variables: bool
    debug_commands: Sequence[str]


@dataclass(frozen=True)
class BufferOptions:
    prompt_filetypes: AbstractSet[str]
    name_patterns: Sequence[str]


@dataclass(frozen=True)
class Settings:
    logging: LogOptions
    completion: CompletionOptions
    fallback: FallbackOptions
    buffers: BufferOptions
    kind_mapping: Mapping[str, str]
