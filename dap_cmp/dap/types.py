from dataclasses import dataclass
from typing import Any, Hashable, Mapping, Optional, Protocol, Sequence

# https://microsoft.github.io/debug-adapter-protocol/specification


class DAPError(Exception):
    """
    Debugger answered with an error envelope
    """


class DebugSession(Protocol):
    uid: Hashable
    capabilities: Any
    current_frame: Optional[int]

    async def request(self, command: str, arguments: Mapping[str, Any]) -> Any:
        """
        Resolves to the response body, raises `DAPError` on error envelopes
        """
        ...


@dataclass(frozen=True)
class CompletionItem:
    label: Optional[str] = None
    text: Optional[str] = None
    sortText: Optional[str] = None
    detail: Optional[str] = None
    type: Optional[str] = None
    start: Optional[int] = None
    length: Optional[int] = None
    selectionStart: Optional[int] = None
    selectionLength: Optional[int] = None

    # Not in DAP, some adapters send them anyway
    filterText: Optional[str] = None
    documentation: Optional[str] = None


@dataclass(frozen=True)
class CompletionsResponse:
    # decoded one by one into `CompletionItem`
    targets: Optional[Sequence[Any]] = None


@dataclass(frozen=True)
class Scope:
    name: str
    variablesReference: int
    expensive: bool = False


@dataclass(frozen=True)
class ScopesResponse:
    scopes: Sequence[Scope]


@dataclass(frozen=True)
class Variable:
    name: str
    value: str = ""
    type: Optional[str] = None
    variablesReference: int = 0


@dataclass(frozen=True)
class VariablesResponse:
    variables: Sequence[Variable]
