from typing import Any, Awaitable, Callable, Mapping, Optional, Sequence

from .types import DebugSession

DEFAULT_TRIGGERS: Sequence[str] = (".", "[", "(", " ")

Finder = Callable[[], Awaitable[Optional[DebugSession]]]


def _capabilities(session: Optional[DebugSession]) -> Mapping[str, Any]:
    caps = session.capabilities if session else None
    return caps if isinstance(caps, Mapping) else {}


def supports_completion_requests(session: Optional[DebugSession]) -> bool:
    return _capabilities(session).get("supportsCompletionsRequest") is True


def trigger_characters(session: Optional[DebugSession]) -> Sequence[str]:
    chars = _capabilities(session).get("completionTriggerCharacters")
    if isinstance(chars, Sequence) and not isinstance(chars, str):
        return tuple(char for char in chars if isinstance(char, str))
    else:
        return DEFAULT_TRIGGERS
