from typing import Any, Awaitable, Callable, Mapping, Optional, Sequence, Tuple

from pynvim_pp.logging import suppress_and_log

from ..consts import DEBUG_NAME
from ..dap.gateway import Finder, trigger_characters
from ..dap.types import DebugSession
from ..shared.settings import Settings
from ..shared.types import (
    EMPTY,
    PLAIN_TEXT_FORMAT,
    SNIPPET_FORMAT,
    BufInfo,
    CompletionContext,
    CompletionOutcome,
    SuggestionItem,
)
from .buffers import is_dap_buffer
from .orchestrator import Orchestrator

Capture = Callable[[], Awaitable[Tuple[BufInfo, CompletionContext]]]
Callback = Callable[[CompletionOutcome], Awaitable[None]]


def _encode_item(item: SuggestionItem) -> Mapping[str, Any]:
    encoded = {
        "label": item.label,
        "kind": item.kind.value,
        "filterText": item.filter_text,
        "insertText": item.insert_text,
        "insertTextFormat": SNIPPET_FORMAT if item.is_snippet else PLAIN_TEXT_FORMAT,
        "detail": item.detail,
        "documentation": item.documentation,
        "sortText": item.sort_text,
    }
    return {key: val for key, val in encoded.items() if val is not None}


def encode(outcome: CompletionOutcome) -> Mapping[str, Any]:
    """
    nvim-cmp takes LSP shaped completion lists
    """

    return {
        "items": [_encode_item(item) for item in outcome.items],
        "isIncomplete": outcome.is_incomplete,
    }


class Source:
    def __init__(self, settings: Settings, find: Finder, capture: Capture) -> None:
        self._settings = settings
        self._find, self._capture = find, capture
        self._orchestrator = Orchestrator(settings, find=find)

    def get_debug_name(self) -> str:
        return DEBUG_NAME

    def is_available(self, buf: BufInfo) -> bool:
        return is_dap_buffer(self._settings.buffers, buf=buf)

    async def find(self) -> Optional[DebugSession]:
        return await self._find()

    async def get_trigger_characters(self) -> Sequence[str]:
        session = await self.find()
        return trigger_characters(session)

    async def complete(self, callback: Callback) -> None:
        outcome = EMPTY
        with suppress_and_log():
            buf, context = await self._capture()
            outcome = await self._orchestrator.complete(buf, context=context)
        with suppress_and_log():
            await callback(outcome)
