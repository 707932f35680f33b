from asyncio import get_running_loop
from dataclasses import asdict
from typing import (
    Any,
    Hashable,
    Iterable,
    Iterator,
    Mapping,
    MutableSet,
    Optional,
)

from pynvim_pp.logging import log
from std2.pickle.decoder import new_decoder
from std2.pickle.types import DecodeError

from ..dap.gateway import Finder, supports_completion_requests
from ..dap.types import CompletionItem, CompletionsResponse, DAPError, DebugSession
from ..shared.aio import TimedOut, with_timeout
from ..shared.settings import Settings
from ..shared.types import (
    EMPTY,
    STALE,
    BufInfo,
    CompletionContext,
    CompletionOutcome,
    CompletionRequest,
)
from .buffers import is_dap_buffer
from .context import completion_request
from .fallback import fallback
from .trans import kinds, trans

_COMPLETIONS = "completions"

_RESPONSE = new_decoder[CompletionsResponse](CompletionsResponse, strict=False)
_ITEM = new_decoder[CompletionItem](CompletionItem, strict=False)


def _arguments(request: CompletionRequest) -> Mapping[str, Any]:
    return {key: val for key, val in asdict(request).items() if val is not None}


def _remaining(deadline: float) -> float:
    return max(0.0, deadline - get_running_loop().time())


def _items(targets: Iterable[Any]) -> Iterator[CompletionItem]:
    for target in targets:
        try:
            yield _ITEM(target)
        except DecodeError as e:
            log.debug("%s", f"malformed DAP completion item :: {e}")


class Orchestrator:
    """
    One `complete` call resolves to exactly one outcome

    live reply, timeout, fallback or empty, whichever the cycle reaches first
    """

    def __init__(self, settings: Settings, find: Finder) -> None:
        self._settings = settings
        self._find = find
        self._kinds = kinds(settings.kind_mapping)
        self._warned: MutableSet[Hashable] = set()

    def _capability_gap(self, session: Optional[DebugSession]) -> None:
        if not session:
            log.debug("%s", "no DAP session, using fallback")
        elif session.uid not in self._warned:
            self._warned.add(session.uid)
            msg = f"DAP session {session.uid} does not support completion requests"
            log.warning("%s", msg)

    async def _fallback(
        self,
        deadline: float,
        context: CompletionContext,
        session: Optional[DebugSession],
    ) -> CompletionOutcome:
        items = await fallback(
            self._settings.fallback,
            timeout=_remaining(deadline),
            context=context,
            session=session,
        )
        return CompletionOutcome(items=items, is_incomplete=False)

    async def complete(
        self, buf: BufInfo, context: CompletionContext
    ) -> CompletionOutcome:
        if not is_dap_buffer(self._settings.buffers, buf=buf):
            log.debug("%s", f"not a DAP buffer :: {buf.name}")
            return EMPTY

        deadline = get_running_loop().time() + self._settings.completion.timeout

        session = await self._find()
        if not session or not supports_completion_requests(session):
            self._capability_gap(session)
            return await self._fallback(deadline, context=context, session=session)

        request = completion_request(context, session=session)
        log.debug("%s", f"DAP completion :: {request}")

        try:
            reply = await with_timeout(
                _remaining(deadline), session.request(_COMPLETIONS, _arguments(request))
            )
        except TimedOut:
            log.warning("%s", "DAP completion request timed out")
            return STALE
        except DAPError as e:
            log.error("%s", f"DAP completion error :: {e}")
            return await self._fallback(deadline, context=context, session=session)

        try:
            targets = _RESPONSE(reply).targets
        except DecodeError as e:
            log.debug("%s", f"malformed DAP completion response :: {e}")
            return EMPTY

        snippets = self._settings.completion.snippets
        items = tuple(
            trans(self._kinds, snippets=snippets, item=item)
            for item in _items(targets or ())
        )
        if not items:
            log.debug("%s", "no DAP completion targets")
            return EMPTY
        else:
            log.debug("%s", f"DAP completion :: {len(items)} items")
            return CompletionOutcome(items=items, is_incomplete=False)
