from asyncio import gather
from typing import (
    Iterable,
    Iterator,
    MutableSequence,
    MutableSet,
    Optional,
    Sequence,
)

from pynvim_pp.logging import log
from std2.pickle.decoder import new_decoder
from std2.pickle.types import DecodeError

from ..dap.types import (
    DAPError,
    DebugSession,
    Scope,
    ScopesResponse,
    Variable,
    VariablesResponse,
)
from ..shared.aio import TimedOut, with_timeout
from ..shared.settings import FallbackOptions
from ..shared.types import CompletionContext, ItemKind, SuggestionItem

_DEBUG_COMMAND = "Debug command"
_VARIABLE = "variable"

_SCOPES = new_decoder[ScopesResponse](ScopesResponse, strict=False)
_VARIABLES = new_decoder[VariablesResponse](VariablesResponse, strict=False)


def keywords(commands: Iterable[str], prefix: str) -> Iterator[SuggestionItem]:
    for command in commands:
        if command.startswith(prefix):
            yield SuggestionItem(
                label=command,
                kind=ItemKind.keyword,
                filter_text=command,
                insert_text=command,
                detail=_DEBUG_COMMAND,
            )


async def _scope_vars(session: DebugSession, scope: Scope) -> Sequence[Variable]:
    try:
        reply = await session.request(
            "variables", {"variablesReference": scope.variablesReference}
        )
        return _VARIABLES(reply).variables
    except (DAPError, DecodeError) as e:
        log.debug("%s", f"variables :: {scope.name} :: {e}")
        return ()


async def _variables(session: DebugSession, frame_id: int) -> Sequence[SuggestionItem]:
    try:
        reply = await session.request("scopes", {"frameId": frame_id})
        scopes = _SCOPES(reply).scopes
    except (DAPError, DecodeError) as e:
        log.debug("%s", f"scopes :: {e}")
        return ()

    seen: MutableSet[str] = set()
    acc: MutableSequence[SuggestionItem] = []
    for variables in await gather(*(_scope_vars(session, scope) for scope in scopes)):
        for var in variables:
            if var.name not in seen:
                seen.add(var.name)
                item = SuggestionItem(
                    label=var.name,
                    kind=ItemKind.variable,
                    filter_text=var.name,
                    insert_text=var.name,
                    detail=var.type or _VARIABLE,
                    documentation=var.value,
                )
                acc.append(item)
    return acc


async def fallback(
    options: FallbackOptions,
    timeout: float,
    context: CompletionContext,
    session: Optional[DebugSession],
) -> Sequence[SuggestionItem]:
    if not options.enabled:
        return ()

    acc = [*keywords(options.debug_commands, prefix=context.before_cursor)]

    if (
        options.variables
        and session
        and (frame_id := session.current_frame) is not None
    ):
        try:
            acc.extend(await with_timeout(timeout, _variables(session, frame_id)))
        except TimedOut:
            log.debug("%s", "variable fallback timed out")

    return acc
