from pathlib import Path
from typing import Sequence

from pynvim_pp.lib import decode
from pynvim_pp.nvim import Nvim
from pynvim_pp.types import NoneType

from ...consts import CMP_SOURCE, DEBUG_NAME
from ...registry import NAMESPACE, atomic, rpc
from ...shared.types import CompletionOutcome
from ..context import capture
from ..rt_types import Stack
from ..source import encode

_LUA = decode(
    Path(__file__).resolve(strict=True).with_name("source.lua").read_bytes()
)


@rpc()
async def _available(stack: Stack) -> bool:
    buf, _ = await capture()
    return stack.source.is_available(buf)


@rpc()
async def _trigger_characters(stack: Stack) -> Sequence[str]:
    return await stack.source.get_trigger_characters()


@rpc(blocking=False)
async def _complete(stack: Stack, uid: int) -> None:
    async def cont(outcome: CompletionOutcome) -> None:
        await Nvim.api.exec_lua(
            NoneType, f"{NAMESPACE}.resolve(...)", (uid, encode(outcome))
        )

    await stack.source.complete(cont)


atomic.exec_lua(
    _LUA,
    (
        NAMESPACE,
        DEBUG_NAME,
        CMP_SOURCE,
        _available.method,
        _trigger_characters.method,
        _complete.method,
    ),
)
