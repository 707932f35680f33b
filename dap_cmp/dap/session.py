from asyncio import Future, get_running_loop
from dataclasses import dataclass
from itertools import count
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Optional

from pynvim_pp.lib import decode
from pynvim_pp.logging import log
from pynvim_pp.nvim import Nvim
from pynvim_pp.types import NoneType
from std2.pickle.decoder import new_decoder

from ..registry import NAMESPACE, atomic, rpc
from ..server.rt_types import Stack
from ..shared.timeit import timeit
from .types import DAPError

_LUA = decode(
    Path(__file__).resolve(strict=True).with_name("session.lua").read_bytes()
)


@dataclass(frozen=True)
class _Session:
    id: int
    capabilities: Any = None
    frame_id: Optional[int] = None


@dataclass(frozen=True)
class _Payload:
    uid: int
    ok: bool
    message: Optional[str] = None
    reply: Any = None


_SESSION_DECODER = new_decoder[Optional[_Session]](Optional[_Session], strict=False)
_DECODER = new_decoder[_Payload](_Payload, strict=False)

_UIDS = count()
_PENDING: MutableMapping[int, Future] = {}


@rpc(blocking=False)
async def _dap_notify(stack: Stack, rpayload: Mapping[str, Any]) -> None:
    payload = _DECODER(rpayload)
    fut = _PENDING.pop(payload.uid, None)

    if not fut:
        log.info("%s", f"<><> DELAYED DAP RESP <><> :: {payload.uid}")
    elif fut.done():
        pass
    elif payload.ok:
        fut.set_result(payload.reply)
    else:
        fut.set_exception(DAPError(payload.message or "unknown DAP error"))


atomic.exec_lua(_LUA, (NAMESPACE, _dap_notify.method))


@dataclass(frozen=True)
class NvimSession:
    """
    Borrowed handle on a nvim-dap session, good for one completion cycle
    """

    uid: int
    capabilities: Any
    current_frame: Optional[int]

    async def request(self, command: str, arguments: Mapping[str, Any]) -> Any:
        uid = next(_UIDS)
        fut: Future = get_running_loop().create_future()
        _PENDING[uid] = fut
        try:
            with timeit(f"DAP :: {command}"):
                await Nvim.api.exec_lua(
                    NoneType,
                    f"{NAMESPACE}.dap_request(...)",
                    (self.uid, uid, command, arguments),
                )
                return await fut
        finally:
            _PENDING.pop(uid, None)


async def active_session() -> Optional[NvimSession]:
    raw = await Nvim.api.exec_lua(NoneType, f"return {NAMESPACE}.dap_session()", ())
    if session := _SESSION_DECODER(raw):
        return NvimSession(
            uid=session.id,
            capabilities=session.capabilities,
            current_frame=session.frame_id,
        )
    else:
        log.debug("%s", "no active DAP session")
        return None
