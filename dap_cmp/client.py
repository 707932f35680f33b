from asyncio import get_running_loop
from asyncio.exceptions import CancelledError
from contextlib import suppress
from functools import wraps
from logging import CRITICAL
from logging import DEBUG as DEBUG_LV
from logging import getLevelName
from pathlib import PurePath
from string import Template
from sys import exit
from textwrap import dedent
from typing import Any, Sequence, cast

from pynvim_pp.logging import log, suppress_and_log
from pynvim_pp.nvim import Nvim, conn
from pynvim_pp.rpc import MsgType
from pynvim_pp.types import Method, NoneType, RPCallable
from std2.pickle.types import DecodeError

from ._registry import ____
from .consts import DEBUG
from .registry import atomic, rpc
from .server.rt_types import Stack
from .server.runtime import stack
from .server.settings import ValidationError
from .shared.settings import LogOptions

assert ____ or True

_CB = RPCallable[None]


def _set_debug(options: LogOptions) -> None:
    loop = get_running_loop()
    loop.set_debug(DEBUG)
    if DEBUG:
        log.setLevel(DEBUG_LV)
    elif not options.enabled:
        log.setLevel(CRITICAL + 1)
    else:
        log.setLevel(getLevelName(options.level.upper()))


async def _default(msg: MsgType, method: Method, params: Sequence[Any]) -> None:
    with suppress_and_log():
        assert False, (msg, method, params)


def _trans(stack: Stack, handler: _CB) -> _CB:
    @wraps(handler)
    async def f(*params: Any) -> None:
        with suppress(CancelledError):
            return await handler(stack, *params)

    return cast(_CB, f)


async def init(socket: PurePath) -> None:
    async with conn(socket, default=_default) as client:
        try:
            stk = await stack()
        except (DecodeError, ValidationError) as e:
            tpl = """
                Some options may have changed.
                Check `g:dap_cmp_settings` against the defaults.


                ⚠️  ${e}
                """
            msg = Template(dedent(tpl)).substitute(e=e)
            await Nvim.write(msg, error=True)
            exit(1)
        else:
            _set_debug(stk.settings.logging)
            rpc_atomic, handlers = rpc.drain()
            for handler in handlers.values():
                hldr = _trans(stk, handler=handler)
                client.register(hldr)

            await (rpc_atomic + atomic).commit(NoneType)
            log.info("%s", "DAP completion source registered")
