from typing import Optional, Tuple, cast

from pynvim_pp.atomic import Atomic
from pynvim_pp.lib import decode, encode
from pynvim_pp.types import NoneType

from ..dap.types import DebugSession
from ..shared.types import BufInfo, CompletionContext, CompletionRequest


def snapshot(line: str, row: int, col: int) -> CompletionContext:
    """
    `col` is a utf-8 byte offset, as reported by `nvim_win_get_cursor`
    """

    before_cursor = decode(encode(line)[:col])
    return CompletionContext(
        row=row, column=len(before_cursor), line=line, before_cursor=before_cursor
    )


async def capture() -> Tuple[BufInfo, CompletionContext]:
    with Atomic() as (atomic, ns):
        ns.buftype = atomic.buf_get_option(0, "buftype")
        ns.filetype = atomic.buf_get_option(0, "filetype")
        ns.name = atomic.buf_get_name(0)
        ns.line = atomic.get_current_line()
        ns.cursor = atomic.win_get_cursor(0)
        await atomic.commit(NoneType)

    buf = BufInfo(
        buftype=ns.buftype(str), filetype=ns.filetype(str), name=ns.name(str)
    )
    r, col = cast(Tuple[int, int], ns.cursor(NoneType))
    ctx = snapshot(ns.line(str), row=r - 1, col=col)
    return buf, ctx


def completion_request(
    context: CompletionContext, session: Optional[DebugSession]
) -> CompletionRequest:
    return CompletionRequest(
        frameId=session.current_frame if session else None,
        text=context.before_cursor,
        column=context.column,
        line=context.row,
    )
