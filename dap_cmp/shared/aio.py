from asyncio import create_task, wait
from typing import Any, Coroutine, TypeVar

from std2.asyncio import cancel

_T = TypeVar("_T")


class TimedOut(Exception): ...


async def with_timeout(timeout: float, co: Coroutine[Any, Any, _T]) -> _T:
    """
    First of `co` or `timeout` wins, the loser is cancelled

    Exceptions raised by `co` propagate
    """

    done, not_done = await wait((create_task(co),), timeout=timeout)
    await cancel(*not_done)
    if done:
        return await done.pop()
    else:
        raise TimedOut()
