from functools import lru_cache
from re import Pattern, compile

from ..shared.settings import BufferOptions
from ..shared.types import BufInfo

_PROMPT = "prompt"


@lru_cache(maxsize=None)
def _pattern(pattern: str) -> Pattern:
    return compile(pattern)


def is_dap_buffer(options: BufferOptions, buf: BufInfo) -> bool:
    if buf.buftype == _PROMPT:
        return buf.filetype in options.prompt_filetypes
    else:
        return any(
            _pattern(pattern).search(buf.name) for pattern in options.name_patterns
        )
