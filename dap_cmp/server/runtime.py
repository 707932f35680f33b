from typing import Any, cast

from pynvim_pp.lib import decode
from pynvim_pp.nvim import Nvim
from pynvim_pp.types import NoneType
from yaml import safe_load

from ..consts import CONFIG_YML, SETTINGS_VAR
from ..dap.session import active_session
from ..shared.settings import Settings
from .context import capture
from .rt_types import Stack
from .settings import decode_settings
from .source import Source


async def _settings() -> Settings:
    yml = safe_load(decode(CONFIG_YML.read_bytes()))
    user_config = cast(Any, (await Nvim.vars.get(NoneType, SETTINGS_VAR)) or {})
    return decode_settings(yml, user_config=user_config)


async def stack() -> Stack:
    settings = await _settings()
    source = Source(settings, find=active_session, capture=capture)
    return Stack(settings=settings, source=source)
