from typing import Any, Mapping, cast

from pynvim_pp.nvim import Nvim
from pynvim_pp.types import NoneType

from ...dap.gateway import supports_completion_requests
from ...registry import NAMESPACE, atomic, rpc
from ..context import capture
from ..health import Probe, checks, report
from ..rt_types import Stack

_LUA = """
return {
  cmp = (pcall(require, "cmp")),
  dap = (pcall(require, "dap")),
}
"""


@rpc()
async def _health(stack: Stack) -> None:
    loaded = cast(Mapping[str, Any], await Nvim.api.exec_lua(NoneType, _LUA, ()))
    session = await stack.source.find()
    buf, _ = await capture()
    probe = Probe(
        cmp=bool(loaded.get("cmp")),
        dap=bool(loaded.get("dap")),
        session=session is not None,
        completions=supports_completion_requests(session),
        dap_buffer=stack.source.is_available(buf),
    )
    await Nvim.write(report(checks(probe)))


_CMD = f"""
vim.api.nvim_create_user_command("DAPcmpHealth", function()
  {NAMESPACE}.{_health.method}()
end, {{}})
"""
atomic.exec_lua(_CMD, ())
