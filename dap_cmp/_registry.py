from .dap import session
from .server.registrants import health, source

assert health
assert session
assert source

____ = None
