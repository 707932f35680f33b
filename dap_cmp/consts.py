from os import environ
from pathlib import Path

TOP_LEVEL = Path(__file__).resolve(strict=True).parent

_CONF_DIR = TOP_LEVEL / "config"
CONFIG_YML = _CONF_DIR / "defaults.yml"

SETTINGS_VAR = "dap_cmp_settings"

DEBUG_NAME = "DAP completion source"
CMP_SOURCE = "dap"

DEBUG = "DAP_CMP_DEBUG" in environ
