# csp_headers/config.py
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def truthy(val: Optional[str]) -> bool:
    return bool(val and val.strip().lower() in ("1", "true", "yes", "on"))


BUILD_DIR = os.getenv("CSP_BUILD_DIR", "").strip() or None
CONFIG_PATH = os.getenv("CSP_CONFIG", "csp.yml")
SET_ALL_POLICIES = truthy(os.getenv("CSP_SET_ALL_POLICIES"))
HEADERS_APPEND = truthy(os.getenv("CSP_HEADERS_APPEND"))
HEADERS_FILENAME = "_headers"


class ConfigError(ValueError):
    """Raised when run inputs are missing or malformed."""
