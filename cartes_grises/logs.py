import logging
from typing import Optional

from .db import read_config_yaml

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def resolve_log_level(level: Optional[str] = None) -> int:
    name = (level or read_config_yaml().get("log_level") or "INFO").upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: Optional[str] = None) -> int:
    """Configure the root logger once; later calls only adjust the level."""
    lvl = resolve_log_level(level)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=lvl, format=LOG_FORMAT)
    root.setLevel(lvl)
    return lvl
