from .config import Settings, get_settings
from .logging_config import setup_logging, request_id_var

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "request_id_var",
]
