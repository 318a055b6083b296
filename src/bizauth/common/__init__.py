"""Common utilities for bizauth."""

from bizauth.common.errors import BizAuthError, ErrorCode
from bizauth.common.settings import Settings, get_settings

__all__ = [
    "BizAuthError",
    "ErrorCode",
    "Settings",
    "get_settings",
]
