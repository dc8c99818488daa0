"""Database models for the ALM settings backend."""

from .alm_setting import AlmSetting
from .auth import ApiToken

__all__ = ["AlmSetting", "ApiToken"]
