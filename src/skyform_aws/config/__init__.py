"""Provider configuration loading."""

from .models import ProviderConfig, WaitOverride, WaitSettings
from .parser import Config, ConfigValidationError

__all__ = [
    "Config",
    "ConfigValidationError",
    "ProviderConfig",
    "WaitOverride",
    "WaitSettings",
]
