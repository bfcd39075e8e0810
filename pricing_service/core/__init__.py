# Core modules

from .config import settings, get_settings, Settings
from .exceptions import BookstorePricingError, BackendServiceError

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "BookstorePricingError",
    "BackendServiceError",
]
