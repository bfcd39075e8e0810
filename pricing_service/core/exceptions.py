"""Pricing service errors"""

from typing import Optional


class BookstorePricingError(Exception):
    """Base exception for pricing service errors"""
    pass


class BackendServiceError(BookstorePricingError):
    """The pricing/discount backend failed or could not be reached"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
