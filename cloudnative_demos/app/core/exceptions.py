"""
Custom exceptions for the demo services.

The service layer raises these instead of leaking client library
errors (``redis``, ``requests``) to the API layer.  Each exception
carries a human readable ``message`` and a stable ``error_code``.
"""

from typing import Optional


class DemoException(Exception):
    """Base exception for the demo services."""

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class HostResolutionError(DemoException):
    """The local host name could not be resolved at startup."""

    def __init__(self, message: str):
        super().__init__(message, "HOST_RESOLUTION_ERROR")


class SessionStoreError(DemoException):
    """The external session store could not be reached or answered badly."""

    def __init__(self, message: str, session_id: Optional[str] = None):
        self.session_id = session_id
        super().__init__(message, "SESSION_STORE_ERROR")


class ConfigurationError(DemoException):
    """The config server could not supply the application properties."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message, "CONFIGURATION_ERROR")
