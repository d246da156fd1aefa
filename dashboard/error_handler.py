"""
Centralized error handling for the portfolio dashboard.

This module provides:
- Custom exception classes
- Translation of ``requests`` exceptions into those classes
- Consistent error logging
"""

from enum import Enum
from typing import Optional

from requests.exceptions import (ConnectionError, HTTPError, RequestException,
                                 Timeout)

from .logging_config import logger


class ErrorCategory(Enum):
    """Categories of errors for consistent handling."""
    NETWORK = "network"
    API = "api"
    DATA = "data"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class DashboardError(Exception):
    """Base exception for all portfolio dashboard errors."""

    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN,
                 original_error: Optional[Exception] = None):
        self.message = message
        self.category = category
        self.original_error = original_error
        super().__init__(self.message)


class NetworkError(DashboardError):
    """Network-related errors (timeouts, connection failures)."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message, ErrorCategory.NETWORK, original_error)


class APIError(DashboardError):
    """Upstream returned an HTTP error status."""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 original_error: Optional[Exception] = None):
        self.status_code = status_code
        super().__init__(message, ErrorCategory.API, original_error)


class DataError(DashboardError):
    """Upstream answered but the payload held no usable value."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message, ErrorCategory.DATA, original_error)


class ConfigurationError(DashboardError):
    """Configuration and setup errors."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message, ErrorCategory.CONFIGURATION, original_error)


class ErrorHandler:
    """Central error handling utilities."""

    @staticmethod
    def wrap_external_api_error(error: Exception, service_name: str) -> DashboardError:
        """Convert external API exceptions to dashboard exceptions.

        Args:
            error: The original exception
            service_name: Name of the upstream service (for messages)

        Returns:
            DashboardError subclass; dashboard errors pass through unchanged.
        """
        if isinstance(error, DashboardError):
            return error
        if isinstance(error, Timeout):
            return NetworkError(
                f"{service_name} request timeout - server slow to respond",
                original_error=error
            )
        elif isinstance(error, ConnectionError):
            return NetworkError(
                f"Cannot connect to {service_name} - network unavailable",
                original_error=error
            )
        elif isinstance(error, HTTPError):
            response = getattr(error, 'response', None)
            status_code = response.status_code if response is not None else None
            return APIError(
                f"{service_name} returned HTTP error: {error}",
                status_code=status_code,
                original_error=error
            )
        elif isinstance(error, RequestException):
            return NetworkError(
                f"{service_name} request failed: {error}",
                original_error=error
            )
        else:
            return DashboardError(
                f"Unexpected error from {service_name}: {error}",
                original_error=error
            )

    @staticmethod
    def log_error(error: Exception, context: str = "") -> None:
        """Log error with appropriate level and context.

        Args:
            error: The exception to log
            context: Additional context about where error occurred
        """
        prefix = f"[{context}] " if context else ""

        if isinstance(error, (NetworkError, DataError)):
            logger.warning("%s%s", prefix, error.message)
        elif isinstance(error, APIError):
            if error.status_code and error.status_code >= 500:
                logger.error("%s%s (HTTP %d)", prefix, error.message, error.status_code)
            else:
                logger.warning("%s%s", prefix, error.message)
        elif isinstance(error, ConfigurationError):
            logger.error("%s%s", prefix, error.message)
        else:
            logger.error("%s%s", prefix, str(error), exc_info=error)
