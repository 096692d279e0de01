"""
Error taxonomy for announce.

Every failure raised while routing, building or executing a request derives
from AnnounceError. Errors carry a machine-readable error code (one of the
ErrorKind values) and a details dictionary so the dispatcher can record them
as per-destination outcomes without losing context.

Error Dictionary Format:
    {
        "status": "error",
        "message": "missing url field: password",
        "error_code": "MISSING_FIELD",
        "details": {
            "field": "password"
        },
        "timestamp": "2026-10-18T15:30:00"
    }

Usage:
    from announce.utils.errors import MissingFieldError

    if not parts.password:
        raise MissingFieldError("password")
"""

import re
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any


class ErrorKind(str, Enum):
    """Machine-readable classification of announce errors."""
    NO_MATCHING_SCHEMA = "NO_MATCHING_SCHEMA"
    WRONG_SCHEME = "WRONG_SCHEME"
    MISSING_FIELD = "MISSING_FIELD"
    PARSE = "PARSE"
    TRANSPORT = "TRANSPORT"
    SERVICE_REPORTED_FAILURE = "SERVICE_REPORTED_FAILURE"
    IO = "IO"
    CONFIGURATION = "CONFIGURATION"


# =============================================================================
# Base Exception Class
# =============================================================================

class AnnounceError(Exception):
    """
    Base exception for all announce errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        details: Additional context as dictionary

    Example:
        >>> error = AnnounceError(
        ...     message="Something went wrong",
        ...     error_code="SERVICE_REPORTED_FAILURE",
        ...     details={"service": "rocketchat"}
        ... )
    """

    kind: Optional[ErrorKind] = None

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize AnnounceError.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code (default: the class kind,
                else derived from the class name)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self._generate_error_code()
        self.details = details or {}
        super().__init__(message)

    def _generate_error_code(self) -> str:
        """
        Generate error code from the class kind or class name.

        Converts class name from CamelCase to UPPER_SNAKE_CASE when the class
        has no ErrorKind. Example: SomethingBrokeError -> SOMETHING_BROKE

        Returns:
            Error code string
        """
        if self.kind is not None:
            return self.kind.value
        name = self.__class__.__name__
        if name.endswith('Error'):
            name = name[:-5]
        s1 = re.sub('(.)([A-Z][a-z]+)', r'\1_\2', name)
        return re.sub('([a-z0-9])([A-Z])', r'\1_\2', s1).upper()

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary format.

        Returns:
            Dictionary with error information
        """
        return {
            "status": "error",
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
            "timestamp": datetime.now().isoformat()
        }


# =============================================================================
# Routing Errors
# =============================================================================

class NoMatchingSchemaError(AnnounceError):
    """No registered service adapter owns the destination's scheme."""

    kind = ErrorKind.NO_MATCHING_SCHEMA

    def __init__(self, scheme: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize NoMatchingSchemaError.

        Args:
            scheme: The unmatched URI scheme
            details: Additional context
        """
        error_details = {"scheme": scheme}
        if details:
            error_details.update(details)

        super().__init__(
            message=f"Schema does not match a supported service: '{scheme}'",
            details=error_details
        )


class WrongSchemeError(AnnounceError):
    """A service adapter was invoked with a scheme it does not own."""

    kind = ErrorKind.WRONG_SCHEME

    def __init__(self, scheme: str, service: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize WrongSchemeError.

        Args:
            scheme: Scheme that was found
            service: Name of the adapter that rejected it
            details: Additional context
        """
        error_details = {"scheme": scheme, "service": service}
        if details:
            error_details.update(details)

        super().__init__(
            message=f"Wrong scheme for service {service}: found \"{scheme}\"",
            details=error_details
        )


# =============================================================================
# URI Errors
# =============================================================================

class ParseError(AnnounceError):
    """Destination URI is malformed."""

    kind = ErrorKind.PARSE

    def __init__(self, uri: str, reason: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize ParseError.

        Args:
            uri: The offending URI (credentials masked by the caller)
            reason: Parser failure reason
            details: Additional context
        """
        error_details = {"uri": uri, "reason": reason}
        if details:
            error_details.update(details)

        super().__init__(
            message=f"Url parse error: {reason}",
            details=error_details
        )


class MissingFieldError(AnnounceError):
    """A well-formed URI lacks a component required by its adapter."""

    kind = ErrorKind.MISSING_FIELD

    def __init__(self, field: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize MissingFieldError.

        Args:
            field: Name of the missing configuration field
            details: Additional context
        """
        error_details = {"field": field}
        if details:
            error_details.update(details)

        super().__init__(
            message=f"missing url field: {field}",
            details=error_details
        )
        self.field = field


# =============================================================================
# Delivery Errors
# =============================================================================

class TransportError(AnnounceError):
    """Network, IPC or serialization failure from the underlying transport."""

    kind = ErrorKind.TRANSPORT

    def __init__(self, origin: str, reason: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize TransportError.

        Args:
            origin: Transport that failed ("http" or "dbus")
            reason: Failure reason reported by the library
            details: Additional context
        """
        error_details = {"origin": origin, "reason": reason}
        if details:
            error_details.update(details)

        super().__init__(
            message=f"{origin} error: {reason}",
            details=error_details
        )
        self.origin = origin


class ServiceError(AnnounceError):
    """The remote service answered but reported a failure."""

    kind = ErrorKind.SERVICE_REPORTED_FAILURE

    def __init__(self, service: str, detail: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize ServiceError.

        Args:
            service: Name of the reporting service
            detail: Failure detail taken from the response
            details: Additional context
        """
        error_details = {"service": service, "detail": detail}
        if details:
            error_details.update(details)

        super().__init__(
            message=f"An error occurred in {service}: {detail}",
            details=error_details
        )


class FileAccessError(AnnounceError):
    """A file referenced by a message could not be read."""

    kind = ErrorKind.IO

    def __init__(self, path: str, reason: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize FileAccessError.

        Args:
            path: Path of the file
            reason: Failure reason
            details: Additional context
        """
        error_details = {"path": path, "reason": reason}
        if details:
            error_details.update(details)

        super().__init__(
            message=f"Error handling io for '{path}': {reason}",
            details=error_details
        )


class ConfigurationError(AnnounceError):
    """Invalid adapter registry or settings."""

    kind = ErrorKind.CONFIGURATION

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, details=details)
