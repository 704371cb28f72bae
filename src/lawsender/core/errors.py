"""
Standardized error types for law-sender.

Every failure surfaced by the library derives from :class:`LawSenderError`.
Errors carry an :class:`ErrorContext` (id, timestamp, category, severity and
free-form metadata) so they can be rendered as structured diagnostics, and
preserve the underlying exception as ``__cause__``.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "DirectoryServiceError",
    "ErrorCategory",
    "ErrorContext",
    "ErrorSeverity",
    "InvalidKeyEncodingError",
    "LawSenderError",
    "MalformedResourcePathError",
    "RemoteRejectionError",
    "TransportError",
    "WorkspaceNotFoundError",
]


class ErrorCategory(str, Enum):
    """Broad classification used for diagnostics and exit handling."""

    AUTH = "auth"
    CONFIG = "config"
    NETWORK = "network"
    REMOTE = "remote"
    RESOLUTION = "resolution"
    SYSTEM = "system"


class ErrorSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class ErrorContext:
    """Context captured when an error is created."""

    category: ErrorCategory = ErrorCategory.SYSTEM
    severity: ErrorSeverity = ErrorSeverity.MEDIUM
    error_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error_id": self.error_id,
            "timestamp": self.timestamp.isoformat(),
            "category": self.category.value,
            "severity": self.severity.value,
            "metadata": dict(self.metadata),
        }


class LawSenderError(Exception):
    """Base class for all law-sender errors."""

    default_category = ErrorCategory.SYSTEM
    default_severity = ErrorSeverity.MEDIUM

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        severity: ErrorSeverity | None = None,
        cause: BaseException | None = None,
        **metadata: Any,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = ErrorContext(
            category=category or self.default_category,
            severity=severity or self.default_severity,
            metadata=metadata,
        )
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for structured diagnostics."""
        data: dict[str, Any] = {
            "error_type": type(self).__name__,
            "message": self.message,
            "context": self.context.to_dict(),
        }
        if self.__cause__ is not None:
            data["cause"] = f"{type(self.__cause__).__name__}: {self.__cause__}"
        return data


class ConfigurationError(LawSenderError):
    """Invalid caller-supplied configuration (ids, table name, settings)."""

    default_category = ErrorCategory.CONFIG


class InvalidKeyEncodingError(LawSenderError):
    """The shared key is not valid base64."""

    default_category = ErrorCategory.AUTH
    default_severity = ErrorSeverity.HIGH


class AuthenticationError(LawSenderError):
    """Credential acquisition or shared-key retrieval was refused."""

    default_category = ErrorCategory.AUTH
    default_severity = ErrorSeverity.HIGH


class DirectoryServiceError(LawSenderError):
    """The resource manager returned an error while listing or reading keys."""

    default_category = ErrorCategory.RESOLUTION


class WorkspaceNotFoundError(LawSenderError):
    """No workspace with the requested customer id is visible."""

    default_category = ErrorCategory.RESOLUTION

    def __init__(self, customer_id: str, **kwargs: Any) -> None:
        super().__init__(
            f"workspace with customer ID {customer_id!r} not found",
            customer_id=customer_id,
            **kwargs,
        )
        self.customer_id = customer_id


class MalformedResourcePathError(LawSenderError):
    """A matching workspace has a resource path without name or group."""

    default_category = ErrorCategory.RESOLUTION

    def __init__(self, message: str, *, resource_path: str, **kwargs: Any) -> None:
        super().__init__(message, resource_path=resource_path, **kwargs)
        self.resource_path = resource_path


class TransportError(LawSenderError):
    """Network-level failure: connect, DNS, TLS or timeout."""

    default_category = ErrorCategory.NETWORK
    default_severity = ErrorSeverity.HIGH


class RemoteRejectionError(LawSenderError):
    """The ingestion endpoint answered with a status above 399."""

    default_category = ErrorCategory.REMOTE

    def __init__(
        self,
        status: int,
        code: str = "",
        message: str = "",
        *,
        reason: str = "",
        **kwargs: Any,
    ) -> None:
        status_text = f"{status} {reason}".strip()
        super().__init__(
            f"response with status {status_text} error: {code!r} => {message!r}",
            status=status,
            code=code,
            **kwargs,
        )
        # str(self) keeps the summary; .message is the server's Message field.
        self.message = message
        self.status = status
        self.code = code
