"""
Signing, request assembly and submission primitives.
"""

from __future__ import annotations

from .errors import (
    AuthenticationError,
    ConfigurationError,
    DirectoryServiceError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    InvalidKeyEncodingError,
    LawSenderError,
    MalformedResourcePathError,
    RemoteRejectionError,
    TransportError,
    WorkspaceNotFoundError,
)
from .request import RequestBuilder, format_rfc1123, format_rfc3339, read_body
from .settings import SendConfig, Settings
from .signing import CanonicalRequest, hmac_sha256_b64, sign, sign_request
from .submitter import Submitter

__all__ = [
    "AuthenticationError",
    "CanonicalRequest",
    "ConfigurationError",
    "DirectoryServiceError",
    "ErrorCategory",
    "ErrorContext",
    "ErrorSeverity",
    "InvalidKeyEncodingError",
    "LawSenderError",
    "MalformedResourcePathError",
    "RemoteRejectionError",
    "RequestBuilder",
    "SendConfig",
    "Settings",
    "Submitter",
    "TransportError",
    "WorkspaceNotFoundError",
    "format_rfc1123",
    "format_rfc3339",
    "hmac_sha256_b64",
    "read_body",
    "sign",
    "sign_request",
]
