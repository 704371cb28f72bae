"""
SharedKey request signing for the Log Analytics Data Collector API.

The service recomputes the same digest independently, so the canonical string
must be reproduced byte for byte::

    METHOD \\n CONTENT-LENGTH \\n CONTENT-TYPE \\n x-ms-date:DATE \\n /api/logs

The string is signed with HMAC-SHA256 keyed by the base64-decoded shared key
and the digest is base64 encoded.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
from dataclasses import dataclass

import httpx

from .errors import InvalidKeyEncodingError
from .settings import LOGS_RESOURCE

DATE_HEADER = "X-Ms-Date"


@dataclass(frozen=True)
class CanonicalRequest:
    """Request metadata covered by the signature."""

    method: str
    content_length: int
    content_type: str
    date: str
    resource: str = LOGS_RESOURCE


def string_to_sign(descriptor: CanonicalRequest) -> str:
    return "\n".join(
        [
            descriptor.method.upper(),
            str(descriptor.content_length),
            descriptor.content_type,
            "x-ms-date:" + descriptor.date,
            descriptor.resource,
        ]
    )


def decode_key(b64_key: str | bytes) -> bytes:
    """Decode a base64 shared key into raw HMAC key bytes.

    Raises:
        InvalidKeyEncodingError: if the key is not strict base64.
    """
    if isinstance(b64_key, (bytes, bytearray)):
        text = bytes(b64_key).decode("utf-8", errors="replace")
    else:
        text = b64_key.encode("utf-8", errors="replace").decode("utf-8")
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        # The key itself is never included in the message.
        raise InvalidKeyEncodingError(
            "shared key is not valid base64", cause=exc
        ) from exc


def hmac_sha256_b64(data: str, b64_key: str | bytes) -> str:
    """Return base64(HMAC-SHA256(base64decode(key), utf8(data)))."""
    raw_key = decode_key(b64_key)
    # Unencodable code points (lone surrogates) become "?" as in the key.
    payload = data.encode("utf-8", errors="replace")
    digest = hmac.new(raw_key, payload, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def sign(descriptor: CanonicalRequest, b64_key: str | bytes) -> str:
    """Sign a canonical request descriptor."""
    return hmac_sha256_b64(string_to_sign(descriptor), b64_key)


def descriptor_from_request(request: httpx.Request) -> CanonicalRequest:
    """Build the descriptor from a prepared ``httpx.Request``.

    The content length is taken from the buffered body, which is what will be
    transmitted; the ``Content-Length`` header is only a fallback for bodies
    that are not yet read.
    """
    try:
        length = len(request.content)
    except httpx.RequestNotRead:
        length = int(request.headers.get("Content-Length", "0"))
    return CanonicalRequest(
        method=request.method,
        content_length=length,
        content_type=request.headers.get("Content-Type", ""),
        date=request.headers.get(DATE_HEADER, ""),
    )


def sign_request(request: httpx.Request, b64_key: str | bytes) -> str:
    return sign(descriptor_from_request(request), b64_key)
