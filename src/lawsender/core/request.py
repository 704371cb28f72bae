"""
Outbound request assembly for the Data Collector API.

The signature covers the content length, so the body is always fully
buffered into ``bytes`` before the request is built. Streams, files and
iterables of chunks are read to completion here.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Any, Iterable, Union

import httpx

from . import diagnostics
from .errors import ConfigurationError
from .settings import LOGS_RESOURCE, IngestionSettings, validate_table_name
from .signing import DATE_HEADER

CONTENT_TYPE = "application/json"

Body = Union[bytes, bytearray, memoryview, str, Iterable[bytes], Any]


def to_gmt(timestamp: datetime | None = None) -> datetime:
    """Normalize ``timestamp`` to UTC; naive values are taken as UTC."""
    if timestamp is None:
        return datetime.now(timezone.utc)
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def format_rfc1123(timestamp: datetime) -> str:
    """``Sat, 01 Jan 2000 01:01:01 GMT``"""
    return format_datetime(to_gmt(timestamp), usegmt=True)


def format_rfc3339(timestamp: datetime) -> str:
    """``2000-01-01T01:01:01Z``"""
    return to_gmt(timestamp).strftime("%Y-%m-%dT%H:%M:%SZ")


def read_body(body: Body) -> bytes:
    """Buffer ``body`` into bytes so its exact length is known.

    Mappings and lists are serialized as compact JSON; everything else is
    sent exactly as given.
    """
    if isinstance(body, bytes):
        return body
    if isinstance(body, (bytearray, memoryview)):
        return bytes(body)
    if isinstance(body, str):
        return body.encode("utf-8")
    if isinstance(body, (dict, list)):
        return json.dumps(body, separators=(",", ":"), ensure_ascii=False).encode(
            "utf-8"
        )
    read = getattr(body, "read", None)
    if callable(read):
        data = read()
        return data.encode("utf-8") if isinstance(data, str) else bytes(data)
    try:
        chunks = iter(body)
    except TypeError as exc:
        raise TypeError(
            f"unsupported body type: {type(body).__name__}"
        ) from exc
    return b"".join(
        chunk.encode("utf-8") if isinstance(chunk, str) else bytes(chunk)
        for chunk in chunks
    )


class RequestBuilder:
    """Build unsigned ingestion requests."""

    def __init__(self, settings: IngestionSettings | None = None) -> None:
        self._settings = settings or IngestionSettings()

    def endpoint(self, workspace_id: str) -> str:
        return (
            f"https://{workspace_id}.{self._settings.domain}{LOGS_RESOURCE}"
            f"?api-version={self._settings.api_version}"
        )

    def build(
        self,
        workspace_id: str,
        table: str,
        body: Body,
        timestamp: datetime | None = None,
    ) -> httpx.Request:
        """Return a POST request with every header except ``Authorization``."""
        if not workspace_id:
            raise ConfigurationError("workspace id must not be empty")
        try:
            validate_table_name(table)
        except ValueError as exc:
            raise ConfigurationError(str(exc), table=table, cause=exc) from exc

        content = read_body(body)
        when = to_gmt(timestamp)
        headers = {
            "Content-Type": CONTENT_TYPE,
            DATE_HEADER: format_rfc1123(when),
            "Log-Type": table,
            "Time-Generated-Field": format_rfc3339(when),
            "Content-Length": str(len(content)),
        }
        diagnostics.debug(
            "request-builder",
            "request prepared",
            workspace_id=workspace_id,
            table=table,
            content_length=len(content),
        )
        return httpx.Request(
            "POST", self.endpoint(workspace_id), content=content, headers=headers
        )
