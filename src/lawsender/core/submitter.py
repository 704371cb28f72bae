"""
Single-shot submission of signed ingestion requests.

One POST per call, no retry. Statuses up to 399 are success; anything above
is mapped to :class:`RemoteRejectionError` using the ``Error``/``Message``
fields of the JSON error body when present.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from . import diagnostics
from .errors import RemoteRejectionError, TransportError
from .settings import HttpSettings


def authorization_header(workspace_id: str, signature: str) -> str:
    return f"SharedKey {workspace_id}:{signature}"


def parse_error_body(content: bytes) -> tuple[str, str]:
    """Extract ``(Error, Message)`` from an error body; empty on failure."""
    try:
        data: Any = json.loads(content)
    except (ValueError, UnicodeDecodeError):
        return "", ""
    if not isinstance(data, dict):
        return "", ""
    code = data.get("Error")
    message = data.get("Message")
    return (
        code if isinstance(code, str) else "",
        message if isinstance(message, str) else "",
    )


class Submitter:
    """Send prepared requests with a synchronous ``httpx.Client``.

    A client passed in is borrowed and left open; otherwise the submitter
    creates one from ``HttpSettings`` and closes it in :meth:`close`.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        settings: HttpSettings | None = None,
    ) -> None:
        cfg = settings or HttpSettings()
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=cfg.timeout_seconds, verify=cfg.verify_tls
        )

    def __enter__(self) -> Submitter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def submit(
        self, request: httpx.Request, workspace_id: str, signature: str
    ) -> None:
        """Attach the authorization header and transmit ``request``.

        Raises:
            TransportError: connection, DNS, TLS or timeout failure.
            RemoteRejectionError: the endpoint answered with status > 399.
        """
        request.headers["Authorization"] = authorization_header(
            workspace_id, signature
        )
        try:
            response = self._client.send(request)
        except httpx.TransportError as exc:
            diagnostics.warn(
                "submitter",
                "transport failure",
                url=str(request.url),
                error=str(exc),
            )
            raise TransportError(
                f"request to {request.url.host} failed: {exc}",
                url=str(request.url),
                cause=exc,
            ) from exc

        try:
            if response.status_code > 399:
                response.read()
                code, message = parse_error_body(response.content)
                diagnostics.warn(
                    "submitter",
                    "ingestion rejected",
                    status_code=response.status_code,
                    code=code,
                )
                raise RemoteRejectionError(
                    response.status_code,
                    code,
                    message,
                    reason=response.reason_phrase,
                )
            diagnostics.debug(
                "submitter", "ingestion accepted", status_code=response.status_code
            )
        finally:
            response.close()
