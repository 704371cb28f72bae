"""
Public entrypoints for law-sender.

Send one JSON record to an Azure Log Analytics workspace::

    from lawsender import SendConfig, send

    send(
        SendConfig(workspace_id=..., table="MyTable", subscription_id=...),
        b'{"name": "tester"}',
    )
"""

from __future__ import annotations

import httpx

from ._version import __version__
from .azure.resolver import DirectoryService
from .collector import Collector, LogAnalyticsCollector, new_collector
from .core.errors import (
    InvalidKeyEncodingError,
    LawSenderError,
    MalformedResourcePathError,
    RemoteRejectionError,
    TransportError,
    WorkspaceNotFoundError,
)
from .core.request import Body
from .core.settings import SendConfig, Settings

__all__ = [
    "Collector",
    "InvalidKeyEncodingError",
    "LawSenderError",
    "LogAnalyticsCollector",
    "MalformedResourcePathError",
    "RemoteRejectionError",
    "SendConfig",
    "Settings",
    "TransportError",
    "WorkspaceNotFoundError",
    "__version__",
    "new_collector",
    "send",
]


def send(
    config: SendConfig,
    body: Body,
    *,
    directory: DirectoryService | None = None,
    settings: Settings | None = None,
    client: httpx.Client | None = None,
) -> None:
    """Resolve the shared key for ``config`` and submit ``body`` once."""
    collector = new_collector(
        config, directory=directory, settings=settings, client=client
    )
    collector.send_data(body)
