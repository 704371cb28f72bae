"""
Collector: the send-data capability.

``Collector`` is a single-method protocol so callers can substitute test
doubles. ``LogAnalyticsCollector`` is the only concrete implementation; it
composes the request builder, signer and submitter for one workspace.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

import httpx

from .azure.directory import AzureDirectoryService
from .azure.resolver import DirectoryService, WorkspaceResolver
from .core import diagnostics
from .core.request import Body, RequestBuilder
from .core.settings import SendConfig, Settings
from .core.signing import sign_request
from .core.submitter import Submitter


@runtime_checkable
class Collector(Protocol):
    def send_data(self, body: Body) -> None:
        """Submit one JSON record."""


class LogAnalyticsCollector:
    """Send records to one workspace table using its shared key."""

    def __init__(
        self,
        workspace_id: str,
        shared_key: str,
        table: str,
        *,
        timestamp: datetime | None = None,
        settings: Settings | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        cfg = settings or Settings()
        self.workspace_id = workspace_id
        self.table = table
        self.timestamp = timestamp
        self._shared_key = shared_key
        self._settings = cfg
        self._builder = RequestBuilder(cfg.ingestion)
        self._client = client

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(workspace_id={self.workspace_id!r}, "
            f"table={self.table!r}, shared_key='***')"
        )

    def send_data(self, body: Body) -> None:
        """Build, sign and submit ``body``.

        Raises:
            ConfigurationError: invalid table name.
            InvalidKeyEncodingError: shared key is not base64.
            TransportError: network failure.
            RemoteRejectionError: the endpoint rejected the record.
        """
        request = self._builder.build(
            self.workspace_id, self.table, body, timestamp=self.timestamp
        )
        signature = sign_request(request, self._shared_key)
        with Submitter(self._client, settings=self._settings.http) as submitter:
            submitter.submit(request, self.workspace_id, signature)
        diagnostics.debug(
            "collector",
            "record sent",
            workspace_id=self.workspace_id,
            table=self.table,
        )


def _discover_key(directory: DirectoryService, config: SendConfig) -> str:
    ref = WorkspaceResolver(directory).resolve(
        config.subscription_id, config.workspace_id
    )
    return directory.get_shared_key(ref.resource_group, ref.name)


def new_collector(
    config: SendConfig,
    *,
    directory: DirectoryService | None = None,
    settings: Settings | None = None,
    client: httpx.Client | None = None,
) -> LogAnalyticsCollector:
    """Resolve the workspace, fetch its shared key and return a collector.

    ``directory`` defaults to :class:`AzureDirectoryService` authenticated
    with ``DefaultAzureCredential``; that default is closed once the key is
    read. Settings are loaded before any lookup.
    """
    settings = settings or Settings()
    if directory is None:
        with AzureDirectoryService(config.subscription_id) as owned:
            shared_key = _discover_key(owned, config)
    else:
        shared_key = _discover_key(directory, config)
    return LogAnalyticsCollector(
        config.workspace_id,
        shared_key,
        config.table,
        timestamp=config.timestamp,
        settings=settings,
        client=client,
    )
