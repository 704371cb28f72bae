"""
Azure Resource Manager directory service.

Wraps ``azure-identity`` for the credential provider and
``azure-mgmt-loganalytics`` for workspace listing and shared-key retrieval.
"""

from __future__ import annotations

from typing import Any, Iterator

from azure.core.exceptions import AzureError, ClientAuthenticationError
from azure.identity import DefaultAzureCredential
from azure.mgmt.loganalytics import LogAnalyticsManagementClient

from ..core import diagnostics
from ..core.errors import AuthenticationError, DirectoryServiceError
from .resolver import WorkspaceEntry


def default_credential() -> DefaultAzureCredential:
    """Return ``DefaultAzureCredential()`` (env, managed identity, CLI...)."""
    return DefaultAzureCredential()


def _wrap_sdk_error(exc: AzureError, action: str, **context: Any) -> Exception:
    # CredentialUnavailableError derives from ClientAuthenticationError.
    if isinstance(exc, ClientAuthenticationError):
        return AuthenticationError(f"{action}: {exc}", cause=exc, **context)
    return DirectoryServiceError(f"{action}: {exc}", cause=exc, **context)


class AzureDirectoryService:
    """Directory service backed by ``LogAnalyticsManagementClient``.

    Clients and credentials passed in are borrowed; the ones created here
    are closed by :meth:`close` or on leaving the ``with`` block.
    """

    def __init__(
        self,
        subscription_id: str,
        *,
        credential: Any | None = None,
        client: Any | None = None,
    ) -> None:
        self._subscription_id = subscription_id
        self._owned: list[Any] = []
        if client is None:
            if credential is None:
                credential = default_credential()
                self._owned.append(credential)
            client = LogAnalyticsManagementClient(credential, subscription_id)
            self._owned.insert(0, client)
        self._client = client

    def __enter__(self) -> AzureDirectoryService:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        owned, self._owned = self._owned, []
        for resource in owned:
            resource.close()

    def list_workspaces(self, subscription_id: str) -> Iterator[WorkspaceEntry]:
        if subscription_id != self._subscription_id:
            raise DirectoryServiceError(
                "directory service is bound to a different subscription",
                subscription_id=subscription_id,
            )
        try:
            # ItemPaged fetches further pages while iterating.
            for workspace in self._client.workspaces.list():
                customer_id = getattr(workspace, "customer_id", None)
                resource_path = getattr(workspace, "id", None)
                if not customer_id or not resource_path:
                    continue
                yield WorkspaceEntry(
                    customer_id=customer_id, resource_path=resource_path
                )
        except AzureError as exc:
            raise _wrap_sdk_error(
                exc, "listing workspaces failed", subscription_id=subscription_id
            ) from exc

    def get_shared_key(self, resource_group: str, workspace_name: str) -> str:
        try:
            keys = self._client.shared_keys.get_shared_keys(
                resource_group, workspace_name
            )
        except AzureError as exc:
            raise _wrap_sdk_error(
                exc,
                "reading shared keys failed",
                resource_group=resource_group,
                workspace_name=workspace_name,
            ) from exc
        key = getattr(keys, "primary_shared_key", None)
        if not key:
            raise AuthenticationError(
                "workspace has no primary shared key",
                resource_group=resource_group,
                workspace_name=workspace_name,
            )
        diagnostics.debug(
            "directory",
            "shared key retrieved",
            resource_group=resource_group,
            workspace_name=workspace_name,
        )
        return str(key)
