"""
Workspace lookup by customer id.

The ingestion API addresses a workspace by its customer id, while the
shared key is read through Azure Resource Manager by resource group and
workspace name. The resolver bridges the two by scanning the workspaces
visible in a subscription.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Protocol

from ..core import diagnostics
from ..core.errors import MalformedResourcePathError, WorkspaceNotFoundError

# /subscriptions/<sub>/resourceGroups/<rg>/providers/<provider>/.../<name>
WORKSPACE_PATH_RE = re.compile(
    r"^/subscriptions/[^/]+/resourceGroups/(?P<rg_name>[^/]*)"
    r"/providers/[^/]+/.+/(?P<name>[^/]*)$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class WorkspaceEntry:
    """One workspace as listed by the directory service."""

    customer_id: str
    resource_path: str


@dataclass(frozen=True)
class WorkspaceRef:
    """Symbolic address of a workspace in Resource Manager."""

    name: str
    resource_group: str


class DirectoryService(Protocol):
    """Resource Manager operations the resolver and collector rely on."""

    def list_workspaces(self, subscription_id: str) -> Iterable[WorkspaceEntry]:
        """Yield every workspace in the subscription, across all pages."""

    def get_shared_key(self, resource_group: str, workspace_name: str) -> str:
        """Return the workspace's primary shared key (base64)."""


def parse_resource_path(resource_path: str) -> WorkspaceRef:
    """Extract name and resource group from a workspace resource id.

    Raises:
        MalformedResourcePathError: if the path does not have the expected
            shape or either segment is empty.
    """
    match = WORKSPACE_PATH_RE.match(resource_path)
    if match is None:
        raise MalformedResourcePathError(
            f"unrecognized workspace ID {resource_path!r}",
            resource_path=resource_path,
        )
    name = match.group("name")
    rg_name = match.group("rg_name")
    if not name:
        raise MalformedResourcePathError(
            f"workspace name not found in workspace ID {resource_path!r}",
            resource_path=resource_path,
        )
    if not rg_name:
        raise MalformedResourcePathError(
            "workspace resource group name not found in workspace ID "
            f"{resource_path!r}",
            resource_path=resource_path,
        )
    return WorkspaceRef(name=name, resource_group=rg_name)


class WorkspaceResolver:
    def __init__(self, directory: DirectoryService) -> None:
        self._directory = directory

    def resolve(self, subscription_id: str, customer_id: str) -> WorkspaceRef:
        """Find the workspace whose customer id equals ``customer_id``.

        Matching is exact and case-sensitive. Every page of the listing is
        scanned.
        """
        scanned = 0
        for entry in self._directory.list_workspaces(subscription_id):
            scanned += 1
            if entry.customer_id == customer_id:
                ref = parse_resource_path(entry.resource_path)
                diagnostics.debug(
                    "resolver",
                    "workspace resolved",
                    customer_id=customer_id,
                    name=ref.name,
                    resource_group=ref.resource_group,
                    scanned=scanned,
                )
                return ref
        raise WorkspaceNotFoundError(
            customer_id, subscription_id=subscription_id, scanned=scanned
        )
