"""
Azure Resource Manager collaborators: workspace resolution and key lookup.
"""

from __future__ import annotations

from .directory import AzureDirectoryService, default_credential
from .resolver import (
    DirectoryService,
    WorkspaceEntry,
    WorkspaceRef,
    WorkspaceResolver,
    parse_resource_path,
)

__all__ = [
    "AzureDirectoryService",
    "DirectoryService",
    "WorkspaceEntry",
    "WorkspaceRef",
    "WorkspaceResolver",
    "default_credential",
    "parse_resource_path",
]
