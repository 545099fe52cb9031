"""Storage adapters."""

from .filesystem import FilesystemWorkspace, workspace_name

__all__ = ["FilesystemWorkspace", "workspace_name"]
