"""Interfaces of the external stores the content tree is built from."""
from typing import Protocol

from console_api.tree.resources import ResourceAction, ResourceType
from console_api.tree.schemas import (
    AssetRecord,
    DashboardRecord,
    DataSourceRecord,
    DraftFile,
    Identity,
    LibraryRecord,
    RecycleRecord,
    TaskRecord,
)


class PermissionOracle(Protocol):
    """Answers whether an identity may perform an action on a resource."""

    def check_permission(
        self,
        identity: Identity,
        resource_type: ResourceType,
        resource_path: str,
        action: ResourceAction,
    ) -> bool: ...


class IdentityDirectory(Protocol):
    """Resolves users and administrative status."""

    def list_users(self, organization: str) -> list[Identity]: ...

    def is_admin(self, identity: Identity) -> bool: ...


class AssetStore(Protocol):
    """Viewsheets, worksheets and their folders."""

    def global_entries(self) -> list[AssetRecord]: ...

    def user_entries(self, user: Identity) -> list[AssetRecord]: ...

    def trash_entries(self) -> list[AssetRecord]: ...


class RecycleBin(Protocol):
    """Metadata about entries moved to the recycle bin."""

    def entries(self) -> list[RecycleRecord]: ...

    def stored_paths(self) -> set[str]: ...


class DataSourceRegistry(Protocol):
    """Data sources and their folders."""

    def subfolders(self, parent: str | None) -> list[str]: ...

    def list_data_sources(self, parent: str | None) -> list[DataSourceRecord]: ...


class LibraryRegistry(Protocol):
    """Scripts and table styles."""

    def scripts(self) -> list[LibraryRecord]: ...

    def table_style_folders(self, parent: str | None) -> list[str]: ...

    def table_styles(self, folder: str | None) -> list[LibraryRecord]: ...


class ScheduleRegistry(Protocol):
    """Schedule tasks and task folders."""

    def tasks(self, organization: str) -> list[TaskRecord]: ...

    def task_folders(self, parent: str) -> list[str]: ...


class DashboardRegistry(Protocol):
    """Global and per-user portal dashboards."""

    def global_dashboards(self) -> list[DashboardRecord]: ...

    def dashboard_order(self, identity: Identity) -> list[str]: ...

    def user_dashboards(self, user: Identity) -> list[DashboardRecord]: ...


class DraftStore(Protocol):
    """Auto-saved draft files."""

    def list_drafts(self) -> list[DraftFile]: ...

    def delete(self, draft: DraftFile) -> bool: ...
