"""YAML-backed snapshot of the content stores and their permissions.

A catalog file describes users, grants and the content held by each
store. One ``Catalog`` implements every collaborator interface except
the draft store, which lives on disk.
"""
from pathlib import Path

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from console_api.tree.paths import parent_path
from console_api.tree.resources import ResourceAction, ResourceType
from console_api.tree.schemas import (
    AssetRecord,
    DashboardRecord,
    DataSourceRecord,
    Identity,
    LibraryRecord,
    RecycleRecord,
    TaskRecord,
)

logger = structlog.get_logger()

WILDCARD = "*"
STYLE_SEPARATOR = "~"


class CatalogError(Exception):
    """Raised when a catalog file cannot be read or is invalid."""

    def __init__(
        self,
        message: str,
        path: str,
        validation_error: ValidationError | None = None,
    ) -> None:
        """Initialize catalog error.

        Args:
            message: Error description.
            path: Path of the catalog file.
            validation_error: Pydantic validation error details, if any.
        """
        super().__init__(message)
        self.path = path
        self.validation_error = validation_error


class Grant(BaseModel):
    """Permission granted to an identity on a resource subtree."""

    identity: str = Field(description="User name, identity key or '*'")
    type: ResourceType
    path: str = Field(description="Resource path, '*' for every path")
    actions: list[ResourceAction]

    def matches(
        self,
        identity: Identity,
        resource_type: ResourceType,
        resource_path: str,
        action: ResourceAction,
    ) -> bool:
        """Check if this grant covers a permission request.

        A grant on a path covers the path and everything below it. An
        ADMIN grant covers every action.
        """
        if self.identity not in (WILDCARD, identity.name, identity.key):
            return False
        if self.type is not resource_type:
            return False
        if action not in self.actions and ResourceAction.ADMIN not in self.actions:
            return False
        return (
            self.path in (WILDCARD, resource_path)
            or resource_path.startswith(self.path.rstrip("/") + "/")
        )


class AssetSection(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    global_entries: list[AssetRecord] = Field(default_factory=list, alias="global")
    users: dict[str, list[AssetRecord]] = Field(default_factory=dict)
    trash: list[AssetRecord] = Field(default_factory=list)


class RecycleSection(BaseModel):
    entries: list[RecycleRecord] = Field(default_factory=list)
    stored_paths: list[str] = Field(default_factory=list)


class DataSourceSection(BaseModel):
    folders: list[str] = Field(default_factory=list)
    sources: list[DataSourceRecord] = Field(default_factory=list)


class LibrarySection(BaseModel):
    scripts: list[LibraryRecord] = Field(default_factory=list)
    table_style_folders: list[str] = Field(default_factory=list)
    table_styles: list[LibraryRecord] = Field(default_factory=list)


class ScheduleSection(BaseModel):
    folders: list[str] = Field(default_factory=list)
    tasks: list[TaskRecord] = Field(default_factory=list)


class DashboardSection(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    global_dashboards: list[DashboardRecord] = Field(
        default_factory=list, alias="global"
    )
    order: dict[str, list[str]] = Field(default_factory=dict)
    users: dict[str, list[DashboardRecord]] = Field(default_factory=dict)


def _for_user(mapping: dict[str, list], user: Identity) -> list:
    # sections are keyed by identity key or, in the default organization, by name
    if user.key in mapping:
        return list(mapping[user.key])
    return list(mapping.get(user.name, []))


class Catalog(BaseModel):
    """In-memory content snapshot loaded from YAML."""

    users: list[Identity] = Field(default_factory=list)
    admins: list[Identity] = Field(default_factory=list)
    grants: list[Grant] = Field(default_factory=list)
    assets: AssetSection = Field(default_factory=AssetSection)
    recycle_bin: RecycleSection = Field(default_factory=RecycleSection)
    data_sources: DataSourceSection = Field(default_factory=DataSourceSection)
    library: LibrarySection = Field(default_factory=LibrarySection)
    schedule: ScheduleSection = Field(default_factory=ScheduleSection)
    dashboards: DashboardSection = Field(default_factory=DashboardSection)

    # === PermissionOracle ===

    def check_permission(
        self,
        identity: Identity,
        resource_type: ResourceType,
        resource_path: str,
        action: ResourceAction,
    ) -> bool:
        if self.is_admin(identity):
            return True
        return any(
            grant.matches(identity, resource_type, resource_path, action)
            for grant in self.grants
        )

    # === IdentityDirectory ===

    def list_users(self, organization: str) -> list[Identity]:
        return [user for user in self.users if user.organization == organization]

    def is_admin(self, identity: Identity) -> bool:
        return identity in self.admins

    # === AssetStore ===

    def global_entries(self) -> list[AssetRecord]:
        return list(self.assets.global_entries)

    def user_entries(self, user: Identity) -> list[AssetRecord]:
        return _for_user(self.assets.users, user)

    def trash_entries(self) -> list[AssetRecord]:
        return list(self.assets.trash)

    # === RecycleBin ===

    def entries(self) -> list[RecycleRecord]:
        return list(self.recycle_bin.entries)

    def stored_paths(self) -> set[str]:
        return set(self.recycle_bin.stored_paths)

    # === DataSourceRegistry ===

    def subfolders(self, parent: str | None) -> list[str]:
        return [
            folder
            for folder in self.data_sources.folders
            if _parent_folder(folder, "/") == parent
        ]

    def list_data_sources(self, parent: str | None) -> list[DataSourceRecord]:
        return [
            source for source in self.data_sources.sources if source.folder == parent
        ]

    # === LibraryRegistry ===

    def scripts(self) -> list[LibraryRecord]:
        return list(self.library.scripts)

    def table_style_folders(self, parent: str | None) -> list[str]:
        return [
            folder
            for folder in self.library.table_style_folders
            if _parent_folder(folder, STYLE_SEPARATOR) == parent
        ]

    def table_styles(self, folder: str | None) -> list[LibraryRecord]:
        return [style for style in self.library.table_styles if style.folder == folder]

    # === ScheduleRegistry ===

    def tasks(self, organization: str) -> list[TaskRecord]:
        return [
            task
            for task in self.schedule.tasks
            if task.owner is None or task.owner.organization == organization
        ]

    def task_folders(self, parent: str) -> list[str]:
        return [
            folder.rsplit("/", 1)[-1]
            for folder in self.schedule.folders
            if parent_path(folder, "") == parent
        ]

    # === DashboardRegistry ===

    def global_dashboards(self) -> list[DashboardRecord]:
        return list(self.dashboards.global_dashboards)

    def dashboard_order(self, identity: Identity) -> list[str]:
        return _for_user(self.dashboards.order, identity)

    def user_dashboards(self, user: Identity) -> list[DashboardRecord]:
        return _for_user(self.dashboards.users, user)


def _parent_folder(folder: str, separator: str) -> str | None:
    head, sep, _ = folder.rpartition(separator)
    return head if sep and head else None


def load_catalog(path: Path) -> Catalog:
    """Load and validate a catalog file.

    Args:
        path: Path to the YAML catalog.

    Returns:
        The validated catalog, or an empty catalog if the file is missing.

    Raises:
        CatalogError: If the file cannot be read, is not valid YAML, or
            does not match the catalog schema.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.warning("catalog_not_found", path=str(path))
        return Catalog()
    except OSError as e:
        raise CatalogError(f"Cannot read catalog: {e}", str(path)) from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid YAML in catalog: {e}", str(path)) from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise CatalogError("Catalog must be a mapping", str(path))

    try:
        catalog = Catalog.model_validate(data)
    except ValidationError as e:
        logger.error(
            "catalog_validation_failed",
            path=str(path),
            errors=e.errors(),
        )
        raise CatalogError(
            f"Invalid catalog: {path}", str(path), validation_error=e
        ) from e

    logger.info(
        "catalog_loaded",
        path=str(path),
        users=len(catalog.users),
        grants=len(catalog.grants),
    )
    return catalog
