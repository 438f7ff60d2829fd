"""Mapping from tree nodes to the resources the permission oracle guards."""
from enum import Enum
from typing import NamedTuple

from console_api.tree.categories import Category


class ResourceType(str, Enum):
    """Kinds of resources the permission oracle understands."""

    REPORT = "report"
    ASSET = "asset"
    DATA_SOURCE = "data-source"
    DATA_SOURCE_FOLDER = "data-source-folder"
    DATA_MODEL_FOLDER = "data-model-folder"
    QUERY = "query"
    QUERY_FOLDER = "query-folder"
    LOGICAL_MODEL = "logical-model"
    CUBE = "cube"
    SCRIPT = "script"
    SCRIPT_LIBRARY = "script-library"
    TABLE_STYLE = "table-style"
    TABLE_STYLE_LIBRARY = "table-style-library"
    LIBRARY = "library"
    DASHBOARD = "dashboard"
    SCHEDULE_TASK = "schedule-task"
    SCHEDULE_TASK_FOLDER = "schedule-task-folder"
    SECURITY_USER = "security-user"


class ResourceAction(str, Enum):
    """Actions checked against a resource."""

    READ = "read"
    WRITE = "write"
    DELETE = "delete"
    ADMIN = "admin"


class Resource(NamedTuple):
    """A (type, path) pair understood by the permission oracle."""

    type: ResourceType
    path: str


# Categories whose resource path is the node path unchanged.
_PATH_RESOURCES: dict[Category, ResourceType] = {
    Category.REPOSITORY_FOLDER: ResourceType.REPORT,
    Category.VIEWSHEET: ResourceType.REPORT,
    Category.VIEWSHEET_SNAPSHOT: ResourceType.REPORT,
    Category.AUTO_SAVE_VIEWSHEET: ResourceType.REPORT,
    Category.WORKSHEET: ResourceType.ASSET,
    Category.WORKSHEET_FOLDER: ResourceType.ASSET,
    Category.AUTO_SAVE_WORKSHEET: ResourceType.ASSET,
    Category.DATA_SOURCE: ResourceType.DATA_SOURCE,
    Category.VPM: ResourceType.DATA_SOURCE,
    Category.DATA_SOURCE_FOLDER: ResourceType.DATA_SOURCE_FOLDER,
    Category.DATA_MODEL_FOLDER: ResourceType.DATA_MODEL_FOLDER,
    Category.QUERY: ResourceType.QUERY,
    Category.QUERY_FOLDER: ResourceType.QUERY_FOLDER,
    Category.CUBE: ResourceType.CUBE,
    Category.SCRIPT: ResourceType.SCRIPT,
    Category.TABLE_STYLE: ResourceType.TABLE_STYLE,
    Category.DASHBOARD: ResourceType.DASHBOARD,
    Category.DASHBOARD_FOLDER: ResourceType.DASHBOARD,
    Category.SCHEDULE_TASK: ResourceType.SCHEDULE_TASK,
    Category.SCHEDULE_TASK_FOLDER: ResourceType.SCHEDULE_TASK_FOLDER,
}

# Categories guarded by a single resource regardless of node path.
_FIXED_RESOURCES: dict[Category, Resource] = {
    Category.TRASH: Resource(ResourceType.REPORT, "/"),
    Category.RECYCLE_BIN_FOLDER: Resource(ResourceType.REPORT, "/"),
    Category.SCRIPT_FOLDER: Resource(ResourceType.SCRIPT_LIBRARY, "*"),
    Category.LIBRARY_FOLDER: Resource(ResourceType.LIBRARY, "*"),
}

UNMAPPED_CATEGORIES: frozenset[Category] = frozenset({
    Category.USER_ROOT,
    Category.AUTO_SAVE_FOLDER,
    Category.AUTO_SAVE_WORKSHEET_FOLDER,
    Category.AUTO_SAVE_VIEWSHEET_FOLDER,
})


def map_resource(category: Category, path: str) -> Resource | None:
    """Map a node's category and path to the resource guarding it.

    Args:
        category: Node category.
        path: Node path, with any trash prefix already removed.

    Returns:
        The guarding resource, or None for categories with no resource.
    """
    if category in UNMAPPED_CATEGORIES:
        return None

    if category in _PATH_RESOURCES:
        return Resource(_PATH_RESOURCES[category], path)

    if category in _FIXED_RESOURCES:
        return _FIXED_RESOURCES[category]

    if category is Category.TABLE_STYLE_FOLDER:
        if path == "*":
            return Resource(ResourceType.TABLE_STYLE_LIBRARY, "*")
        return Resource(ResourceType.TABLE_STYLE, path)

    if category in (Category.LOGICAL_MODEL, Category.LOGICAL_MODEL_EXTENSION):
        # data-source^[folder^]model[^extension]; extensions share the base grant
        segments = path.split("^")
        if category is Category.LOGICAL_MODEL_EXTENSION and len(segments) > 1:
            segments = segments[:-1]
        return Resource(ResourceType.LOGICAL_MODEL, "^".join(segments))

    if category in (Category.PARTITION, Category.PARTITION_EXTENSION):
        return Resource(ResourceType.DATA_SOURCE, path.split("^", 1)[0])

    return None
