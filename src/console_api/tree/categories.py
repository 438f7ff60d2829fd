"""Node categories for the content tree."""
from enum import Enum


class NodeKind(str, Enum):
    """Domain a tree node belongs to, independent of folder-ness."""

    REPOSITORY = "repository"
    VIEWSHEET = "viewsheet"
    WORKSHEET = "worksheet"
    DATA_SOURCE = "data-source"
    DATA_SOURCE_FOLDER = "data-source-folder"
    DATA_MODEL = "data-model"
    QUERY = "query"
    LOGICAL_MODEL = "logical-model"
    PARTITION = "partition"
    VPM = "vpm"
    CUBE = "cube"
    LIBRARY = "library"
    SCRIPT = "script"
    TABLE_STYLE = "table-style"
    SCHEDULE_TASK = "schedule-task"
    DASHBOARD = "dashboard"
    RECYCLE_BIN = "recycle-bin"
    AUTO_SAVE = "auto-save"
    USER = "user"
    TRASH = "trash"


class Category(str, Enum):
    """Category of a tree node.

    Each member combines a NodeKind with a folder bit. Use the ``kind``
    and ``is_folder`` properties instead of comparing raw values.
    """

    REPOSITORY_FOLDER = "repository-folder"
    VIEWSHEET = "viewsheet"
    VIEWSHEET_SNAPSHOT = "viewsheet-snapshot"
    WORKSHEET = "worksheet"
    WORKSHEET_FOLDER = "worksheet-folder"
    DATA_SOURCE = "data-source"
    DATA_SOURCE_FOLDER = "data-source-folder"
    DATA_MODEL_FOLDER = "data-model-folder"
    QUERY = "query"
    QUERY_FOLDER = "query-folder"
    LOGICAL_MODEL = "logical-model"
    LOGICAL_MODEL_EXTENSION = "logical-model-extension"
    PARTITION = "partition"
    PARTITION_EXTENSION = "partition-extension"
    VPM = "vpm"
    CUBE = "cube"
    LIBRARY_FOLDER = "library-folder"
    SCRIPT = "script"
    SCRIPT_FOLDER = "script-folder"
    TABLE_STYLE = "table-style"
    TABLE_STYLE_FOLDER = "table-style-folder"
    SCHEDULE_TASK = "schedule-task"
    SCHEDULE_TASK_FOLDER = "schedule-task-folder"
    DASHBOARD = "dashboard"
    DASHBOARD_FOLDER = "dashboard-folder"
    RECYCLE_BIN_FOLDER = "recycle-bin-folder"
    AUTO_SAVE_FOLDER = "auto-save-folder"
    AUTO_SAVE_WORKSHEET_FOLDER = "auto-save-worksheet-folder"
    AUTO_SAVE_VIEWSHEET_FOLDER = "auto-save-viewsheet-folder"
    AUTO_SAVE_WORKSHEET = "auto-save-worksheet"
    AUTO_SAVE_VIEWSHEET = "auto-save-viewsheet"
    USER_ROOT = "user-root"
    TRASH = "trash"

    @property
    def kind(self) -> NodeKind:
        """Domain of this category."""
        return CATEGORY_TRAITS[self][0]

    @property
    def is_folder(self) -> bool:
        """Whether nodes of this category can hold children."""
        return CATEGORY_TRAITS[self][1]

    @property
    def is_auto_save(self) -> bool:
        """Whether this is one of the auto-save grouping or entry categories."""
        return self.kind is NodeKind.AUTO_SAVE


CATEGORY_TRAITS: dict[Category, tuple[NodeKind, bool]] = {
    Category.REPOSITORY_FOLDER: (NodeKind.REPOSITORY, True),
    Category.VIEWSHEET: (NodeKind.VIEWSHEET, False),
    Category.VIEWSHEET_SNAPSHOT: (NodeKind.VIEWSHEET, False),
    Category.WORKSHEET: (NodeKind.WORKSHEET, False),
    Category.WORKSHEET_FOLDER: (NodeKind.WORKSHEET, True),
    Category.DATA_SOURCE: (NodeKind.DATA_SOURCE, True),
    Category.DATA_SOURCE_FOLDER: (NodeKind.DATA_SOURCE_FOLDER, True),
    Category.DATA_MODEL_FOLDER: (NodeKind.DATA_MODEL, True),
    Category.QUERY: (NodeKind.QUERY, False),
    Category.QUERY_FOLDER: (NodeKind.QUERY, True),
    Category.LOGICAL_MODEL: (NodeKind.LOGICAL_MODEL, True),
    Category.LOGICAL_MODEL_EXTENSION: (NodeKind.LOGICAL_MODEL, False),
    Category.PARTITION: (NodeKind.PARTITION, True),
    Category.PARTITION_EXTENSION: (NodeKind.PARTITION, False),
    Category.VPM: (NodeKind.VPM, False),
    Category.CUBE: (NodeKind.CUBE, False),
    Category.LIBRARY_FOLDER: (NodeKind.LIBRARY, True),
    Category.SCRIPT: (NodeKind.SCRIPT, False),
    Category.SCRIPT_FOLDER: (NodeKind.SCRIPT, True),
    Category.TABLE_STYLE: (NodeKind.TABLE_STYLE, False),
    Category.TABLE_STYLE_FOLDER: (NodeKind.TABLE_STYLE, True),
    Category.SCHEDULE_TASK: (NodeKind.SCHEDULE_TASK, False),
    Category.SCHEDULE_TASK_FOLDER: (NodeKind.SCHEDULE_TASK, True),
    Category.DASHBOARD: (NodeKind.DASHBOARD, False),
    Category.DASHBOARD_FOLDER: (NodeKind.DASHBOARD, True),
    Category.RECYCLE_BIN_FOLDER: (NodeKind.RECYCLE_BIN, True),
    Category.AUTO_SAVE_FOLDER: (NodeKind.AUTO_SAVE, True),
    Category.AUTO_SAVE_WORKSHEET_FOLDER: (NodeKind.AUTO_SAVE, True),
    Category.AUTO_SAVE_VIEWSHEET_FOLDER: (NodeKind.AUTO_SAVE, True),
    Category.AUTO_SAVE_WORKSHEET: (NodeKind.AUTO_SAVE, False),
    Category.AUTO_SAVE_VIEWSHEET: (NodeKind.AUTO_SAVE, False),
    Category.USER_ROOT: (NodeKind.USER, True),
    Category.TRASH: (NodeKind.TRASH, True),
}
