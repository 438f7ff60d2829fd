"""Schedule task folders and tasks."""
from collections import defaultdict

import structlog

from console_api.tree.categories import Category
from console_api.tree.collaborators import ScheduleRegistry
from console_api.tree.schemas import Node, RequestContext, TaskRecord

logger = structlog.get_logger()


def task_label(task: TaskRecord) -> str:
    """Display label of a task, prefixed with its owner's name."""
    if task.owner is None:
        return task.name
    return f"{task.owner.name}:{task.name}"


class ScheduleSource:
    """Schedule Tasks root."""

    name = "schedule"
    description = "schedule task nodes"

    def __init__(self, registry: ScheduleRegistry) -> None:
        """Initialize the adapter.

        Args:
            registry: Schedule registry.
        """
        self._registry = registry

    def fetch(self, context: RequestContext) -> Node:
        """Build the schedule task root for the viewer's organization.

        Internal tasks are skipped. Tasks in a folder that is not
        registered are not shown.

        Args:
            context: Caller context.

        Returns:
            The schedule task root.
        """
        by_folder: dict[str, list[TaskRecord]] = defaultdict(list)
        skipped = 0

        for task in self._registry.tasks(context.identity.organization):
            if task.internal:
                skipped += 1
                continue
            by_folder[task.folder.strip("/")].append(task)

        logger.debug("schedule_tasks_loaded", internal_skipped=skipped)

        return Node(
            path="/",
            label="Schedule Tasks",
            category=Category.SCHEDULE_TASK_FOLDER,
            children=self._children("", by_folder),
        )

    def _children(
        self, path: str, by_folder: dict[str, list[TaskRecord]]
    ) -> list[Node]:
        folders = []

        for name in self._registry.task_folders(path):
            folder_path = f"{path}/{name}" if path else name
            folders.append(
                Node(
                    path=folder_path,
                    label=name,
                    category=Category.SCHEDULE_TASK_FOLDER,
                    children=self._children(folder_path, by_folder),
                )
            )

        folders.sort(key=lambda n: n.label)
        tasks = sorted(by_folder.get(path, []), key=lambda t: t.task_id)

        return folders + [
            Node(
                path=f"{path}/{task.task_id}" if path else task.task_id,
                label=task_label(task),
                category=Category.SCHEDULE_TASK,
                icon="datetime-field-icon",
                last_modified=task.last_modified,
            )
            for task in tasks
        ]
