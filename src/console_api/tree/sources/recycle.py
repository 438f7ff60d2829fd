"""Recycle bin and auto-saved drafts."""
from collections.abc import Callable, Sequence
from datetime import datetime, timedelta, timezone

import structlog

from console_api.tree.areas import UserArea, live_recycle_records, recycled_node
from console_api.tree.categories import Category
from console_api.tree.collaborators import (
    DraftStore,
    IdentityDirectory,
    PermissionOracle,
    RecycleBin,
)
from console_api.tree.paths import AUTO_SAVE_FOLDER, RECYCLE_BIN_FOLDER
from console_api.tree.permissions import check_permission
from console_api.tree.reaper import DRAFT_RETENTION, group_drafts, reap_drafts
from console_api.tree.resources import ResourceAction, map_resource
from console_api.tree.schemas import Node, RecycleRecord, RequestContext

logger = structlog.get_logger()


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


class RecycleSource:
    """Recycle Bin placeholder with recycled entries and auto-saved drafts.

    The placeholder has an empty path. Its visibility follows its
    children: it survives redaction only when something below it does.
    """

    name = "recycle"
    description = "recycle bin nodes"

    def __init__(
        self,
        areas: Sequence[UserArea],
        recycle_bin: RecycleBin,
        oracle: PermissionOracle,
        directory: IdentityDirectory,
        drafts: DraftStore,
        security_enabled: bool = True,
        retention: timedelta = DRAFT_RETENTION,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the adapter.

        Args:
            areas: Prebuilt private areas of the visible users.
            recycle_bin: Recycle bin metadata.
            oracle: Permission oracle, for global recycled entries.
            directory: Identity directory, for the administrator check.
            drafts: Auto-saved draft store.
            security_enabled: When False every viewer sees the drafts.
            retention: How long drafts are kept.
            clock: Returns the current aware datetime.
        """
        self._areas = areas
        self._recycle_bin = recycle_bin
        self._oracle = oracle
        self._directory = directory
        self._drafts = drafts
        self._security_enabled = security_enabled
        self._retention = retention
        self._clock = clock

    def fetch(self, context: RequestContext) -> Node:
        """Build the recycle bin root.

        Args:
            context: Caller context.

        Returns:
            The recycle bin placeholder.
        """
        global_records, _ = live_recycle_records(self._recycle_bin)

        entries = [
            recycled_node(record)
            for record in global_records
            if self._readable(record, context)
        ]
        entries.extend(node for area in self._areas for node in area.recycled)

        children = [
            Node(
                path=RECYCLE_BIN_FOLDER,
                label="Repository",
                category=Category.RECYCLE_BIN_FOLDER,
                children=entries,
            )
        ]

        if not self._security_enabled or self._directory.is_admin(context.identity):
            children.append(self._auto_saved(context))

        return Node(
            path="",
            label=RECYCLE_BIN_FOLDER,
            category=Category.RECYCLE_BIN_FOLDER,
            children=children,
        )

    def _readable(self, record: RecycleRecord, context: RequestContext) -> bool:
        resource = map_resource(record.category, record.original_path)
        if resource is None:
            logger.debug(
                "recycle_entry_unmapped",
                category=record.category.value,
                path=record.path,
            )
            return False
        return check_permission(
            self._oracle, context.identity, resource, ResourceAction.READ
        )

    def _auto_saved(self, context: RequestContext) -> Node:
        retained = reap_drafts(
            self._drafts, context, now=self._clock(), retention=self._retention
        )
        visible = {area.user.key for area in self._areas}

        return Node(
            path=AUTO_SAVE_FOLDER,
            label="Auto Saved Files",
            category=Category.AUTO_SAVE_FOLDER,
            children=group_drafts(retained, visible),
        )
