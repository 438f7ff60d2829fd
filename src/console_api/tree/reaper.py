"""Expiry of auto-saved drafts and their grouping into tree nodes."""
from collections.abc import Collection
from datetime import datetime, timedelta

import structlog

from console_api.tree.categories import Category
from console_api.tree.collaborators import DraftStore
from console_api.tree.paths import ANONYMOUS
from console_api.tree.schemas import (
    DraftFile,
    DraftKind,
    Identity,
    Node,
    RequestContext,
)

logger = structlog.get_logger()

DRAFT_RETENTION = timedelta(days=7)

_KIND_FOLDERS: dict[DraftKind, tuple[str, str, Category]] = {
    DraftKind.WORKSHEET: ("worksheet", "Worksheet", Category.AUTO_SAVE_WORKSHEET_FOLDER),
    DraftKind.VIEWSHEET: ("dashboard", "Dashboard", Category.AUTO_SAVE_VIEWSHEET_FOLDER),
}

_KIND_ENTRIES: dict[DraftKind, tuple[Category, str]] = {
    DraftKind.WORKSHEET: (Category.AUTO_SAVE_WORKSHEET, "worksheet-icon"),
    DraftKind.VIEWSHEET: (Category.AUTO_SAVE_VIEWSHEET, "viewsheet-icon"),
}


def reap_drafts(
    store: DraftStore,
    context: RequestContext,
    now: datetime,
    retention: timedelta = DRAFT_RETENTION,
) -> list[DraftFile]:
    """Delete expired drafts and return the ones still retained.

    A draft expires when it was last modified more than ``retention``
    before ``now``. Expired drafts are excluded even when their deletion
    fails.

    Args:
        store: Draft store to list and delete from.
        context: Caller context, used for logging.
        now: Current time, timezone-aware.
        retention: How long drafts are kept.

    Returns:
        Drafts within the retention window, in store order.
    """
    retained: list[DraftFile] = []

    for draft in store.list_drafts():
        age = now - draft.last_modified

        if age <= retention:
            retained.append(draft)
            continue

        try:
            deleted = store.delete(draft)
        except OSError as e:
            logger.error(
                "draft_delete_failed",
                file=draft.file_name,
                user=context.identity.name,
                error=str(e),
            )
            continue

        if deleted:
            logger.info(
                "draft_expired_deleted",
                file=draft.file_name,
                age_days=age.days,
            )
        else:
            logger.debug("draft_already_gone", file=draft.file_name)

    return retained


def group_drafts(
    drafts: list[DraftFile],
    visible_user_keys: Collection[str],
) -> list[Node]:
    """Group drafts by owner, then by kind, into placeholder nodes.

    Anonymous drafts are always included. Drafts of other owners are
    included only when the owner is a visible user.

    Args:
        drafts: Retained drafts.
        visible_user_keys: Identity keys the viewer may see.

    Returns:
        One auto-save folder per owner, in first-seen order.
    """
    grouped: dict[str, dict[DraftKind, dict[str, Node]]] = {}

    for draft in drafts:
        owner = draft.owner_key or ANONYMOUS

        if draft.owner_key is not None and draft.owner_key not in visible_user_keys:
            continue

        category, icon = _KIND_ENTRIES[draft.kind]
        by_kind = grouped.setdefault(owner, {kind: {} for kind in DraftKind})
        by_kind[draft.kind].setdefault(
            draft.file_name,
            Node(
                path=draft.file_name,
                label=draft.name,
                full_path=draft.file_name,
                category=category,
                icon=icon,
                last_modified=int(draft.last_modified.timestamp() * 1000),
            ),
        )

    return [_owner_folder(owner, by_kind) for owner, by_kind in grouped.items()]


def _owner_folder(owner: str, by_kind: dict[DraftKind, dict[str, Node]]) -> Node:
    kind_folders = []

    for kind in (DraftKind.WORKSHEET, DraftKind.VIEWSHEET):
        suffix, label, category = _KIND_FOLDERS[kind]
        entries = list(by_kind[kind].values())
        kind_folders.append(
            Node(
                path=f"{owner}/{suffix}",
                label=label,
                category=category,
                children=entries or None,
            )
        )

    label = owner if owner == ANONYMOUS else Identity.from_key(owner).name

    return Node(
        path=owner,
        label=label,
        category=Category.AUTO_SAVE_FOLDER,
        children=kind_folders,
    )
