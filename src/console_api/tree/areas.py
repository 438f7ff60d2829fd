"""Per-user private areas shown under the user roots."""
from collections.abc import Collection

import structlog
from pydantic import BaseModel, ConfigDict, Field

from console_api.tree.categories import Category
from console_api.tree.collaborators import (
    AssetStore,
    DashboardRegistry,
    IdentityDirectory,
    PermissionOracle,
    RecycleBin,
)
from console_api.tree.hierarchy import build_asset_tree
from console_api.tree.paths import (
    MY_DASHBOARDS,
    MY_REPORTS,
    RECYCLE_BIN_FOLDER,
    USERS_DASHBOARD_FOLDER,
    USERS_FOLDER,
    is_my_report,
)
from console_api.tree.permissions import can_view_user
from console_api.tree.schemas import Identity, Node, RecycleRecord

logger = structlog.get_logger()


class UserArea(BaseModel):
    """Private folders of one visible user."""

    model_config = ConfigDict(frozen=True)

    user: Identity
    loaded: bool = Field(description="Whether folder contents were loaded")
    reports: Node
    dashboards: Node
    recycled: list[Node] = Field(default_factory=list)


def visible_users(
    directory: IdentityDirectory,
    oracle: PermissionOracle,
    viewer: Identity,
) -> list[Identity]:
    """List the users whose private areas the viewer may see.

    Args:
        directory: Identity directory.
        oracle: Permission oracle.
        viewer: Viewing identity.

    Returns:
        Users of the viewer's organization, sorted by name.
    """
    users = [
        user
        for user in directory.list_users(viewer.organization)
        if can_view_user(oracle, viewer, user)
    ]
    return sorted(users, key=lambda u: u.name.casefold())


def build_user_areas(
    users: list[Identity],
    users_to_load: Collection[str],
    assets: AssetStore,
    dashboards: DashboardRegistry,
    recycled: list[RecycleRecord],
    ascending: bool = True,
) -> list[UserArea]:
    """Build the private folders of each visible user.

    Folder contents are only read for users named in ``users_to_load``.
    Recycled entries are always attached to their original owner.

    Args:
        users: Visible users.
        users_to_load: Identity keys (or bare names) of users to expand.
        assets: Asset store.
        dashboards: Dashboard registry.
        recycled: Per-user recycle bin records.
        ascending: Label sort direction.

    Returns:
        One area per user, in input order.
    """
    areas = []

    for user in users:
        loaded = user.key in users_to_load or user.name in users_to_load
        report_children = None
        dashboard_children = None

        if loaded:
            report_children = build_asset_tree(
                assets.user_entries(user), MY_REPORTS, ascending, owner=user
            )
            dashboard_children = [
                Node(
                    path=f"{MY_DASHBOARDS}/{record.name}",
                    label=record.name,
                    category=Category.DASHBOARD,
                    owner=user,
                    description=record.description,
                    icon="viewsheet-icon",
                    last_modified=record.last_modified,
                )
                for record in dashboards.user_dashboards(user)
            ]

        areas.append(
            UserArea(
                user=user,
                loaded=loaded,
                reports=Node(
                    path=MY_REPORTS,
                    label=user.name,
                    category=Category.USER_ROOT,
                    owner=user,
                    full_path=f"{USERS_FOLDER}/{user.name}",
                    icon="user-icon",
                    children=report_children,
                ),
                dashboards=Node(
                    path=MY_DASHBOARDS,
                    label=user.name,
                    category=Category.USER_ROOT,
                    owner=user,
                    full_path=f"{USERS_DASHBOARD_FOLDER}/{user.name}",
                    icon="user-icon",
                    children=dashboard_children,
                ),
                recycled=[
                    recycled_node(record, owner=user)
                    for record in recycled
                    if record.original_user == user
                ],
            )
        )

    return areas


def live_recycle_records(
    recycle_bin: RecycleBin,
) -> tuple[list[RecycleRecord], list[RecycleRecord]]:
    """Read recycle bin records that still have a stored entry.

    Records whose entry is gone from the store are dropped.

    Args:
        recycle_bin: Recycle bin.

    Returns:
        Global records and per-user records. A record is per-user when
        it came from a private asset folder and names its original user.
    """
    stored = recycle_bin.stored_paths()
    global_records: list[RecycleRecord] = []
    user_records: list[RecycleRecord] = []

    for record in recycle_bin.entries():
        if record.path not in stored:
            logger.debug("recycle_entry_stale", path=record.path)
            continue

        if record.original_user is not None and is_my_report(record.original_path):
            user_records.append(record)
        else:
            global_records.append(record)

    return global_records, user_records


def recycled_node(record: RecycleRecord, owner: Identity | None = None) -> Node:
    """Build the node for an entry held by the recycle bin.

    Args:
        record: Recycle bin record.
        owner: Owner of a private entry, or None for global entries.

    Returns:
        A node under the ``Recycle Bin/`` path namespace.
    """
    path = record.path
    if not path.startswith(RECYCLE_BIN_FOLDER + "/"):
        path = f"{RECYCLE_BIN_FOLDER}/{path}"

    return Node(
        path=path,
        label=record.name,
        category=record.category,
        owner=owner,
        full_path=record.original_path,
        icon=_recycled_icon(record.category),
    )


def _recycled_icon(category: Category) -> str | None:
    """Icon for a recycled entry, which has no asset details."""
    if category.is_folder:
        return None
    if category is Category.WORKSHEET:
        return "worksheet-icon"
    return "viewsheet-icon"
