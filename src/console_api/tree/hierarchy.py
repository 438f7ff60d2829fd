"""Nesting of flat asset entries into tree nodes."""
from collections import defaultdict
from collections.abc import Iterable

from console_api.tree.categories import Category
from console_api.tree.merger import sort_nodes
from console_api.tree.paths import is_in_recycle_bin, parent_path
from console_api.tree.schemas import AssetRecord, Identity, Node

REPORT_CATEGORIES: frozenset[Category] = frozenset({
    Category.REPOSITORY_FOLDER,
    Category.VIEWSHEET,
    Category.VIEWSHEET_SNAPSHOT,
})

WORKSHEET_CATEGORIES: frozenset[Category] = frozenset({
    Category.WORKSHEET_FOLDER,
    Category.WORKSHEET,
})

WORKSHEET_ICONS: dict[str, str] = {
    "condition": "condition-icon",
    "named-group": "grouping-icon",
    "variable": "variable-icon",
    "table": "worksheet-icon",
    "date-range": "date-range-icon",
}


def asset_icon(record: AssetRecord) -> str | None:
    """Pick the display icon for an asset entry.

    Args:
        record: Asset entry.

    Returns:
        Icon class name, or None for the default folder icon.
    """
    if record.category in (Category.VIEWSHEET, Category.VIEWSHEET_SNAPSHOT):
        if record.materialized:
            return "materialized-viewsheet-icon"
        if record.category is Category.VIEWSHEET_SNAPSHOT:
            return "snapshot-icon"
        return "viewsheet-icon"

    if record.category is Category.WORKSHEET:
        if record.materialized:
            return "materialized-worksheet-icon"
        return WORKSHEET_ICONS.get(record.worksheet_type or "table")

    return None


def build_asset_tree(
    records: Iterable[AssetRecord],
    root_path: str,
    ascending: bool = True,
    owner: Identity | None = None,
) -> list[Node]:
    """Build nested nodes from flat asset entries.

    Entries are attached to their parent by path. Top-level entries
    attach to ``root_path``. Entries inside a recycle bin folder are
    skipped, as is an entry at the root path itself.

    Args:
        records: Flat asset entries.
        root_path: Path that top-level entries hang from.
        ascending: Label sort direction.
        owner: Owner set on every node, for private entries.

    Returns:
        Children of the root, folders first.
    """
    by_parent: dict[str, list[AssetRecord]] = defaultdict(list)

    for record in records:
        if record.path == root_path or is_in_recycle_bin(record.path):
            continue
        by_parent[parent_path(record.path, root_path)].append(record)

    def build(path: str) -> list[Node]:
        nodes = []
        for record in by_parent.get(path, []):
            children = build(record.path) if record.category.is_folder else None
            nodes.append(
                Node(
                    path=record.path,
                    label=record.path.rsplit("/", 1)[-1],
                    category=record.category,
                    owner=owner,
                    description=record.description,
                    icon=asset_icon(record),
                    last_modified=record.last_modified,
                    children=children,
                )
            )
        return sort_nodes(nodes, ascending=ascending, folders_first=True)

    return build(root_path)
