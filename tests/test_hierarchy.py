"""Asset nesting tests."""

import pytest

from console_api.tree import Category, Identity
from console_api.tree.hierarchy import build_asset_tree
from console_api.tree.schemas import AssetRecord

BOB = Identity(name="bob")


def _record(path: str, category: Category = Category.VIEWSHEET) -> AssetRecord:
    return AssetRecord(path=path, category=category)


def test_entries_nest_by_parent_path() -> None:
    """Folders hold their entries and come before leaves."""
    nodes = build_asset_tree(
        [
            _record("Top"),
            _record("Examples", Category.REPOSITORY_FOLDER),
            _record("Examples/Census"),
            _record("Examples/Recycle Bin/Old"),
        ],
        "/",
    )

    assert [n.label for n in nodes] == ["Examples", "Top"]
    assert [c.path for c in nodes[0].children] == ["Examples/Census"]
    assert nodes[1].children is None


@pytest.mark.parametrize(
    ("root", "child"),
    [("/", "Notes"), ("My Dashboards", "My Dashboards/Notes")],
)
def test_folder_at_root_path_is_skipped(root: str, child: str) -> None:
    """A folder entry naming the root itself is not nested under itself."""
    nodes = build_asset_tree(
        [_record(root, Category.REPOSITORY_FOLDER), _record(child)],
        root,
    )

    assert [n.path for n in nodes] == [child]


def test_owner_is_set_on_every_node() -> None:
    """Private entries at any depth carry their owner."""
    nodes = build_asset_tree(
        [
            _record("My Dashboards/Plans", Category.REPOSITORY_FOLDER),
            _record("My Dashboards/Plans/Q1"),
        ],
        "My Dashboards",
        owner=BOB,
    )

    (plans,) = nodes
    assert plans.owner == BOB
    assert plans.children[0].owner == BOB


def test_global_entries_have_no_owner() -> None:
    """Without an owner the nodes stay in the shared scope."""
    (node,) = build_asset_tree([_record("Examples/Census")], "Examples")

    assert node.owner is None
