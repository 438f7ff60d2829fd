"""Category trait and resource mapping tests."""

import pytest

from console_api.tree import (
    Category,
    NodeKind,
    Resource,
    ResourceType,
    map_resource,
)
from console_api.tree.categories import CATEGORY_TRAITS
from console_api.tree.paths import (
    is_in_recycle_bin,
    is_private,
    is_recycled_entry,
    is_virtual_root,
    parent_path,
    strip_trash_prefix,
)
from console_api.tree.resources import UNMAPPED_CATEGORIES


def test_every_category_has_traits() -> None:
    """The trait table covers every category."""
    assert set(CATEGORY_TRAITS) == set(Category)


def test_folder_bit_and_kind() -> None:
    """Folder categories share their kind with the leaf category."""
    assert Category.WORKSHEET_FOLDER.is_folder
    assert not Category.WORKSHEET.is_folder
    assert Category.WORKSHEET_FOLDER.kind is Category.WORKSHEET.kind is NodeKind.WORKSHEET


def test_auto_save_categories() -> None:
    """Only the five auto-save categories report is_auto_save."""
    auto_save = {c for c in Category if c.is_auto_save}
    assert auto_save == {
        Category.AUTO_SAVE_FOLDER,
        Category.AUTO_SAVE_WORKSHEET_FOLDER,
        Category.AUTO_SAVE_VIEWSHEET_FOLDER,
        Category.AUTO_SAVE_WORKSHEET,
        Category.AUTO_SAVE_VIEWSHEET,
    }


@pytest.mark.parametrize(
    ("category", "path", "expected"),
    [
        (Category.VIEWSHEET, "Examples/Census", Resource(ResourceType.REPORT, "Examples/Census")),
        (Category.WORKSHEET_FOLDER, "Shared", Resource(ResourceType.ASSET, "Shared")),
        (Category.SCRIPT_FOLDER, "Scripts", Resource(ResourceType.SCRIPT_LIBRARY, "*")),
        (Category.LIBRARY_FOLDER, "*", Resource(ResourceType.LIBRARY, "*")),
        (Category.TABLE_STYLE_FOLDER, "*", Resource(ResourceType.TABLE_STYLE_LIBRARY, "*")),
        (Category.TABLE_STYLE_FOLDER, "Dark", Resource(ResourceType.TABLE_STYLE, "Dark")),
        (Category.TRASH, "Trashcan", Resource(ResourceType.REPORT, "/")),
        (Category.RECYCLE_BIN_FOLDER, "Recycle Bin", Resource(ResourceType.REPORT, "/")),
        (
            Category.LOGICAL_MODEL_EXTENSION,
            "Orders^Model^EU",
            Resource(ResourceType.LOGICAL_MODEL, "Orders^Model"),
        ),
        (Category.PARTITION_EXTENSION, "Orders^Part^X", Resource(ResourceType.DATA_SOURCE, "Orders")),
        (Category.VPM, "Orders^VPM", Resource(ResourceType.DATA_SOURCE, "Orders^VPM")),
    ],
)
def test_map_resource(category: Category, path: str, expected: Resource) -> None:
    """Node categories map to the resource guarding them."""
    assert map_resource(category, path) == expected


@pytest.mark.parametrize("category", sorted(UNMAPPED_CATEGORIES, key=lambda c: c.value))
def test_unmapped_categories(category: Category) -> None:
    """Grouping categories have no guarding resource."""
    assert map_resource(category, "anything") is None


def test_path_predicates() -> None:
    """Scope predicates recognize the fixed folder paths."""
    assert is_private("My Dashboards/Notes")
    assert is_private("My Portal Dashboards")
    assert not is_private("My Dashboards Extra")
    assert is_in_recycle_bin("Examples/Recycle Bin/x")
    assert is_recycled_entry("Recycle Bin/x")
    assert not is_recycled_entry("Recycle Bin")
    assert is_virtual_root(Category.USER_ROOT, "Users")
    assert not is_virtual_root(Category.USER_ROOT, "My Dashboards")
    assert not is_virtual_root(Category.REPOSITORY_FOLDER, "Users")
    assert strip_trash_prefix("Trashcan/Old") == "Old"
    assert parent_path("a/b/c") == "a/b"
    assert parent_path("a") == "/"
