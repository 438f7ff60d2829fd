"""Catalog loading and permission grant tests."""

from pathlib import Path

import pytest
import yaml
from conftest import CATALOG_DATA

from console_api.tree import (
    Catalog,
    CatalogError,
    Identity,
    ResourceAction,
    ResourceType,
    load_catalog,
)
from console_api.tree.catalog import Grant

ALICE = Identity(name="alice")


@pytest.fixture
def catalog_file(tmp_path: Path) -> Path:
    """Write the shared catalog as YAML."""
    path = tmp_path / "catalog.yaml"
    path.write_text(yaml.safe_dump(CATALOG_DATA), encoding="utf-8")
    return path


def test_load_catalog(catalog_file: Path) -> None:
    """A valid file loads into a catalog."""
    catalog = load_catalog(catalog_file)

    assert [u.name for u in catalog.users] == ["alice", "bob", "admin"]
    assert catalog.is_admin(Identity(name="admin"))
    assert [r.path for r in catalog.global_entries()][:2] == ["Examples", "Examples/Census"]


def test_missing_catalog_is_empty(tmp_path: Path) -> None:
    """A missing file yields an empty catalog."""
    catalog = load_catalog(tmp_path / "missing.yaml")

    assert catalog.users == []
    assert catalog.global_entries() == []


def test_empty_catalog_file(tmp_path: Path) -> None:
    """An empty document is an empty catalog."""
    path = tmp_path / "catalog.yaml"
    path.write_text("", encoding="utf-8")

    assert load_catalog(path).grants == []


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    """Malformed YAML is reported with the file path."""
    path = tmp_path / "catalog.yaml"
    path.write_text("users: [\n", encoding="utf-8")

    with pytest.raises(CatalogError) as exc_info:
        load_catalog(path)

    assert "Invalid YAML" in str(exc_info.value)
    assert exc_info.value.path == str(path)


def test_non_mapping_raises(tmp_path: Path) -> None:
    """A top-level list is not a catalog."""
    path = tmp_path / "catalog.yaml"
    path.write_text("- alice\n- bob\n", encoding="utf-8")

    with pytest.raises(CatalogError, match="must be a mapping"):
        load_catalog(path)


def test_schema_error_raises(tmp_path: Path) -> None:
    """Schema violations carry the validation error."""
    path = tmp_path / "catalog.yaml"
    path.write_text(
        "grants:\n  - identity: alice\n    type: spaceship\n    path: x\n    actions: [read]\n",
        encoding="utf-8",
    )

    with pytest.raises(CatalogError) as exc_info:
        load_catalog(path)

    assert exc_info.value.validation_error is not None


def test_identity_keys_in_catalog() -> None:
    """Users may be listed by key to place them in another organization."""
    catalog = Catalog.model_validate({"users": ["alice", "carol~;~acme"]})

    assert catalog.list_users("host-org") == [ALICE]
    assert catalog.list_users("acme") == [Identity(name="carol", organization="acme")]


def test_grant_covers_subtree() -> None:
    """A grant on a folder covers everything below it."""
    grant = Grant(identity="alice", type="report", path="Examples", actions=["read"])

    assert grant.matches(ALICE, ResourceType.REPORT, "Examples", ResourceAction.READ)
    assert grant.matches(ALICE, ResourceType.REPORT, "Examples/Census", ResourceAction.READ)
    assert not grant.matches(ALICE, ResourceType.REPORT, "Examples2", ResourceAction.READ)
    assert not grant.matches(ALICE, ResourceType.ASSET, "Examples", ResourceAction.READ)
    assert not grant.matches(ALICE, ResourceType.REPORT, "Examples", ResourceAction.ADMIN)
    assert not grant.matches(
        Identity(name="bob"), ResourceType.REPORT, "Examples", ResourceAction.READ
    )


def test_admin_grant_covers_every_action() -> None:
    """ADMIN implies the other actions."""
    grant = Grant(identity="*", type="query", path="*", actions=["admin"])

    assert grant.matches(ALICE, ResourceType.QUERY, "Top Orders", ResourceAction.READ)
    assert grant.matches(ALICE, ResourceType.QUERY, "Top Orders", ResourceAction.DELETE)


def test_catalog_store_queries(catalog: Catalog) -> None:
    """Catalog sections answer the store interfaces."""
    assert catalog.subfolders(None) == ["Sales"]
    assert [s.full_name for s in catalog.list_data_sources("Sales")] == ["Sales/Orders"]
    assert catalog.table_style_folders(None) == ["Dark"]
    assert [s.name for s in catalog.table_styles("Dark")] == ["Dark~Night"]
    assert catalog.task_folders("") == ["Reports"]
    assert [t.task_id for t in catalog.tasks("host-org")] == [
        "alice~;~host-org:Daily",
        "admin~;~host-org:Cleanup",
        "bob~;~host-org:Weekly",
    ]
    assert catalog.dashboard_order(ALICE) == ["Ops__GLOBAL"]
    assert [r.path for r in catalog.user_entries(ALICE)] == ["My Dashboards/Notes"]
    assert catalog.stored_paths() == {
        "Recycle Bin/Draft_1",
        "Recycle Bin/Secret_1",
        "Recycle Bin/Mine_1",
    }
