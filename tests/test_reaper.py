"""Auto-saved draft expiry, grouping and storage tests."""

import os
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from conftest import NOW, MemoryDraftStore, context_for

from console_api.tree import (
    Category,
    DirectoryDraftStore,
    DraftFile,
    DraftKind,
    group_drafts,
    parse_draft_name,
    reap_drafts,
)

ALICE_KEY = "alice~;~host-org"


def _draft(
    name: str,
    age: timedelta,
    owner_key: str | None = ALICE_KEY,
    kind: DraftKind = DraftKind.VIEWSHEET,
) -> DraftFile:
    return DraftFile(
        file_name=f"8^{kind.value}^{owner_key or '_NULL_'}^{name}",
        scope="8",
        kind=kind,
        owner_key=owner_key,
        name=name,
        last_modified=NOW - age,
    )


class FailingDeleteStore(MemoryDraftStore):
    def delete(self, draft: DraftFile) -> bool:
        raise PermissionError(f"cannot remove {draft.file_name}")


def test_reap_keeps_drafts_within_retention() -> None:
    """Drafts exactly at the retention age are kept."""
    boundary = _draft("Boundary", timedelta(days=7))
    fresh = _draft("Fresh", timedelta(hours=1))
    store = MemoryDraftStore([boundary, fresh])

    retained = reap_drafts(store, context_for("admin"), NOW)

    assert retained == [boundary, fresh]
    assert store.deleted == []


def test_reap_deletes_expired_drafts() -> None:
    """Drafts older than the retention window are deleted and excluded."""
    expired = _draft("Expired", timedelta(days=7, seconds=1))
    fresh = _draft("Fresh", timedelta(days=1))
    store = MemoryDraftStore([expired, fresh])

    retained = reap_drafts(store, context_for("admin"), NOW)

    assert retained == [fresh]
    assert store.deleted == [expired.file_name]


def test_reap_excludes_expired_draft_when_delete_fails() -> None:
    """A failed deletion is logged and the draft is still hidden."""
    expired = _draft("Expired", timedelta(days=30))
    store = FailingDeleteStore([expired])

    assert reap_drafts(store, context_for("admin"), NOW) == []


def test_reap_uses_custom_retention() -> None:
    """The retention window is configurable."""
    draft = _draft("Day Old", timedelta(days=2))
    store = MemoryDraftStore([draft])

    assert reap_drafts(store, context_for("admin"), NOW, retention=timedelta(days=1)) == []


def test_group_drafts_by_owner_and_kind() -> None:
    """Drafts are grouped per owner, then split into worksheet and dashboard."""
    drafts = [
        _draft("Untitled-1", timedelta(hours=1), owner_key=None),
        _draft("Sales", timedelta(hours=1)),
        _draft("Model", timedelta(hours=2), kind=DraftKind.WORKSHEET),
    ]

    folders = group_drafts(drafts, {ALICE_KEY})

    assert [f.label for f in folders] == ["anonymous", "alice"]
    assert all(f.category is Category.AUTO_SAVE_FOLDER for f in folders)

    worksheet, dashboard = folders[1].children
    assert worksheet.path == f"{ALICE_KEY}/worksheet"
    assert worksheet.category is Category.AUTO_SAVE_WORKSHEET_FOLDER
    assert [n.label for n in worksheet.children] == ["Model"]
    assert dashboard.label == "Dashboard"
    assert [n.label for n in dashboard.children] == ["Sales"]
    assert dashboard.children[0].category is Category.AUTO_SAVE_VIEWSHEET

    anonymous_worksheet = folders[0].children[0]
    assert anonymous_worksheet.children is None


def test_group_drafts_hides_invisible_owners() -> None:
    """Drafts of users the viewer cannot see are skipped."""
    drafts = [_draft("Plan", timedelta(hours=1), owner_key="carol~;~host-org")]

    assert group_drafts(drafts, {ALICE_KEY}) == []


def test_group_drafts_entry_timestamp() -> None:
    """Entry nodes carry the draft modification time in milliseconds."""
    draft = _draft("Sales", timedelta(0))

    (folder,) = group_drafts([draft], {ALICE_KEY})
    entry = folder.children[1].children[0]

    assert entry.last_modified == int(NOW.timestamp() * 1000)
    assert entry.path == draft.file_name


def test_parse_draft_name_anonymous() -> None:
    """Null and anonymous owners parse to no owner."""
    draft = parse_draft_name("8^VIEWSHEET^_NULL_^Untitled-1^0_0_0_0_0_0_0_1~", NOW)

    assert draft is not None
    assert draft.kind is DraftKind.VIEWSHEET
    assert draft.owner_key is None
    assert draft.name == "Untitled-1"
    assert draft.scope == "8"


def test_parse_draft_name_with_owner() -> None:
    """An owner key is kept as given."""
    draft = parse_draft_name(f"1^WORKSHEET^{ALICE_KEY}^Orders", NOW)

    assert draft.owner_key == ALICE_KEY
    assert draft.kind is DraftKind.WORKSHEET


@pytest.mark.parametrize("name", ["notes.txt", "8^VIEWSHEET^alice", "8^CHART^alice^x"])
def test_parse_draft_name_rejects_other_files(name: str) -> None:
    """Names that are not draft names are ignored."""
    assert parse_draft_name(name, NOW) is None


def _touch(directory: Path, name: str, modified: datetime) -> Path:
    path = directory / name
    path.write_text("{}", encoding="utf-8")
    os.utime(path, (modified.timestamp(), modified.timestamp()))
    return path


def test_directory_store_lists_drafts(tmp_path: Path) -> None:
    """Draft files are listed by name with their modification times."""
    _touch(tmp_path, f"8^VIEWSHEET^{ALICE_KEY}^Sales", NOW)
    _touch(tmp_path, "1^WORKSHEET^_NULL_^Untitled-1", NOW - timedelta(days=1))
    _touch(tmp_path, "readme.txt", NOW)
    (tmp_path / "8^VIEWSHEET^bob^Folder").mkdir()

    drafts = DirectoryDraftStore(tmp_path).list_drafts()

    assert [d.name for d in drafts] == ["Untitled-1", "Sales"]
    assert drafts[1].last_modified == NOW
    assert drafts[1].last_modified.tzinfo is timezone.utc


def test_directory_store_missing_directory(tmp_path: Path) -> None:
    """A missing drafts directory lists nothing."""
    assert DirectoryDraftStore(tmp_path / "missing").list_drafts() == []


def test_directory_store_delete(tmp_path: Path) -> None:
    """Deleting removes the file and reports whether it existed."""
    path = _touch(tmp_path, f"8^VIEWSHEET^{ALICE_KEY}^Sales", NOW)
    store = DirectoryDraftStore(tmp_path)
    (draft,) = store.list_drafts()

    assert store.delete(draft) is True
    assert not path.exists()
    assert store.delete(draft) is False


def test_reap_directory_store(tmp_path: Path) -> None:
    """Expired files are removed from disk."""
    old = _touch(tmp_path, f"8^VIEWSHEET^{ALICE_KEY}^Old", NOW - timedelta(days=10))
    new = _touch(tmp_path, f"8^VIEWSHEET^{ALICE_KEY}^New", NOW - timedelta(days=3))

    retained = reap_drafts(DirectoryDraftStore(tmp_path), context_for("admin"), NOW)

    assert [d.name for d in retained] == ["New"]
    assert not old.exists()
    assert new.exists()
