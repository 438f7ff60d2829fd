"""Pytest configuration and fixtures."""

import sys
from datetime import datetime, timezone
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from fastapi.testclient import TestClient

from console_api.app import create_app
from console_api.config import Settings
from console_api.tree import (
    Catalog,
    ContentTreeService,
    DraftFile,
    Identity,
    RequestContext,
)

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)

CATALOG_DATA: dict[str, object] = {
    "users": ["alice", "bob", "admin"],
    "admins": ["admin"],
    "grants": [
        {"identity": "alice", "type": "report", "path": "Examples", "actions": ["read", "admin"]},
        {"identity": "alice", "type": "asset", "path": "Shared", "actions": ["read"]},
        {"identity": "alice", "type": "data-source", "path": "Sales/Orders", "actions": ["admin"]},
        {"identity": "*", "type": "schedule-task", "path": "*", "actions": ["read"]},
    ],
    "assets": {
        "global": [
            {"path": "Examples", "category": "repository-folder"},
            {"path": "Examples/Census", "category": "viewsheet", "last_modified": 1000},
            {"path": "Finance", "category": "repository-folder"},
            {"path": "Finance/Budget", "category": "viewsheet"},
            {"path": "Shared", "category": "worksheet-folder"},
            {"path": "Shared/Sales", "category": "worksheet", "worksheet_type": "condition"},
        ],
        "users": {
            "alice": [{"path": "My Dashboards/Notes", "category": "viewsheet"}],
            "bob": [{"path": "My Dashboards/Plans", "category": "viewsheet"}],
        },
        "trash": [{"path": "Trashcan/Old", "category": "viewsheet"}],
    },
    "recycle_bin": {
        "entries": [
            {
                "path": "Recycle Bin/Draft_1",
                "name": "Draft",
                "category": "viewsheet",
                "original_path": "Examples/Draft",
            },
            {
                "path": "Recycle Bin/Secret_1",
                "name": "Secret",
                "category": "viewsheet",
                "original_path": "Finance/Secret",
            },
            {
                "path": "Recycle Bin/Mine_1",
                "name": "Mine",
                "category": "viewsheet",
                "original_path": "My Dashboards/Mine",
                "original_user": "alice",
            },
            {
                "path": "Recycle Bin/Gone_1",
                "name": "Gone",
                "category": "viewsheet",
                "original_path": "Examples/Gone",
            },
        ],
        "stored_paths": ["Recycle Bin/Draft_1", "Recycle Bin/Secret_1", "Recycle Bin/Mine_1"],
    },
    "data_sources": {
        "folders": ["Sales"],
        "sources": [
            {
                "name": "Orders",
                "folder": "Sales",
                "type": "jdbc",
                "queries": [{"name": "Top Orders"}],
                "data_model": {
                    "logical_models": [{"name": "Orders Model", "extensions": ["EU"]}],
                    "vpms": [{"name": "Region VPM"}],
                },
            },
        ],
    },
    "library": {
        "scripts": [{"name": "util.js"}, {"name": "audit.js", "audit": True}],
        "table_style_folders": ["Dark"],
        "table_styles": [{"name": "Dark~Night", "folder": "Dark"}, {"name": "Plain"}],
    },
    "schedule": {
        "folders": ["Reports"],
        "tasks": [
            {"name": "Daily", "owner": "alice", "folder": "Reports"},
            {"name": "Cleanup", "owner": "admin", "internal": True},
            {"name": "Weekly", "owner": "bob"},
        ],
    },
    "dashboards": {
        "global": [{"name": "Overview__GLOBAL"}, {"name": "Ops__GLOBAL"}],
        "order": {"alice": ["Ops__GLOBAL"]},
        "users": {"alice": [{"name": "Mine"}]},
    },
}


class MemoryDraftStore:
    """Draft store over an in-memory list, recording deletions."""

    def __init__(self, drafts: list[DraftFile] | None = None) -> None:
        self.drafts = list(drafts or [])
        self.deleted: list[str] = []

    def list_drafts(self) -> list[DraftFile]:
        return list(self.drafts)

    def delete(self, draft: DraftFile) -> bool:
        if draft not in self.drafts:
            return False
        self.drafts.remove(draft)
        self.deleted.append(draft.file_name)
        return True


def context_for(name: str, organization: str = "host-org") -> RequestContext:
    """Request context for a named user."""
    return RequestContext(identity=Identity(name=name, organization=organization))


@pytest.fixture
def catalog() -> Catalog:
    """Create the shared test catalog."""
    return Catalog.model_validate(CATALOG_DATA)


@pytest.fixture
def draft_store() -> MemoryDraftStore:
    """Create an empty in-memory draft store."""
    return MemoryDraftStore()


@pytest.fixture
def service(catalog: Catalog, draft_store: MemoryDraftStore) -> ContentTreeService:
    """Create a tree service over the test catalog."""
    return ContentTreeService(
        oracle=catalog,
        directory=catalog,
        assets=catalog,
        recycle_bin=catalog,
        data_sources=catalog,
        library=catalog,
        schedule=catalog,
        dashboards=catalog,
        drafts=draft_store,
        timeout=10.0,
        clock=lambda: NOW,
    )


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Create test settings."""
    drafts_dir = tmp_path / "autosave"
    drafts_dir.mkdir()
    catalog_path = tmp_path / "catalog.yaml"
    catalog_path.write_text("users: [alice]\n", encoding="utf-8")
    return Settings(
        host="127.0.0.1",
        port=8000,
        debug=True,
        catalog_path=catalog_path,
        drafts_dir=drafts_dir,
    )


@pytest.fixture
def client(settings: Settings, service: ContentTreeService) -> TestClient:
    """Create test client with configured app."""
    app = create_app(settings, service=service)
    return TestClient(app)
