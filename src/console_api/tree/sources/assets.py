"""Global viewsheet and worksheet roots."""
import structlog

from console_api.tree.categories import Category
from console_api.tree.collaborators import AssetStore
from console_api.tree.hierarchy import (
    REPORT_CATEGORIES,
    WORKSHEET_CATEGORIES,
    build_asset_tree,
)
from console_api.tree.schemas import Node, RequestContext

logger = structlog.get_logger()


class AssetSource:
    """Repository and worksheet roots from the asset store."""

    name = "assets"
    description = "asset nodes"

    def __init__(self, store: AssetStore, ascending: bool = True) -> None:
        """Initialize the adapter.

        Args:
            store: Asset store.
            ascending: Label sort direction.
        """
        self._store = store
        self._ascending = ascending

    def fetch(self, context: RequestContext) -> list[Node]:
        """Build the global repository and worksheet roots.

        Args:
            context: Caller context.

        Returns:
            The repository root followed by the worksheet root.
        """
        records = self._store.global_entries()
        reports = [r for r in records if r.category in REPORT_CATEGORIES]
        worksheets = [r for r in records if r.category in WORKSHEET_CATEGORIES]
        logger.debug(
            "asset_entries_loaded",
            reports=len(reports),
            worksheets=len(worksheets),
        )

        return [
            Node(
                path="/",
                label="Repository",
                category=Category.REPOSITORY_FOLDER,
                icon="shared-report-icon",
                children=build_asset_tree(reports, "/", self._ascending),
            ),
            Node(
                path="/",
                label="Worksheets",
                category=Category.WORKSHEET_FOLDER,
                icon="shared-worksheet-icon",
                children=build_asset_tree(worksheets, "/", self._ascending),
            ),
        ]
