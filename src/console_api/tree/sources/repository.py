"""Per-user private asset folders and the trashcan."""
from collections.abc import Sequence

from console_api.tree.areas import UserArea
from console_api.tree.categories import Category
from console_api.tree.collaborators import AssetStore
from console_api.tree.hierarchy import build_asset_tree
from console_api.tree.paths import TRASH_FOLDER, USERS_FOLDER
from console_api.tree.schemas import Node, RequestContext


class RepositorySource:
    """User Private Assets root and the Trashcan."""

    name = "repository"
    description = "repository nodes"

    def __init__(
        self,
        areas: Sequence[UserArea],
        store: AssetStore,
        ascending: bool = True,
    ) -> None:
        """Initialize the adapter.

        Args:
            areas: Prebuilt private areas of the visible users.
            store: Asset store, for trashed entries.
            ascending: Label sort direction.
        """
        self._areas = areas
        self._store = store
        self._ascending = ascending

    def fetch(self, context: RequestContext) -> list[Node]:
        """Build the user root and the trashcan.

        Args:
            context: Caller context.

        Returns:
            The user private assets root followed by the trashcan.
        """
        return [
            Node(
                path=USERS_FOLDER,
                label="User Private Assets",
                category=Category.USER_ROOT,
                children=[area.reports for area in self._areas],
            ),
            Node(
                path=TRASH_FOLDER,
                label=TRASH_FOLDER,
                category=Category.TRASH,
                icon="trash-icon",
                children=build_asset_tree(
                    self._store.trash_entries(), TRASH_FOLDER, self._ascending
                ),
            ),
        ]
