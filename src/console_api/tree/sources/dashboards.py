"""Global and per-user portal dashboards."""
from collections.abc import Sequence

from console_api.tree.areas import UserArea
from console_api.tree.categories import Category
from console_api.tree.collaborators import DashboardRegistry
from console_api.tree.paths import ANONYMOUS, USERS_DASHBOARD_FOLDER
from console_api.tree.schemas import DashboardRecord, Identity, Node, RequestContext

GLOBAL_SUFFIX = "__GLOBAL"


def order_dashboards(
    dashboards: list[DashboardRecord], order: list[str]
) -> list[DashboardRecord]:
    """Order dashboards by a user's tab order.

    Args:
        dashboards: Dashboards to order.
        order: Dashboard names in the user's tab order.

    Returns:
        Dashboards in tab order. Those missing from ``order`` come last,
        in their original order.
    """
    rank = {name: index for index, name in enumerate(order)}
    return sorted(dashboards, key=lambda d: rank.get(d.name, len(rank)))


class DashboardSource:
    """Portal Dashboard Tab and User Portal Dashboard Tab roots."""

    name = "dashboards"
    description = "dashboard nodes"

    def __init__(
        self,
        areas: Sequence[UserArea],
        registry: DashboardRegistry,
        security_enabled: bool = True,
    ) -> None:
        """Initialize the adapter.

        Args:
            areas: Prebuilt private areas of the visible users.
            registry: Dashboard registry.
            security_enabled: When False, the tab order is the anonymous
                user's.
        """
        self._areas = areas
        self._registry = registry
        self._security_enabled = security_enabled

    def fetch(self, context: RequestContext) -> list[Node]:
        """Build the global and per-user dashboard roots.

        Args:
            context: Caller context.

        Returns:
            The global dashboard root followed by the user dashboard root.
        """
        viewer = context.identity
        if not self._security_enabled:
            viewer = Identity(name=ANONYMOUS, organization=viewer.organization)

        ordered = order_dashboards(
            self._registry.global_dashboards(),
            self._registry.dashboard_order(viewer),
        )

        return [
            Node(
                path="/",
                label="Portal Dashboard Tab",
                category=Category.DASHBOARD_FOLDER,
                children=[
                    Node(
                        path=record.name,
                        label=record.name.replace(GLOBAL_SUFFIX, "", 1),
                        category=Category.DASHBOARD,
                        description=record.description,
                        last_modified=record.last_modified,
                    )
                    for record in ordered
                ],
            ),
            Node(
                path=USERS_DASHBOARD_FOLDER,
                label="User Portal Dashboard Tab",
                category=Category.USER_ROOT,
                children=[area.dashboards for area in self._areas],
            ),
        ]
