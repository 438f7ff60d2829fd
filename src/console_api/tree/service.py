"""Content tree service: gather, merge, redact and search."""
from collections.abc import Callable, Collection
from datetime import datetime, timedelta

import structlog

from console_api.tree.areas import (
    UserArea,
    build_user_areas,
    live_recycle_records,
    visible_users,
)
from console_api.tree.collaborators import (
    AssetStore,
    DashboardRegistry,
    DataSourceRegistry,
    DraftStore,
    IdentityDirectory,
    LibraryRegistry,
    PermissionOracle,
    RecycleBin,
    ScheduleRegistry,
)
from console_api.tree.gatherer import (
    MAX_WORKERS,
    AggregationError,
    TreeSource,
    gather,
)
from console_api.tree.merger import merge
from console_api.tree.permissions import AllowAllOracle
from console_api.tree.reaper import DRAFT_RETENTION
from console_api.tree.redactor import redact
from console_api.tree.schemas import Identity, Node, RequestContext
from console_api.tree.search import search
from console_api.tree.sources import (
    AssetSource,
    DashboardSource,
    ObjectSource,
    RecycleSource,
    RepositorySource,
    ScheduleSource,
)
from console_api.tree.sources.recycle import utc_now

logger = structlog.get_logger()

USER_AREAS_SOURCE = "user-areas"


class ContentTreeService:
    """Builds the permission-filtered content tree for a viewer.

    Each call gathers fresh nodes from every store. Nothing is cached
    between calls. The only side effect is the deletion of expired
    auto-saved drafts.
    """

    def __init__(
        self,
        *,
        oracle: PermissionOracle,
        directory: IdentityDirectory,
        assets: AssetStore,
        recycle_bin: RecycleBin,
        data_sources: DataSourceRegistry,
        library: LibraryRegistry,
        schedule: ScheduleRegistry,
        dashboards: DashboardRegistry,
        drafts: DraftStore,
        security_enabled: bool = True,
        ascending: bool = True,
        max_workers: int = MAX_WORKERS,
        timeout: float | None = None,
        retention: timedelta = DRAFT_RETENTION,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the service.

        Args:
            oracle: Permission oracle. Ignored when security is disabled.
            directory: Identity directory.
            assets: Asset store.
            recycle_bin: Recycle bin metadata.
            data_sources: Data source registry.
            library: Script and table style registry.
            schedule: Schedule registry.
            dashboards: Dashboard registry.
            drafts: Auto-saved draft store.
            security_enabled: When False every permission check passes.
            ascending: Label sort direction.
            max_workers: Upper bound on the gather pool size.
            timeout: Seconds to wait for all sources, or None.
            retention: How long auto-saved drafts are kept.
            clock: Returns the current aware datetime.
        """
        self.oracle = oracle if security_enabled else AllowAllOracle()
        self.directory = directory
        self.assets = assets
        self.recycle_bin = recycle_bin
        self.data_sources = data_sources
        self.library = library
        self.schedule = schedule
        self.dashboards = dashboards
        self.drafts = drafts
        self.security_enabled = security_enabled
        self.ascending = ascending
        self.max_workers = max_workers
        self.timeout = timeout
        self.retention = retention
        self.clock = clock

    def get_tree(
        self,
        context: RequestContext,
        users_to_load: Collection[str] = (),
    ) -> list[Node]:
        """Build the redacted content tree.

        Args:
            context: Viewing identity and locale.
            users_to_load: Identity keys of users whose private folders
                are expanded. Other users' folders have no children.

        Returns:
            Top-level nodes the viewer may see, in source order.

        Raises:
            AggregationError: If any source fails or the gather times out.
        """
        return self._build(context, users_to_load, load_all=False)

    def search_tree(self, context: RequestContext, filter_text: str) -> list[Node]:
        """Build the tree with every visible user expanded and filter it.

        Args:
            context: Viewing identity and locale.
            filter_text: Case-insensitive label filter. Empty matches all.

        Returns:
            Top-level nodes with only matching branches.

        Raises:
            AggregationError: If any source fails or the gather times out.
        """
        roots = self._build(context, (), load_all=True)
        matched = []

        for root in roots:
            result = search(root, filter_text)
            if result is not None:
                matched.append(result)

        logger.info(
            "tree_searched",
            filter=filter_text,
            roots=len(roots),
            matched_roots=len(matched),
        )
        return matched

    def sources(self, areas: list[UserArea]) -> list[TreeSource]:
        """Source adapters for one request, in merge order.

        Args:
            areas: Private areas of the visible users.

        Returns:
            The six source adapters.
        """
        return [
            AssetSource(self.assets, self.ascending),
            ObjectSource(self.data_sources, self.library, self.ascending),
            RepositorySource(areas, self.assets, self.ascending),
            DashboardSource(areas, self.dashboards, self.security_enabled),
            ScheduleSource(self.schedule),
            RecycleSource(
                areas,
                self.recycle_bin,
                self.oracle,
                self.directory,
                self.drafts,
                security_enabled=self.security_enabled,
                retention=self.retention,
                clock=self.clock,
            ),
        ]

    def _user_areas(
        self,
        context: RequestContext,
        users_to_load: Collection[str],
        load_all: bool,
    ) -> tuple[list[Identity], list[UserArea]]:
        """Read the visible users and their private areas.

        Raises:
            AggregationError: If any store fails while reading them.
        """
        try:
            users = visible_users(self.directory, self.oracle, context.identity)
            if load_all:
                users_to_load = {user.key for user in users}

            _, user_records = live_recycle_records(self.recycle_bin)
            areas = build_user_areas(
                users,
                users_to_load,
                self.assets,
                self.dashboards,
                user_records,
                self.ascending,
            )
        except Exception as e:
            logger.error(
                "tree_source_failed",
                source=USER_AREAS_SOURCE,
                error=str(e),
                exc_info=e,
            )
            raise AggregationError(
                "Failed to get user area nodes", USER_AREAS_SOURCE
            ) from e

        return users, areas

    def _build(
        self,
        context: RequestContext,
        users_to_load: Collection[str],
        load_all: bool,
    ) -> list[Node]:
        users, areas = self._user_areas(context, users_to_load, load_all)

        results = gather(
            self.sources(areas),
            context,
            max_workers=self.max_workers,
            timeout=self.timeout,
        )

        roots = []
        for node in merge(results):
            redacted = redact(node, context, self.oracle)
            if redacted is not None:
                roots.append(redacted)

        logger.info(
            "tree_built",
            visible_users=len(users),
            loaded_users=sum(1 for area in areas if area.loaded),
            roots=len(roots),
        )
        return roots
