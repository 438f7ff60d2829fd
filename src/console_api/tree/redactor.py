"""Permission redaction of the merged content tree."""
import structlog

from console_api.tree.categories import Category
from console_api.tree.collaborators import PermissionOracle
from console_api.tree.paths import (
    TRASH_FOLDER,
    is_private,
    is_recycled_entry,
    is_virtual_root,
    strip_trash_prefix,
)
from console_api.tree.permissions import can_view_user, check_permission
from console_api.tree.resources import (
    Resource,
    ResourceAction,
    ResourceType,
    map_resource,
)
from console_api.tree.schemas import Node, RequestContext

logger = structlog.get_logger()


def redact(
    node: Node,
    context: RequestContext,
    oracle: PermissionOracle,
) -> Node | None:
    """Filter a subtree down to what the viewer may see.

    Children are redacted first. A node that fails its permission check
    is dropped when nothing below it survives, and kept read-only when
    it is still needed as an ancestor of visible nodes. Owner-scoped
    nodes of other users are dropped outright unless the viewer
    administers that user. Virtual roots are never dropped.

    Args:
        node: Root of the subtree.
        context: Viewing identity and locale.
        oracle: Permission oracle.

    Returns:
        A redacted copy of the node, or None if it is not visible.
    """
    viewer = context.identity
    virtual_root = is_virtual_root(node.category, node.path)

    if (
        node.owner is not None
        and not virtual_root
        and not can_view_user(oracle, viewer, node.owner)
    ):
        return None

    children: list[Node] | None = None

    if node.children is not None:
        children = []
        for child in node.children:
            result = redact(child, context, oracle)
            if result is not None:
                children.append(result)

    if node.category.is_auto_save:
        return node.model_copy(
            update={"children": children, "read_only": None, "built_in": False}
        )

    read_only = _is_read_only(node, children, virtual_root, context, oracle)

    if read_only and not virtual_root and not children:
        return None

    return node.model_copy(
        update={"children": children, "read_only": True if read_only else None}
    )


def _is_read_only(
    node: Node,
    children: list[Node] | None,
    virtual_root: bool,
    context: RequestContext,
    oracle: PermissionOracle,
) -> bool:
    if virtual_root:
        return True

    if is_private(node.path) or is_recycled_entry(node.path):
        return False

    path = strip_trash_prefix(node.path)
    resource = map_resource(node.category, path)
    viewer = context.identity

    if resource is None:
        if node.category is not Category.REPOSITORY_FOLDER:
            logger.error(
                "unmapped_resource",
                category=node.category.value,
                path=node.path,
            )
        return True

    if node.category is Category.RECYCLE_BIN_FOLDER:
        return not (
            check_permission(oracle, viewer, resource, ResourceAction.ADMIN)
            and check_permission(
                oracle,
                viewer,
                Resource(ResourceType.ASSET, resource.path),
                ResourceAction.ADMIN,
            )
        )

    if path == TRASH_FOLDER:
        return not children

    if node.category is Category.SCHEDULE_TASK:
        return not check_permission(
            oracle,
            viewer,
            Resource(ResourceType.SCHEDULE_TASK, path),
            ResourceAction.READ,
        )

    return not check_permission(oracle, viewer, resource, ResourceAction.ADMIN)
