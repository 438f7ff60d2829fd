"""Permission checks that treat oracle failures as a denial."""
import structlog

from console_api.tree.collaborators import PermissionOracle
from console_api.tree.resources import Resource, ResourceAction, ResourceType
from console_api.tree.schemas import Identity

logger = structlog.get_logger()


def check_permission(
    oracle: PermissionOracle,
    identity: Identity,
    resource: Resource,
    action: ResourceAction,
) -> bool:
    """Ask the oracle for a permission, denying if the oracle fails.

    Args:
        oracle: Permission oracle.
        identity: Viewing identity.
        resource: Resource being checked.
        action: Action being checked.

    Returns:
        True only if the oracle answered and granted the action.
    """
    try:
        return bool(
            oracle.check_permission(identity, resource.type, resource.path, action)
        )
    except Exception as e:
        logger.warning(
            "permission_check_failed",
            resource_type=resource.type.value,
            resource_path=resource.path,
            action=action.value,
            error=str(e),
        )
        return False


def can_view_user(
    oracle: PermissionOracle, viewer: Identity, user: Identity
) -> bool:
    """Check if a viewer may see another user's private area.

    Args:
        oracle: Permission oracle.
        viewer: Viewing identity.
        user: Owner of the private area.

    Returns:
        True when the viewer is the user or administers the user.
    """
    if viewer == user:
        return True

    return check_permission(
        oracle,
        viewer,
        Resource(ResourceType.SECURITY_USER, user.key),
        ResourceAction.ADMIN,
    )


class AllowAllOracle:
    """Oracle used when security is disabled; grants every action."""

    def check_permission(
        self,
        identity: Identity,
        resource_type: ResourceType,
        resource_path: str,
        action: ResourceAction,
    ) -> bool:
        return True
