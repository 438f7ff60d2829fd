"""Fixed folder paths and scope predicates for the content tree."""
from console_api.tree.categories import Category

USERS_FOLDER = "Users"
USERS_DASHBOARD_FOLDER = "Users Dashboards"
MY_REPORTS = "My Dashboards"
MY_DASHBOARDS = "My Portal Dashboards"
TRASH_FOLDER = "Trashcan"
RECYCLE_BIN_FOLDER = "Recycle Bin"
AUTO_SAVE_FOLDER = "Auto Save Files"
ANONYMOUS = "anonymous"

VIRTUAL_ROOT_PATHS: frozenset[str] = frozenset({
    USERS_FOLDER,
    USERS_DASHBOARD_FOLDER,
    MY_DASHBOARDS,
})


def _is_under(path: str, root: str) -> bool:
    return path == root or path.startswith(root + "/")


def is_my_report(path: str) -> bool:
    """Check if a path is inside a user's private asset folder.

    Args:
        path: Node path.

    Returns:
        True for ``My Dashboards`` and anything below it.
    """
    return _is_under(path, MY_REPORTS)


def is_private(path: str) -> bool:
    """Check if a path lives in a user's private area.

    Args:
        path: Node path.

    Returns:
        True for private assets and private portal dashboards.
    """
    return _is_under(path, MY_REPORTS) or _is_under(path, MY_DASHBOARDS)


def is_in_recycle_bin(path: str) -> bool:
    """Check if any segment of a path is a recycle bin folder."""
    return RECYCLE_BIN_FOLDER in path.split("/")


def is_recycled_entry(path: str) -> bool:
    """Check if a path names an entry held by the global recycle bin."""
    return path.startswith(RECYCLE_BIN_FOLDER + "/")


def is_virtual_root(category: Category, path: str) -> bool:
    """Check if a node is one of the per-user grouping roots.

    Virtual roots exist only to group private user folders and are never
    pruned by the redactor.

    Args:
        category: Node category.
        path: Node path.

    Returns:
        True for user-root nodes on a sentinel path.
    """
    return category is Category.USER_ROOT and path in VIRTUAL_ROOT_PATHS


def strip_trash_prefix(path: str) -> str:
    """Remove a leading ``Trashcan/`` segment from a path."""
    prefix = TRASH_FOLDER + "/"
    return path[len(prefix):] if path.startswith(prefix) else path


def parent_path(path: str, root: str = "/") -> str:
    """Get the parent of a slash-delimited path.

    Args:
        path: Child path.
        root: Value returned for top-level paths.

    Returns:
        The path without its last segment, or ``root``.
    """
    head, sep, _ = path.rpartition("/")
    return head if sep and head else root
