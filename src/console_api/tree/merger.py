"""Sibling ordering and the merge of adapter results."""
from collections.abc import Iterable, Sequence

from console_api.tree.schemas import Node


def sort_nodes(
    nodes: Iterable[Node],
    ascending: bool = True,
    folders_first: bool = False,
) -> list[Node]:
    """Order sibling nodes by case-insensitive label.

    Args:
        nodes: Nodes to order.
        ascending: Sort labels A-Z when True, Z-A otherwise.
        folders_first: Place folder categories before leaves.

    Returns:
        A new sorted list.
    """
    ordered = sorted(nodes, key=lambda n: n.label.casefold(), reverse=not ascending)

    if folders_first:
        # stable sort keeps the label order within each group
        ordered.sort(key=lambda n: 0 if n.category.is_folder else 1)

    return ordered


def merge(results: Sequence[Sequence[Node]]) -> list[Node]:
    """Concatenate adapter outputs in adapter order.

    Adapters own disjoint path namespaces, so nothing is deduplicated.

    Args:
        results: One node list per adapter.

    Returns:
        The top-level node list.
    """
    return [node for nodes in results for node in nodes]
