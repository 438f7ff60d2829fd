"""Label search over a redacted content tree."""
from console_api.tree.schemas import Node


def search(node: Node, text: str, full_matched: bool = False) -> Node | None:
    """Reduce a subtree to nodes matching a label filter.

    A node is kept when its label contains the filter, when any
    descendant is kept, or when it or an ancestor has a label equal to
    the filter. Comparison is case-insensitive.

    Args:
        node: Root of the subtree.
        text: Filter text.
        full_matched: Whether an ancestor's label equals the filter.

    Returns:
        A copy holding only matching children, or None.
    """
    needle = text.casefold()
    label = node.label.casefold()
    full_matched = full_matched or label == needle
    matched: list[Node] | None = None

    if node.children is not None:
        matched = []
        for child in node.children:
            result = search(child, text, full_matched)
            if result is not None:
                matched.append(result)

    if needle in label or matched or full_matched:
        return node.model_copy(update={"children": matched})

    return None
