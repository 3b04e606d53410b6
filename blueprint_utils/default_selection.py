"""Pick the node that is selected before the user has clicked anything."""
from typing import Callable, Optional, Tuple

from blueprint_types.types import Forest, Node, NodePath

NodePredicate = Callable[[Node], bool]


def locate_first(nodes: Forest, predicate: NodePredicate, parent: NodePath = ()) -> Optional[Tuple[NodePath, Node]]:
    """
    Depth-first, pre-order search following children in their stored order.

    Returns the (path, node) pair of the first node satisfying predicate, or
    None when nothing matches. No match is a normal outcome (an empty or
    unconventional tree), not an error.
    """
    for index, node in enumerate(nodes):
        path = parent + (index,)
        if predicate(node):
            return path, node
        if node.children:
            found = locate_first(node.children, predicate, path)
            if found is not None:
                return found
    return None


def find_first(nodes: Forest, predicate: NodePredicate) -> Optional[Node]:
    found = locate_first(nodes, predicate)
    return found[1] if found is not None else None


def find_default_file(nodes: Forest, sentinel: str) -> Optional[Node]:
    """Return the first node named sentinel, or None."""
    return find_first(nodes, lambda node: node.name == sentinel)
