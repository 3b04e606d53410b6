from .selection import SelectionStore
from .types import Forest, Node, NodeKind, NodePath, display_path, iter_preorder, node_at, path_of

__all__ = [
    "Forest",
    "Node",
    "NodeKind",
    "NodePath",
    "SelectionStore",
    "display_path",
    "iter_preorder",
    "node_at",
    "path_of",
]
