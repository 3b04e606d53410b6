"""
Framework independent part of the file tree.

The renderer walks the forest level by level, asks the expansion map whether a
directory is open and tells the host about file activations through a callback.
It never writes the selection itself.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from blueprint_types.types import Forest, Node, NodePath, node_at
from blueprint_utils.config import HighlightMode

logger = logging.getLogger(__name__)

ICON_EXPANDED = "▼"
ICON_COLLAPSED = "▶"


class ExpansionState:
    """Expanded/collapsed flag per directory, keyed by index path.

    A directory without an entry is expanded, which is the state it starts in
    the first time it is rendered. Collapsing a directory tears down its
    subtree, so the flags of its descendants are forgotten as well.
    """

    def __init__(self):
        self._flags: Dict[NodePath, bool] = {}

    def is_expanded(self, path: NodePath) -> bool:
        return self._flags.get(path, True)

    def toggle(self, path: NodePath) -> bool:
        expanded = not self.is_expanded(path)
        self._flags[path] = expanded
        if not expanded:
            self._forget_descendants(path)
        return expanded

    def _forget_descendants(self, path: NodePath) -> None:
        depth = len(path)
        for key in [key for key in self._flags if len(key) > depth and key[:depth] == path]:
            del self._flags[key]

    def reset(self) -> None:
        self._flags.clear()

    def snapshot(self) -> Dict[NodePath, bool]:
        return dict(self._flags)


def matches_selection(node: Node, selected: Optional[Node], mode: HighlightMode = HighlightMode.IDENTITY) -> bool:
    """Whether a file row is drawn as selected."""
    if selected is None or not node.is_file:
        return False
    if mode == HighlightMode.CONTENT:
        return (node.name, node.content) == (selected.name, selected.content)
    return node is selected


@dataclass(frozen=True)
class TreeRow:
    """One visible row of the tree."""

    path: NodePath
    node: Node
    depth: int
    expanded: Optional[bool] = None
    selected: bool = False

    @property
    def indicator(self) -> str:
        if self.expanded is None:
            return " "
        return ICON_EXPANDED if self.expanded else ICON_COLLAPSED


def render_rows(
    nodes: Forest,
    expansion: ExpansionState,
    selected: Optional[Node] = None,
    mode: HighlightMode = HighlightMode.IDENTITY,
    depth: int = 0,
    parent: NodePath = (),
) -> List[TreeRow]:
    rows = []
    for index, node in enumerate(nodes):
        path = parent + (index,)
        if node.is_directory:
            expanded = expansion.is_expanded(path)
            rows.append(TreeRow(path, node, depth, expanded=expanded))
            if expanded:
                rows.extend(render_rows(node.entries, expansion, selected, mode, depth + 1, path))
        else:
            rows.append(TreeRow(path, node, depth, selected=matches_selection(node, selected, mode)))
    return rows


class TreeRenderer:
    """Top-level owner of the forest and of its expansion map."""

    def __init__(
        self,
        forest: Forest,
        on_select: Callable[[Node], None],
        highlight: HighlightMode = HighlightMode.IDENTITY,
    ):
        self._forest = list(forest)
        self.on_select = on_select
        self.highlight = highlight
        self.expansion = ExpansionState()

    @property
    def forest(self) -> List[Node]:
        return self._forest

    def load(self, forest: Forest) -> None:
        """Replace the forest; every directory starts expanded again."""
        self._forest = list(forest)
        self.expansion.reset()

    def node(self, path: NodePath) -> Node:
        return node_at(self._forest, path)

    def is_expanded(self, path: NodePath) -> bool:
        return self.expansion.is_expanded(path)

    def toggle(self, path: NodePath) -> bool:
        node = self.node(path)
        if not node.is_directory:
            raise ValueError(f"{node.name} is not a directory")
        expanded = self.expansion.toggle(path)
        logger.debug("%s %s", "expanded" if expanded else "collapsed", node.name)
        return expanded

    def activate(self, path: NodePath) -> Optional[Node]:
        """A click on the row at path: toggle a directory or select a file.

        Returns the node handed to the selection callback, None for directories.
        """
        node = self.node(path)
        if node.is_directory:
            self.toggle(path)
            return None
        self.on_select(node)
        return node

    def rows(self, selected: Optional[Node] = None) -> List[TreeRow]:
        return render_rows(self._forest, self.expansion, selected, self.highlight)
