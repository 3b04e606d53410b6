from typing import Callable, Dict, List, Optional

from rich.style import Style
from rich.text import Text
from textual.widgets import Tree
from textual.widgets.tree import TreeNode

from blueprint_types.types import Forest, Node, NodePath
from blueprint_utils.config import HighlightMode

from .icons import icon_for
from .tree_state import TreeRenderer, matches_selection

SELECTED_STYLE = Style(bold=True, color="white", bgcolor="grey23")


class FileExplorer(Tree):
    """File explorer tree component.

    Tree nodes carry the index path of their model node as data. Expansion
    lives in the renderer's map and is mirrored onto the tree nodes, so every
    toggle (click, enter, space) goes through the same state.
    """

    DEFAULT_CSS = """
    FileExplorer {
        background: #1e293b;
        padding: 0 1;
    }
    """

    def __init__(
        self,
        files: Optional[Forest] = None,
        on_select: Optional[Callable[[Node], None]] = None,
        highlight: HighlightMode = HighlightMode.IDENTITY,
        name=None,
        id=None,
        classes=None,
    ):
        super().__init__("Files", name=name, id=id, classes=classes)
        self.show_root = False
        self.auto_expand = False
        self.on_select_callback = on_select
        self.renderer = TreeRenderer(files or [], self._forward_selection, highlight)
        self.selected_file: Optional[Node] = None
        self._tree_nodes: Dict[NodePath, TreeNode] = {}

    def on_mount(self):
        """Initialize the file tree."""
        self.root.expand()
        self._load_files(self.renderer.forest, self.root)

    def load_files(self, files: Forest) -> None:
        """Replace the whole forest, expansion state starts over."""
        self.renderer.load(files)
        self.selected_file = None
        self.clear()
        self._tree_nodes = {}
        self.root.expand()
        self._load_files(self.renderer.forest, self.root)

    def _load_files(self, files: Forest, parent: TreeNode, parent_path: NodePath = ()):
        """Recursively load files into the tree."""
        for index, file in enumerate(files):
            path = parent_path + (index,)
            if file.is_directory:
                node = parent.add(file.name, data=path, expand=self.renderer.is_expanded(path), allow_expand=True)
                self._load_files(file.entries, node, path)
            else:
                node = parent.add_leaf(file.name, data=path)
            self._tree_nodes[path] = node

    def tree_node(self, path: NodePath) -> TreeNode:
        return self._tree_nodes[path]

    def _forward_selection(self, node: Node) -> None:
        if self.on_select_callback is not None:
            self.on_select_callback(node)

    def activate_path(self, path: NodePath) -> Optional[Node]:
        """Same as clicking the row at path."""
        selected = self.renderer.activate(path)
        if selected is None:
            self._sync_expansion(self._tree_nodes[path])
        return selected

    def _sync_expansion(self, tree_node: TreeNode) -> None:
        if self.renderer.is_expanded(tree_node.data):
            tree_node.expand()
        else:
            tree_node.collapse()
        for child in tree_node.children:
            if child.allow_expand:
                self._sync_expansion(child)

    def show_selection(self, node: Optional[Node]) -> None:
        """Repaint the highlight for a new selection value."""
        self.selected_file = node
        for tree_node in self._tree_nodes.values():
            if not tree_node.allow_expand:
                tree_node.refresh()

    def is_row_selected(self, path: NodePath) -> bool:
        return matches_selection(self.renderer.node(path), self.selected_file, self.renderer.highlight)

    def render_label(self, node: TreeNode, base_style: Style, style: Style) -> Text:
        if node.data is None:
            return super().render_label(node, base_style, style)

        model = self.renderer.node(node.data)
        label = Text(model.name)
        if model.is_directory:
            expanded = self.renderer.is_expanded(node.data)
            toggle = self.ICON_NODE_EXPANDED if expanded else self.ICON_NODE
            icon, icon_style = icon_for(model.name, is_directory=True, is_open=expanded)
        else:
            # files get a blank where directories show the chevron
            toggle = " " * len(self.ICON_NODE)
            icon, icon_style = icon_for(model.name)
            if self.is_row_selected(node.data):
                label.stylize(SELECTED_STYLE)
        label.stylize(style)
        return Text.assemble((toggle, base_style), (icon, Style.parse(icon_style)), label)

    def on_tree_node_selected(self, event: Tree.NodeSelected) -> None:
        """Handle node selection."""
        event.stop()
        if event.node.data is None:
            return
        self.activate_path(event.node.data)

    def action_toggle_node(self) -> None:
        node = self.cursor_node
        if node is None or node.data is None or not node.allow_expand:
            return
        self.renderer.toggle(node.data)
        self._sync_expansion(node)

    def action_toggle_expand_all(self) -> None:
        # shift+space: siblings keep their own state, only the cursor row toggles
        self.action_toggle_node()

    def visible_rows(self) -> List[str]:
        """Plain text of the rows currently shown, top to bottom."""
        lines = []
        for row in self.renderer.rows(self.selected_file):
            lines.append("  " * row.depth + f"{row.indicator} {row.node.name}")
        return lines
