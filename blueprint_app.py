import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from textual.app import App
from textual.containers import Horizontal, Vertical
from textual.widgets import Footer, Header, Label, Static

from blueprint_components.file_tree import FileExplorer
from blueprint_components.viewer_pane import ViewerPane
from blueprint_data.apihub_core import PROJECT_SUBTITLE, PROJECT_VERSION, SIDEBAR_NOTES, bundled_forest
from blueprint_types.selection import SelectionStore
from blueprint_types.types import Node, display_path, path_of
from blueprint_utils.config import ViewerConfig, load_config
from blueprint_utils.default_selection import find_default_file
from blueprint_utils.forest_loader import ForestLoadError

logger = logging.getLogger(__name__)

ForestSource = Callable[[], List[Node]]


@dataclass(frozen=True)
class SidebarInfo:
    version: str = ""
    subtitle: str = ""
    notes: Tuple[str, ...] = ()


BUNDLED_SIDEBAR = SidebarInfo(PROJECT_VERSION, PROJECT_SUBTITLE, SIDEBAR_NOTES)


class BlueprintViewer(App):
    """Tree of the blueprint on the left, the selected file on the right.

    The app owns the selection store. The tree gets the store's setter as its
    callback, the viewer pane and the tree highlight both follow the store.
    """

    TITLE = "Blueprint Viewer"
    CSS = """
    #main {
        height: 1fr;
    }
    #sidebar {
        width: 36;
        background: #1e293b;
        border-right: solid #334155;
    }
    #sidebar-title {
        height: 1;
        width: 100%;
        padding: 0 1;
        color: #22d3ee;
        background: #0f172a;
        text-style: bold;
    }
    #sidebar-subtitle {
        height: auto;
        padding: 0 1;
        color: #94a3b8;
        background: #0f172a;
    }
    #file-explorer {
        height: 1fr;
    }
    #sidebar-footer {
        height: auto;
        padding: 0 1;
        color: #64748b;
        background: #0f172a;
        border-top: solid #334155;
    }
    """
    BINDINGS = [
        ("ctrl+r", "reload", "Reload forest"),
        ("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        forest_source: Optional[ForestSource] = None,
        config: Optional[ViewerConfig] = None,
        forest: Optional[List[Node]] = None,
        sidebar: Optional[SidebarInfo] = None,
    ):
        super().__init__()
        self.config = config or load_config()
        self.forest_source = forest_source or bundled_forest
        # an already loaded forest saves the first call to the source
        self.forest = list(forest) if forest is not None else list(self.forest_source())
        if sidebar is None:
            sidebar = BUNDLED_SIDEBAR if self.forest_source is bundled_forest else SidebarInfo()
        self.sidebar = sidebar
        self.selection = SelectionStore()

    def compose(self):
        """Create ui loadout"""
        yield Header()
        with Horizontal(id="main"):
            with Vertical(id="sidebar"):
                title = self.config.project_name
                if self.sidebar.version:
                    title = f"{title}  {self.sidebar.version}"
                yield Label(title, id="sidebar-title")
                if self.sidebar.subtitle:
                    yield Static(self.sidebar.subtitle, id="sidebar-subtitle")
                yield FileExplorer(
                    files=self.forest,
                    on_select=self.selection.select,
                    highlight=self.config.highlight,
                    id="file-explorer",
                )
                if self.sidebar.notes:
                    yield Static("\n".join(self.sidebar.notes), id="sidebar-footer")
            yield ViewerPane(project_name=self.config.project_name, theme=self.config.theme, id="viewer")
        yield Footer()

    def on_mount(self) -> None:
        """Called after the app is mounted"""
        self.selection.subscribe(self._on_selection_changed)
        self.apply_default_selection()

    def apply_default_selection(self) -> None:
        default = find_default_file(self.forest, self.config.default_file)
        if default is None:
            logger.info("no %s in the forest, starting without a selection", self.config.default_file)
            self._on_selection_changed(None)
            return
        self.selection.select(default)

    def _on_selection_changed(self, node: Optional[Node]) -> None:
        self.query_one(FileExplorer).show_selection(node)
        location = None
        if node is not None:
            path = path_of(self.forest, node)
            if path is not None:
                location = display_path(self.forest, path)
        self.query_one(ViewerPane).show_file(node, location)

    def replace_forest(self, forest: List[Node]) -> None:
        """Swap in a new forest: expansion and selection start over."""
        self.forest = list(forest)
        self.selection.clear()
        self.query_one(FileExplorer).load_files(self.forest)
        self.apply_default_selection()

    def action_reload(self) -> None:
        try:
            forest = self.forest_source()
        except ForestLoadError as e:
            logger.error("reload failed: %s", e)
            self.notify(f"Error reloading: {e}", severity="error")
            return
        self.replace_forest(forest)
        self.notify("Forest reloaded")


def main():
    """Entry point for the command-line interface"""
    from blueprint_cli.cli import main as cli_main
    return cli_main()


if __name__ == "__main__":
    main()
