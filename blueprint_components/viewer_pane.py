from typing import List, Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container, Vertical
from textual.widgets import Label, Static

from blueprint_types.types import Node

from .code_viewer import CodeViewer
from .icons import icon_for

PLACEHOLDER = "Select a file to view its implementation"


class ViewerPane(Vertical):
    """Tab header, breadcrumb and code view for the selected node."""

    DEFAULT_CSS = """
    ViewerPane {
        width: 1fr;
        background: #0f172a;
    }

    ViewerPane #tabs-bar {
        height: 1;
        background: #0f172a;
        padding: 0 1;
    }

    ViewerPane #breadcrumb-bar {
        height: 1;
        padding: 0 1;
        color: #64748b;
    }

    ViewerPane #code-header {
        height: 1;
        padding: 0 1;
        background: #1e293b;
        color: #94a3b8;
    }

    ViewerPane #code-content {
        height: 1fr;
    }

    ViewerPane #placeholder {
        width: 1fr;
        height: 1fr;
        content-align: center middle;
        color: #64748b;
    }
    """

    def __init__(self, project_name: str = "apihub-core", theme: str = "monokai", **kwargs):
        super().__init__(**kwargs)
        self.project_name = project_name
        self.code_theme = theme
        self.current_file: Optional[Node] = None
        self.breadcrumb_text = ""

    def compose(self) -> ComposeResult:
        with Container(id="tabs-bar"):
            yield Static(id="tab-label")
        with Container(id="breadcrumb-bar"):
            yield Static(id="breadcrumb-container", classes="breadcrumb")
        with Container(id="code-header"):
            yield Label(id="language-label")
        yield CodeViewer(id="code-content", theme=self.code_theme)
        yield Static(PLACEHOLDER, id="placeholder")

    def on_mount(self) -> None:
        self.show_file(self.current_file)

    def show_file(self, node: Optional[Node], location: Optional[List[str]] = None) -> None:
        """Display node, or the placeholder prompt when nothing is selected."""
        self.current_file = node
        has_file = node is not None
        for widget_id in ("#tabs-bar", "#breadcrumb-bar", "#code-header", "#code-content"):
            self.query_one(widget_id).display = has_file
        self.query_one("#placeholder").display = not has_file
        if not has_file:
            return

        icon, icon_style = icon_for(node.name)
        self.query_one("#tab-label", Static).update(Text.assemble((icon, icon_style), (node.name, "bold")))

        # the selected node itself is always the last segment
        parts = [self.project_name] + (location or [node.name])
        self.breadcrumb_text = " > ".join(parts)
        breadcrumb = Text(" > ".join(parts[:-1]) + " > ")
        breadcrumb.append(parts[-1], style="cyan")
        self.query_one("#breadcrumb-container", Static).update(breadcrumb)

        self.query_one("#language-label", Label).update((node.language or "plain").upper())
        self.query_one("#code-content", CodeViewer).show(node.content or "", node.language)
