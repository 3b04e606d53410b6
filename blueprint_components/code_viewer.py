from typing import Optional

from textual.widgets import TextArea

# names used by the data source -> names of the tree-sitter grammars
LANGUAGE_ALIASES = {
    "shell": "bash",
    "sh": "bash",
}


class CodeViewer(TextArea):
    """A read-only TextArea showing the content of the selected file."""

    def __init__(
        self,
        text: str = "",
        *,
        theme: str = "monokai",
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(
            text=text,
            theme=theme,
            soft_wrap=False,
            read_only=True,
            show_line_numbers=True,
            name=name,
            id=id,
            classes=classes,
        )

    def show(self, content: str, language: Optional[str] = None) -> None:
        """Replace the text; highlight it when the grammar is installed."""
        language = LANGUAGE_ALIASES.get(language, language)
        if language not in self.available_languages:
            language = None
        self.language = language
        self.load_text(content)
        self.scroll_home(animate=False)
