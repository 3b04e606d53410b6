import sys
from dataclasses import dataclass
from typing import Callable, List, Optional

import click
from rich.console import Console
from rich.text import Text

from blueprint_app import BlueprintViewer
from blueprint_components.icons import icon_for
from blueprint_components.tree_state import TreeRenderer
from blueprint_data.apihub_core import bundled_forest
from blueprint_types.types import Node
from blueprint_utils.config import HighlightMode, ViewerConfig, load_config
from blueprint_utils.default_selection import find_default_file
from blueprint_utils.forest_loader import ForestLoadError, load_forest, scan_project
from blueprint_utils.log import configure_logging

__version__ = "0.1.0"


@dataclass
class Options:
    forest_file: Optional[str] = None
    scan_path: Optional[str] = None
    default_file: Optional[str] = None
    highlight: Optional[str] = None

    def config(self) -> ViewerConfig:
        return load_config(default_file=self.default_file, highlight=self.highlight)

    def forest_source(self) -> Optional[Callable[[], List[Node]]]:
        if self.forest_file:
            return lambda: load_forest(self.forest_file)
        if self.scan_path:
            return lambda: scan_project(self.scan_path)
        return None


def _load(options: Options) -> List[Node]:
    source = options.forest_source() or bundled_forest
    try:
        return source()
    except ForestLoadError as e:
        raise click.ClickException(str(e)) from e


@click.group(invoke_without_command=True)
@click.option('--forest', 'forest_file', type=click.Path(exists=True, dir_okay=False), help='JSON document with the forest to show.')
@click.option('--path', 'scan_path', type=click.Path(exists=True, file_okay=False), help='Show a directory on disk instead.')
@click.option('--default-file', help='Name of the file selected on startup.')
@click.option('--highlight', type=click.Choice([mode.value for mode in HighlightMode]), help='How the tree matches the selected file.')
@click.pass_context
def cli(ctx, forest_file, scan_path, default_file, highlight):
    """Blueprint viewer - browse a tree of files in the terminal"""
    if forest_file and scan_path:
        raise click.UsageError("--forest and --path are mutually exclusive")
    ctx.obj = Options(forest_file, scan_path, default_file, highlight)
    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@cli.command()
@click.pass_obj
def run(options: Options):
    """Start the interactive viewer"""
    config = options.config()
    configure_logging(config.log_level, config.log_file)
    forest = _load(options)
    app = BlueprintViewer(forest_source=options.forest_source() or bundled_forest, config=config, forest=forest)
    app.run()


@cli.command()
@click.pass_obj
def show(options: Options):
    """Print the fully expanded tree, marking the default selection"""
    config = options.config()
    configure_logging(config.log_level, config.log_file)
    forest = _load(options)
    default = find_default_file(forest, config.default_file)
    renderer = TreeRenderer(forest, on_select=lambda node: None, highlight=config.highlight)

    console = Console(highlight=False, soft_wrap=True)
    for row in renderer.rows(default):
        icon, icon_style = icon_for(row.node.name, row.node.is_directory, bool(row.expanded))
        line = Text("  " * row.depth + row.indicator + " ")
        line.append(icon, style=icon_style)
        line.append(row.node.name, style="bold cyan" if row.selected else "")
        if row.selected:
            line.append("  <- selected", style="cyan")
        console.print(line)
    if default is None:
        console.print(f"No {config.default_file} in the tree, nothing selected.", style="dim")


@cli.command()
def version():
    """Show the version"""
    click.echo(f'Blueprint viewer v{__version__}')


def main():
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nGoodbye!")
        sys.exit(0)


if __name__ == '__main__':
    main()
