import unittest

from blueprint_app import BlueprintViewer
from blueprint_components.file_tree import FileExplorer
from blueprint_components.viewer_pane import ViewerPane
from blueprint_types.types import Node
from blueprint_utils.config import HighlightMode, ViewerConfig
from forest_fixtures import nested_forest, scenario_forest


def make_app(forest_factory=scenario_forest, **config) -> BlueprintViewer:
    return BlueprintViewer(forest_source=forest_factory, config=ViewerConfig(**config))


class BlueprintViewerTests(unittest.IsolatedAsyncioTestCase):
    async def test_default_file_is_selected_on_mount(self) -> None:
        app = make_app()
        async with app.run_test() as pilot:
            await pilot.pause()
            protocol = app.forest[0].children[0]
            viewer = app.query_one(ViewerPane)

            self.assertIs(app.selection.value, protocol)
            self.assertIs(viewer.current_file, protocol)
            self.assertEqual(viewer.breadcrumb_text, "apihub-core > root > protocol.md")
            self.assertTrue(app.query_one(FileExplorer).is_row_selected((0, 0)))

    async def test_clicking_another_file_moves_the_selection(self) -> None:
        app = make_app()
        async with app.run_test() as pilot:
            await pilot.pause()
            explorer = app.query_one(FileExplorer)
            explorer.activate_path((0, 1))
            await pilot.pause()

            a_go = app.forest[0].children[1]
            self.assertIs(app.selection.value, a_go)
            self.assertIs(app.query_one(ViewerPane).current_file, a_go)
            self.assertTrue(explorer.is_row_selected((0, 1)))
            self.assertFalse(explorer.is_row_selected((0, 0)))

    async def test_directory_clicks_toggle_without_touching_selection(self) -> None:
        app = make_app()
        async with app.run_test() as pilot:
            await pilot.pause()
            explorer = app.query_one(FileExplorer)
            before = app.selection.value

            explorer.activate_path((0,))
            await pilot.pause()
            self.assertFalse(explorer.tree_node((0,)).is_expanded)
            self.assertEqual(explorer.visible_rows(), ["▶ root"])
            self.assertIs(app.selection.value, before)

            explorer.activate_path((0,))
            await pilot.pause()
            self.assertTrue(explorer.tree_node((0,)).is_expanded)
            self.assertIs(app.selection.value, before)

    async def test_collapsing_a_parent_restores_children_expanded(self) -> None:
        app = make_app(nested_forest)
        async with app.run_test() as pilot:
            await pilot.pause()
            explorer = app.query_one(FileExplorer)
            explorer.activate_path((0, 2, 0))
            explorer.activate_path((0, 2))
            explorer.activate_path((0, 2))
            await pilot.pause()

            self.assertTrue(explorer.tree_node((0, 2)).is_expanded)
            self.assertTrue(explorer.tree_node((0, 2, 0)).is_expanded)

    async def test_missing_default_shows_placeholder(self) -> None:
        app = make_app(lambda: [Node.directory("root", [])], default_file="missing.md")
        async with app.run_test() as pilot:
            await pilot.pause()
            viewer = app.query_one(ViewerPane)

            self.assertIsNone(app.selection.value)
            self.assertIsNone(viewer.current_file)
            self.assertTrue(viewer.query_one("#placeholder").display)
            self.assertFalse(viewer.query_one("#code-content").display)

    async def test_replacing_the_forest_resets_state(self) -> None:
        forests = [scenario_forest(), nested_forest()]
        app = make_app(lambda: forests.pop(0))
        async with app.run_test() as pilot:
            await pilot.pause()
            explorer = app.query_one(FileExplorer)
            explorer.activate_path((0, 1))
            explorer.activate_path((0,))

            app.action_reload()
            await pilot.pause()

            self.assertEqual(app.forest[0].name, "apihub-core")
            self.assertEqual(explorer.renderer.expansion.snapshot(), {})
            # the default is resolved again against the new forest
            self.assertEqual(app.selection.value.content, "deep")

    async def test_content_highlight_marks_identical_files(self) -> None:
        forest = [Node.directory("cmd", [
            Node.directory("a", [Node.file("main.go", "same")]),
            Node.directory("b", [Node.file("main.go", "same")]),
        ])]
        app = make_app(lambda: forest, default_file="main.go", highlight=HighlightMode.CONTENT)
        async with app.run_test() as pilot:
            await pilot.pause()
            explorer = app.query_one(FileExplorer)
            self.assertTrue(explorer.is_row_selected((0, 0, 0)))
            self.assertTrue(explorer.is_row_selected((0, 1, 0)))



class FileExplorerInputTests(unittest.IsolatedAsyncioTestCase):
    """Drive the tree through mouse and keyboard like a user would."""

    async def test_clicking_a_file_row_selects_it(self) -> None:
        app = make_app()
        async with app.run_test() as pilot:
            await pilot.pause()
            # row 2 is a.go: 4 columns of guides, toggle gap, icon, then the name
            await pilot.click("#file-explorer", offset=(10, 2))
            await pilot.pause()

            explorer = app.query_one(FileExplorer)
            self.assertIs(app.selection.value, app.forest[0].children[1])
            self.assertTrue(explorer.is_row_selected((0, 1)))
            self.assertFalse(explorer.is_row_selected((0, 0)))
            self.assertTrue(explorer.renderer.is_expanded((0,)))

    async def test_clicking_a_directory_row_twice_toggles_it_once_per_click(self) -> None:
        app = make_app()
        async with app.run_test() as pilot:
            await pilot.pause()
            explorer = app.query_one(FileExplorer)
            before = app.selection.value

            await pilot.click("#file-explorer", offset=(7, 0))
            await pilot.pause()
            self.assertFalse(explorer.renderer.is_expanded((0,)))
            self.assertFalse(explorer.tree_node((0,)).is_expanded)
            self.assertIs(app.selection.value, before)

            await pilot.pause(0.6)
            await pilot.click("#file-explorer", offset=(7, 0))
            await pilot.pause()
            self.assertTrue(explorer.renderer.is_expanded((0,)))
            self.assertTrue(explorer.tree_node((0,)).is_expanded)
            self.assertIs(app.selection.value, before)

    async def test_enter_selects_the_file_under_the_cursor(self) -> None:
        app = make_app()
        async with app.run_test() as pilot:
            explorer = app.query_one(FileExplorer)
            explorer.focus()
            await pilot.pause()
            explorer.cursor_line = explorer.tree_node((0, 1)).line
            await pilot.press("enter")
            await pilot.pause()

            self.assertIs(app.selection.value, app.forest[0].children[1])

    async def test_enter_and_space_toggle_a_directory_through_the_map(self) -> None:
        app = make_app()
        async with app.run_test() as pilot:
            explorer = app.query_one(FileExplorer)
            explorer.focus()
            await pilot.pause()
            before = app.selection.value
            explorer.cursor_line = explorer.tree_node((0,)).line

            await pilot.press("enter")
            await pilot.pause()
            self.assertFalse(explorer.renderer.is_expanded((0,)))
            self.assertFalse(explorer.tree_node((0,)).is_expanded)

            await pilot.press("space")
            await pilot.pause()
            self.assertTrue(explorer.renderer.is_expanded((0,)))
            self.assertTrue(explorer.tree_node((0,)).is_expanded)
            self.assertIs(app.selection.value, before)

    async def test_shift_space_only_toggles_the_cursor_row(self) -> None:
        app = make_app(nested_forest)
        async with app.run_test() as pilot:
            explorer = app.query_one(FileExplorer)
            explorer.focus()
            await pilot.pause()
            explorer.cursor_line = explorer.tree_node((0, 1)).line

            await pilot.press("shift+space")
            await pilot.pause()

            self.assertFalse(explorer.renderer.is_expanded((0, 1)))
            self.assertTrue(explorer.renderer.is_expanded((0, 2)))
            for path in [(0,), (0, 1), (0, 1, 0), (0, 2), (0, 2, 0)]:
                self.assertEqual(explorer.tree_node(path).is_expanded, explorer.renderer.is_expanded(path), path)
            self.assertIn("  ▶ abi", explorer.visible_rows())

            explorer.activate_path((0, 1))
            await pilot.pause()
            self.assertTrue(explorer.tree_node((0, 1)).is_expanded)


class HostSetupTests(unittest.IsolatedAsyncioTestCase):
    async def test_preloaded_forest_skips_the_source(self) -> None:
        calls = []

        def source():
            calls.append(1)
            return nested_forest()

        forest = scenario_forest()
        app = BlueprintViewer(forest_source=source, config=ViewerConfig(), forest=forest)
        async with app.run_test() as pilot:
            await pilot.pause()
            self.assertEqual(calls, [])
            self.assertIs(app.selection.value, forest[0].children[0])

    async def test_bundled_blueprint_shows_version_and_footer(self) -> None:
        app = BlueprintViewer(config=ViewerConfig())
        async with app.run_test() as pilot:
            await pilot.pause()
            self.assertEqual(app.sidebar.version, "v0.1")
            self.assertIn("Architecture: MVU", app.sidebar.notes)
            self.assertEqual(len(app.query("#sidebar-footer")), 1)
            self.assertEqual(len(app.query("#sidebar-subtitle")), 1)

    async def test_other_forests_get_a_plain_sidebar(self) -> None:
        app = make_app()
        async with app.run_test() as pilot:
            await pilot.pause()
            self.assertEqual(len(app.query("#sidebar-footer")), 0)


if __name__ == "__main__":
    unittest.main()
