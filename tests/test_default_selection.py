import unittest

from blueprint_types.types import Node
from blueprint_utils.default_selection import find_default_file, find_first, locate_first
from forest_fixtures import nested_forest, scenario_forest


class DefaultSelectionTests(unittest.TestCase):
    def test_scenario_finds_protocol_md(self) -> None:
        forest = scenario_forest()
        found = find_default_file(forest, "protocol.md")
        self.assertIs(found, forest[0].children[0])

    def test_no_match_returns_none(self) -> None:
        forest = [Node.directory("root", [])]
        self.assertIsNone(find_default_file(forest, "missing.md"))
        self.assertIsNone(find_default_file([], "protocol.md"))

    def test_repeated_calls_return_the_same_node(self) -> None:
        forest = nested_forest()
        results = {id(find_default_file(forest, "protocol.md")) for _ in range(5)}
        self.assertEqual(len(results), 1)

    def test_pre_order_wins_over_depth(self) -> None:
        # the deep match comes first in traversal order
        forest = nested_forest()
        found = find_default_file(forest, "protocol.md")
        self.assertEqual(found.content, "deep")

    def test_earlier_shallow_match_beats_later_deep_match(self) -> None:
        shallow = Node.file("protocol.md", "shallow")
        forest = [
            Node.directory("root", [
                shallow,
                Node.directory("nested", [Node.file("protocol.md", "deep")]),
            ]),
        ]
        self.assertIs(find_default_file(forest, "protocol.md"), shallow)

    def test_children_are_not_resorted(self) -> None:
        forest = [Node.directory("root", [Node.file("b.md", "1"), Node.file("a.md", "2")])]
        found = find_first(forest, lambda node: node.name.endswith(".md"))
        self.assertEqual(found.name, "b.md")

    def test_predicate_can_match_directories_and_roots(self) -> None:
        forest = nested_forest()
        self.assertIs(find_first(forest, lambda node: node.is_directory), forest[0])

    def test_locate_first_reports_the_index_path(self) -> None:
        path, node = locate_first(nested_forest(), lambda node: node.name == "api.go")
        self.assertEqual(path, (0, 2, 1))
        self.assertEqual(node.content, "package api")


if __name__ == "__main__":
    unittest.main()
