from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Index path from the forest to a node, e.g. (0, 2, 1)
NodePath = Tuple[int, ...]


class NodeKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"


class Node(BaseModel):
    """One entry (file or directory) of the displayed hierarchy.

    Nodes are immutable and supplied whole by the data source. The core does
    not check the structural invariants (only directories carry children, only
    files carry content, no node reachable twice); callers must hand in a
    well formed tree.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., min_length=1, description="Display label")
    kind: NodeKind = Field(..., alias="type", description="file or directory")
    content: Optional[str] = Field(default=None, description="Opaque text payload of a file")
    children: Optional[Tuple["Node", ...]] = Field(default=None, description="Ordered entries of a directory")
    language: Optional[str] = Field(default=None, description="Display hint for the viewer")

    @field_validator("kind", mode="before")
    @classmethod
    def _accept_folder(cls, value):
        # scanners and older documents say "folder"
        if value == "folder":
            return NodeKind.DIRECTORY
        return value

    @classmethod
    def file(cls, name: str, content: str = "", language: Optional[str] = None) -> "Node":
        return cls(name=name, kind=NodeKind.FILE, content=content, language=language)

    @classmethod
    def directory(cls, name: str, children: Sequence["Node"] = ()) -> "Node":
        return cls(name=name, kind=NodeKind.DIRECTORY, children=tuple(children))

    @property
    def is_file(self) -> bool:
        return self.kind == NodeKind.FILE

    @property
    def is_directory(self) -> bool:
        return self.kind == NodeKind.DIRECTORY

    @property
    def entries(self) -> Tuple["Node", ...]:
        """Children of a directory, empty for files."""
        return self.children or ()


Node.model_rebuild()

Forest = Sequence[Node]


def iter_preorder(nodes: Forest, parent: NodePath = ()) -> Iterator[Tuple[NodePath, Node]]:
    """Yield (path, node) pairs depth first, parents before children, in stored order."""
    for index, node in enumerate(nodes):
        path = parent + (index,)
        yield path, node
        if node.is_directory:
            yield from iter_preorder(node.entries, path)


def node_at(nodes: Forest, path: NodePath) -> Node:
    """Return the node addressed by path. Raises KeyError for unknown paths."""
    if not path:
        raise KeyError(path)
    current: Sequence[Node] = nodes
    node = None
    for index in path:
        if index < 0 or index >= len(current):
            raise KeyError(path)
        node = current[index]
        current = node.entries
    return node


def display_path(nodes: Forest, path: NodePath) -> List[str]:
    """Names from the root down to the node at path."""
    names = []
    for depth in range(1, len(path) + 1):
        names.append(node_at(nodes, path[:depth]).name)
    return names


def path_of(nodes: Forest, target: Node) -> Optional[NodePath]:
    """Locate the exact node object in the forest."""
    for path, node in iter_preorder(nodes):
        if node is target:
            return path
    return None
