from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set


BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_INDENT = "│   "
SPACE_INDENT = "    "


@dataclass
class DirectoryNode:
    """A directory path in the arena and the names directly under it."""

    path: str
    children: Set[str] = field(default_factory=set)

    def child_path(self, name: str) -> str:
        return f"{self.path}/{name}" if self.path else name


# ============================================================================
# Tree Builder
# ============================================================================


class TreeBuilder:
    """Rebuilds and renders a directory tree from flat relative paths."""

    def build_nodes(self, relative_paths: Iterable[str]) -> Dict[str, DirectoryNode]:
        """
        Register every path prefix as a node owning its next segment.

        The root is the node keyed by ``""``.
        """
        nodes: Dict[str, DirectoryNode] = {}
        for relative_path in relative_paths:
            parent = ""
            for part in relative_path.split("/"):
                if not part:
                    continue
                node = nodes.get(parent)
                if node is None:
                    node = nodes[parent] = DirectoryNode(parent)
                node.children.add(part)
                parent = node.child_path(part)
        return nodes

    def render(self, nodes: Dict[str, DirectoryNode]) -> str:
        lines: List[str] = []

        def format_tree(node: DirectoryNode, prefix: str) -> None:
            children = sorted(node.children)
            for i, name in enumerate(children):
                is_last = i == len(children) - 1
                lines.append(f"{prefix}{LAST_BRANCH if is_last else BRANCH}{name}\n")
                child = nodes.get(node.child_path(name))
                if child is not None:
                    format_tree(child, prefix + (SPACE_INDENT if is_last else PIPE_INDENT))

        root = nodes.get("")
        if root is not None:
            format_tree(root, "")
        return "".join(lines)

    def build(self, relative_paths: Iterable[str]) -> str:
        """Render the tree text for ``relative_paths``; same input, same bytes."""
        return self.render(self.build_nodes(relative_paths))
