"""Folder node with lazily aggregated size and source."""

from __future__ import annotations

from typing import Any

from .container import ChildContainer
from .node import Node


class BaseFolder(ChildContainer, Node):
    """Folder whose ``size`` and ``src`` are memoized sums of its children.

    Caches are dropped (not recomputed) whenever a child is added anywhere
    below, and rebuilt on the next read.
    """

    is_folder = True

    def __init__(self, name: str, parent: Node | None = None) -> None:
        super().__init__(name, parent)
        self.children: dict[str, Node] = {}
        self._cache: dict[str, Any] = {}

    @property
    def src(self) -> str:
        if "src" not in self._cache:
            self._cache["src"] = "".join(child.src or "" for child in self.children.values())
        return self._cache["src"]

    @property
    def size(self) -> int:
        if "size" not in self._cache:
            self._cache["size"] = sum(
                child.size for child in self.children.values() if child.size is not None
            )
        return self._cache["size"]

    def invalidate(self) -> None:
        """Drop cached aggregates here and in every ancestor folder."""
        node: Node | None = self
        while isinstance(node, BaseFolder):
            node._cache.clear()
            node = node.parent

    def _children_changed(self) -> None:
        self.invalidate()

    def merge_nested_folders(self) -> None:
        """Collapse runs of single-child folders of the same kind into one node."""
        if not self.is_root:
            while len(self.children) == 1:
                (only_child,) = self.children.values()
                if type(only_child) is not type(self):
                    break
                self.name += f"/{only_child.name}"
                self.children = only_child.children

        self.merge_nested_children()

    def to_chart_data(self) -> dict[str, Any]:
        return {
            "label": self.name,
            "path": self.path,
            "statSize": self.size,
            "groups": [child.to_chart_data() for child in self.children.values()],
        }
