"""Base node of the module size tree."""

from __future__ import annotations


class Node:
    """Named tree node; the parent's ``children`` map owns it."""

    is_folder = False

    def __init__(self, name: str, parent: Node | None = None) -> None:
        self.name = name
        self.parent = parent

    @property
    def path(self) -> str:
        names: list[str] = []
        node: Node | None = self
        while node is not None:
            names.append(node.name)
            node = node.parent
        return "/".join(reversed(names))

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"
