"""Child-map placement shared by folders and concatenated modules."""

from __future__ import annotations

from .node import Node


class ChildContainer:
    """Name-keyed ``children`` map with the tree's placement rules.

    A module landing on an existing folder is dropped (directory wins); a
    module landing on an existing module is merged into it.
    """

    children: dict[str, Node]

    def get_child(self, name: str) -> Node | None:
        return self.children.get(name)

    def add_child_module(self, module) -> None:
        current = self.children.get(module.name)
        if current is not None and current.is_folder:
            return

        if current is not None:
            current.merge_data(module.data)
        else:
            module.parent = self
            self.children[module.name] = module
        self._children_changed()

    def add_child_folder(self, folder):
        folder.parent = self
        self.children[folder.name] = folder
        self._children_changed()
        return folder

    def merge_nested_children(self) -> None:
        for child in self.children.values():
            child.parent = self
            merge = getattr(child, "merge_nested_folders", None)
            if merge is not None:
                merge()

    def _children_changed(self) -> None:
        pass
