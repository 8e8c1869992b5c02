"""Module produced by scope hoisting, decomposed into its inlined parts."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..options import AnalyzerOptions
from .container import ChildContainer
from .content import ContentFolder, ContentModule
from .estimates import estimate_share
from .module import Module
from .node import Node
from .paths import module_path_parts


class ConcatenatedModule(ChildContainer, Module):
    """Module whose stats record lists the sub-modules inlined into it.

    The sub-modules are placed once, at construction, into a private child
    tree of ``ContentFolder``/``ContentModule``/nested ``ConcatenatedModule``
    nodes. When this module has no source of its own, its parsed and
    compressed sizes are estimated from its share of the parent's sizes.
    """

    def __init__(
        self,
        name: str,
        data: Mapping[str, Any],
        parent: Node | None = None,
        options: AnalyzerOptions | None = None,
    ) -> None:
        super().__init__(name, data, parent, options)
        self.name += " (concatenated)"
        self.children: dict[str, Node] = {}
        self.fill_content_modules()

    def size_of(self, size_type: str) -> int | None:
        measured = self.measured_size(size_type)
        if measured is not None:
            return measured
        return self.estimated_size(size_type)

    def estimated_size(self, size_type: str) -> int | None:
        if self.parent is None:
            return None
        return estimate_share(self.size, self.parent.size, getattr(self.parent, size_type, None))

    def fill_content_modules(self) -> None:
        for module_data in self.data.get("modules") or []:
            self.add_content_module(module_data)

    def add_content_module(self, module_data: Mapping[str, Any]) -> None:
        path_parts = module_path_parts(module_data)
        if not path_parts:
            return

        *folders, file_name = path_parts
        current_folder: ChildContainer = self
        for folder_name in folders:
            child = current_folder.get_child(folder_name)
            if not isinstance(child, ContentFolder):
                child = current_folder.add_child_folder(ContentFolder(folder_name, self))
            current_folder = child

        if module_data.get("modules"):
            module = ConcatenatedModule(file_name, module_data, self, self.options)
        else:
            module = ContentModule(file_name, module_data, self, self.options)
        current_folder.add_child_module(module)

    def merge_nested_folders(self) -> None:
        self.merge_nested_children()

    def to_chart_data(self) -> dict[str, Any]:
        return {
            **super().to_chart_data(),
            "concatenated": True,
            "groups": [child.to_chart_data() for child in self.children.values()],
        }
