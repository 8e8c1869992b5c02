"""Assemble a size tree from a list of stats module records."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ..options import AnalyzerOptions
from .folder import Folder


def create_modules_tree(modules: Iterable[Mapping[str, Any]], options: AnalyzerOptions | None = None) -> Folder:
    """Build a fresh root folder from ``modules`` and collapse single-child chains."""
    root = Folder(".", options)
    for module_data in modules:
        root.add_module(module_data)
    root.merge_nested_folders()
    return root
