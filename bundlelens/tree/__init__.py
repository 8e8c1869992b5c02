"""Module size tree: folders, modules, and concatenated-module estimates."""

from __future__ import annotations

from .base_folder import BaseFolder
from .build import create_modules_tree
from .concatenated import ConcatenatedModule
from .content import ContentFolder, ContentModule
from .estimates import estimate_share
from .folder import Folder
from .module import Module
from .node import Node
from .paths import module_path_parts

__all__ = [
    "BaseFolder",
    "ConcatenatedModule",
    "ContentFolder",
    "ContentModule",
    "Folder",
    "Module",
    "Node",
    "create_modules_tree",
    "estimate_share",
    "module_path_parts",
]
