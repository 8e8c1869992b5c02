"""Filesystem-style folder of stats modules, the root of each asset tree."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..options import AnalyzerOptions
from ..sizes import byte_length, compressed_size
from .base_folder import BaseFolder
from .concatenated import ConcatenatedModule
from .module import Module
from .node import Node
from .paths import module_path_parts

logger = logging.getLogger(__name__)


class Folder(BaseFolder):
    def __init__(self, name: str, options: AnalyzerOptions | None = None, parent: Node | None = None) -> None:
        super().__init__(name, parent)
        self.options = options or AnalyzerOptions()

    @property
    def parsed_size(self) -> int | None:
        return byte_length(self.src) if self.src else None

    @property
    def gzip_size(self) -> int | None:
        return self.get_compressed_size("gzip")

    @property
    def brotli_size(self) -> int | None:
        return self.get_compressed_size("brotli")

    @property
    def zstd_size(self) -> int | None:
        return self.get_compressed_size("zstd")

    def get_compressed_size(self, algorithm: str) -> int | None:
        if algorithm != self.options.compression_algorithm:
            return None
        key = f"{algorithm}_size"
        if key not in self._cache:
            self._cache[key] = compressed_size(algorithm, self.src) if self.src else None
        return self._cache[key]

    def add_module(self, module_data: Mapping[str, Any]) -> None:
        """Place one stats module record at its resolved path below this folder."""
        path_parts = module_path_parts(module_data)
        if not path_parts:
            logger.debug("Skipping module without a usable name: %r", module_data.get("id"))
            return

        *folders, file_name = path_parts
        current_folder: BaseFolder = self
        for folder_name in folders:
            child = current_folder.get_child(folder_name)
            # A module may claim a directory-shaped id (empty dynamic require
            # context); the folder replaces it.
            if not isinstance(child, Folder):
                child = current_folder.add_child_folder(Folder(folder_name, self.options))
            current_folder = child

        module_class = ConcatenatedModule if module_data.get("modules") else Module
        module = module_class(file_name, module_data, self, self.options)
        current_folder.add_child_module(module)

    def to_chart_data(self) -> dict[str, Any]:
        return {
            **super().to_chart_data(),
            "parsedSize": self.parsed_size,
            "gzipSize": self.gzip_size,
            "brotliSize": self.brotli_size,
            "zstdSize": self.zstd_size,
        }
