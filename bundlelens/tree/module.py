"""Leaf module node holding stats data and parsed source."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..options import AnalyzerOptions
from ..sizes import byte_length, compressed_size
from .node import Node


class Module(Node):
    """One stats module; raw size from stats, parsed sizes from its source slice."""

    def __init__(
        self,
        name: str,
        data: Mapping[str, Any],
        parent: Node | None = None,
        options: AnalyzerOptions | None = None,
    ) -> None:
        super().__init__(name, parent)
        self.data: dict[str, Any] = dict(data)
        self.options = options or AnalyzerOptions()
        self._compressed_sizes: dict[str, int | None] = {}

    @property
    def src(self) -> str | None:
        return self.data.get("parsedSrc")

    @src.setter
    def src(self, value: str | None) -> None:
        self.data["parsedSrc"] = value
        self._compressed_sizes.clear()
        invalidate = getattr(self.parent, "invalidate", None)
        if invalidate is not None:
            invalidate()

    @property
    def size(self) -> int | None:
        return self.data.get("size")

    @size.setter
    def size(self, value: int | None) -> None:
        self.data["size"] = value

    @property
    def parsed_size(self) -> int | None:
        return self.size_of("parsed_size")

    @property
    def gzip_size(self) -> int | None:
        return self.size_of("gzip_size")

    @property
    def brotli_size(self) -> int | None:
        return self.size_of("brotli_size")

    @property
    def zstd_size(self) -> int | None:
        return self.size_of("zstd_size")

    def size_of(self, size_type: str) -> int | None:
        return self.measured_size(size_type)

    def measured_size(self, size_type: str) -> int | None:
        """Size taken from this node's own source, ``None`` if it has none."""
        if size_type == "parsed_size":
            return byte_length(self.src) if self.src else None
        return self.get_compressed_size(size_type.removesuffix("_size"))

    def get_compressed_size(self, algorithm: str) -> int | None:
        if algorithm != self.options.compression_algorithm:
            return None
        if algorithm not in self._compressed_sizes:
            self._compressed_sizes[algorithm] = compressed_size(algorithm, self.src) if self.src else None
        return self._compressed_sizes[algorithm]

    def merge_data(self, data: Mapping[str, Any]) -> None:
        """Fold another record with the same path into this module."""
        if data.get("size"):
            self.size = (self.size or 0) + data["size"]
        if data.get("parsedSrc"):
            self.src = (self.src or "") + data["parsedSrc"]

    def to_chart_data(self) -> dict[str, Any]:
        return {
            "id": self.data.get("id"),
            "label": self.name,
            "path": self.path,
            "statSize": self.size,
            "parsedSize": self.parsed_size,
            "gzipSize": self.gzip_size,
            "brotliSize": self.brotli_size,
            "zstdSize": self.zstd_size,
        }
