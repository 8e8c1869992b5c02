"""Nodes inside a concatenated module, sized only by estimate.

Module concatenation erases the boundaries between the inlined modules, so
these nodes have no source of their own. Their parsed and compressed sizes
are the owner module's sizes scaled by their share of its stat size, and
they are exported with ``inaccurateSizes``.
"""

from __future__ import annotations

import weakref
from collections.abc import Mapping
from typing import Any

from ..options import AnalyzerOptions
from .base_folder import BaseFolder
from .estimates import estimate_share
from .module import Module


class _OwnedEstimate:
    """Weak back-reference to the concatenated module a node is a fraction of."""

    _owner_ref: weakref.ReferenceType

    @property
    def owner_module(self):
        return self._owner_ref()

    def size_of(self, size_type: str) -> int | None:
        owner = self.owner_module
        if owner is None:
            return None
        return estimate_share(self.size, owner.size, getattr(owner, size_type))


class ContentModule(_OwnedEstimate, Module):
    def __init__(
        self,
        name: str,
        data: Mapping[str, Any],
        owner_module,
        options: AnalyzerOptions | None = None,
    ) -> None:
        super().__init__(name, data, None, options)
        self._owner_ref = weakref.ref(owner_module)

    def to_chart_data(self) -> dict[str, Any]:
        return {**super().to_chart_data(), "inaccurateSizes": True}


class ContentFolder(_OwnedEstimate, BaseFolder):
    def __init__(self, name: str, owner_module, parent=None) -> None:
        super().__init__(name, parent)
        self._owner_ref = weakref.ref(owner_module)

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

    def to_chart_data(self) -> dict[str, Any]:
        return {
            **super().to_chart_data(),
            "parsedSize": self.parsed_size,
            "gzipSize": self.gzip_size,
            "brotliSize": self.brotli_size,
            "zstdSize": self.zstd_size,
            "inaccurateSizes": True,
        }
