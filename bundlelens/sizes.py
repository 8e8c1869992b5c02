"""Compressed-size measurement for bundle and module sources."""

from __future__ import annotations

import gzip

import brotli
import zstandard


def compressed_size(algorithm: str, text: str) -> int:
    """Return the compressed byte length of ``text`` under ``algorithm``."""
    data = text.encode("utf-8")
    if algorithm == "gzip":
        return len(gzip.compress(data, compresslevel=9))
    if algorithm == "brotli":
        return len(brotli.compress(data))
    if algorithm == "zstd":
        return len(zstandard.ZstdCompressor().compress(data))
    raise ValueError(f"Unsupported compression algorithm: {algorithm}.")


def byte_length(text: str | None) -> int | None:
    """UTF-8 length of ``text``; ``None`` passes through."""
    if text is None:
        return None
    return len(text.encode("utf-8"))
