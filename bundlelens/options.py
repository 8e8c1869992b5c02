"""Analysis options shared by the size tree and the analyzer."""

from __future__ import annotations

from dataclasses import dataclass

COMPRESSION_ALGORITHMS = ("gzip", "brotli", "zstd")
DEFAULT_COMPRESSION_ALGORITHM = "gzip"


@dataclass(frozen=True)
class AnalyzerOptions:
    """Per-run settings; exactly one compression algorithm is active."""

    compression_algorithm: str = DEFAULT_COMPRESSION_ALGORITHM

    def __post_init__(self) -> None:
        if self.compression_algorithm not in COMPRESSION_ALGORITHMS:
            raise ValueError(
                f"Unsupported compression algorithm: {self.compression_algorithm}. "
                f"Use one of these: {', '.join(COMPRESSION_ALGORITHMS)}"
            )
