from __future__ import annotations

import gzip
import unittest

import brotli
import zstandard

from bundlelens.options import AnalyzerOptions
from bundlelens.sizes import byte_length, compressed_size


class CompressedSizeTests(unittest.TestCase):
    source = "var answer = 42; " * 50

    def test_each_algorithm_matches_its_library(self) -> None:
        data = self.source.encode("utf-8")
        self.assertEqual(compressed_size("gzip", self.source), len(gzip.compress(data, compresslevel=9)))
        self.assertEqual(compressed_size("brotli", self.source), len(brotli.compress(data)))
        self.assertEqual(compressed_size("zstd", self.source), len(zstandard.ZstdCompressor().compress(data)))

    def test_compression_shrinks_repetitive_source(self) -> None:
        self.assertLess(compressed_size("gzip", self.source), byte_length(self.source))

    def test_unknown_algorithm(self) -> None:
        with self.assertRaisesRegex(ValueError, "Unsupported compression algorithm: lzma"):
            compressed_size("lzma", self.source)

    def test_byte_length(self) -> None:
        self.assertEqual(byte_length("abc"), 3)
        self.assertEqual(byte_length("ü€"), 5)
        self.assertIsNone(byte_length(None))


class AnalyzerOptionsTests(unittest.TestCase):
    def test_default_is_gzip(self) -> None:
        self.assertEqual(AnalyzerOptions().compression_algorithm, "gzip")

    def test_rejects_unknown_algorithm(self) -> None:
        with self.assertRaises(ValueError):
            AnalyzerOptions(compression_algorithm="deflate")


if __name__ == "__main__":
    unittest.main()
