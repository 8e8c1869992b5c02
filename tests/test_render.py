from __future__ import annotations

import unittest

from bundlelens.render import format_size, highlight_source, render_chart_lines, size_field_name

CHART = [
    {
        "label": "main.js",
        "isAsset": True,
        "statSize": 3072,
        "parsedSize": 1536,
        "groups": [
            {
                "label": "src",
                "path": "./src",
                "statSize": 3000,
                "parsedSize": 1500,
                "groups": [
                    {"id": 0, "label": "index.js", "path": "./src/index.js", "statSize": 1000, "parsedSize": 500},
                    {
                        "id": 1,
                        "label": "app.js (concatenated)",
                        "path": "./src/app.js (concatenated)",
                        "statSize": 2000,
                        "parsedSize": 1000,
                        "concatenated": True,
                        "groups": [
                            {"label": "a.js", "statSize": 2000, "parsedSize": 1000, "inaccurateSizes": True},
                        ],
                    },
                ],
            },
            {"id": 2, "label": "runtime.js", "statSize": 72, "parsedSize": None},
        ],
    }
]


class FormatSizeTests(unittest.TestCase):
    def test_units(self) -> None:
        self.assertEqual(format_size(0), "0 B")
        self.assertEqual(format_size(512), "512 B")
        self.assertEqual(format_size(1536), "1.5 KB")
        self.assertEqual(format_size(2048), "2 KB")
        self.assertEqual(format_size(3 * 1024 * 1024), "3 MB")

    def test_missing(self) -> None:
        self.assertEqual(format_size(None), "—")


class SizeFieldTests(unittest.TestCase):
    def test_compressed_follows_algorithm(self) -> None:
        self.assertEqual(size_field_name("compressed", "zstd"), "zstdSize")
        self.assertEqual(size_field_name("stat", "gzip"), "statSize")
        with self.assertRaises(ValueError):
            size_field_name("huge", "gzip")


class ChartLinesTests(unittest.TestCase):
    def test_plain_tree(self) -> None:
        lines = render_chart_lines(CHART, "parsedSize", no_color=True)
        self.assertEqual(
            lines,
            [
                "main.js [1.5 KB]",
                "├─ src/ [1.5 KB]",
                "│  ├─ index.js [500 B]",
                "│  └─ app.js (concatenated) [1000 B]",
                "│     └─ a.js [~1000 B]",
                "└─ runtime.js [—]",
            ],
        )

    def test_max_depth_cuts_children(self) -> None:
        lines = render_chart_lines(CHART, "statSize", max_depth=1, no_color=True)
        self.assertEqual(lines, ["main.js [3 KB]", "├─ src/ [2.9 KB]", "└─ runtime.js [72 B]"])

    def test_colors_are_optional(self) -> None:
        colored = render_chart_lines(CHART, "parsedSize")
        self.assertIn("\033[", colored[0])


class HighlightTests(unittest.TestCase):
    def test_no_color_returns_source(self) -> None:
        self.assertEqual(highlight_source("var a = 1;", no_color=True), "var a = 1;")

    def test_highlight_adds_escapes(self) -> None:
        rendered = highlight_source("var a = 1;")
        self.assertIn("\x1b[", rendered)
        self.assertIn("a", rendered)


if __name__ == "__main__":
    unittest.main()
