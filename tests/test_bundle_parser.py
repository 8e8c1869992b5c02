"""Bundle parsing against real Tree-sitter syntax trees.

Each case feeds a small hand-written bundle in one of the wrapper shapes
bundlers emit and checks the recovered module slices.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from bundlelens.bundle import BundleParseError, parse_bundle, parse_bundle_file


class WrapperShapeTests(unittest.TestCase):
    def test_iife_argument_hash(self) -> None:
        text = "(function(modules){ run() })({0: function(module, exports){ a() }, 1: function(m){ b() }});"
        parsed = parse_bundle(text)
        self.assertEqual(
            parsed.module_slices,
            {"0": "function(module, exports){ a() }", "1": "function(m){ b() }"},
        )

    def test_iife_argument_array_skips_holes(self) -> None:
        text = "(function(modules){})([function(){ a() }, , function(){ b() }]);"
        parsed = parse_bundle(text)
        self.assertEqual(parsed.module_slices, {"0": "function(){ a() }", "2": "function(){ b() }"})

    def test_async_chunk_call(self) -> None:
        text = 'webpackJsonp([1],{5:function(e,t){ x() }, "./b.js": function(){ y() }});'
        parsed = parse_bundle(text)
        self.assertEqual(parsed.module_slices, {"5": "function(e,t){ x() }", "./b.js": "function(){ y() }"})

    def test_async_chunk_push(self) -> None:
        text = "(self.webpackChunk = self.webpackChunk || []).push([[1],{7:(e,t,n)=>{ y() }}]);"
        parsed = parse_bundle(text)
        self.assertEqual(parsed.module_slices, {"7": "(e,t,n)=>{ y() }"})

    def test_worker_chunk_call(self) -> None:
        text = 'self.webpackChunkCallback(["w"],{9:function(){ z() }});'
        parsed = parse_bundle(text)
        self.assertEqual(parsed.module_slices, {"9": "function(){ z() }"})

    def test_exports_modules_assignment(self) -> None:
        text = 'exports.ids=[4];exports.modules={"./a.js":function(){ a() }};'
        parsed = parse_bundle(text)
        self.assertEqual(parsed.module_slices, {"./a.js": "function(){ a() }"})

    def test_top_level_wrapper_after_directive(self) -> None:
        text = (
            '"use strict";\n'
            "(() => {\n"
            "  var __modules__ = ({ 1: (m) => { m.exports = 1; } });\n"
            "  var cache = {};\n"
            "})();\n"
        )
        parsed = parse_bundle(text)
        self.assertEqual(parsed.module_slices, {"1": "(m) => { m.exports = 1; }"})

    def test_compacted_array_uses_base_id(self) -> None:
        text = "webpackJsonp([0], Array(3).concat([function(){ a() }, function(){ b() }]));"
        parsed = parse_bundle(text)
        self.assertEqual(parsed.module_slices, {"3": "function(){ a() }", "4": "function(){ b() }"})

    def test_top_level_wrapper_with_plain_array(self) -> None:
        text = "(function(){ var modules = [function(){ a() }, function(){ b() }]; modules[0](); })();"
        parsed = parse_bundle(text)
        self.assertEqual(parsed.module_slices, {"0": "function(){ a() }", "1": "function(){ b() }"})

    def test_dedupe_aliases_and_id_arrays_are_wrappers(self) -> None:
        text = '(function(m){})({1: function(){ a() }, 2: 1, 3: [1, "x"]});'
        parsed = parse_bundle(text)
        self.assertEqual(parsed.module_slices, {"1": "function(){ a() }", "2": "1", "3": '[1, "x"]'})

    def test_method_members_span_parameters_through_body(self) -> None:
        text = "(function(m){})({ 5(module){ a() } });"
        parsed = parse_bundle(text)
        self.assertEqual(parsed.module_slices, {"5": "(module){ a() }"})

    def test_parenthesized_wrappers_are_sliced_without_parens(self) -> None:
        text = "(function(m){})({0: (function(){ a() })});"
        parsed = parse_bundle(text)
        self.assertEqual(parsed.module_slices, {"0": "function(){ a() }"})

    def test_comments_inside_container_are_ignored(self) -> None:
        text = "(function(m){})({/* first */ 0: function(){ a() } /* last */});"
        parsed = parse_bundle(text)
        self.assertEqual(parsed.module_slices, {"0": "function(){ a() }"})

    def test_container_found_inside_umd_factory(self) -> None:
        text = (
            "(function(root, factory){ module.exports = factory(); })(this, function(){\n"
            "  return (function(modules){})({0: function(){ a() }});\n"
            "});"
        )
        parsed = parse_bundle(text)
        self.assertEqual(parsed.module_slices, {"0": "function(){ a() }"})


class ParseResultTests(unittest.TestCase):
    def test_runtime_text_excludes_module_ranges(self) -> None:
        text = "(function(modules){ r() })({0: function(){ a() }});"
        parsed = parse_bundle(text)
        self.assertEqual(parsed.full_text, text)
        self.assertEqual(parsed.runtime_text, "(function(modules){ r() })({0: });")

    def test_locations_are_utf8_byte_offsets(self) -> None:
        text = 'var s = "é";(function(m){})({0: function(){ return "ü" }});'
        parsed = parse_bundle(text)
        location = parsed.locations["0"]
        self.assertEqual(text.encode("utf-8")[location.start : location.end].decode("utf-8"), 'function(){ return "ü" }')
        self.assertEqual(parsed.module_slices["0"], 'function(){ return "ü" }')

    def test_unrecognized_bundle_is_all_runtime(self) -> None:
        text = 'console.log("hi");'
        parsed = parse_bundle(text)
        self.assertEqual(parsed.module_slices, {})
        self.assertEqual(parsed.runtime_text, text)

    def test_named_iife_callee_is_not_a_loader(self) -> None:
        parsed = parse_bundle("(function loader(m){})({0: function(){}});")
        self.assertEqual(parsed.module_slices, {})

    def test_syntax_error_raises_with_position(self) -> None:
        with self.assertRaises(BundleParseError) as ctx:
            parse_bundle("var a = ;\n")
        self.assertIsNotNone(ctx.exception.line)
        self.assertIsInstance(ctx.exception, ValueError)

    def test_import_requires_module_source_kind(self) -> None:
        text = 'import a from "a";\nwebpackJsonp([0], {1: function(){ a() }});'
        with self.assertRaises(BundleParseError):
            parse_bundle(text)
        parsed = parse_bundle(text, source_kind="module")
        self.assertEqual(parsed.module_slices, {"1": "function(){ a() }"})

    def test_unknown_source_kind_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            parse_bundle("", source_kind="jsx")

    def test_parse_bundle_file_keeps_line_endings(self) -> None:
        text = "webpackJsonp([0], {1: function(){\r\n a()\r\n}});"
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "chunk.js"
            path.write_bytes(text.encode("utf-8"))
            parsed = parse_bundle_file(path)
        self.assertEqual(parsed.full_text, text)
        self.assertEqual(parsed.module_slices["1"], "function(){\r\n a()\r\n}")

    def test_slices_and_runtime_rebuild_the_bundle(self) -> None:
        text = (
            "/* é */ webpackJsonp([0], Array(2).concat([\n"
            "  function(m){ m.exports = 'ü'; },\n"
            "  ,\n"
            "  (function(){ b() })\n"
            "]));\n"
        )
        parsed = parse_bundle(text)
        self.assertEqual(set(parsed.module_slices), {"2", "4"})

        runtime = parsed.runtime_text.encode("utf-8")
        rebuilt: list[bytes] = []
        runtime_index = 0
        last_end = 0
        for module_id, location in sorted(parsed.locations.items(), key=lambda item: item[1].start):
            gap = location.start - last_end
            rebuilt.append(runtime[runtime_index : runtime_index + gap])
            rebuilt.append(parsed.module_slices[module_id].encode("utf-8"))
            runtime_index += gap
            last_end = location.end
        rebuilt.append(runtime[runtime_index:])

        self.assertEqual(b"".join(rebuilt).decode("utf-8"), text)

    def test_parse_bundle_file_drops_byte_order_mark(self) -> None:
        text = "webpackJsonp([0], {1: function(){ a() }});"
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "chunk.js"
            path.write_bytes(b"\xef\xbb\xbf" + text.encode("utf-8"))
            parsed = parse_bundle_file(path)
        self.assertEqual(parsed.full_text, text)
        self.assertEqual(parsed.module_slices["1"], "function(){ a() }")


if __name__ == "__main__":
    unittest.main()
