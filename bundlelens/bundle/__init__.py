"""Bundle-script parsing: module containers, slices, and runtime code."""

from __future__ import annotations

from .parser import bundle_runtime, find_modules_container, parse_bundle, parse_bundle_file, read_text
from .types import BundleParseError, ModuleLocation, ParsedBundle

__all__ = [
    "BundleParseError",
    "ModuleLocation",
    "ParsedBundle",
    "bundle_runtime",
    "find_modules_container",
    "parse_bundle",
    "parse_bundle_file",
    "read_text",
]
