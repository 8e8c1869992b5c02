"""Split a bundle script into per-module source slices and runtime code.

One depth-first walk over the syntax tree looks for the modules container.
At each node the wrapper contexts are tried in priority order and the walk
stops at the first match. Call expressions that match no context are only
descended through their arguments, which is how containers buried in extra
wrapper calls (dedupe helpers, UMD library output) are still found.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .config import ASSIGNMENT_NODE_TYPES, MODULE_SYNTAX_NODE_TYPES, SOURCE_KINDS
from .shapes import CALL_SHAPES, match_exports_modules, match_top_level_wrapper, modules_locations
from .syntax import call_arguments, first_error_node, load_parser, significant_children
from .types import BundleParseError, ModuleLocation, ParsedBundle

logger = logging.getLogger(__name__)


def read_text(path: Path) -> str:
    """Read bundle text without newline translation.

    Decodes UTF-8 and drops a leading BOM; undecodable bytes are replaced.
    """
    data = path.read_bytes()
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("utf-8-sig", errors="replace")


def _check_syntax(root, source_kind: str) -> None:
    error_node = first_error_node(root)
    if error_node is not None:
        line, column = error_node.start_point
        reason = "Missing token" if error_node.is_missing else "Unexpected token"
        raise BundleParseError(reason, int(line), int(column))

    if source_kind == "module":
        return
    for statement in root.named_children:
        if statement.type in MODULE_SYNTAX_NODE_TYPES:
            line, column = statement.start_point
            raise BundleParseError(
                "'import' and 'export' may appear only with source kind 'module'",
                int(line),
                int(column),
            )


def find_modules_container(source: bytes, root) -> tuple[str, object] | None:
    """Return ``(shape_name, container_node)`` for the first matching container."""
    stack: list[tuple[object, bool]] = [(child, True) for child in reversed(significant_children(root))]

    while stack:
        node, top_level = stack.pop()
        node_type = node.type

        if node_type == "expression_statement":
            if top_level:
                container = match_top_level_wrapper(source, node)
                if container is not None:
                    return "top-level-wrapper", container
            stack.extend((child, False) for child in reversed(significant_children(node)))
            continue

        if node_type in ASSIGNMENT_NODE_TYPES:
            if node_type == "assignment_expression":
                container = match_exports_modules(source, node)
                if container is not None:
                    return "exports-modules", container
            continue

        if node_type == "call_expression":
            args = call_arguments(node)
            if args is None:
                stack.extend((child, False) for child in reversed(significant_children(node)))
                continue
            for shape_name, matcher in CALL_SHAPES:
                container = matcher(source, node)
                if container is not None:
                    return shape_name, container
            stack.extend((arg, False) for arg in reversed(args))
            continue

        stack.extend((child, False) for child in reversed(significant_children(node)))

    return None


def bundle_runtime(source: bytes, locations: dict[str, ModuleLocation]) -> bytes:
    """Return the bundle bytes with every module range cut out."""
    parts: list[bytes] = []
    last_index = 0
    for location in sorted(locations.values(), key=lambda item: item.start):
        parts.append(source[last_index : location.start])
        last_index = location.end
    parts.append(source[last_index:])
    return b"".join(parts)


def parse_bundle(text: str, source_kind: str = "script") -> ParsedBundle:
    """Locate module bodies inside ``text``.

    Raises ``BundleParseError`` when the text is not valid JavaScript. A
    bundle without a recognized container is not an error: it yields no
    module slices and the whole text as runtime code.
    """
    if source_kind not in SOURCE_KINDS:
        raise ValueError(f"Unknown source kind {source_kind!r}. Use one of these: {', '.join(SOURCE_KINDS)}")

    source = text.encode("utf-8")
    tree = load_parser().parse(source)
    _check_syntax(tree.root_node, source_kind)

    match = find_modules_container(source, tree.root_node)
    locations: dict[str, ModuleLocation] = {}
    if match is not None:
        shape_name, container = match
        locations = modules_locations(source, container)
        logger.debug("Found %d modules in %s container", len(locations), shape_name)
    else:
        logger.debug("No modules container found; treating bundle as runtime code")

    module_slices = {
        module_id: source[location.start : location.end].decode("utf-8")
        for module_id, location in locations.items()
    }
    return ParsedBundle(
        module_slices=module_slices,
        full_text=text,
        runtime_text=bundle_runtime(source, locations).decode("utf-8"),
        locations=locations,
    )


def parse_bundle_file(path: Path, source_kind: str = "script") -> ParsedBundle:
    """Read and parse one bundle asset from disk."""
    return parse_bundle(read_text(path), source_kind=source_kind)
