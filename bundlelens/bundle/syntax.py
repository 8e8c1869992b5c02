"""Tree-sitter loading and small node helpers shared by the shape matchers.

All helpers take the UTF-8 encoded bundle bytes alongside the node, since
Tree-sitter nodes only carry byte offsets.
"""

from __future__ import annotations

import codecs
from functools import lru_cache

from .config import COMMENT_NODE_TYPES, ERROR_NODE_TYPE, GRAMMAR_NAME


@lru_cache(maxsize=1)
def load_parser():
    """Return the shared Tree-sitter JavaScript parser."""
    from tree_sitter_language_pack import get_parser

    return get_parser(GRAMMAR_NAME)


def node_text(source_bytes: bytes, node) -> str:
    """Decode source slice covered by a Tree-sitter node."""
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def significant_children(node) -> list:
    """Named children of ``node`` without comments."""
    return [child for child in node.named_children if child.type not in COMMENT_NODE_TYPES]


def unwrap_parens(node):
    """Strip any number of surrounding parenthesized expressions."""
    while node is not None and node.type == "parenthesized_expression":
        inner = significant_children(node)
        if len(inner) != 1:
            return node
        node = inner[0]
    return node


def field(node, name: str):
    """``child_by_field_name`` with parentheses removed."""
    if node is None:
        return None
    return unwrap_parens(node.child_by_field_name(name))


def call_arguments(node) -> list | None:
    """Return argument nodes of a call, or ``None`` for tagged templates."""
    arguments = node.child_by_field_name("arguments")
    if arguments is None or arguments.type != "arguments":
        return None
    return significant_children(arguments)


def array_elements(node) -> list:
    """Return array elements with ``None`` standing in for holes.

    Holes are not nodes in the grammar, so they are recovered from the comma
    tokens: ``[a,,b]`` gives ``[a, None, b]`` and ``[a,]`` gives ``[a]``.
    """
    elements: list = []
    current = None
    for child in node.children:
        if child.type in {"[", "]"} or child.type in COMMENT_NODE_TYPES:
            continue
        if child.type == ",":
            elements.append(current)
            current = None
            continue
        current = child
    if current is not None:
        elements.append(current)
    return elements


def number_value(source_bytes: bytes, node) -> int | float | None:
    """Numeric value of a ``number`` literal, ``None`` for BigInt or garbage."""
    text = node_text(source_bytes, node).replace("_", "")
    if text.endswith("n"):
        return None
    lowered = text.lower()
    try:
        if lowered.startswith(("0x", "0o", "0b")):
            return int(lowered, 0)
        value = float(text)
    except ValueError:
        return None
    return int(value) if value.is_integer() else value


def _decode_escape(text: str) -> str:
    try:
        return codecs.decode(text, "unicode_escape")
    except UnicodeDecodeError:
        return text[1:]


def string_value(source_bytes: bytes, node) -> str:
    """Cooked value of a ``string`` literal."""
    parts: list[str] = []
    for child in node.named_children:
        if child.type == "string_fragment":
            parts.append(node_text(source_bytes, child))
        elif child.type == "escape_sequence":
            parts.append(_decode_escape(node_text(source_bytes, child)))
    return "".join(parts)


def identifier_is(source_bytes: bytes, node, name: str) -> bool:
    """True when ``node`` is an identifier-like node spelled ``name``."""
    if node is None:
        return False
    if node.type not in {"identifier", "property_identifier"}:
        return False
    return node_text(source_bytes, node) == name


def first_error_node(root):
    """Return the first ``ERROR`` or missing node in document order, if any."""
    if not root.has_error:
        return None
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == ERROR_NODE_TYPE or node.is_missing:
            return node
        stack.extend(child for child in reversed(node.children) if child.has_error or child.is_missing)
    return root
