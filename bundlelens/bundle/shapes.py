"""Recognizers for the syntactic shapes bundlers use to hold module bodies.

A *container* is the hash or array literal keyed by module id. Containers
are found inside one of several *wrapper contexts* (top-level IIFE, async
chunk call, ``exports.modules`` assignment, ...). Every matcher here is a
pure function of one node and the bundle bytes; the traversal order and
precedence live in ``parser.py``.
"""

from __future__ import annotations

from collections.abc import Callable

from .config import DECLARATION_NODE_TYPES, FUNCTION_NODE_TYPES
from .syntax import (
    array_elements,
    call_arguments,
    field,
    identifier_is,
    node_text,
    number_value,
    significant_children,
    string_value,
    unwrap_parens,
)
from .types import ModuleLocation

ContainerMatcher = Callable[[bytes, object], object | None]


# ---------------------------------------------------------------------------
# Module ids and wrappers
# ---------------------------------------------------------------------------


def is_numeric_id(source: bytes, node) -> bool:
    """Non-negative integer literal."""
    if node is None or node.type != "number":
        return False
    value = number_value(source, node)
    return isinstance(value, int) and value >= 0


def is_module_id(source: bytes, node) -> bool:
    """Numeric id or string literal."""
    node = unwrap_parens(node)
    if node is None:
        return False
    return node.type == "string" or is_numeric_id(source, node)


def is_anonymous_function(node) -> bool:
    return node is not None and node.type in FUNCTION_NODE_TYPES and node.child_by_field_name("name") is None


def is_module_wrapper(source: bytes, node) -> bool:
    """One container entry: a function, a dedupe alias id, or ``[id, ...args]``."""
    node = unwrap_parens(node)
    if node is None:
        return False
    if is_anonymous_function(node):
        return True
    if is_module_id(source, node):
        return True
    if node.type == "array":
        elements = array_elements(node)
        return len(elements) > 1 and is_module_id(source, elements[0])
    return False


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------


def is_modules_hash(source: bytes, node) -> bool:
    """Object literal whose every member value is a module wrapper."""
    node = unwrap_parens(node)
    if node is None or node.type != "object":
        return False
    for member in significant_children(node):
        if member.type == "spread_element":
            continue
        if member.type == "method_definition":
            continue
        if member.type != "pair":
            return False
        if not is_module_wrapper(source, member.child_by_field_name("value")):
            return False
    return True


def is_modules_array(source: bytes, node) -> bool:
    """Array literal of module wrappers; holes are skipped ids."""
    node = unwrap_parens(node)
    if node is None or node.type != "array":
        return False
    return all(element is None or is_module_wrapper(source, element) for element in array_elements(node))


def is_simple_modules_list(source: bytes, node) -> bool:
    return is_modules_hash(source, node) or is_modules_array(source, node)


def _compacted_array_parts(source: bytes, node):
    """Return ``(base_id, inner_array)`` for ``Array(N).concat([...])``."""
    node = unwrap_parens(node)
    if node is None or node.type != "call_expression":
        return None
    callee = field(node, "function")
    if callee is None or callee.type != "member_expression":
        return None
    if not identifier_is(source, callee.child_by_field_name("property"), "concat"):
        return None
    array_call = field(callee, "object")
    if array_call is None or array_call.type != "call_expression":
        return None
    if not identifier_is(source, field(array_call, "function"), "Array"):
        return None
    array_args = call_arguments(array_call)
    if array_args is None or len(array_args) != 1 or not is_numeric_id(source, array_args[0]):
        return None
    concat_args = call_arguments(node)
    if concat_args is None or len(concat_args) != 1:
        return None
    return number_value(source, array_args[0]), unwrap_parens(concat_args[0])


def is_compacted_modules_array(source: bytes, node) -> bool:
    """``Array(<min id>).concat([<module>, ...])`` emitted by old bundler releases."""
    parts = _compacted_array_parts(source, node)
    return parts is not None and is_modules_array(source, parts[1])


def is_modules_list(source: bytes, node) -> bool:
    return is_simple_modules_list(source, node) or is_compacted_modules_array(source, node)


# ---------------------------------------------------------------------------
# Locations
# ---------------------------------------------------------------------------


def _location(node) -> ModuleLocation:
    node = unwrap_parens(node)
    return ModuleLocation(start=node.start_byte, end=node.end_byte)


def _number_key(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def _property_key(source: bytes, key) -> str | None:
    if key is None:
        return None
    if key.type == "computed_property_name":
        inner = significant_children(key)
        if len(inner) != 1:
            return None
        key = unwrap_parens(inner[0])
    if key.type == "string":
        return string_value(source, key)
    if key.type == "number":
        value = number_value(source, key)
        return None if value is None else _number_key(value)
    if key.type in {"property_identifier", "identifier"}:
        return node_text(source, key)
    return None


def _hash_locations(source: bytes, node) -> dict[str, ModuleLocation]:
    locations: dict[str, ModuleLocation] = {}
    for member in significant_children(node):
        if member.type == "pair":
            module_id = _property_key(source, member.child_by_field_name("key"))
            value = member.child_by_field_name("value")
            if module_id is None or module_id == "undefined" or value is None:
                continue
            locations[module_id] = _location(value)
        elif member.type == "method_definition":
            module_id = _property_key(source, member.child_by_field_name("name"))
            parameters = member.child_by_field_name("parameters")
            body = member.child_by_field_name("body")
            if module_id is None or module_id == "undefined" or parameters is None or body is None:
                continue
            locations[module_id] = ModuleLocation(start=parameters.start_byte, end=body.end_byte)
    return locations


def _array_locations(elements: list, base_id: int) -> dict[str, ModuleLocation]:
    return {
        str(index + base_id): _location(element)
        for index, element in enumerate(elements)
        if element is not None
    }


def modules_locations(source: bytes, node) -> dict[str, ModuleLocation]:
    """Map every module id in a container to the range of its wrapper."""
    node = unwrap_parens(node)
    if node is None:
        return {}
    if node.type == "object":
        return _hash_locations(source, node)
    if node.type == "array":
        return _array_locations(array_elements(node), 0)
    parts = _compacted_array_parts(source, node)
    if parts is not None:
        base_id, inner = parts
        if inner is not None and inner.type == "array":
            return _array_locations(array_elements(inner), int(base_id))
    return {}


# ---------------------------------------------------------------------------
# Wrapper contexts
# ---------------------------------------------------------------------------


def is_chunk_ids(source: bytes, node) -> bool:
    """Array of numeric or string chunk ids."""
    node = unwrap_parens(node)
    if node is None or node.type != "array":
        return False
    return all(is_module_id(source, element) for element in array_elements(node))


def may_be_async_chunk_arguments(source: bytes, args: list) -> bool:
    return (
        len(args) >= 2
        and args[0] is not None
        and args[0].type != "spread_element"
        and is_chunk_ids(source, args[0])
    )


def _iife_call(statement):
    """Call expression of ``(fn)()`` or ``!fn()`` statements."""
    children = significant_children(statement)
    if not children:
        return None
    expression = unwrap_parens(children[0])
    if expression is not None and expression.type == "unary_expression":
        expression = field(expression, "argument")
    if expression is None or expression.type != "call_expression":
        return None
    return expression


def _has_no_parameters(function) -> bool:
    if function.child_by_field_name("parameter") is not None:
        return False
    parameters = function.child_by_field_name("parameters")
    return parameters is None or not significant_children(parameters)


def match_top_level_wrapper(source: bytes, statement):
    """Modules stashed in the first variable declaration of a bare IIFE.

    ``(() => { var __modules__ = {...}; ... })()``: the call takes no
    arguments, the function takes no parameters, and the first declarator
    of the first declaration whose initializer is a container wins.
    """
    call = _iife_call(statement)
    if call is None:
        return None
    args = call_arguments(call)
    if args is None or args:
        return None
    function = field(call, "function")
    if function is None or function.type not in FUNCTION_NODE_TYPES or not _has_no_parameters(function):
        return None
    body = function.child_by_field_name("body")
    if body is None or body.type != "statement_block":
        return None

    declaration = next(
        (child for child in significant_children(body) if child.type in DECLARATION_NODE_TYPES),
        None,
    )
    if declaration is None:
        return None
    for declarator in significant_children(declaration):
        if declarator.type != "variable_declarator":
            continue
        value = field(declarator, "value")
        if value is not None and is_modules_list(source, value):
            return value
    return None


def match_exports_modules(source: bytes, assignment):
    """``exports.modules = <container>``."""
    left = field(assignment, "left")
    if left is None or left.type != "member_expression":
        return None
    if not identifier_is(source, field(left, "object"), "exports"):
        return None
    if not identifier_is(source, left.child_by_field_name("property"), "modules"):
        return None
    right = field(assignment, "right")
    if right is not None and is_modules_list(source, right):
        return right
    return None


def match_iife_argument(source: bytes, call):
    """``(function (modules) {...})(<container>)``: the main chunk with its loader."""
    callee = field(call, "function")
    if callee is None or callee.type not in {"function_expression", "function"}:
        return None
    if callee.child_by_field_name("name") is not None:
        return None
    args = call_arguments(call)
    if args is None or len(args) != 1 or not is_simple_modules_list(source, args[0]):
        return None
    return args[0]


def match_async_chunk_call(source: bytes, call):
    """``webpackJsonp([<chunk ids>], <container>, ...)`` with any callee name."""
    callee = field(call, "function")
    if callee is None or callee.type != "identifier":
        return None
    args = call_arguments(call)
    if args is None or not may_be_async_chunk_arguments(source, args):
        return None
    if args[1].type == "spread_element" or not is_modules_list(source, args[1]):
        return None
    return args[1]


def match_async_chunk_push(source: bytes, call):
    """``(self.chunks = self.chunks || []).push([[<chunk ids>], <container>, ...])``."""
    callee = field(call, "function")
    if callee is None or callee.type != "member_expression":
        return None
    if not identifier_is(source, callee.child_by_field_name("property"), "push"):
        return None
    target = field(callee, "object")
    if target is None or target.type != "assignment_expression":
        return None
    args = call_arguments(call)
    if args is None or len(args) != 1:
        return None
    payload = unwrap_parens(args[0])
    if payload is None or payload.type != "array":
        return None
    elements = array_elements(payload)
    if not may_be_async_chunk_arguments(source, elements):
        return None
    if elements[1] is None or not is_modules_list(source, elements[1]):
        return None
    return elements[1]


def match_worker_chunk_call(source: bytes, call):
    """``<global>.<callback>([<chunk ids>], <container>)`` from worker chunks.

    Both the global object and the callback name are configurable, so only
    the call shape is checked.
    """
    callee = field(call, "function")
    if callee is None or callee.type != "member_expression":
        return None
    args = call_arguments(call)
    if args is None or len(args) != 2:
        return None
    if args[0].type == "spread_element" or not is_chunk_ids(source, args[0]):
        return None
    if not is_modules_list(source, args[1]):
        return None
    return args[1]


CALL_SHAPES: tuple[tuple[str, ContainerMatcher], ...] = (
    ("iife-argument", match_iife_argument),
    ("async-chunk", match_async_chunk_call),
    ("async-chunk-push", match_async_chunk_push),
    ("worker-chunk", match_worker_chunk_call),
)
