"""Grammar and node-kind configuration for bundle parsing."""

from __future__ import annotations

GRAMMAR_NAME = "javascript"

SOURCE_KINDS = ("script", "module")

COMMENT_NODE_TYPES = {
    "comment",
    "html_comment",
}

# ``function`` is the node name older grammar releases use for anonymous
# function expressions.
FUNCTION_NODE_TYPES = {
    "function_expression",
    "function",
    "generator_function",
    "arrow_function",
}

DECLARATION_NODE_TYPES = {
    "variable_declaration",
    "lexical_declaration",
}

ASSIGNMENT_NODE_TYPES = {
    "assignment_expression",
    "augmented_assignment_expression",
}

MODULE_SYNTAX_NODE_TYPES = {
    "import_statement",
    "export_statement",
}

ERROR_NODE_TYPE = "ERROR"
