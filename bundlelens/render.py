"""Terminal rendering of chart data and module sources.

Chart groups are printed as a branch-drawn tree, one row per node, with the
selected size next to each label. Sizes estimated from a concatenated
module's share are marked with ``~``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import JavascriptLexer

SIZE_UNITS = ("B", "KB", "MB", "GB")
MISSING_SIZE = "—"

SIZE_FIELDS = {
    "stat": "statSize",
    "parsed": "parsedSize",
}

ASSET_COLOR = "\033[1;35m"
DIR_COLOR = "\033[1;34m"
FILE_COLOR = "\033[38;5;252m"
CONCATENATED_COLOR = "\033[38;5;179m"
BRANCH_COLOR = "\033[2;38;5;245m"
SIZE_COLOR = "\033[38;5;109m"
RESET = "\033[0m"


def format_size(size: int | float | None) -> str:
    """Human readable byte count: ``512 B``, ``1.5 KB``, ``2 MB``."""
    if size is None:
        return MISSING_SIZE
    if abs(size) < 1024:
        return f"{int(size)} B"
    value = float(size)
    for unit in SIZE_UNITS[1:]:
        value /= 1024
        if abs(value) < 1024:
            break
    return f"{value:.1f}".rstrip("0").rstrip(".") + f" {unit}"


def size_field_name(size_kind: str, compression_algorithm: str) -> str:
    """Chart key for ``stat``/``parsed``/``compressed`` under the active algorithm."""
    if size_kind == "compressed":
        return f"{compression_algorithm}Size"
    try:
        return SIZE_FIELDS[size_kind]
    except KeyError:
        raise ValueError(f"Unknown size kind {size_kind!r}") from None


def _paint(text: str, color: str, no_color: bool) -> str:
    return text if no_color else f"{color}{text}{RESET}"


def _node_color(node: Mapping[str, Any]) -> str:
    if node.get("isAsset"):
        return ASSET_COLOR
    if node.get("concatenated"):
        return CONCATENATED_COLOR
    if "groups" in node:
        return DIR_COLOR
    return FILE_COLOR


def _node_label(node: Mapping[str, Any], size_field: str, no_color: bool) -> str:
    label = str(node.get("label", ""))
    if "groups" in node and not node.get("isAsset") and not node.get("concatenated"):
        label += "/"
    size = node.get(size_field)
    size_text = format_size(size)
    if node.get("inaccurateSizes") and size_field != "statSize" and size is not None:
        size_text = "~" + size_text
    return f"{_paint(label, _node_color(node), no_color)} {_paint(f'[{size_text}]', SIZE_COLOR, no_color)}"


def render_chart_lines(
    chart: Iterable[Mapping[str, Any]],
    size_field: str = "statSize",
    max_depth: int | None = None,
    no_color: bool = False,
) -> list[str]:
    """Render every asset of ``chart`` as a tree; children below ``max_depth`` are cut."""
    lines: list[str] = []

    def walk(groups: list[Mapping[str, Any]], prefix: str, depth: int) -> None:
        if max_depth is not None and depth > max_depth:
            return
        for idx, group in enumerate(groups):
            last = idx == len(groups) - 1
            branch = "└─ " if last else "├─ "
            lines.append(f"{_paint(prefix + branch, BRANCH_COLOR, no_color)}{_node_label(group, size_field, no_color)}")
            children = group.get("groups") or []
            if children:
                walk(children, prefix + ("   " if last else "│  "), depth + 1)

    for asset in chart:
        if lines:
            lines.append("")
        lines.append(_node_label(asset, size_field, no_color))
        walk(list(asset.get("groups") or []), "", 1)
    return lines


def highlight_source(source: str, no_color: bool = False) -> str:
    """Return JavaScript ``source`` highlighted for a terminal."""
    if no_color:
        return source
    return highlight(source, JavascriptLexer(), TerminalFormatter())
