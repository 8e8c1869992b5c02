"""Turn a stats module record into folder/file path segments."""

from __future__ import annotations

import re
from collections.abc import Mapping

MULTI_MODULE_RE = re.compile(r"^multi ")


def module_path_parts(module_data: Mapping) -> list[str] | None:
    """Return path segments for a module record, or ``None`` without a usable name.

    Synthetic multi-entry modules keep their whole identifier as one segment.
    Otherwise loader prefixes (``a-loader!b-loader!./src/x.js``) are dropped,
    the leading ``.`` segment is removed and ``~`` expands to ``node_modules``.
    """
    identifier = module_data.get("identifier")
    if isinstance(identifier, str) and MULTI_MODULE_RE.match(identifier):
        return [identifier]

    name = module_data.get("name")
    if not name or not isinstance(name, str):
        return None

    raw_path = name.split("!")[-1]
    parts = ["node_modules" if part == "~" else part for part in raw_path.split("/")[1:]]
    return parts or None
