"""Asset-name exclusion filters."""

from __future__ import annotations

import re
from collections.abc import Callable

AssetFilter = Callable[[str], bool]


def _exclude_function(pattern) -> Callable[[str], bool]:
    if isinstance(pattern, str):
        pattern = re.compile(pattern)
    if isinstance(pattern, re.Pattern):
        return lambda asset: pattern.search(asset) is not None
    if callable(pattern):
        return pattern
    raise TypeError(
        f"Pattern should be either a string, a compiled regex or a callable, but {pattern!r} got."
    )


def create_assets_filter(exclude_patterns) -> AssetFilter:
    """Return ``asset_name -> included`` for one or more exclude patterns.

    Strings are regexes searched anywhere in the name, callables return
    ``True`` for names to exclude. ``None`` or an empty list keeps everything.
    """
    patterns = exclude_patterns if isinstance(exclude_patterns, (list, tuple)) else [exclude_patterns]
    exclude_functions = [_exclude_function(pattern) for pattern in patterns if pattern]

    if not exclude_functions:
        return lambda asset: True
    return lambda asset: all(exclude(asset) is not True for exclude in exclude_functions)
