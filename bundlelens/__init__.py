"""Public package surface for bundlelens.

Exports ``main`` for programmatic CLI invocation and ``get_viewer_data``
for library use. Implementation lives in the submodules.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


def get_viewer_data(*args, **kwargs):
    """Lazily import the analyzer; see ``bundlelens.analyzer.get_viewer_data``."""
    from .analyzer import get_viewer_data as _get_viewer_data

    return _get_viewer_data(*args, **kwargs)


__all__ = ["get_viewer_data", "main"]
