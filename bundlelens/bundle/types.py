"""Datatypes produced by the bundle parser."""

from __future__ import annotations

from dataclasses import dataclass, field


class BundleParseError(ValueError):
    """Bundle text is not valid JavaScript for the requested source kind."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        if line is not None and column is not None:
            message = f"{message} ({line + 1}:{column})"
        super().__init__(message)
        self.line = line
        self.column = column


@dataclass(frozen=True)
class ModuleLocation:
    """Byte range ``[start, end)`` of one module body inside a bundle."""

    start: int
    end: int


@dataclass(frozen=True)
class ParsedBundle:
    """Result of splitting a bundle into module slices and runtime code."""

    module_slices: dict[str, str]
    full_text: str
    runtime_text: str
    locations: dict[str, ModuleLocation] = field(default_factory=dict)


__all__ = [
    "BundleParseError",
    "ModuleLocation",
    "ParsedBundle",
]
