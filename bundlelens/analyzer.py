"""Turn a bundler stats manifest (plus optional bundle files) into chart data.

Each kept JavaScript asset becomes one exported tree. When the emitted
bundle files are available they are parsed to attach real source slices
to modules; otherwise the trees carry stats sizes only.
"""

from __future__ import annotations

import copy
import json
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .assets import create_assets_filter
from .bundle import BundleParseError, parse_bundle_file
from .options import AnalyzerOptions
from .sizes import byte_length, compressed_size
from .tree import Folder, create_modules_tree

logger = logging.getLogger(__name__)

FILENAME_QUERY_RE = re.compile(r"\?.*$")
FILENAME_EXTENSIONS_RE = re.compile(r"\.(js|mjs|cjs|bundle)$", re.IGNORECASE)
ENTRY_MODULES_NAME = "./entry modules"

StatsModule = dict[str, Any]


@dataclass(frozen=True)
class BundleSources:
    """Full and runtime text of one parsed asset."""

    src: str
    runtime_src: str


@dataclass
class ParsedAssets:
    """Outcome of parsing every asset file found in the bundle directory."""

    sources: dict[str, BundleSources] = field(default_factory=dict)
    modules: dict[str, str] = field(default_factory=dict)


def read_stats_file(path: Path) -> dict[str, Any]:
    """Load a stats JSON document."""
    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ValueError(f"Stats file {path} does not contain a JSON object")
    return data


def _flatten(items) -> list:
    """Flatten one level, like ``lodash.flatten``."""
    result: list = []
    for item in items or []:
        if isinstance(item, list):
            result.extend(item)
        else:
            result.append(item)
    return result


def _is_runtime_module(module: Mapping[str, Any]) -> bool:
    return module.get("moduleType") == "runtime"


def _is_entry_module(module: Mapping[str, Any]) -> bool:
    return module.get("depth") == 0


def get_bundle_modules(stats: Mapping[str, Any]) -> list[StatsModule]:
    """Chunk and top-level modules without runtime modules or duplicate ids."""
    modules = [chunk.get("modules") for chunk in stats.get("chunks") or []]
    modules.extend(stats.get("modules") or [])

    seen_ids: set = set()
    result: list[StatsModule] = []
    for module in _flatten(module for module in modules if module):
        if not module or _is_runtime_module(module):
            continue
        module_id = module.get("id")
        if module_id in seen_ids:
            continue
        seen_ids.add(module_id)
        result.append(module)
    return result


def _child_asset_stats(children: list[Mapping[str, Any]], asset_name: str) -> Mapping[str, Any] | None:
    for child in children:
        chunk_assets = _flatten((child.get("assetsByChunkName") or {}).values())
        if asset_name in chunk_assets:
            return child
    return None


def _asset_has_module(asset: Mapping[str, Any], module: Mapping[str, Any]) -> bool:
    asset_chunks = asset.get("chunks") or []
    return any(chunk in asset_chunks for chunk in module.get("chunks") or [])


def chunk_to_initial_by_entrypoint(stats: Mapping[str, Any] | None) -> dict[str, dict[str, bool]]:
    """Map asset name to the entrypoints that load it up front."""
    if stats is None:
        return {}
    result: dict[str, dict[str, bool]] = {}
    for entrypoint in (stats.get("entrypoints") or {}).values():
        for asset in entrypoint.get("assets") or []:
            name = asset["name"] if isinstance(asset, Mapping) else asset
            result.setdefault(name, {})[entrypoint.get("name")] = True
    return result


def _hoist_child_assets(stats: dict[str, Any]) -> dict[str, Any]:
    """Fold child compilations' assets into the top-level asset list."""
    children = stats.get("children") or []
    if not children:
        return stats

    if not stats.get("assets"):
        # Everything lives in the first child; later children contribute assets.
        hoisted = children[0]
        extra_children = children[1:]
    else:
        hoisted = stats
        extra_children = children

    hoisted["assets"] = list(hoisted.get("assets") or [])
    for child in extra_children:
        for asset in child.get("assets") or []:
            hoisted["assets"].append({**asset, "isChild": True})
    return hoisted


def _select_assets(assets: list[dict[str, Any]], is_asset_included) -> list[dict[str, Any]]:
    selected = []
    for asset in assets:
        # Non-"asset" types (e.g. auxiliary files) carry no modules.
        if asset.get("type") and asset["type"] != "asset":
            continue
        name = FILENAME_QUERY_RE.sub("", asset.get("name", ""))
        if not FILENAME_EXTENSIONS_RE.search(name) or not asset.get("chunks"):
            continue
        if not is_asset_included(name):
            continue
        selected.append({**asset, "name": name})
    return selected


def _prepare_stats(bundle_stats: Mapping[str, Any], is_asset_included):
    """Copy the stats, hoist child assets, and select the JavaScript assets."""
    full_stats = copy.deepcopy(dict(bundle_stats))
    children = list(full_stats.get("children") or [])
    stats = _hoist_child_assets(full_stats)
    return stats, children, _select_assets(stats.get("assets") or [], is_asset_included)


def parse_assets(assets: list[Mapping[str, Any]], bundle_dir: Path) -> ParsedAssets:
    """Parse each asset's file in ``bundle_dir``; failures are logged and skipped."""
    parsed = ParsedAssets()
    for asset in assets:
        asset_file = bundle_dir / asset["name"]
        source_kind = "module" if (asset.get("info") or {}).get("javascriptModule") else "script"
        try:
            bundle = parse_bundle_file(asset_file, source_kind=source_kind)
        except FileNotFoundError:
            logger.warning('Error parsing bundle asset "%s": no such file', asset_file)
            continue
        except (BundleParseError, OSError) as exc:
            logger.warning('Error parsing bundle asset "%s": %s', asset_file, exc)
            continue

        parsed.sources[asset["name"]] = BundleSources(src=bundle.full_text, runtime_src=bundle.runtime_text)
        parsed.modules.update(bundle.module_slices)
        logger.debug("Parsed %s: %d modules", asset["name"], len(bundle.module_slices))
    return parsed


def _attach_parsed_sources(
    asset_modules: list[StatsModule],
    parsed_modules: Mapping[str, str],
    asset_sources: BundleSources | None,
) -> list[StatsModule]:
    unparsed_entry_modules: list[StatsModule] = []
    for module in asset_modules:
        module_id = module.get("id")
        parsed_src = parsed_modules.get(str(module_id)) if module_id is not None else None
        if parsed_src:
            module["parsedSrc"] = parsed_src
        elif _is_entry_module(module):
            unparsed_entry_modules.append(module)

    # Entry modules of newer bundler releases are inlined at the end of the
    # runtime scope, so they own whatever code is left outside module slices.
    if not unparsed_entry_modules or asset_sources is None:
        return asset_modules

    if len(unparsed_entry_modules) == 1:
        unparsed_entry_modules[0]["parsedSrc"] = asset_sources.runtime_src
        return asset_modules

    remaining = [module for module in asset_modules if not any(module is entry for entry in unparsed_entry_modules)]
    entry_group: StatsModule = {
        "identifier": ENTRY_MODULES_NAME,
        "name": ENTRY_MODULES_NAME,
        "modules": unparsed_entry_modules,
        "size": sum(module.get("size") or 0 for module in unparsed_entry_modules),
        "parsedSrc": asset_sources.runtime_src,
    }
    return [entry_group, *remaining]


def _asset_chart(
    name: str,
    stat_size: int | None,
    tree: Folder,
    asset_sources: BundleSources | None,
    options: AnalyzerOptions,
    initial_by_entrypoint: Mapping[str, dict[str, bool]],
) -> dict[str, Any]:
    sizes: dict[str, int | None] = {"parsedSize": None, "gzipSize": None, "brotliSize": None, "zstdSize": None}
    if asset_sources is not None:
        sizes["parsedSize"] = byte_length(asset_sources.src)
        algorithm = options.compression_algorithm
        sizes[f"{algorithm}Size"] = compressed_size(algorithm, asset_sources.src)

    return {
        "label": name,
        "isAsset": True,
        # Stats module sizes are pre-minification; the asset's own size is
        # only meaningful when no modules were attributed to it.
        "statSize": tree.size or stat_size,
        **sizes,
        "groups": [child.to_chart_data() for child in tree.children.values()],
        "isInitialByEntrypoint": dict(initial_by_entrypoint.get(name, {})),
    }


def get_viewer_data(
    bundle_stats: Mapping[str, Any],
    bundle_dir: Path | str | None = None,
    *,
    compression_algorithm: str = "gzip",
    exclude_assets=None,
) -> list[dict[str, Any]]:
    """Build exported chart data for every JavaScript asset in ``bundle_stats``.

    ``bundle_stats`` is not modified. Assets whose bundle file is missing or
    unparseable keep stats-only sizes; the rest of the run continues.
    """
    options = AnalyzerOptions(compression_algorithm=compression_algorithm)
    is_asset_included = create_assets_filter(exclude_assets)

    stats, children, assets = _prepare_stats(bundle_stats, is_asset_included)

    parsed: ParsedAssets | None = None
    if bundle_dir is not None:
        parsed = parse_assets(assets, Path(bundle_dir))
        if not parsed.sources:
            parsed = None
            logger.warning("No bundles were parsed. Analyzer will show only original module sizes from stats file.")

    initial_by_entrypoint = chunk_to_initial_by_entrypoint(stats)
    result: list[dict[str, Any]] = []

    for asset in assets:
        asset_stats = _child_asset_stats(children, asset["name"]) if asset.get("isChild") else stats
        modules = get_bundle_modules(asset_stats) if asset_stats is not None else []
        asset_modules = [copy.copy(module) for module in modules if _asset_has_module(asset, module)]

        asset_sources = parsed.sources.get(asset["name"]) if parsed is not None else None
        if parsed is not None:
            asset_modules = _attach_parsed_sources(asset_modules, parsed.modules, asset_sources)

        tree = create_modules_tree(asset_modules, options)
        result.append(
            _asset_chart(asset["name"], asset.get("size"), tree, asset_sources, options, initial_by_entrypoint)
        )

    return result


def get_module_source(
    bundle_stats: Mapping[str, Any],
    bundle_dir: Path | str,
    module_id: str,
    *,
    exclude_assets=None,
) -> str | None:
    """Parsed source slice of one module id, or ``None`` if no asset contains it."""
    _, _, assets = _prepare_stats(bundle_stats, create_assets_filter(exclude_assets))
    parsed = parse_assets(assets, Path(bundle_dir))
    return parsed.modules.get(str(module_id))
