"""Asset tiers — stylesheets and scripts registered per scope.

Three tiers, from broadest to narrowest:

- ``GLOBAL``: every admin screen (``AdminConfig.global_assets``)
- ``SCREEN``: one screen (the ``assets`` override key)
- ``TAB``: the active tab (``screen.enqueue_style(...)`` inside a tab view)

The engine only talks to the ``AssetLoader`` protocol.  ``AssetQueue``
is the in-process implementation: it records what was requested and
renders ``<link>``/``<script>`` tags for hosts without an asset
pipeline of their own.

Built assets ship a JSON manifest next to the bundle::

    dist/admin/status.asset.json   {"dependencies": ["wp-element"], "version": "3f2a"}
    dist/admin/status.css
    dist/admin/status.js
"""

from __future__ import annotations

import html
import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger("campaignbridge.assets")

_MANIFEST_SUFFIX = ".asset.json"


class AssetTier(Enum):
    GLOBAL = "global"
    SCREEN = "screen"
    TAB = "tab"


@dataclass(frozen=True, slots=True)
class Asset:
    """One enqueued stylesheet or script."""

    handle: str
    src: str
    kind: str  # "style" or "script"
    tier: AssetTier
    deps: tuple[str, ...] = ()
    version: str | None = None
    in_footer: bool = True


@runtime_checkable
class AssetLoader(Protocol):
    """Registration surface the engine forwards asset requests to."""

    def enqueue_style(
        self,
        handle: str,
        src: str,
        deps: Sequence[str] = (),
        version: str | None = None,
        *,
        tier: AssetTier = AssetTier.SCREEN,
    ) -> None: ...

    def enqueue_script(
        self,
        handle: str,
        src: str,
        deps: Sequence[str] = (),
        version: str | None = None,
        in_footer: bool = True,
        *,
        tier: AssetTier = AssetTier.SCREEN,
    ) -> None: ...

    def enqueue_manifest(
        self,
        handle: str,
        manifest: str,
        *,
        style: bool = True,
        script: bool = True,
        deps: Sequence[str] = (),
        in_footer: bool = True,
        tier: AssetTier = AssetTier.SCREEN,
    ) -> dict[str, bool]: ...

    def localize(self, handle: str, object_name: str, data: Mapping[str, Any]) -> None: ...


class AssetQueue:
    """Records enqueued assets and renders them as HTML tags.

    Handles are prefixed (``cb-`` by default) and stylesheets depend on
    the global admin stylesheet, mirroring how the host namespaces
    plugin assets.  Styles and scripts have separate handle namespaces;
    re-enqueueing a handle of the same kind replaces the earlier entry.
    """

    __slots__ = ("_assets", "_base_url", "_localized", "_prefix", "_root", "_version")

    def __init__(
        self,
        *,
        base_url: str = "",
        root: str | Path = ".",
        prefix: str = "cb-",
        version: str | None = None,
    ) -> None:
        self._base_url = base_url
        self._root = Path(root)
        self._prefix = prefix
        self._version = version
        self._assets: dict[tuple[str, str], Asset] = {}
        self._localized: dict[str, dict[str, Mapping[str, Any]]] = {}

    @property
    def assets(self) -> tuple[Asset, ...]:
        return tuple(self._assets.values())

    def by_tier(self, tier: AssetTier) -> tuple[Asset, ...]:
        return tuple(a for a in self._assets.values() if a.tier is tier)

    def __contains__(self, handle: object) -> bool:
        handles = {a.handle for a in self._assets.values()}
        return handle in handles or f"{self._prefix}{handle}" in handles

    def clear(self, tier: AssetTier | None = None) -> None:
        """Drop every asset, or only those in *tier*."""
        if tier is None:
            self._assets.clear()
            self._localized.clear()
            return
        for key in [k for k, a in self._assets.items() if a.tier is tier]:
            del self._assets[key]

    def enqueue_style(
        self,
        handle: str,
        src: str,
        deps: Sequence[str] = (),
        version: str | None = None,
        *,
        tier: AssetTier = AssetTier.SCREEN,
    ) -> None:
        global_handle = f"{self._prefix}admin-global"
        full = f"{self._prefix}{handle}"
        base_deps = () if full == global_handle else (global_handle,)
        self._add(
            Asset(
                handle=full,
                src=self._base_url + src,
                kind="style",
                tier=tier,
                deps=(*base_deps, *deps),
                version=version or self._version,
            )
        )

    def enqueue_script(
        self,
        handle: str,
        src: str,
        deps: Sequence[str] = (),
        version: str | None = None,
        in_footer: bool = True,
        *,
        tier: AssetTier = AssetTier.SCREEN,
    ) -> None:
        self._add(
            Asset(
                handle=f"{self._prefix}{handle}",
                src=self._base_url + src,
                kind="script",
                tier=tier,
                deps=tuple(deps),
                version=version or self._version,
                in_footer=in_footer,
            )
        )

    def enqueue_manifest(
        self,
        handle: str,
        manifest: str,
        *,
        style: bool = True,
        script: bool = True,
        deps: Sequence[str] = (),
        in_footer: bool = True,
        tier: AssetTier = AssetTier.SCREEN,
    ) -> dict[str, bool]:
        """Enqueue the CSS and/or JS bundle described by a build manifest.

        Returns ``{"style": bool, "script": bool}`` telling which parts
        were found and enqueued.  Missing files are logged, not raised.
        """
        result = {"style": False, "script": False}
        meta = self._read_manifest(manifest)
        if meta is None:
            return result

        manifest_deps = tuple(meta.get("dependencies", ()))
        version = meta.get("version")
        if style:
            css = manifest.removesuffix(_MANIFEST_SUFFIX) + ".css"
            if (self._root / css).is_file():
                self.enqueue_style(handle, css, (*manifest_deps, *deps), version, tier=tier)
                result["style"] = True
            else:
                logger.debug("CSS file not found: %s", css)
        if script:
            js = manifest.removesuffix(_MANIFEST_SUFFIX) + ".js"
            if (self._root / js).is_file():
                self.enqueue_script(
                    handle, js, (*manifest_deps, *deps), version, in_footer, tier=tier
                )
                result["script"] = True
            else:
                logger.debug("JS file not found: %s", js)
        return result

    def localize(self, handle: str, object_name: str, data: Mapping[str, Any]) -> None:
        self._localized.setdefault(f"{self._prefix}{handle}", {})[object_name] = dict(data)

    def render_tags(self) -> str:
        """Render every queued asset, stylesheets first, then scripts."""
        lines: list[str] = []
        for asset in self._assets.values():
            if asset.kind == "style":
                lines.append(
                    f'<link rel="stylesheet" id="{html.escape(asset.handle)}-css" '
                    f'href="{html.escape(self._versioned(asset))}">'
                )
        for asset in self._assets.values():
            if asset.kind != "script":
                continue
            for object_name, data in self._localized.get(asset.handle, {}).items():
                payload = json.dumps(data).replace("</", "<\\/")
                lines.append(f"<script>var {object_name} = {payload};</script>")
            lines.append(
                f'<script id="{html.escape(asset.handle)}-js" '
                f'src="{html.escape(self._versioned(asset))}"></script>'
            )
        return "\n".join(lines)

    def _versioned(self, asset: Asset) -> str:
        if not asset.version:
            return asset.src
        separator = "&" if "?" in asset.src else "?"
        return f"{asset.src}{separator}ver={asset.version}"

    def _add(self, asset: Asset) -> None:
        self._assets[asset.kind, asset.handle] = asset

    def _read_manifest(self, manifest: str) -> Mapping[str, Any] | None:
        path = self._root / manifest
        if not path.is_file():
            logger.debug("Asset manifest not found: %s", path)
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Unreadable asset manifest: %s", path)
            return None
        return data if isinstance(data, Mapping) else None


def _script_entry(
    handle: str, entry: Any, default_deps: tuple[str, ...]
) -> tuple[str, tuple[str, ...], bool] | None:
    """Split a ``scripts``/``asset_scripts`` value into (src, deps, in_footer)."""
    if not isinstance(entry, Mapping):
        return str(entry), default_deps, True
    src = entry.get("src") or entry.get("path") or ""
    if not src:
        logger.warning("Script %r has no src; skipped", handle)
        return None
    deps = tuple(entry["deps"]) if "deps" in entry else default_deps
    return src, deps, bool(entry.get("in_footer", True))


def enqueue_from_config(loader: AssetLoader, assets: Mapping[str, Any], tier: AssetTier) -> None:
    """Apply an ``assets`` override block to *loader*.

    Shape::

        {
            # plain files
            "styles":        {"status": "css/status.css"},
            "scripts":       {"status": "js/status.js"},           # deps: jquery
            # built bundles, addressed by their manifest
            "asset_styles":  {"status": "dist/status.asset.json"},  # css only
            "asset_scripts": {"status": "dist/status.asset.json"},  # js only, or
                             {"status": {"src": "dist/status.asset.json",
                                         "deps": ["wp-api"], "in_footer": False}},
            "asset_both":    {"status": "dist/status.asset.json"},  # css + js
        }

    Script mappings accept ``path`` in place of ``src``.  Plain scripts
    without ``deps`` depend on ``jquery``; bundled scripts only on what
    their manifest lists.  ``manifests`` is accepted as an alias of
    ``asset_both``.
    """
    for handle, src in (assets.get("styles") or {}).items():
        loader.enqueue_style(handle, src, tier=tier)

    for handle, script in (assets.get("scripts") or {}).items():
        entry = _script_entry(handle, script, ("jquery",))
        if entry is not None:
            src, deps, in_footer = entry
            loader.enqueue_script(handle, src, deps, in_footer=in_footer, tier=tier)

    for handle, manifest in (assets.get("asset_styles") or {}).items():
        loader.enqueue_manifest(handle, manifest, script=False, tier=tier)

    for handle, script in (assets.get("asset_scripts") or {}).items():
        entry = _script_entry(handle, script, ())
        if entry is not None:
            manifest, deps, in_footer = entry
            loader.enqueue_manifest(
                handle, manifest, style=False, deps=deps, in_footer=in_footer, tier=tier
            )

    both = {**(assets.get("manifests") or {}), **(assets.get("asset_both") or {})}
    for handle, manifest in both.items():
        loader.enqueue_manifest(handle, manifest, tier=tier)
