"""Tests for campaignbridge.assets — tiered asset queue and manifests."""

import json

import pytest

from campaignbridge.assets import AssetLoader, AssetQueue, AssetTier, enqueue_from_config

MANIFEST = "dist/app.asset.json"


class TestAssetQueue:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(AssetQueue(), AssetLoader)

    def test_style_depends_on_global(self) -> None:
        queue = AssetQueue(base_url="/static/")
        queue.enqueue_style("settings", "css/settings.css")
        (asset,) = queue.assets
        assert asset.handle == "cb-settings"
        assert asset.src == "/static/css/settings.css"
        assert asset.deps == ("cb-admin-global",)
        assert asset.kind == "style"

    def test_global_style_has_no_self_dependency(self) -> None:
        queue = AssetQueue()
        queue.enqueue_style("admin-global", "css/admin.css", tier=AssetTier.GLOBAL)
        assert queue.assets[0].deps == ()

    def test_script_defaults(self) -> None:
        queue = AssetQueue(version="1.0")
        queue.enqueue_script("status", "js/status.js", ("jquery",))
        (asset,) = queue.assets
        assert asset.deps == ("jquery",)
        assert asset.in_footer is True
        assert asset.version == "1.0"

    def test_reenqueue_replaces(self) -> None:
        queue = AssetQueue()
        queue.enqueue_script("status", "a.js")
        queue.enqueue_script("status", "b.js")
        assert [a.src for a in queue.assets] == ["b.js"]

    def test_clear_by_tier(self) -> None:
        queue = AssetQueue()
        queue.enqueue_style("g", "g.css", tier=AssetTier.GLOBAL)
        queue.enqueue_style("t", "t.css", tier=AssetTier.TAB)
        queue.clear(AssetTier.TAB)
        assert "g" in queue
        assert "t" not in queue
        queue.clear()
        assert queue.assets == ()

    def test_render_tags(self) -> None:
        queue = AssetQueue(version="2")
        queue.enqueue_script("status", "js/status.js")
        queue.localize("status", "cbStatus", {"html": "</script>"})
        queue.enqueue_style("panel", "css/panel.css?x=1")
        tags = queue.render_tags()

        lines = tags.splitlines()
        assert lines[0] == '<link rel="stylesheet" id="cb-panel-css" href="css/panel.css?x=1&amp;ver=2">'
        assert lines[1] == '<script>var cbStatus = {"html": "<\\/script>"};</script>'
        assert lines[2] == '<script id="cb-status-js" src="js/status.js?ver=2"></script>'


class TestManifests:
    def _write(self, tmp_path, name: str, meta: dict, *, css: bool = True, js: bool = True) -> str:
        dist = tmp_path / "dist"
        dist.mkdir(exist_ok=True)
        (dist / f"{name}.asset.json").write_text(json.dumps(meta))
        if css:
            (dist / f"{name}.css").write_text("")
        if js:
            (dist / f"{name}.js").write_text("")
        return f"dist/{name}.asset.json"

    def test_enqueues_both_parts(self, tmp_path) -> None:
        manifest = self._write(tmp_path, "status", {"dependencies": ["wp-element"], "version": "3f2a"})
        queue = AssetQueue(root=tmp_path)
        assert queue.enqueue_manifest("status", manifest) == {"style": True, "script": True}

        style, script = queue.assets
        assert style.src == "dist/status.css"
        assert style.deps == ("cb-admin-global", "wp-element")
        assert script.src == "dist/status.js"
        assert script.version == "3f2a"

    def test_missing_parts(self, tmp_path) -> None:
        manifest = self._write(tmp_path, "editor", {}, css=False)
        queue = AssetQueue(root=tmp_path)
        assert queue.enqueue_manifest("editor", manifest) == {"style": False, "script": True}

    def test_script_only(self, tmp_path) -> None:
        manifest = self._write(tmp_path, "status", {})
        queue = AssetQueue(root=tmp_path)
        assert queue.enqueue_manifest("status", manifest, style=False) == {
            "style": False,
            "script": True,
        }

    def test_missing_manifest(self, tmp_path) -> None:
        queue = AssetQueue(root=tmp_path)
        assert queue.enqueue_manifest("x", "dist/x.asset.json") == {"style": False, "script": False}

    def test_unreadable_manifest(self, tmp_path) -> None:
        (tmp_path / "bad.asset.json").write_text("{not json")
        queue = AssetQueue(root=tmp_path)
        assert queue.enqueue_manifest("bad", "bad.asset.json") == {"style": False, "script": False}


class TestEnqueueFromConfig:
    def test_all_shapes(self, tmp_path) -> None:
        (tmp_path / "dist").mkdir()
        (tmp_path / "dist" / "app.asset.json").write_text("{}")
        (tmp_path / "dist" / "app.js").write_text("")
        queue = AssetQueue(root=tmp_path)
        enqueue_from_config(
            queue,
            {
                "styles": {"status": "css/status.css"},
                "scripts": {
                    "plain": "js/plain.js",
                    "rich": {"src": "js/rich.js", "deps": ["jquery"], "in_footer": False},
                    "broken": {"deps": ["jquery"]},
                },
                "manifests": {"app": "dist/app.asset.json"},
            },
            AssetTier.SCREEN,
        )
        handles = [a.handle for a in queue.by_tier(AssetTier.SCREEN)]
        assert handles == ["cb-status", "cb-plain", "cb-rich", "cb-app"]
        rich = next(a for a in queue.assets if a.handle == "cb-rich")
        assert rich.in_footer is False
        assert rich.deps == ("jquery",)

    def test_plain_scripts_default_to_jquery(self) -> None:
        queue = AssetQueue()
        enqueue_from_config(
            queue,
            {"scripts": {"plain": "js/plain.js", "bare": {"src": "js/bare.js", "deps": []}}},
            AssetTier.SCREEN,
        )
        deps = {a.handle: a.deps for a in queue.assets}
        assert deps == {"cb-plain": ("jquery",), "cb-bare": ()}


class TestEnqueueBuiltAssets:
    @pytest.fixture
    def root(self, tmp_path):
        dist = tmp_path / "dist"
        dist.mkdir()
        (dist / "app.asset.json").write_text(json.dumps({"dependencies": ["wp-element"]}))
        (dist / "app.css").write_text("")
        (dist / "app.js").write_text("")
        return tmp_path

    def test_asset_styles_enqueue_css_only(self, root) -> None:
        queue = AssetQueue(root=root)
        enqueue_from_config(queue, {"asset_styles": {"app": MANIFEST}}, AssetTier.SCREEN)
        assert [(a.kind, a.src) for a in queue.assets] == [("style", "dist/app.css")]

    def test_asset_scripts_string(self, root) -> None:
        queue = AssetQueue(root=root)
        enqueue_from_config(queue, {"asset_scripts": {"app": MANIFEST}}, AssetTier.SCREEN)
        (asset,) = queue.assets
        assert (asset.kind, asset.src) == ("script", "dist/app.js")
        assert asset.deps == ("wp-element",)
        assert asset.in_footer is True

    def test_asset_scripts_mapping(self, root) -> None:
        queue = AssetQueue(root=root)
        enqueue_from_config(
            queue,
            {
                "asset_scripts": {
                    "app": {"path": "dist/app.asset.json", "deps": ["wp-api"], "in_footer": False},
                    "broken": {"deps": ["wp-api"]},
                }
            },
            AssetTier.SCREEN,
        )
        (asset,) = queue.assets
        assert asset.handle == "cb-app"
        assert asset.deps == ("wp-element", "wp-api")
        assert asset.in_footer is False

    def test_asset_both(self, root) -> None:
        queue = AssetQueue(root=root)
        enqueue_from_config(queue, {"asset_both": {"app": "dist/app.asset.json"}}, AssetTier.TAB)
        assert sorted(a.kind for a in queue.by_tier(AssetTier.TAB)) == ["script", "style"]
