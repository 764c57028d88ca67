"""Tests for the campaignbridge CLI — screens, check, and render subcommands."""

import pytest

from campaignbridge.cli import main

SCREENS = {
    "dashboard.py": """
        def render(screen):
            return "<p>hello</p>"
    """,
    "settings/_config.py": """
        CONFIG = {"menu_title": "CB Settings"}
    """,
    "settings/general.py": """
        def render(screen):
            return f"<p>from:{screen.get('from_name')}</p>"
    """,
    "_partials/footer.py": "",
}


class TestNoCommand:
    def test_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "usage: campaignbridge" in capsys.readouterr().out


class TestScreens:
    def test_lists_screens(self, make_screens, capsys: pytest.CaptureFixture[str]) -> None:
        root = make_screens(SCREENS)
        main(["screens", str(root)])
        out = capsys.readouterr().out
        lines = out.splitlines()
        assert lines[0].split() == ["KIND", "SLUG", "TITLE", "CONTROLLER", "TABS"]
        assert lines[2].split() == ["single", "dashboard", "Dashboard", "-", "-"]
        assert "campaignbridge.controllers.Settings_Controller" in lines[3]
        assert "CB Settings" in lines[3]
        assert lines[3].endswith("general")
        assert "_partials" not in out

    def test_empty_directory(self, make_screens, capsys: pytest.CaptureFixture[str]) -> None:
        root = make_screens({})
        main(["screens", str(root)])
        out = capsys.readouterr().out
        assert "No screens found." in out

    def test_not_a_directory(self, tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["screens", str(tmp_path / "missing")])
        assert exc_info.value.code == 1
        assert "Error: not a directory" in capsys.readouterr().err


class TestCheck:
    def test_ok(self, make_screens, capsys: pytest.CaptureFixture[str]) -> None:
        root = make_screens(SCREENS)
        main(["check", str(root)])
        assert "OK: 2 screen(s), 0 issue(s)" in capsys.readouterr().out

    def test_broken_override_fails(self, make_screens, capsys: pytest.CaptureFixture[str]) -> None:
        root = make_screens(
            {
                **SCREENS,
                "_dashboard.py": "raise RuntimeError('boom')\n",
            }
        )
        with pytest.raises(SystemExit) as exc_info:
            main(["check", str(root)])
        assert exc_info.value.code == 1
        out = capsys.readouterr().out
        assert "error: configuration [dashboard]" in out
        assert "boom" in out
        assert "FAILED: 1 screen(s)" in out

    def test_composite_without_tabs(self, make_screens, capsys: pytest.CaptureFixture[str]) -> None:
        root = make_screens({"reports/": ""})
        with pytest.raises(SystemExit):
            main(["check", str(root)])
        assert "composite screen has no tabs" in capsys.readouterr().out

    def test_duplicate_slug_is_a_warning(
        self, make_screens, capsys: pytest.CaptureFixture[str]
    ) -> None:
        root = make_screens(
            {
                "dashboard.py": SCREENS["dashboard.py"],
                "home.py": SCREENS["dashboard.py"],
                "_home.py": 'CONFIG = {"slug": "dashboard"}\n',
            }
        )
        main(["check", str(root)])
        out = capsys.readouterr().out
        assert "warning: duplicate-slug [home]" in out
        assert "OK: 1 screen(s), 1 issue(s)" in out


class TestRender:
    def test_get(self, make_screens, capsys: pytest.CaptureFixture[str]) -> None:
        root = make_screens(SCREENS)
        main(["render", str(root), "dashboard"])
        out = capsys.readouterr().out
        assert '<h1>Dashboard</h1>' in out
        assert "<p>hello</p>" in out

    def test_post_saves_then_renders(
        self, make_screens, capsys: pytest.CaptureFixture[str]
    ) -> None:
        root = make_screens(SCREENS)
        main(["render", str(root), "settings", "--tab", "general", "--post", "from_name=Acme"])
        out = capsys.readouterr().out
        assert "<p>from:Acme</p>" in out
        assert "Settings saved." in out
        assert 'class="nav-tab nav-tab-active"' in out

    def test_bad_post_field(self, make_screens, capsys: pytest.CaptureFixture[str]) -> None:
        root = make_screens(SCREENS)
        with pytest.raises(SystemExit) as exc_info:
            main(["render", str(root), "settings", "--post", "no-equals"])
        assert exc_info.value.code == 2
        assert "KEY=VALUE" in capsys.readouterr().err

    def test_unknown_slug(self, make_screens, capsys: pytest.CaptureFixture[str]) -> None:
        root = make_screens(SCREENS)
        with pytest.raises(SystemExit) as exc_info:
            main(["render", str(root), "missing"])
        assert exc_info.value.code == 1
        assert "No admin page registered" in capsys.readouterr().err

    def test_assets_listed(self, make_screens, capsys: pytest.CaptureFixture[str]) -> None:
        root = make_screens(
            {
                "status.py": """
                    def render(screen):
                        screen.enqueue_style("status", "css/status.css")
                        return "<p>status</p>"
                """,
            }
        )
        main(["render", str(root), "status"])
        out = capsys.readouterr().out
        assert "<!-- assets -->" in out
        assert 'id="cb-status-css"' in out
