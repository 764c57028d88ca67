"""Tests for campaignbridge.screens.overrides — override sources and merging."""

import logging

import pytest

from campaignbridge.errors import ConfigurationError
from campaignbridge.screens.overrides import (
    MappingOverrideLoader,
    ModuleOverrideLoader,
    NullOverrideLoader,
    merge_configuration,
)


class TestMergeConfiguration:
    def test_later_layers_win(self) -> None:
        merged = merge_configuration({"title": "A"}, {"title": "B"}, {"title": "C"})
        assert merged["title"] == "C"

    def test_absent_override_keeps_derived(self) -> None:
        merged = merge_configuration({"title": "A"}, {"title": "B"}, None)
        assert merged["title"] == "B"

    def test_disjoint_keys_combine(self) -> None:
        merged = merge_configuration({"capability": "manage_options"}, {"menu_title": "X"})
        assert merged == {"capability": "manage_options", "menu_title": "X"}

    def test_inputs_not_mutated(self) -> None:
        defaults = {"title": "A"}
        merge_configuration(defaults, {"title": "B"})
        assert defaults == {"title": "A"}


class TestMappingOverrideLoader:
    def test_screen_and_tab_keys(self) -> None:
        loader = MappingOverrideLoader({
            "settings": {"menu_title": "CB Settings"},
            "settings/general": {"order": 1},
        })
        assert loader.load("settings") == {"menu_title": "CB Settings"}
        assert loader.load("general", "settings") == {"order": 1}
        assert loader.load("general") is None

    def test_null_loader(self) -> None:
        assert NullOverrideLoader().load("anything") is None


class TestModuleOverrideLoader:
    def test_container_config_entry(self, make_screens) -> None:
        root = make_screens({
            "settings/_config.py": "CONFIG = {'menu_title': 'CB Settings'}\n",
            "settings/general.py": "",
        })
        assert ModuleOverrideLoader(root).load("settings") == {"menu_title": "CB Settings"}

    def test_single_screen_sibling_file(self, make_screens) -> None:
        root = make_screens({
            "dashboard.py": "",
            "_dashboard.py": "CONFIG = {'position': 2}\n",
        })
        assert ModuleOverrideLoader(root).load("dashboard") == {"position": 2}

    def test_tab_file(self, make_screens) -> None:
        root = make_screens({
            "settings/general.py": "",
            "settings/_general.py": "CONFIG = {'label': 'Sending'}\n",
        })
        assert ModuleOverrideLoader(root).load("general", "settings") == {"label": "Sending"}

    def test_config_function(self, make_screens) -> None:
        root = make_screens({
            "dashboard.py": "",
            "_dashboard.py": "def config():\n    return {'description': 'Live'}\n",
        })
        assert ModuleOverrideLoader(root).load("dashboard") == {"description": "Live"}

    def test_absent_source(self, make_screens) -> None:
        root = make_screens({"dashboard.py": "", "settings/general.py": ""})
        loader = ModuleOverrideLoader(root)
        assert loader.load("dashboard") is None
        assert loader.load("settings") is None
        assert loader.load("general", "settings") is None

    def test_custom_config_entry(self, make_screens) -> None:
        root = make_screens({"settings/_screen.py": "CONFIG = {'slug': 'prefs'}\n"})
        assert ModuleOverrideLoader(root, "_screen").load("settings") == {"slug": "prefs"}

    def test_broken_module_is_configuration_error(self, make_screens) -> None:
        root = make_screens({"settings/_config.py": "raise RuntimeError('boom')\n"})
        with pytest.raises(ConfigurationError, match="boom") as exc_info:
            ModuleOverrideLoader(root).load("settings")
        assert exc_info.value.screen == "settings"

    def test_non_mapping_is_configuration_error(self, make_screens) -> None:
        root = make_screens({"settings/_config.py": "CONFIG = ['menu_title']\n"})
        with pytest.raises(ConfigurationError, match="mapping"):
            ModuleOverrideLoader(root).load("settings")

    def test_unknown_keys_logged(self, make_screens, caplog: pytest.LogCaptureFixture) -> None:
        root = make_screens({"settings/_config.py": "CONFIG = {'colour': 'blue'}\n"})
        with caplog.at_level(logging.DEBUG, logger="campaignbridge.screens"):
            assert ModuleOverrideLoader(root).load("settings") == {"colour": "blue"}
        assert "colour" in caplog.text
