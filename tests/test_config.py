"""Tests for campaignbridge.config — AdminConfig defaults and immutability."""

import dataclasses

import pytest

from campaignbridge.config import AdminConfig


class TestAdminConfig:
    def test_defaults(self) -> None:
        config = AdminConfig()
        assert config.parent_slug == "campaignbridge"
        assert config.default_capability == "manage_options"
        assert config.controller_namespace == "campaignbridge.controllers"
        assert config.reserved_prefixes == ("_", ".")
        assert config.config_entry == "_config"
        assert config.default_tab_order == 10
        assert config.page_param == "page"
        assert config.tab_param == "tab"
        assert config.secret_key == ""
        assert config.global_assets == {}

    def test_frozen(self) -> None:
        config = AdminConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.parent_slug = "other"  # type: ignore[misc]

    def test_replace(self) -> None:
        config = dataclasses.replace(AdminConfig(), secret_key="s3cret")
        assert config.secret_key == "s3cret"
        assert config.parent_slug == "campaignbridge"

    def test_global_assets_not_shared(self) -> None:
        assert AdminConfig().global_assets is not AdminConfig().global_assets
