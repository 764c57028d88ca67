"""Smoke tests for the bundled examples/admin screens directory."""

from pathlib import Path

import pytest

from campaignbridge.config import AdminConfig
from campaignbridge.options import OptionStore
from campaignbridge.screens.registry import ScreenRegistry
from campaignbridge.testing import ScreenTestClient, active_tab_title, assert_notice

SCREENS = Path(__file__).parent.parent / "examples" / "admin" / "screens"


@pytest.fixture
def client() -> ScreenTestClient:
    registry = ScreenRegistry.from_config(AdminConfig(screens_dir=SCREENS, secret_key="test"))
    return ScreenTestClient(registry)


class TestExampleScreens:
    def test_menu(self, client: ScreenTestClient) -> None:
        client.host.build()
        assert [page.menu_title for page in client.host.pages] == [
            "Dashboard",
            "CB Settings",
            "Status",
        ]
        assert client.registry.diagnostics == ()

    def test_dashboard(self, client: ScreenTestClient) -> None:
        html = client.get("dashboard")
        assert "<p>Welcome to CampaignBridge.</p>" in html
        assert '<p class="description">Campaign activity at a glance.</p>' in html

    def test_status_template(self, client: ScreenTestClient) -> None:
        html = client.get("status")
        assert "<th>Plugin version</th><td>0.1.0</td>" in html
        assert "Not configured" in html

    def test_settings_tabs(self, client: ScreenTestClient) -> None:
        html = client.get("settings")
        assert "<h1>CampaignBridge Settings</h1>" in html
        assert active_tab_title(html) == "General"
        assert 'name="_cbnonce"' in html

        html = client.get("settings", tab="mailchimp")
        assert active_tab_title(html) == "Mailchimp"
        assert "Not connected" in html

    def test_settings_save(self, client: ScreenTestClient) -> None:
        assert client.registry.nonces is not None
        token = client.registry.nonces.create("save_settings")
        form = {"from_name": "Acme Mail", "_cbnonce": token}
        html = client.post("settings", form, tab="general")
        assert_notice(html, "Settings saved.", level="success")
        assert 'value="Acme Mail"' in html

    def test_settings_save_without_nonce_is_rejected(
        self, client: ScreenTestClient, options: OptionStore
    ) -> None:
        html = client.post("settings", {"from_name": "Forged"}, tab="general")
        assert_notice(html, "Security check failed.", level="error")
        assert "from_name" not in options
        assert 'value="Forged"' not in html

    def test_settings_save_with_wrong_action_nonce(
        self, client: ScreenTestClient, options: OptionStore
    ) -> None:
        assert client.registry.nonces is not None
        token = client.registry.nonces.create("reset_all")
        client.post("settings", {"from_name": "Forged", "_cbnonce": token}, tab="general")
        assert "from_name" not in options
