"""Tests for campaignbridge.screens.naming — identity derivation."""

import pytest

from campaignbridge.screens.naming import (
    ScreenIdentity,
    controller_type_name,
    qualified_controller_name,
    resolve_identity,
    slug_from_name,
    split_words,
    title_from_name,
)


class TestSplitWords:
    def test_splits_on_separator_runs(self) -> None:
        assert split_words("post__types--list  view") == ["post", "types", "list", "view"]

    def test_drops_empty_segments(self) -> None:
        assert split_words("_dashboard_") == ["dashboard"]


class TestTitle:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("dashboard", "Dashboard"),
            ("post_types", "Post Types"),
            ("email-templates", "Email Templates"),
            ("My-Page", "My Page"),
        ],
    )
    def test_title_from_name(self, raw: str, expected: str) -> None:
        assert title_from_name(raw) == expected

    def test_rest_of_word_untouched(self) -> None:
        assert title_from_name("api_keysHQ") == "Api KeysHQ"


class TestSlug:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("dashboard", "dashboard"),
            ("post_types", "post-types"),
            ("My-Page", "my-page"),
            ("my_page", "my-page"),
            ("Email Templates", "email-templates"),
        ],
    )
    def test_slug_from_name(self, raw: str, expected: str) -> None:
        assert slug_from_name(raw) == expected


class TestControllerName:
    def test_type_name(self) -> None:
        assert controller_type_name("email_templates") == "Email_Templates_Controller"
        assert controller_type_name("settings") == "Settings_Controller"

    def test_hyphens_become_underscores(self) -> None:
        assert controller_type_name("post-types") == "Post_Types_Controller"

    def test_qualified(self) -> None:
        qualified = qualified_controller_name("settings", "campaignbridge.controllers")
        assert qualified == "campaignbridge.controllers.Settings_Controller"


class TestResolveIdentity:
    def test_identity(self) -> None:
        identity = resolve_identity("post_types")
        assert identity == ScreenIdentity(
            name="post_types",
            slug="post-types",
            title="Post Types",
            controller_type="Post_Types_Controller",
        )

    def test_deterministic(self) -> None:
        for raw in ("dashboard", "My-Page", "a_b-c d", "___"):
            first = resolve_identity(raw)
            second = resolve_identity(raw)
            assert (first.slug, first.title) == (second.slug, second.title)

    def test_no_words_falls_back_to_raw(self) -> None:
        identity = resolve_identity("___")
        assert identity.slug
        assert identity.title
