"""Tests for app.services.slug.extract_plugin_slug."""

import pytest

from app.services.slug import (
    EMPTY_URL_MESSAGE,
    INVALID_URL_MESSAGE,
    InvalidPluginURL,
    extract_plugin_slug,
    is_valid_slug,
)


class TestExtractPluginSlug:
    def test_canonical_plugin_url(self):
        assert extract_plugin_slug("https://wordpress.org/plugins/wp-rss-aggregator/") == "wp-rss-aggregator"

    def test_without_trailing_slash(self):
        assert extract_plugin_slug("https://wordpress.org/plugins/akismet") == "akismet"

    def test_query_string_is_ignored(self):
        assert extract_plugin_slug("https://wordpress.org/plugins/akismet/?ref=home") == "akismet"
        assert extract_plugin_slug("https://wordpress.org/plugins/akismet?ref=home") == "akismet"

    def test_fragment_is_ignored(self):
        assert extract_plugin_slug("https://wordpress.org/plugins/akismet#reviews") == "akismet"

    def test_only_first_segment_after_plugins(self):
        assert extract_plugin_slug("https://wordpress.org/plugins/akismet/advanced/") == "akismet"

    def test_scheme_is_optional(self):
        assert extract_plugin_slug("wordpress.org/plugins/jetpack/") == "jetpack"

    def test_http_and_www(self):
        assert extract_plugin_slug("http://www.wordpress.org/plugins/jetpack/") == "jetpack"

    def test_localised_directory_subdomain(self):
        assert extract_plugin_slug("https://de.wordpress.org/plugins/woocommerce/") == "woocommerce"

    def test_explicit_port(self):
        assert extract_plugin_slug("https://wordpress.org:443/plugins/akismet/") == "akismet"

    def test_userinfo_before_host(self):
        assert extract_plugin_slug("https://user@wordpress.org/plugins/akismet/") == "akismet"

    def test_surrounding_whitespace_is_ignored(self):
        assert extract_plugin_slug("   https://wordpress.org/plugins/akismet/  \n") == "akismet"


class TestExtractPluginSlugFailures:
    @pytest.mark.parametrize("value", ["", "   ", "\t\n"])
    def test_blank_input(self, value):
        with pytest.raises(InvalidPluginURL) as excinfo:
            extract_plugin_slug(value)
        assert str(excinfo.value) == EMPTY_URL_MESSAGE

    @pytest.mark.parametrize(
        "value",
        [
            "not a url",
            "https://wordpress.org/",
            "https://wordpress.org/themes/twentytwenty/",
            "https://wordpress.org/plugins/",
            "https://wordpress.org/plugins//",
            "https://example.com/plugins/akismet/",
            "https://evilwordpress.org/plugins/akismet/",
            "https://wordpress.org.example.com/plugins/akismet/",
            "https://wordpress.org@example.com/plugins/akismet/",
            "https://wordpress.org/plugins/-x/",
            "https://wordpress.org/plugins/foo.bar/",
        ],
    )
    def test_not_a_plugin_directory_url(self, value):
        with pytest.raises(InvalidPluginURL) as excinfo:
            extract_plugin_slug(value)
        assert str(excinfo.value) == INVALID_URL_MESSAGE

    def test_validation_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            extract_plugin_slug("not a url")


class TestIsValidSlug:
    def test_directory_slugs(self):
        assert is_valid_slug("wp-rss-aggregator")
        assert is_valid_slug("akismet")
        assert is_valid_slug("seo_by_rank_math")

    def test_rejects_junk(self):
        assert not is_valid_slug("")
        assert not is_valid_slug("-leading-dash")
        assert not is_valid_slug("has space")
        assert not is_valid_slug("<script>")
        assert not is_valid_slug("favicon.ico")
