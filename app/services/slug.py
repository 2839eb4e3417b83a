"""Plugin slug extraction from user-supplied WordPress.org URLs."""

import re

# Host must be wordpress.org or one of its subdomains (de.wordpress.org, ...).
# The scheme, userinfo and port are optional, so "wordpress.org/plugins/foo"
# and "https://wordpress.org:443/plugins/foo/" are both accepted.
_PLUGIN_URL_PATTERN = re.compile(
    r"^(?:https?://)?(?:[^/@\s]+@)?(?:[a-z0-9-]+\.)*wordpress\.org(?::\d+)?/plugins/([^/?#\s]+)",
    re.IGNORECASE,
)
_SLUG_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9_-]*")

EMPTY_URL_MESSAGE = "Please enter a plugin URL"
INVALID_URL_MESSAGE = (
    "Please enter a valid WordPress.org plugin URL "
    "(e.g., https://wordpress.org/plugins/plugin-name/)"
)


class InvalidPluginURL(ValueError):
    """Raised when a string does not identify a WordPress.org plugin."""


def extract_plugin_slug(url: str) -> str:
    """Return the plugin slug embedded in a WordPress.org plugin *url*.

    The slug is the first path segment after ``/plugins/``; trailing slashes,
    query strings and fragments are ignored.

    Raises:
        InvalidPluginURL: if *url* is blank or not a plugin-directory URL.
    """
    url = (url or "").strip()
    if not url:
        raise InvalidPluginURL(EMPTY_URL_MESSAGE)

    match = _PLUGIN_URL_PATTERN.match(url)
    if not match or not is_valid_slug(match.group(1)):
        raise InvalidPluginURL(INVALID_URL_MESSAGE)
    return match.group(1)


def is_valid_slug(slug: str) -> bool:
    """Return *True* if *slug* looks like a directory slug (used for path parameters)."""
    return bool(_SLUG_PATTERN.fullmatch(slug or ""))
