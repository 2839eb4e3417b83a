"""Tests for the environment parsing helpers in app.config."""

from app.config import _float, _list, _str


class TestStr:
    def test_value_is_used(self):
        assert _str("https://example.test/api/", "default") == "https://example.test/api/"

    def test_surrounding_whitespace_is_stripped(self):
        assert _str("  10/minute \n", "30/minute") == "10/minute"

    def test_missing_or_blank_falls_back(self):
        assert _str(None, "30/minute") == "30/minute"
        assert _str("", "30/minute") == "30/minute"
        assert _str("   ", "30/minute") == "30/minute"


class TestFloat:
    def test_malformed_falls_back(self):
        assert _float("ten", 10.0) == 10.0
        assert _float(" 2.5 ", 10.0) == 2.5


class TestList:
    def test_comma_separated_hosts_are_lowercased(self):
        assert _list("PS.w.org, s.w.org,,", []) == ["ps.w.org", "s.w.org"]

    def test_blank_falls_back(self):
        assert _list(" ", ["ps.w.org"]) == ["ps.w.org"]
