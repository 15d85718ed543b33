"""Tests for versions and version ranges."""

import pytest

from scriptmeta.exceptions import InvalidVersionError
from scriptmeta.versioning import Version, VersionRange, is_version


class TestVersion:
    """Test version parsing and ordering."""

    def test_parse_full(self):
        """Test a four-part version."""
        assert Version.parse("1.2.3.SNAPSHOT") == Version(1, 2, 3, "SNAPSHOT")

    def test_parse_short_pads_with_zeros(self):
        """Test missing parts default to zero."""
        assert Version.parse("1") == Version(1, 0, 0)
        assert str(Version.parse("1.2")) == "1.2.0"

    def test_ordering(self):
        """Test numeric comparison, qualifier last."""
        assert Version.parse("1.10") > Version.parse("1.9")
        assert Version.parse("1.0.0.b") > Version.parse("1.0.0.a")
        assert Version.parse("1.0.0") < Version.parse("1.0.0.a")

    @pytest.mark.parametrize("value", ["", "a", "1.a", "1.0.0.0.0", "1..0", "-1"])
    def test_invalid(self, value):
        """Test malformed versions are rejected."""
        with pytest.raises(InvalidVersionError):
            Version.parse(value)
        assert not is_version(value)

    def test_invalid_version_is_value_error(self):
        """Test InvalidVersionError can be caught as ValueError."""
        with pytest.raises(ValueError):
            Version.parse("x")


class TestVersionRange:
    """Test range parsing, inclusion and filter rendering."""

    def test_half_open_range(self):
        """Test [1.0,2.0) includes its left bound only."""
        version_range = VersionRange.parse("[1.0,2.0)")
        assert version_range.includes("1.0.0")
        assert version_range.includes("1.9.9")
        assert not version_range.includes("2.0.0")
        assert not version_range.includes("0.9")

    def test_open_left_closed_right(self):
        """Test (1.0,2.0] excludes the left bound and includes the right."""
        version_range = VersionRange.parse("(1.0,2.0]")
        assert not version_range.includes("1.0.0")
        assert version_range.includes("2.0.0")

    def test_single_version_is_at_least(self):
        """Test a bare version means that version or later."""
        version_range = VersionRange.parse("1.5")
        assert version_range.includes("1.5.0")
        assert version_range.includes("99.0")
        assert not version_range.includes("1.4.9")

    @pytest.mark.parametrize("value", ["", "[1.0", "[1.0,2.0,3.0)", "[1.0)", "[a,b)", "[1.0,2.0"])
    def test_invalid(self, value):
        """Test malformed ranges are rejected."""
        with pytest.raises(InvalidVersionError):
            VersionRange.parse(value)

    def test_str(self):
        """Test ranges render back to their canonical form."""
        assert str(VersionRange.parse("[1.0,2.0)")) == "[1.0.0,2.0.0)"
        assert str(VersionRange.parse("1")) == "1.0.0"

    def test_filter_closed_open(self):
        """Test the filter of [1.0,2.0)."""
        assert (
            VersionRange.parse("[1.0,2.0)").to_filter_string("version")
            == "(&(version>=1.0.0)(!(version>=2.0.0)))"
        )

    def test_filter_open_closed(self):
        """Test the filter of (1.0,2.0]."""
        assert (
            VersionRange.parse("(1.0,2.0]").to_filter_string("version")
            == "(&(!(version<=1.0.0))(version<=2.0.0))"
        )

    def test_filter_open_open_needs_presence(self):
        """Test an open left and open right bound adds a presence test."""
        assert (
            VersionRange.parse("(1.0,2.0)").to_filter_string("version")
            == "(&(version=*)(!(version<=1.0.0))(!(version>=2.0.0)))"
        )

    def test_filter_unbounded(self):
        """Test a bare version renders a single term."""
        assert VersionRange.parse("1.0").to_filter_string("version") == "(version>=1.0.0)"
