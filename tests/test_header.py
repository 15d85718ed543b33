"""Tests for header clause parsing."""

import pytest

from scriptmeta.exceptions import MalformedDirectiveError
from scriptmeta.header import parse_header


class TestParseHeader:
    """Test clause, attribute and directive parsing."""

    def test_path_only(self):
        """Test a clause with only a path."""
        clauses = parse_header("my/base")
        assert len(clauses) == 1
        assert clauses[0].path == "my/base"
        assert clauses[0].attributes == {}
        assert clauses[0].directives == {}

    def test_attributes_and_directives(self):
        """Test quoted attributes and directives."""
        [clause] = parse_header('my/base;version="[1.0,2.0)";resolution:=optional')
        assert clause.path == "my/base"
        assert clause.attributes == {"version": "[1.0,2.0)"}
        assert clause.directives == {"resolution": "optional"}
        assert clause.parameter_names == ["version", "resolution:"]

    def test_unquoted_range_does_not_split(self):
        """Test the comma inside a bracketed range is not a clause separator."""
        [clause] = parse_header("my/base;version=[1.0,2.0)")
        assert clause.attributes["version"] == "[1.0,2.0)"

    def test_multiple_clauses(self):
        """Test comma-separated clauses."""
        clauses = parse_header("a/b, c/d;version=1.0")
        assert [clause.path for clause in clauses] == ["a/b", "c/d"]
        assert clauses[1].attributes == {"version": "1.0"}

    def test_shared_parameters(self):
        """Test several paths share the parameters that follow them."""
        clauses = parse_header("a;b;version=1.0")
        assert [clause.path for clause in clauses] == ["a", "b"]
        assert all(clause.attributes == {"version": "1.0"} for clause in clauses)

    def test_blank(self):
        """Test a blank header has no clauses."""
        assert parse_header("   ") == []

    @pytest.mark.parametrize(
        "text",
        [
            ";version=1.0",
            "a;=1.0",
            "a;:=optional",
            'a;version="1.0',
            "a;version=1.0;b",
            "a,,b",
        ],
    )
    def test_malformed(self, text):
        """Test malformed clauses are rejected."""
        with pytest.raises(MalformedDirectiveError):
            parse_header(text)
