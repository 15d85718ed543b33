"""Parsing of OSGi-style header clauses.

A header is a comma-separated list of clauses; each clause is a path
followed by ``;``-separated attributes (``key=value``) and directives
(``key:=value``)::

    org/apache/sling/bar;version="[1.0.0,2.0.0)";resolution:=optional

Commas and semicolons inside double quotes or version brackets do not split.
"""

from dataclasses import dataclass, field

from scriptmeta.exceptions import MalformedDirectiveError

_OPENING = "[("
_CLOSING = "])"


@dataclass
class HeaderClause:
    """One clause of a header."""

    path: str
    attributes: dict[str, str] = field(default_factory=dict)
    directives: dict[str, str] = field(default_factory=dict)

    @property
    def parameter_names(self) -> list[str]:
        """Attribute names, followed by directive names suffixed with ``:``."""
        return list(self.attributes) + [f"{name}:" for name in self.directives]


def _split(text: str, separator: str) -> list[str]:
    """Split on a separator that is outside quotes and brackets."""
    parts = []
    current: list[str] = []
    in_quotes = False
    depth = 0
    for char in text:
        if char == '"':
            in_quotes = not in_quotes
        elif not in_quotes:
            if char in _OPENING:
                depth += 1
            elif char in _CLOSING and depth > 0:
                depth -= 1
            elif char == separator and depth == 0:
                parts.append("".join(current))
                current = []
                continue
        current.append(char)
    if in_quotes:
        raise MalformedDirectiveError(f"Unterminated quote in '{text}'")
    parts.append("".join(current))
    return parts


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        return value[1:-1]
    return value


def parse_header(text: str) -> list[HeaderClause]:
    """Parse a header into its clauses.

    A segment without ``=`` is a path; several paths in a row before the
    parameters each start their own clause, sharing those parameters.

    Raises:
        MalformedDirectiveError: On empty paths, empty keys or unbalanced quotes
    """
    clauses: list[HeaderClause] = []
    if not text.strip():
        return clauses

    for raw_clause in _split(text, ","):
        paths: list[str] = []
        attributes: dict[str, str] = {}
        directives: dict[str, str] = {}
        for segment in _split(raw_clause, ";"):
            segment = segment.strip()
            if ":=" in segment:
                key, value = segment.split(":=", 1)
                if not key.strip():
                    raise MalformedDirectiveError(f"Empty directive name in '{text}'")
                directives[key.strip()] = _unquote(value)
            elif "=" in segment:
                key, value = segment.split("=", 1)
                if not key.strip():
                    raise MalformedDirectiveError(f"Empty attribute name in '{text}'")
                attributes[key.strip()] = _unquote(value)
            else:
                if attributes or directives:
                    raise MalformedDirectiveError(
                        f"Path '{segment}' must come before the parameters in '{text}'"
                    )
                if not segment:
                    raise MalformedDirectiveError(f"Empty path in clause '{raw_clause.strip()}'")
                paths.append(_unquote(segment))
        if not paths:
            raise MalformedDirectiveError(f"Clause '{raw_clause.strip()}' has no path")
        for path in paths:
            clauses.append(HeaderClause(path=path, attributes=dict(attributes), directives=dict(directives)))
    return clauses
