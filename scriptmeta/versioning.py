"""Versions and version ranges using OSGi semantics.

A version is ``major[.minor[.micro[.qualifier]]]`` where the numeric parts
default to ``0`` and the qualifier compares as a plain string. A range is
either an interval such as ``[1.0,2.0)`` or a single version meaning
"this version or any later one".
"""

import re
from dataclasses import dataclass

from scriptmeta.exceptions import InvalidVersionError

_VERSION_PATTERN = re.compile(
    r"^(?P<major>\d+)(?:\.(?P<minor>\d+)(?:\.(?P<micro>\d+)(?:\.(?P<qualifier>[A-Za-z0-9_-]+))?)?)?$"
)

LEFT_CLOSED = "["
LEFT_OPEN = "("
RIGHT_CLOSED = "]"
RIGHT_OPEN = ")"


@dataclass(frozen=True, order=True)
class Version:
    """An OSGi version.

    Field order doubles as comparison order, so the generated ordering
    matches OSGi: numeric parts first, then the qualifier.
    """

    major: int = 0
    minor: int = 0
    micro: int = 0
    qualifier: str = ""

    @classmethod
    def parse(cls, value: str) -> "Version":
        """Parse a version string.

        Args:
            value: Version string, e.g. "1", "1.2" or "1.2.3.SNAPSHOT"

        Returns:
            Parsed Version

        Raises:
            InvalidVersionError: If the string is not a valid version
        """
        match = _VERSION_PATTERN.match(value.strip())
        if match is None:
            raise InvalidVersionError(f"Invalid version '{value}'")
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor") or 0),
            micro=int(match.group("micro") or 0),
            qualifier=match.group("qualifier") or "",
        )

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.micro}"
        if self.qualifier:
            return f"{base}.{self.qualifier}"
        return base


def is_version(value: str) -> bool:
    """Check whether a string is a syntactically valid version."""
    return _VERSION_PATTERN.match(value.strip()) is not None


@dataclass(frozen=True)
class VersionRange:
    """An interval over versions; ``right`` is None for an unbounded range."""

    left: Version
    left_closed: bool = True
    right: Version | None = None
    right_closed: bool = False

    @classmethod
    def parse(cls, value: str) -> "VersionRange":
        """Parse a range like ``[1.0,2.0)``, ``(1,2]`` or ``1.0``.

        Raises:
            InvalidVersionError: If the range syntax is invalid
        """
        text = value.strip()
        if not text:
            raise InvalidVersionError("Empty version range")

        if text[0] not in (LEFT_CLOSED, LEFT_OPEN):
            return cls(left=Version.parse(text))

        if len(text) < 2 or text[-1] not in (RIGHT_CLOSED, RIGHT_OPEN):
            raise InvalidVersionError(f"Invalid version range '{value}': missing closing bracket")

        inner = text[1:-1]
        parts = inner.split(",")
        if len(parts) != 2:
            raise InvalidVersionError(
                f"Invalid version range '{value}': expected exactly two comma-separated versions"
            )

        left = Version.parse(parts[0])
        right = Version.parse(parts[1])
        return cls(
            left=left,
            left_closed=text[0] == LEFT_CLOSED,
            right=right,
            right_closed=text[-1] == RIGHT_CLOSED,
        )

    def includes(self, version: Version | str) -> bool:
        """Check if a version falls inside this range."""
        if isinstance(version, str):
            version = Version.parse(version)

        if self.left_closed:
            if version < self.left:
                return False
        elif version <= self.left:
            return False

        if self.right is None:
            return True
        if self.right_closed:
            return version <= self.right
        return version < self.right

    def to_filter_string(self, attribute: str) -> str:
        """Render this range as an LDAP filter over ``attribute``.

        Examples:
            >>> VersionRange.parse("[1.0,2.0)").to_filter_string("version")
            '(&(version>=1.0.0)(!(version>=2.0.0)))'
            >>> VersionRange.parse("1.0").to_filter_string("version")
            '(version>=1.0.0)'
        """
        need_presence = not self.left_closed and (self.right is None or not self.right_closed)
        multiple_terms = need_presence or self.right is not None

        parts = []
        if need_presence:
            parts.append(f"({attribute}=*)")

        if self.left_closed:
            parts.append(f"({attribute}>={self.left})")
        else:
            parts.append(f"(!({attribute}<={self.left}))")

        if self.right is not None:
            if self.right_closed:
                parts.append(f"({attribute}<={self.right})")
            else:
                parts.append(f"(!({attribute}>={self.right}))")

        body = "".join(parts)
        if multiple_terms:
            return f"(&{body})"
        return body

    def __str__(self) -> str:
        if self.right is None:
            return str(self.left)
        left = LEFT_CLOSED if self.left_closed else LEFT_OPEN
        right = RIGHT_CLOSED if self.right_closed else RIGHT_OPEN
        return f"{left}{self.left},{self.right}{right}"
