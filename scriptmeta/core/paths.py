"""Include/exclude filtering of the paths below a scripts directory."""

import re
from collections.abc import Iterable
from functools import lru_cache
from pathlib import Path

from scriptmeta.constants import DEFAULT_EXCLUDES


@lru_cache(maxsize=256)
def _glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Translate a ``**``-aware glob into a regex over POSIX paths."""
    regex = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            regex.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            regex.append(".*")
            i += 2
        elif pattern[i] == "*":
            regex.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            regex.append("[^/]")
            i += 1
        else:
            regex.append(re.escape(pattern[i]))
            i += 1
    return re.compile("".join(regex) + r"\Z")


def matches_glob(relative_path: str, pattern: str) -> bool:
    """Check a root-relative POSIX path against a glob pattern.

    Examples:
        >>> matches_glob(".git/config", "**/.git/**")
        True
        >>> matches_glob("apps/page/page.html~", "**/*~")
        True
        >>> matches_glob("apps/page/page.html", "*.html")
        False
    """
    return _glob_to_regex(pattern.strip().lstrip("/")).match(relative_path) is not None


class PathFilter:
    """Callable answering "does this path take part in the analysis?".

    Without includes every path below root is included; excludes always win.
    Paths outside root are never included.
    """

    def __init__(
        self,
        root: Path,
        includes: Iterable[str] = (),
        excludes: Iterable[str] = DEFAULT_EXCLUDES,
    ) -> None:
        self.root = root
        self.includes = tuple(includes)
        self.excludes = tuple(excludes)

    def __call__(self, path: Path) -> bool:
        if not path.is_relative_to(self.root):
            return False
        relative = path.relative_to(self.root).as_posix()
        if self.includes and not any(matches_glob(relative, pattern) for pattern in self.includes):
            return False
        return not any(matches_glob(relative, pattern) for pattern in self.excludes)
