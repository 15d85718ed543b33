"""Resource types derived from folder paths.

A resource type folder path like ``apps/my/resource/1.0.0`` denotes the
resource type ``apps/my/resource`` in version ``1.0.0``. The trailing
segment only counts as a version if it is a valid version token.
"""

import posixpath
from collections.abc import Iterable
from dataclasses import dataclass

from scriptmeta.versioning import is_version


def normalize_path(value: str) -> str:
    """Normalize a path to forward slashes without ``.``/``..`` segments.

    Examples:
        >>> normalize_path("apps\\\\my/./resource/")
        'apps/my/resource'
        >>> normalize_path("/libs/a/../b")
        '/libs/b'
    """
    value = value.replace("\\", "/")
    if not value:
        return value
    normalized = posixpath.normpath(value)
    # POSIX keeps a leading double slash, resource types never want it
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    return "" if normalized == "." else normalized


def label_of(segment: str) -> str:
    """Return the part of a name after its last ``/`` or ``.``.

    Examples:
        >>> label_of("my/resource")
        'resource'
        >>> label_of("org.example.page")
        'page'
        >>> label_of("page.")
        'page.'
    """
    cut = max(segment.rfind("/"), segment.rfind("."))
    if cut == -1 or cut == len(segment) - 1:
        return segment
    return segment[cut + 1:]


@dataclass(frozen=True)
class ResourceType:
    """A resource type with an optional version.

    Attributes:
        type: Slash-joined resource type, e.g. "apps/my/resource"
        version: Version string taken from the last folder, or None
    """

    type: str
    version: str | None = None

    @classmethod
    def parse(cls, value: str) -> "ResourceType":
        """Parse a resource type path, splitting off a trailing version segment.

        Examples:
            >>> ResourceType.parse("apps/my/resource/1.0.0")
            ResourceType(type='apps/my/resource', version='1.0.0')
            >>> ResourceType.parse("apps/my/resource")
            ResourceType(type='apps/my/resource', version=None)
        """
        value = normalize_path(value)
        last_slash = value.rfind("/")
        if last_slash != -1:
            last_segment = value[last_slash + 1:]
            if last_segment and is_version(last_segment):
                return cls(type=value[:last_slash], version=last_segment)
        return cls(type=value)

    @property
    def label(self) -> str:
        """The resource label, i.e. the name scripts use for the main script."""
        return label_of(self.type)

    def expand(self, search_paths: Iterable[str]) -> frozenset[str]:
        """Compute the resource type strings under the configured search paths.

        Under a search path the type is known both by its absolute path and by
        the path relative to the search path; otherwise only by itself.

        Examples:
            >>> sorted(ResourceType.parse("apps/my/resource").expand(["/apps"]))
            ['/apps/my/resource', 'my/resource']
            >>> sorted(ResourceType.parse("apps/my/resource").expand(["/libs"]))
            ['apps/my/resource']
        """
        resource_types: set[str] = set()
        absolute_type = "/" + self.type.lstrip("/")
        for search_path in search_paths:
            prefix = search_path if search_path.endswith("/") else search_path + "/"
            if absolute_type.startswith(prefix):
                resource_types.add(absolute_type)
                resource_types.add(absolute_type[len(prefix):])
        if not resource_types:
            resource_types.add(self.type)
        return frozenset(resource_types)

    def __str__(self) -> str:
        if self.version:
            return f"{self.type}/{self.version}"
        return self.type
