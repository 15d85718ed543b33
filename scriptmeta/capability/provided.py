"""Provided capabilities: what a scripts tree can serve."""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import NamedTuple

from scriptmeta.exceptions import InvalidCapabilityError


class MergeKey(NamedTuple):
    """Fields that identify a provided capability when merging extends declarations."""

    resource_types: frozenset[str]
    selectors: tuple[str, ...]
    request_extension: str | None
    request_method: str | None


@dataclass(frozen=True)
class ProvidedResourceTypeCapability:
    """A resource type endpoint served by a script or declared by an extends file.

    Attributes:
        resource_types: Equivalent resource type strings (never empty)
        version: Resource type version, if the folder carried one
        selectors: Ordered selectors, outermost folder first
        request_extension: Request extension the script answers to
        request_method: HTTP method the script answers to
        script_engine: Script engine name, None for pure extends declarations
        script_extension: Script file extension, None for pure extends declarations
        extends_resource_type: Declared super type
    """

    resource_types: frozenset[str]
    version: str | None = None
    selectors: tuple[str, ...] = ()
    request_extension: str | None = None
    request_method: str | None = None
    script_engine: str | None = None
    script_extension: str | None = None
    extends_resource_type: str | None = None

    def __post_init__(self) -> None:
        resource_types = frozenset(self.resource_types)
        if not resource_types or any(not resource_type for resource_type in resource_types):
            raise InvalidCapabilityError("A provided capability needs at least one non-empty resource type")
        object.__setattr__(self, "resource_types", resource_types)
        # selectors behave as an ordered set
        object.__setattr__(self, "selectors", tuple(dict.fromkeys(self.selectors)))

    @property
    def merge_key(self) -> MergeKey:
        return MergeKey(self.resource_types, self.selectors, self.request_extension, self.request_method)

    @property
    def is_extends_only(self) -> bool:
        """True for the placeholder an extends declaration leaves before a script claims it."""
        return self.script_engine is None and self.extends_resource_type is not None

    def with_extends(self, extends_resource_type: str | None) -> "ProvidedResourceTypeCapability":
        return replace(self, extends_resource_type=extends_resource_type)


@dataclass(frozen=True)
class ProvidedScriptCapability:
    """A script addressed by path only, outside of any resource type folder."""

    path: str
    script_extension: str
    script_engine: str

    @classmethod
    def from_path(cls, path: str, script_engine_mappings: Mapping[str, str]) -> "ProvidedScriptCapability":
        """Build a capability for a root-relative script path.

        Raises:
            InvalidCapabilityError: If the path has no extension or the
                extension has no script engine
        """
        if not path:
            raise InvalidCapabilityError("The path cannot be empty")
        last_dot = path.rfind(".")
        if last_dot == -1 or last_dot == len(path) - 1 or "/" in path[last_dot:]:
            raise InvalidCapabilityError(f"Path {path} does not seem to have an extension")
        extension = path[last_dot + 1:]
        script_engine = script_engine_mappings.get(extension)
        if not script_engine:
            raise InvalidCapabilityError(
                f"Path {path} does not seem to have an extension mapped to a script engine"
            )
        return cls(path=path, script_extension=extension, script_engine=script_engine)
