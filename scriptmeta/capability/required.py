"""Required capabilities: resource types a scripts tree depends on."""

from dataclasses import dataclass

from scriptmeta.capability.provided import ProvidedResourceTypeCapability
from scriptmeta.exceptions import InvalidCapabilityError, InvalidVersionError
from scriptmeta.versioning import Version, VersionRange


@dataclass(frozen=True)
class RequiredResourceTypeCapability:
    """A dependency on another resource type.

    Attributes:
        resource_type: Required resource type
        version_range: Accepted versions, None accepts any (or no) version
        optional: Whether the dependency may stay unsatisfied
    """

    resource_type: str
    version_range: VersionRange | None = None
    optional: bool = False

    def __post_init__(self) -> None:
        if not self.resource_type:
            raise InvalidCapabilityError("The required resource type cannot be empty")

    def is_satisfied(self, provided: ProvidedResourceTypeCapability) -> bool:
        """Check whether a provided capability fulfils this requirement.

        Only capabilities without selectors count; with a version range the
        provided capability must also carry a version inside the range.
        """
        if provided.selectors:
            return False
        if self.resource_type not in provided.resource_types:
            return False
        if self.version_range is None:
            return True
        if provided.version is None:
            return False
        try:
            return self.version_range.includes(Version.parse(provided.version))
        except InvalidVersionError:
            return False
