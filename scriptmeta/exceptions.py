"""Shared exception classes for scriptmeta."""


class ScriptMetaError(Exception):
    """Base exception for scriptmeta errors."""


class MalformedDirectiveError(ScriptMetaError):
    """Raised when an extends or requires file breaks the clause rules."""


class MalformedDescriptorError(ScriptMetaError):
    """Raised when a .content.xml file is not a usable document view."""


class InvalidVersionError(ScriptMetaError, ValueError):
    """Raised when a version or version range cannot be parsed."""


class InvalidCapabilityError(ScriptMetaError, ValueError):
    """Raised when a capability would be built from invalid fields."""


class ConfigNotFoundError(ScriptMetaError):
    """Raised when scriptmeta.toml is not found."""


class ConfigParseError(ScriptMetaError):
    """Raised when scriptmeta.toml cannot be parsed."""


class ConfigValidationError(ScriptMetaError):
    """Raised when scriptmeta.toml contains invalid configuration."""
