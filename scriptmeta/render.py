"""Rendering of capability sets.

``render_provided`` and ``render_required`` produce the values of the
``Provide-Capability`` and ``Require-Capability`` manifest headers, e.g.::

    sling.servlet;sling.servlet.resourceTypes:List<String>="/apps/my/page,my/page";scriptEngine="htl";scriptExtension="html"
    sling.servlet;filter:="(&(!(sling.servlet.selectors=*))(sling.servlet.resourceTypes=my/base))"

``to_dict`` gives a JSON-friendly view of the same data. All output is
sorted so repeated runs over the same tree render identically.
"""

import json
from typing import Any

from scriptmeta.capability import (
    CapabilitySet,
    ProvidedResourceTypeCapability,
    ProvidedScriptCapability,
    RequiredResourceTypeCapability,
)
from scriptmeta.constants import (
    CAPABILITY_EXTENDS_AT,
    CAPABILITY_EXTENSIONS_AT,
    CAPABILITY_METHODS_AT,
    CAPABILITY_NS,
    CAPABILITY_PATH_AT,
    CAPABILITY_RESOURCE_TYPE_AT,
    CAPABILITY_SCRIPT_ENGINE_AT,
    CAPABILITY_SCRIPT_EXTENSION_AT,
    CAPABILITY_SELECTORS_AT,
    CAPABILITY_VERSION_AT,
    FILTER_DIRECTIVE,
    RESOLUTION_DIRECTIVE,
    RESOLUTION_OPTIONAL,
)

LIST_TYPE = "List<String>"
VERSION_TYPE = "Version"


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _attribute(name: str, value: str, type_name: str | None = None) -> str:
    if type_name:
        return f"{name}:{type_name}={_quote(value)}"
    return f"{name}={_quote(value)}"


def _clause(parameters: list[str]) -> str:
    return ";".join([CAPABILITY_NS, *parameters])


def provided_clause(capability: ProvidedResourceTypeCapability) -> str:
    """Render one provided resource type capability as a header clause."""
    parameters = [
        _attribute(CAPABILITY_RESOURCE_TYPE_AT, ",".join(sorted(capability.resource_types)), LIST_TYPE)
    ]
    if capability.script_engine:
        parameters.append(_attribute(CAPABILITY_SCRIPT_ENGINE_AT, capability.script_engine))
    if capability.script_extension:
        parameters.append(_attribute(CAPABILITY_SCRIPT_EXTENSION_AT, capability.script_extension))
    if capability.version:
        parameters.append(_attribute(CAPABILITY_VERSION_AT, capability.version, VERSION_TYPE))
    if capability.extends_resource_type:
        parameters.append(_attribute(CAPABILITY_EXTENDS_AT, capability.extends_resource_type))
    if capability.request_method:
        parameters.append(_attribute(CAPABILITY_METHODS_AT, capability.request_method))
    if capability.request_extension:
        parameters.append(_attribute(CAPABILITY_EXTENSIONS_AT, capability.request_extension))
    if capability.selectors:
        parameters.append(_attribute(CAPABILITY_SELECTORS_AT, ",".join(capability.selectors), LIST_TYPE))
    return _clause(parameters)


def script_clause(capability: ProvidedScriptCapability) -> str:
    """Render one path-only script capability as a header clause."""
    return _clause(
        [
            _attribute(CAPABILITY_PATH_AT, capability.path),
            _attribute(CAPABILITY_SCRIPT_ENGINE_AT, capability.script_engine),
            _attribute(CAPABILITY_SCRIPT_EXTENSION_AT, capability.script_extension),
        ]
    )


def requirement_filter(requirement: RequiredResourceTypeCapability) -> str:
    """Build the LDAP filter selecting capabilities that satisfy a requirement.

    Examples:
        >>> requirement_filter(RequiredResourceTypeCapability("my/base"))
        '(&(!(sling.servlet.selectors=*))(sling.servlet.resourceTypes=my/base))'
    """
    type_filter = f"({CAPABILITY_RESOURCE_TYPE_AT}={requirement.resource_type})"
    if requirement.version_range is not None:
        type_filter = f"(&{requirement.version_range.to_filter_string(CAPABILITY_VERSION_AT)}{type_filter})"
    return f"(&(!({CAPABILITY_SELECTORS_AT}=*)){type_filter})"


def required_clause(requirement: RequiredResourceTypeCapability, optional: bool = False) -> str:
    """Render one requirement as a header clause."""
    parameters = [f"{FILTER_DIRECTIVE}:={_quote(requirement_filter(requirement))}"]
    if requirement.optional or optional:
        parameters.append(f"{RESOLUTION_DIRECTIVE}:={RESOLUTION_OPTIONAL}")
    return _clause(parameters)


def render_provided(capabilities: CapabilitySet) -> str:
    """Render the ``Provide-Capability`` header value."""
    clauses = sorted(provided_clause(c) for c in capabilities.provided_resource_type_capabilities)
    clauses.extend(sorted(script_clause(c) for c in capabilities.provided_script_capabilities))
    return ",".join(clauses)


def render_required(capabilities: CapabilitySet, missing_requirements_optional: bool = True) -> str:
    """Render the ``Require-Capability`` header value.

    Args:
        capabilities: The analysed capability set
        missing_requirements_optional: Mark requirements that nothing in the
            set satisfies as optional
    """
    clauses = sorted(
        required_clause(
            requirement,
            optional=missing_requirements_optional and requirement in capabilities.unresolved_required,
        )
        for requirement in capabilities.required_resource_type_capabilities
    )
    return ",".join(clauses)


def _provided_dict(capability: ProvidedResourceTypeCapability) -> dict[str, Any]:
    return {
        "resource_types": sorted(capability.resource_types),
        "version": capability.version,
        "selectors": list(capability.selectors),
        "request_extension": capability.request_extension,
        "request_method": capability.request_method,
        "script_engine": capability.script_engine,
        "script_extension": capability.script_extension,
        "extends": capability.extends_resource_type,
    }


def _required_dict(requirement: RequiredResourceTypeCapability) -> dict[str, Any]:
    return {
        "resource_type": requirement.resource_type,
        "version_range": str(requirement.version_range) if requirement.version_range else None,
        "optional": requirement.optional,
    }


def _sort_key(item: dict[str, Any]) -> str:
    return json.dumps(item, sort_keys=True)


def to_dict(capabilities: CapabilitySet) -> dict[str, Any]:
    """Convert a capability set to plain, deterministically ordered data."""
    return {
        "provided": sorted(
            (_provided_dict(c) for c in capabilities.provided_resource_type_capabilities), key=_sort_key
        ),
        "scripts": sorted(
            (
                {"path": c.path, "script_engine": c.script_engine, "script_extension": c.script_extension}
                for c in capabilities.provided_script_capabilities
            ),
            key=_sort_key,
        ),
        "required": sorted(
            (_required_dict(r) for r in capabilities.required_resource_type_capabilities), key=_sort_key
        ),
        "unresolved": sorted(
            (_required_dict(r) for r in capabilities.unresolved_required), key=_sort_key
        ),
    }


def to_json(capabilities: CapabilitySet, indent: int = 2) -> str:
    return json.dumps(to_dict(capabilities), indent=indent)
