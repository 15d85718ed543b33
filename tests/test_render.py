"""Tests for header rendering and JSON export."""

import json

from scriptmeta.capability import (
    CapabilitySet,
    ProvidedResourceTypeCapability,
    ProvidedScriptCapability,
    RequiredResourceTypeCapability,
)
from scriptmeta.render import render_provided, render_required, requirement_filter, to_dict, to_json
from scriptmeta.versioning import VersionRange

PAGE_TYPES = frozenset({"my/page", "/apps/my/page"})

SELECTORS_ABSENT = "(!(sling.servlet.selectors=*))"


class TestRenderProvided:
    """Test Provide-Capability rendering."""

    def test_main_script(self):
        """Test a plain script capability."""
        capabilities = CapabilitySet(
            frozenset({ProvidedResourceTypeCapability(PAGE_TYPES, script_engine="htl", script_extension="html")})
        )
        assert render_provided(capabilities) == (
            'sling.servlet;sling.servlet.resourceTypes:List<String>="/apps/my/page,my/page";'
            'scriptEngine="htl";scriptExtension="html"'
        )

    def test_all_attributes(self):
        """Test every optional attribute in its position."""
        capability = ProvidedResourceTypeCapability(
            PAGE_TYPES,
            version="1.0.0",
            selectors=("print", "a4"),
            request_extension="txt",
            request_method="GET",
            script_engine="jsp",
            script_extension="jsp",
            extends_resource_type="my/base",
        )
        assert render_provided(CapabilitySet(frozenset({capability}))) == (
            'sling.servlet;sling.servlet.resourceTypes:List<String>="/apps/my/page,my/page";'
            'scriptEngine="jsp";scriptExtension="jsp";version:Version="1.0.0";extends="my/base";'
            'sling.servlet.methods="GET";sling.servlet.extensions="txt";'
            'sling.servlet.selectors:List<String>="print,a4"'
        )

    def test_extends_only(self):
        """Test a capability without script renders no engine attributes."""
        capability = ProvidedResourceTypeCapability(PAGE_TYPES, extends_resource_type="my/base")
        assert render_provided(CapabilitySet(frozenset({capability}))) == (
            'sling.servlet;sling.servlet.resourceTypes:List<String>="/apps/my/page,my/page";extends="my/base"'
        )

    def test_path_scripts_follow_resource_types(self):
        """Test path-only scripts are rendered after resource type capabilities."""
        capabilities = CapabilitySet(
            frozenset({ProvidedResourceTypeCapability(PAGE_TYPES, script_engine="htl", script_extension="html")}),
            frozenset({ProvidedScriptCapability("/libs/helpers/format.jsp", "jsp", "jsp")}),
        )
        clauses = render_provided(capabilities).split(",sling.servlet;")
        assert clauses[-1] == 'sling.servlet.paths="/libs/helpers/format.jsp";scriptEngine="jsp";scriptExtension="jsp"'

    def test_empty(self):
        """Test an empty set renders an empty header."""
        assert render_provided(CapabilitySet()) == ""


class TestRenderRequired:
    """Test Require-Capability rendering."""

    def test_filter(self):
        """Test the filter of an unversioned requirement."""
        assert requirement_filter(RequiredResourceTypeCapability("my/base")) == (
            f"(&{SELECTORS_ABSENT}(sling.servlet.resourceTypes=my/base))"
        )

    def test_versioned_filter(self):
        """Test the filter of a versioned requirement."""
        requirement = RequiredResourceTypeCapability("my/base", VersionRange.parse("[1.0,2.0)"))
        assert requirement_filter(requirement) == (
            f"(&{SELECTORS_ABSENT}(&(&(version>=1.0.0)(!(version>=2.0.0)))(sling.servlet.resourceTypes=my/base)))"
        )

    def test_unresolved_marked_optional(self):
        """Test unresolved requirements become optional by default."""
        capabilities = CapabilitySet(required_resource_type_capabilities=frozenset({RequiredResourceTypeCapability("my/base")}))
        assert render_required(capabilities) == (
            f'sling.servlet;filter:="(&{SELECTORS_ABSENT}(sling.servlet.resourceTypes=my/base))";resolution:=optional'
        )

    def test_unresolved_kept_mandatory(self):
        """Test unresolved requirements stay mandatory when asked to."""
        capabilities = CapabilitySet(required_resource_type_capabilities=frozenset({RequiredResourceTypeCapability("my/base")}))
        assert render_required(capabilities, missing_requirements_optional=False) == (
            f'sling.servlet;filter:="(&{SELECTORS_ABSENT}(sling.servlet.resourceTypes=my/base))"'
        )

    def test_resolved_stays_mandatory(self):
        """Test satisfied requirements are not marked optional."""
        capabilities = CapabilitySet(
            frozenset({ProvidedResourceTypeCapability(frozenset({"my/base"}), script_engine="htl", script_extension="html")}),
            frozenset(),
            frozenset({RequiredResourceTypeCapability("my/base")}),
        )
        assert not render_required(capabilities).endswith("resolution:=optional")

    def test_declared_optional(self):
        """Test declared optional requirements are always optional."""
        capabilities = CapabilitySet(
            frozenset({ProvidedResourceTypeCapability(frozenset({"my/base"}), script_engine="htl", script_extension="html")}),
            frozenset(),
            frozenset({RequiredResourceTypeCapability("my/base", optional=True)}),
        )
        assert render_required(capabilities, missing_requirements_optional=False).endswith(";resolution:=optional")


class TestToDict:
    """Test structured export."""

    def test_to_dict(self):
        """Test the exported fields."""
        requirement = RequiredResourceTypeCapability("my/base", VersionRange.parse("[1.0,2.0)"))
        capabilities = CapabilitySet(
            frozenset({ProvidedResourceTypeCapability(PAGE_TYPES, script_engine="htl", script_extension="html")}),
            frozenset({ProvidedScriptCapability("/util.ecma", "ecma", "rhino")}),
            frozenset({requirement}),
        )
        data = to_dict(capabilities)
        assert data["provided"][0]["resource_types"] == ["/apps/my/page", "my/page"]
        assert data["scripts"] == [{"path": "/util.ecma", "script_engine": "rhino", "script_extension": "ecma"}]
        assert data["required"] == [{"resource_type": "my/base", "version_range": "[1.0.0,2.0.0)", "optional": False}]
        assert data["unresolved"] == data["required"]

    def test_to_json(self):
        """Test the JSON export parses back to the dict."""
        capabilities = CapabilitySet(required_resource_type_capabilities=frozenset({RequiredResourceTypeCapability("my/a")}))
        assert json.loads(to_json(capabilities)) == to_dict(capabilities)
