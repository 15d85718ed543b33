"""Tests for capability value objects, the merge index and resolution."""

import pytest

from scriptmeta.capability import (
    CapabilitySet,
    ProvidedCapabilityIndex,
    ProvidedResourceTypeCapability,
    ProvidedScriptCapability,
    RequiredResourceTypeCapability,
)
from scriptmeta.constants import DEFAULT_SCRIPT_ENGINE_MAPPINGS
from scriptmeta.exceptions import InvalidCapabilityError
from scriptmeta.versioning import VersionRange

BASE_TYPES = frozenset({"/apps/my/base", "my/base"})


def provided(version=None, selectors=(), **kwargs) -> ProvidedResourceTypeCapability:
    return ProvidedResourceTypeCapability(
        resource_types=BASE_TYPES,
        version=version,
        selectors=selectors,
        script_engine=kwargs.pop("script_engine", "htl"),
        script_extension=kwargs.pop("script_extension", "html"),
        **kwargs,
    )


class TestProvidedResourceTypeCapability:
    """Test provided capability invariants."""

    def test_empty_resource_types_rejected(self):
        """Test a capability needs at least one resource type."""
        with pytest.raises(InvalidCapabilityError):
            ProvidedResourceTypeCapability(resource_types=frozenset())

    def test_selectors_are_an_ordered_set(self):
        """Test duplicate selectors collapse while order is kept."""
        capability = provided(selectors=("b", "a", "b"))
        assert capability.selectors == ("b", "a")

    def test_structural_equality(self):
        """Test capabilities compare by value, selectors by order."""
        assert provided(selectors=("a", "b")) == provided(selectors=("a", "b"))
        assert provided(selectors=("a", "b")) != provided(selectors=("b", "a"))


class TestProvidedScriptCapability:
    """Test path-only script capabilities."""

    def test_from_path(self):
        """Test the engine is looked up from the extension."""
        capability = ProvidedScriptCapability.from_path("/libs/helpers/format.jsp", DEFAULT_SCRIPT_ENGINE_MAPPINGS)
        assert capability.script_extension == "jsp"
        assert capability.script_engine == "jsp"

    @pytest.mark.parametrize("path", ["", "/libs/helpers/format", "/libs/helpers/format.", "/libs/a.b/c"])
    def test_missing_extension(self, path):
        """Test paths without an extension are rejected."""
        with pytest.raises(InvalidCapabilityError):
            ProvidedScriptCapability.from_path(path, DEFAULT_SCRIPT_ENGINE_MAPPINGS)

    def test_unmapped_extension(self):
        """Test paths with an unmapped extension are rejected."""
        with pytest.raises(InvalidCapabilityError):
            ProvidedScriptCapability.from_path("/libs/readme.txt", DEFAULT_SCRIPT_ENGINE_MAPPINGS)


class TestIsSatisfied:
    """Test requirement satisfaction."""

    def test_type_match(self):
        """Test a matching type without range is satisfied."""
        assert RequiredResourceTypeCapability("my/base").is_satisfied(provided())

    def test_type_mismatch(self):
        """Test another type does not satisfy."""
        assert not RequiredResourceTypeCapability("my/other").is_satisfied(provided())

    def test_selectors_never_satisfy(self):
        """Test capabilities with selectors do not satisfy requirements."""
        assert not RequiredResourceTypeCapability("my/base").is_satisfied(provided(selectors=("print",)))

    def test_version_in_range(self):
        """Test a version inside the range satisfies."""
        requirement = RequiredResourceTypeCapability("my/base", VersionRange.parse("[1.0,2.0)"))
        assert requirement.is_satisfied(provided(version="1.0.0"))

    def test_version_outside_range(self):
        """Test a version outside the range does not satisfy."""
        requirement = RequiredResourceTypeCapability("my/base", VersionRange.parse("[2.0,3.0)"))
        assert not requirement.is_satisfied(provided(version="1.0.0"))

    def test_range_needs_a_version(self):
        """Test an unversioned capability does not satisfy a ranged requirement."""
        requirement = RequiredResourceTypeCapability("my/base", VersionRange.parse("1.0"))
        assert not requirement.is_satisfied(provided())

    def test_empty_type_rejected(self):
        """Test a requirement needs a resource type."""
        with pytest.raises(InvalidCapabilityError):
            RequiredResourceTypeCapability("")


class TestCapabilitySet:
    """Test aggregation and unresolved requirement computation."""

    def test_unresolved_required(self):
        """Test only unmatched requirements are unresolved."""
        satisfied = RequiredResourceTypeCapability("my/base", VersionRange.parse("[1.0,2.0)"))
        unsatisfied = RequiredResourceTypeCapability("my/base", VersionRange.parse("[2.0,3.0)"))
        capabilities = CapabilitySet(
            frozenset({provided(version="1.0.0")}),
            frozenset(),
            frozenset({satisfied, unsatisfied}),
        )
        assert capabilities.unresolved_required == frozenset({unsatisfied})

    def test_union_recomputes_resolution(self):
        """Test a requirement from one set can be satisfied by another."""
        requirement = RequiredResourceTypeCapability("my/base")
        first = CapabilitySet(required_resource_type_capabilities=frozenset({requirement}))
        second = CapabilitySet(provided_resource_type_capabilities=frozenset({provided()}))
        assert first.unresolved_required == frozenset({requirement})
        assert CapabilitySet.union([first, second]).unresolved_required == frozenset()

    def test_empty(self):
        """Test the empty set."""
        assert CapabilitySet().is_empty
        assert not CapabilitySet(provided_resource_type_capabilities=frozenset({provided()})).is_empty


class TestProvidedCapabilityIndex:
    """Test merging of extends declarations with script capabilities."""

    def test_extends_before_script(self):
        """Test an extends declared first is absorbed by the default script."""
        index = ProvidedCapabilityIndex()
        index.declare_extends(BASE_TYPES, None, "my/super")
        index.add(provided())
        assert list(index) == [provided(extends_resource_type="my/super")]

    def test_extends_after_script(self):
        """Test an extends declared last is attached to the default script."""
        index = ProvidedCapabilityIndex()
        index.add(provided())
        index.declare_extends(BASE_TYPES, None, "my/super")
        assert list(index) == [provided(extends_resource_type="my/super")]

    def test_extends_without_script(self):
        """Test an extends without a default script stays a placeholder."""
        index = ProvidedCapabilityIndex()
        index.declare_extends(BASE_TYPES, "1.0.0", "my/super")
        [capability] = list(index)
        assert capability.script_engine is None
        assert capability.extends_resource_type == "my/super"
        assert capability.version == "1.0.0"

    def test_selector_scripts_keep_no_extends(self):
        """Test scripts with selectors are not merged with the extends."""
        index = ProvidedCapabilityIndex()
        index.declare_extends(BASE_TYPES, None, "my/super")
        index.add(provided(selectors=("print",)))
        assert len(index) == 2
        assert provided(selectors=("print",)) in list(index)

    def test_duplicates_collapse(self):
        """Test adding the same capability twice keeps one."""
        index = ProvidedCapabilityIndex()
        index.add(provided())
        index.add(provided())
        assert len(index) == 1
