"""The capability set of a whole scripts tree."""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from scriptmeta.capability.provided import ProvidedResourceTypeCapability, ProvidedScriptCapability
from scriptmeta.capability.required import RequiredResourceTypeCapability


@dataclass(frozen=True)
class CapabilitySet:
    """Provided and required capabilities of a scripts tree.

    ``unresolved_required`` is computed on construction: the required
    capabilities that no provided resource type capability satisfies.
    """

    provided_resource_type_capabilities: frozenset[ProvidedResourceTypeCapability] = frozenset()
    provided_script_capabilities: frozenset[ProvidedScriptCapability] = frozenset()
    required_resource_type_capabilities: frozenset[RequiredResourceTypeCapability] = frozenset()
    unresolved_required: frozenset[RequiredResourceTypeCapability] = field(init=False, compare=False)

    def __post_init__(self) -> None:
        provided = frozenset(self.provided_resource_type_capabilities)
        required = frozenset(self.required_resource_type_capabilities)
        object.__setattr__(self, "provided_resource_type_capabilities", provided)
        object.__setattr__(self, "provided_script_capabilities", frozenset(self.provided_script_capabilities))
        object.__setattr__(self, "required_resource_type_capabilities", required)
        object.__setattr__(
            self,
            "unresolved_required",
            frozenset(
                requirement
                for requirement in required
                if not any(requirement.is_satisfied(capability) for capability in provided)
            ),
        )

    @classmethod
    def union(cls, capability_sets: Iterable["CapabilitySet"]) -> "CapabilitySet":
        """Combine several capability sets into one, recomputing resolution."""
        provided: set[ProvidedResourceTypeCapability] = set()
        scripts: set[ProvidedScriptCapability] = set()
        required: set[RequiredResourceTypeCapability] = set()
        for capability_set in capability_sets:
            provided.update(capability_set.provided_resource_type_capabilities)
            scripts.update(capability_set.provided_script_capabilities)
            required.update(capability_set.required_resource_type_capabilities)
        return cls(frozenset(provided), frozenset(scripts), frozenset(required))

    @classmethod
    def from_file_system_tree(
        cls,
        root: Path,
        paths: Iterable[Path],
        search_paths: Iterable[str],
        script_engine_mappings: Mapping[str, str],
        logger: logging.Logger | None = None,
        path_filter: Callable[[Path], bool] | None = None,
    ) -> "CapabilitySet":
        """Analyse the given directories and files of a tree below ``root``.

        See :func:`scriptmeta.core.scanner.analyse_paths`.
        """
        from scriptmeta.core.scanner import analyse_paths

        return analyse_paths(
            root, paths, search_paths, script_engine_mappings, logger=logger, path_filter=path_filter
        )

    @property
    def is_empty(self) -> bool:
        return not (
            self.provided_resource_type_capabilities
            or self.provided_script_capabilities
            or self.required_resource_type_capabilities
        )


EMPTY = CapabilitySet()
