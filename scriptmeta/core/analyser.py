"""Analysis of a single resource type folder.

Given ``apps/my/page`` below the scripts directory, every script directly in
the folder or in nested selector folders becomes a provided capability, and
the folder's directive files add super types and required resource types.
Nested folders that are resource type folders themselves are skipped; they
are analysed on their own.
"""

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from pathlib import Path

from scriptmeta.capability import (
    EMPTY,
    CapabilitySet,
    ProvidedCapabilityIndex,
    ProvidedResourceTypeCapability,
    RequiredResourceTypeCapability,
)
from scriptmeta.constants import CONTENT_XML_FILE, EXTENDS_FILE, REQUIRES_FILE
from scriptmeta.core.descriptor import DescriptorReader
from scriptmeta.core.predicate import ResourceTypeFolderPredicate
from scriptmeta.resource_type import ResourceType
from scriptmeta.script import is_ambiguous_name, parse_script


class ResourceTypeFolderAnalyser:
    """Derives the capabilities of resource type folders below a scripts directory."""

    def __init__(
        self,
        scripts_directory: Path,
        search_paths: Iterable[str],
        script_engine_mappings: Mapping[str, str],
        logger: logging.Logger | None = None,
        predicate: ResourceTypeFolderPredicate | None = None,
        descriptor_reader: DescriptorReader | None = None,
        path_filter: Callable[[Path], bool] | None = None,
    ) -> None:
        self.scripts_directory = scripts_directory
        self.search_paths = tuple(search_paths)
        self.script_engine_mappings = dict(script_engine_mappings)
        self.logger = logger or logging.getLogger(__name__)
        self.path_filter = path_filter
        self.predicate = predicate or ResourceTypeFolderPredicate(self.logger, path_filter=path_filter)
        self.descriptor_reader = descriptor_reader or DescriptorReader(self.search_paths, self.logger)

    def get_capabilities(self, resource_type_directory: Path) -> CapabilitySet:
        """Analyse one folder; folders that are no resource type folders yield nothing."""
        if resource_type_directory == self.scripts_directory:
            return EMPTY
        if not resource_type_directory.is_relative_to(self.scripts_directory):
            return EMPTY
        if not self.predicate(resource_type_directory):
            return EMPTY

        resource_type = ResourceType.parse(
            resource_type_directory.relative_to(self.scripts_directory).as_posix()
        )
        provided = ProvidedCapabilityIndex()
        required: set[RequiredResourceTypeCapability] = set()

        for entry in sorted(resource_type_directory.iterdir()):
            if entry.is_file():
                if not self._is_included(entry):
                    continue
                if entry.name == EXTENDS_FILE:
                    self.descriptor_reader.process_extends_file(resource_type, entry, provided, required)
                elif entry.name == REQUIRES_FILE:
                    self.descriptor_reader.process_requires_file(entry, required)
                elif entry.name == CONTENT_XML_FILE:
                    self.descriptor_reader.process_content_xml(resource_type, entry, provided, required)
                else:
                    self.process_script_file(resource_type_directory, entry, resource_type, provided)
            elif entry.is_dir() and not self.predicate(entry):
                for script in self._selector_files(entry):
                    self.process_script_file(resource_type_directory, script, resource_type, provided)

        self.logger.debug(
            "Resource type %s: %d provided, %d required capabilities", resource_type, len(provided), len(required)
        )
        return CapabilitySet(frozenset(provided), frozenset(), frozenset(required))

    def _selector_files(self, folder: Path) -> Iterator[Path]:
        """Files below a selector folder, not descending into resource type folders."""
        for entry in sorted(folder.iterdir()):
            if entry.is_file():
                if self._is_included(entry):
                    yield entry
            elif entry.is_dir() and not self.predicate(entry):
                yield from self._selector_files(entry)

    def _is_included(self, path: Path) -> bool:
        return self.path_filter is None or self.path_filter(path)

    def process_script_file(
        self,
        resource_type_directory: Path,
        script_path: Path,
        resource_type: ResourceType,
        provided: ProvidedCapabilityIndex,
    ) -> None:
        """Add the capabilities a script file provides.

        Folders between the resource type folder and the script become
        selectors. Files which are no scripts or whose extension has no
        script engine are skipped.
        """
        file_name = script_path.name
        script = parse_script(file_name)
        if script is None:
            self.logger.debug(
                "Skipping file %s not denoting a script as it does not follow the script naming conventions.",
                script_path,
            )
            return

        script_engine = self.script_engine_mappings.get(script.script_extension)
        if script_engine is None:
            self.logger.debug("Cannot find a script engine mapping for script %s.", script_path)
            return

        selectors = list(script_path.relative_to(resource_type_directory).parts[:-1])
        resource_types = resource_type.expand(self.search_paths)

        def capability(
            selectors: list[str], request_extension: str | None
        ) -> ProvidedResourceTypeCapability:
            return ProvidedResourceTypeCapability(
                resource_types=resource_types,
                version=resource_type.version,
                selectors=tuple(selectors),
                request_extension=request_extension,
                request_method=script.request_method,
                script_engine=script_engine,
                script_extension=script.script_extension,
            )

        if script.name is not None and script.name != resource_type.label:
            if is_ambiguous_name(file_name, script):
                # the name is either a selector or the request extension
                provided.add(capability(selectors + [script.name], None))
                provided.add(capability(selectors, script.name))
                return
            selectors.append(script.name)

        provided.add(capability(selectors, script.request_extension))
