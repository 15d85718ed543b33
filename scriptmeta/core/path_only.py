"""Analysis of scripts that live outside any resource type folder.

Such scripts can only be addressed by their path, e.g.
``/libs/commons/helpers/format.jsp``.
"""

import logging
from collections.abc import Callable, Mapping
from pathlib import Path

from scriptmeta.capability import EMPTY, CapabilitySet, ProvidedScriptCapability, RequiredResourceTypeCapability
from scriptmeta.constants import REQUIRES_FILE
from scriptmeta.core.descriptor import DescriptorReader
from scriptmeta.core.predicate import ResourceTypeFolderPredicate


class PathOnlyScriptAnalyser:
    """Derives path-only script capabilities below a scripts directory."""

    def __init__(
        self,
        scripts_directory: Path,
        script_engine_mappings: Mapping[str, str],
        descriptor_reader: DescriptorReader,
        predicate: ResourceTypeFolderPredicate | None = None,
        logger: logging.Logger | None = None,
        path_filter: Callable[[Path], bool] | None = None,
    ) -> None:
        self.scripts_directory = scripts_directory
        self.script_engine_mappings = dict(script_engine_mappings)
        self.descriptor_reader = descriptor_reader
        self.logger = logger or logging.getLogger(__name__)
        self.path_filter = path_filter
        self.predicate = predicate or ResourceTypeFolderPredicate(self.logger, path_filter=path_filter)

    def get_capabilities(self, file: Path) -> CapabilitySet:
        """Analyse one file.

        Returns the file's script capability plus the requirements of a
        ``requires`` file next to it. Files rejected by the path filter and
        files inside a resource type folder yield an empty set.
        """
        if not file.is_file() or not file.is_relative_to(self.scripts_directory):
            return EMPTY
        if not self._is_included(file):
            return EMPTY

        extension = file.suffix[1:]
        if not extension or extension not in self.script_engine_mappings:
            return EMPTY

        folder = file.parent
        while folder != self.scripts_directory and folder != folder.parent:
            if self.predicate(folder):
                return EMPTY
            folder = folder.parent

        script = ProvidedScriptCapability.from_path(
            "/" + file.relative_to(self.scripts_directory).as_posix(), self.script_engine_mappings
        )
        required: set[RequiredResourceTypeCapability] = set()
        requires = file.parent / REQUIRES_FILE
        if requires.is_file() and self._is_included(requires):
            self.descriptor_reader.process_requires_file(requires, required)
        return CapabilitySet(frozenset(), frozenset({script}), frozenset(required))

    def _is_included(self, path: Path) -> bool:
        return self.path_filter is None or self.path_filter(path)
