"""Whole-tree analysis.

The tree is enumerated once: included files plus every folder (a file brings
its parent folder along). Folders go to the resource type analyser, files to
the path-only analyser, and the results are merged into one CapabilitySet.
The analysers apply the same include/exclude filter to the files they read.
"""

import logging
import os
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path

from scriptmeta.capability import CapabilitySet
from scriptmeta.config import ScanConfig
from scriptmeta.constants import DEFAULT_EXCLUDES
from scriptmeta.core.analyser import ResourceTypeFolderAnalyser
from scriptmeta.core.descriptor import DescriptorReader
from scriptmeta.core.path_only import PathOnlyScriptAnalyser
from scriptmeta.core.paths import PathFilter
from scriptmeta.core.predicate import ResourceTypeFolderPredicate


def _raise(error: OSError) -> None:
    raise error


def walk_tree(
    root: Path,
    includes: Iterable[str] = (),
    excludes: Iterable[str] = DEFAULT_EXCLUDES,
) -> list[Path]:
    """Enumerate the folders and included files below root.

    Without includes every path is included; excludes always win. Each
    included file is followed by its parent folder.

    Raises:
        OSError: If a folder of the tree cannot be listed
    """
    path_filter = PathFilter(root, includes, excludes)
    candidates: list[Path] = []
    for folder, dirnames, filenames in os.walk(root, onerror=_raise):
        base = Path(folder)
        candidates.extend(base / name for name in dirnames)
        candidates.extend(base / name for name in filenames)

    seen: dict[Path, None] = {}
    for path in sorted(candidates):
        if not path_filter(path):
            continue
        seen.setdefault(path, None)
        if not path.is_dir():
            seen.setdefault(path.parent, None)
    return list(seen)


def analyse_paths(
    root: Path,
    paths: Iterable[Path],
    search_paths: Iterable[str],
    script_engine_mappings: Mapping[str, str],
    logger: logging.Logger | None = None,
    path_filter: Callable[[Path], bool] | None = None,
) -> CapabilitySet:
    """Analyse the given paths below root into one CapabilitySet.

    Files rejected by path_filter are ignored wherever a folder is read;
    without one every file counts.

    Raises:
        MalformedDirectiveError: On broken extends or requires files
        MalformedDescriptorError: On broken .content.xml files
        OSError: On filesystem errors while reading the tree
    """
    log = logger or logging.getLogger(__name__)
    search_paths = tuple(search_paths)
    predicate = ResourceTypeFolderPredicate(log, path_filter=path_filter)
    reader = DescriptorReader(search_paths, log)
    folder_analyser = ResourceTypeFolderAnalyser(
        root,
        search_paths,
        script_engine_mappings,
        logger=log,
        predicate=predicate,
        descriptor_reader=reader,
        path_filter=path_filter,
    )
    path_only_analyser = PathOnlyScriptAnalyser(
        root, script_engine_mappings, reader, predicate=predicate, logger=log, path_filter=path_filter
    )

    results = []
    for path in paths:
        if path.is_dir():
            results.append(folder_analyser.get_capabilities(path))
        else:
            results.append(path_only_analyser.get_capabilities(path))
    return CapabilitySet.union(results)


def scan_tree(root: Path, config: ScanConfig | None = None, logger: logging.Logger | None = None) -> CapabilitySet:
    """Analyse a scripts tree with the given configuration."""
    config = config or ScanConfig()
    paths = walk_tree(root, config.includes, config.effective_excludes)
    return analyse_paths(
        root,
        paths,
        config.effective_search_paths,
        config.script_engine_mappings,
        logger=logger,
        path_filter=PathFilter(root, config.includes, config.effective_excludes),
    )


def collect_sources(source_directories: Iterable[str], base_dir: Path) -> list[Path]:
    """Resolve the existing source directories.

    A directory that does not exist as given is looked up below base_dir.
    """
    resolved: list[Path] = []
    for source_directory in source_directories:
        path = Path(source_directory)
        if not path.exists():
            path = base_dir / source_directory
        if path.is_dir() and path not in resolved:
            resolved.append(path)
    return resolved


def scan_sources(
    config: ScanConfig, base_dir: Path, logger: logging.Logger | None = None
) -> CapabilitySet:
    """Analyse every configured source directory and merge the results."""
    sources = collect_sources(config.source_directories, base_dir)
    if not sources:
        (logger or logging.getLogger(__name__)).info("No source directories found below %s", base_dir)
    return CapabilitySet.union(scan_tree(source, config, logger=logger) for source in sources)
