"""Tree analysis for scriptmeta.

- ResourceTypeFolderPredicate: decides whether a folder is a resource type folder
- DescriptorReader: reads extends, requires and .content.xml files
- ResourceTypeFolderAnalyser: capabilities of one resource type folder
- PathOnlyScriptAnalyser: capabilities of scripts outside resource type folders
- PathFilter: include/exclude globs over root-relative paths
- scan_tree / analyse_paths: whole-tree analysis
"""

from scriptmeta.core.analyser import ResourceTypeFolderAnalyser
from scriptmeta.core.descriptor import ContentXml, DescriptorReader, read_content_xml
from scriptmeta.core.path_only import PathOnlyScriptAnalyser
from scriptmeta.core.paths import PathFilter, matches_glob
from scriptmeta.core.predicate import ResourceTypeFolderPredicate, resource_label
from scriptmeta.core.scanner import (
    analyse_paths,
    collect_sources,
    scan_sources,
    scan_tree,
    walk_tree,
)

__all__ = [
    "ResourceTypeFolderPredicate",
    "resource_label",
    "ContentXml",
    "DescriptorReader",
    "read_content_xml",
    "ResourceTypeFolderAnalyser",
    "PathOnlyScriptAnalyser",
    "PathFilter",
    "analyse_paths",
    "collect_sources",
    "matches_glob",
    "scan_sources",
    "scan_tree",
    "walk_tree",
]
