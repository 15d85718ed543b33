"""Test configuration and fixtures."""

from pathlib import Path

import pytest

from scriptmeta.capability import CapabilitySet
from scriptmeta.constants import DEFAULT_SCRIPT_ENGINE_MAPPINGS, DEFAULT_SEARCH_PATHS
from scriptmeta.core import analyse_paths, walk_tree

CONTENT_XML_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<jcr:root xmlns:sling="http://sling.apache.org/jcr/sling/1.0" xmlns:jcr="http://www.jcp.org/jcr/1.0"
    jcr:primaryType="sling:Folder"{attributes}/>
"""


@pytest.fixture
def content_xml():
    """Build a document view .content.xml with sling: attributes."""
    def _build(**attributes: str) -> str:
        rendered = "".join(f'\n    sling:{name}="{value}"' for name, value in attributes.items())
        return CONTENT_XML_TEMPLATE.format(attributes=rendered)
    return _build


@pytest.fixture
def make_tree(tmp_path: Path):
    """Create a scripts tree from a mapping of relative paths to file contents.

    Paths ending in "/" become empty folders.
    """
    def _make(files: dict[str, str], root_name: str = "scripts") -> Path:
        root = tmp_path / root_name
        root.mkdir(parents=True, exist_ok=True)
        for relative, content in files.items():
            path = root / relative
            if relative.endswith("/"):
                path.mkdir(parents=True, exist_ok=True)
                continue
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return root
    return _make


@pytest.fixture
def analyse():
    """Analyse a whole tree with the default search paths and engines."""
    def _analyse(root: Path, search_paths=DEFAULT_SEARCH_PATHS, mappings=DEFAULT_SCRIPT_ENGINE_MAPPINGS) -> CapabilitySet:
        return analyse_paths(root, walk_tree(root), search_paths, mappings)
    return _analyse
