"""Detection of resource type folders.

A folder is a resource type folder when one of its files shows it: an
``extends`` file, a ``.content.xml`` declaring a super type, or a script
named after the folder's resource label (``page/page.html``). A script
without a name that answers ``GET`` (``GET.html``) also marks the folder.
Every other folder is a selector folder.
"""

import logging
from collections.abc import Callable
from pathlib import Path

from scriptmeta.constants import CONTENT_XML_FILE, EXTENDS_FILE
from scriptmeta.core.descriptor import read_content_xml
from scriptmeta.resource_type import label_of
from scriptmeta.script import parse_script
from scriptmeta.versioning import is_version


def resource_label(folder: Path) -> str | None:
    """Compute the resource label a folder's main script would be named after.

    Version folders defer to their parent: ``my/page/1.0.0`` has label ``page``.

    Examples:
        >>> resource_label(Path("apps/my/page/1.0.0"))
        'page'
        >>> resource_label(Path("apps/org.example.page"))
        'page'
    """
    segment = folder.name
    if not segment:
        return None
    if is_version(segment) and folder.parent.name:
        segment = folder.parent.name
    return label_of(segment)


class ResourceTypeFolderPredicate:
    """Callable answering "is this folder a resource type folder?".

    Answers are cached per folder, so one instance must only be used for a
    tree that does not change while it is analysed. Files rejected by
    path_filter do not mark a folder.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        path_filter: Callable[[Path], bool] | None = None,
    ) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.path_filter = path_filter
        self._cache: dict[Path, bool] = {}

    def __call__(self, folder: Path | None) -> bool:
        if folder is None:
            return False
        cached = self._cache.get(folder)
        if cached is None:
            cached = self._test(folder)
            self._cache[folder] = cached
        return cached

    def _test(self, folder: Path) -> bool:
        label = resource_label(folder)
        if label is None:
            return False
        try:
            for child in folder.iterdir():
                if child.is_file() and self._is_included(child) and self._marks_resource_type(child, label):
                    return True
        except OSError as e:
            self.logger.error("Could not check if folder %s denotes a resource type: %s", folder, e)
        return False

    def _is_included(self, path: Path) -> bool:
        return self.path_filter is None or self.path_filter(path)

    def _marks_resource_type(self, child: Path, label: str) -> bool:
        name = child.name
        if name == EXTENDS_FILE:
            return True
        if name == CONTENT_XML_FILE:
            return read_content_xml(child).resource_super_type is not None
        script = parse_script(name)
        if script is None:
            return False
        if script.name == label:
            return True
        return script.name is None and (script.request_extension == "html" or script.request_method == "GET")
