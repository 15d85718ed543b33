"""Readers for the directive files of a resource type folder.

Three files carry directives:

| File           | Content                                                       |
|----------------|---------------------------------------------------------------|
| `extends`      | exactly one clause naming the super type                      |
| `requires`     | one clause per line, each naming a required resource type    |
| `.content.xml` | document view whose root may carry `sling:resourceSuperType`  |
|                | and `sling:requiredResourceTypes`                              |

Clauses look like ``resource/type;version="[1.0,2.0)";resolution:=optional``.
"""

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterable, MutableSet
from dataclasses import dataclass
from pathlib import Path

from scriptmeta.capability import ProvidedCapabilityIndex, RequiredResourceTypeCapability
from scriptmeta.constants import (
    JCR_NAMESPACE,
    JCR_ROOT,
    RESOLUTION_DIRECTIVE,
    RESOLUTION_OPTIONAL,
    SLING_NAMESPACE,
    SLING_REQUIRED_RESOURCE_TYPES,
    SLING_RESOURCE_SUPER_TYPE,
    VERSION_ATTRIBUTE,
)
from scriptmeta.exceptions import InvalidVersionError, MalformedDescriptorError, MalformedDirectiveError
from scriptmeta.header import HeaderClause, parse_header
from scriptmeta.resource_type import ResourceType, normalize_path
from scriptmeta.versioning import VersionRange


ALLOWED_PARAMETER_NAMES = (VERSION_ATTRIBUTE, f"{RESOLUTION_DIRECTIVE}:")

_STRING_TYPES = (None, "String")


@dataclass(frozen=True)
class DocViewValue:
    """A property value in document view notation, e.g. ``{String}[a,b]``."""

    type: str | None
    values: tuple[str, ...]
    multi: bool


def _unescape(value: str) -> str:
    result = []
    escaped = False
    for char in value:
        if escaped:
            result.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        else:
            result.append(char)
    if escaped:
        result.append("\\")
    return "".join(result)


def parse_docview_value(raw: str) -> DocViewValue:
    """Parse a document view property value.

    Examples:
        >>> parse_docview_value("my/super")
        DocViewValue(type=None, values=('my/super',), multi=False)
        >>> parse_docview_value("{String}[a,b\\\\,c]")
        DocViewValue(type='String', values=('a', 'b,c'), multi=True)
    """
    type_name = None
    value = raw
    if value.startswith("{"):
        end = value.find("}")
        if end > 0:
            type_name = value[1:end]
            value = value[end + 1:]

    if len(value) >= 2 and value.startswith("[") and value.endswith("]"):
        inner = value[1:-1]
        if not inner:
            return DocViewValue(type=type_name, values=(), multi=True)
        items = []
        current: list[str] = []
        escaped = False
        for char in inner:
            if escaped:
                current.append("\\" + char)
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == ",":
                items.append(_unescape("".join(current)))
                current = []
            else:
                current.append(char)
        items.append(_unescape("".join(current)))
        return DocViewValue(type=type_name, values=tuple(items), multi=True)

    return DocViewValue(type=type_name, values=(_unescape(value),), multi=False)


@dataclass(frozen=True)
class ContentXml:
    """Directives read from a ``.content.xml`` document view file."""

    path: Path
    resource_super_type: str | None = None
    required_resource_types: tuple[str, ...] = ()


def read_content_xml(path: Path) -> ContentXml:
    """Read the super type and required types from a document view file.

    Raises:
        MalformedDescriptorError: If the file is not a document view or a
            property has the wrong type or cardinality
        OSError: If the file cannot be read
    """
    try:
        tree = ET.parse(path)
    except ET.ParseError as e:
        raise MalformedDescriptorError(f"Cannot parse {path}: {e}") from e

    root = tree.getroot()
    root_tag = f"{{{JCR_NAMESPACE}}}{JCR_ROOT}"
    if root.tag != root_tag or sum(1 for _ in root.iter(root_tag)) != 1:
        raise MalformedDescriptorError(
            f"Path {path} does not seem to provide a Docview format - "
            "https://jackrabbit.apache.org/filevault/docview.html."
        )

    resource_super_type = None
    raw_super_type = root.get(f"{{{SLING_NAMESPACE}}}{SLING_RESOURCE_SUPER_TYPE}")
    if raw_super_type:
        value = parse_docview_value(raw_super_type)
        if value.multi or value.type not in _STRING_TYPES:
            raise MalformedDescriptorError(
                f"Invalid sling:{SLING_RESOURCE_SUPER_TYPE} property value ({raw_super_type}) in file {path}."
            )
        resource_super_type = value.values[0]

    required_resource_types: tuple[str, ...] = ()
    raw_required = root.get(f"{{{SLING_NAMESPACE}}}{SLING_REQUIRED_RESOURCE_TYPES}")
    if raw_required:
        value = parse_docview_value(raw_required)
        if not value.multi or value.type not in _STRING_TYPES:
            raise MalformedDescriptorError(
                f"Invalid sling:{SLING_REQUIRED_RESOURCE_TYPES} property value ({raw_required}) in file {path}."
            )
        required_resource_types = tuple(dict.fromkeys(value.values))

    return ContentXml(
        path=path,
        resource_super_type=resource_super_type,
        required_resource_types=required_resource_types,
    )


def _read_lines(path: Path) -> list[str]:
    return [line.strip() for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


class DescriptorReader:
    """Turns directive files into provided and required capabilities."""

    def __init__(self, search_paths: Iterable[str], logger: logging.Logger | None = None) -> None:
        self.search_paths = tuple(search_paths)
        self.logger = logger or logging.getLogger(__name__)

    def process_extends_file(
        self,
        resource_type: ResourceType,
        path: Path,
        provided: ProvidedCapabilityIndex,
        required: MutableSet[RequiredResourceTypeCapability],
    ) -> None:
        """Read an ``extends`` file.

        Raises:
            MalformedDirectiveError: If the file does not hold exactly one clause
        """
        lines = _read_lines(path)
        if len(lines) != 1:
            raise MalformedDirectiveError(f"The file '{path}' must contain one line only (not multiple ones)")
        self._process_extended_resource_type(resource_type, path, provided, required, lines[0])

    def process_requires_file(self, path: Path, required: MutableSet[RequiredResourceTypeCapability]) -> None:
        """Read a ``requires`` file, one clause per non-blank line."""
        self._process_required_resource_types(path, required, _read_lines(path))

    def process_content_xml(
        self,
        resource_type: ResourceType,
        path: Path,
        provided: ProvidedCapabilityIndex,
        required: MutableSet[RequiredResourceTypeCapability],
    ) -> None:
        """Read the super type and required types of a ``.content.xml`` file."""
        content = read_content_xml(path)
        if content.resource_super_type:
            self._process_extended_resource_type(
                resource_type, path, provided, required, content.resource_super_type
            )
        if content.required_resource_types:
            self._process_required_resource_types(path, required, content.required_resource_types)

    def _process_extended_resource_type(
        self,
        resource_type: ResourceType,
        source: Path,
        provided: ProvidedCapabilityIndex,
        required: MutableSet[RequiredResourceTypeCapability],
        text: str,
    ) -> None:
        clauses = parse_header(text)
        if len(clauses) != 1:
            raise MalformedDirectiveError(
                f"The file '{source}' must contain one clause only (not multiple ones separated by ',')"
            )
        requirement = self._to_requirement(clauses[0], source, "extends")
        provided.declare_extends(
            resource_type.expand(self.search_paths), resource_type.version, requirement.resource_type
        )
        required.add(requirement)

    def _process_required_resource_types(
        self,
        source: Path,
        required: MutableSet[RequiredResourceTypeCapability],
        lines: Iterable[str],
    ) -> None:
        for line in lines:
            clauses = parse_header(line)
            if len(clauses) != 1:
                raise MalformedDirectiveError(
                    f"Each line in file '{source}' must contain one clause only (not multiple ones separated by ',')"
                )
            required.add(self._to_requirement(clauses[0], source, "requires"))

    def _to_requirement(self, clause: HeaderClause, source: Path, kind: str) -> RequiredResourceTypeCapability:
        for name in clause.parameter_names:
            if name not in ALLOWED_PARAMETER_NAMES:
                raise MalformedDirectiveError(
                    f"Found unsupported attribute/directive '{name}' in file '{source}'. Only the following "
                    f"attributes or directives may be used in the {kind} file: {','.join(ALLOWED_PARAMETER_NAMES)}"
                )
        resource_type = normalize_path(clause.path)
        if not resource_type or resource_type == ".." or resource_type.startswith("../"):
            raise MalformedDirectiveError(f"Invalid resource type '{clause.path}' in file '{source}'")
        return RequiredResourceTypeCapability(
            resource_type=resource_type,
            version_range=self._version_range(clause.attributes.get(VERSION_ATTRIBUTE), source),
            optional=clause.directives.get(RESOLUTION_DIRECTIVE) == RESOLUTION_OPTIONAL,
        )

    def _version_range(self, value: str | None, source: Path) -> VersionRange | None:
        if value is None:
            return None
        try:
            return VersionRange.parse(value)
        except InvalidVersionError:
            self.logger.warning("Invalid version range format %s in file %s.", value, source)
            return None
