"""Script file name parsing.

Script files follow the pattern::

    [name.][requestExtension.][requestMethod.]scriptExtension

| Parts | Example               | name   | requestExtension | requestMethod |
|-------|-----------------------|--------|------------------|---------------|
| 2     | `test.html`           | test   |                  |               |
| 2     | `GET.html`            |        |                  | GET           |
| 3     | `test.txt.html`       | test   | txt              |               |
| 3     | `test.POST.html`      | test   |                  | POST          |
| 4     | `test.txt.PUT.html`   | test   | txt              | PUT           |
"""

import mimetypes
from dataclasses import dataclass

from scriptmeta.constants import METHODS

# Extensions a request may carry, taken from the interpreter's built-in table
# so the result does not depend on the host's mime.types files.
REQUEST_EXTENSIONS = frozenset(
    extension.lstrip(".") for extension in mimetypes.MimeTypes().types_map[True]
)


@dataclass(frozen=True)
class Script:
    """Parsed script file name.

    Attributes:
        name: Selector or resource label part, None for method-only names
        request_extension: Request extension the script answers to
        request_method: HTTP method the script answers to
        script_extension: Extension used to pick the script engine
    """

    name: str | None
    request_extension: str | None
    request_method: str | None
    script_extension: str


def parse_script(file_name: str) -> Script | None:
    """Parse a bare file name into its script parts.

    Returns None if the name has fewer than 2 or more than 4 dot-separated
    parts.

    Examples:
        >>> parse_script("test.txt.PUT.html")
        Script(name='test', request_extension='txt', request_method='PUT', script_extension='html')
        >>> parse_script("GET.html")
        Script(name=None, request_extension=None, request_method='GET', script_extension='html')
        >>> parse_script("extends") is None
        True
    """
    parts = file_name.split(".")
    if len(parts) < 2 or len(parts) > 4:
        return None

    name: str | None = parts[0]
    script_extension = parts[-1]
    request_extension = None
    request_method = None

    if len(parts) == 2 and name in METHODS:
        request_method = name
        name = None
    elif len(parts) == 3:
        # Only the middle part is checked against the methods here; the
        # leading part is always kept as the name.
        middle = parts[1]
        if middle in METHODS:
            request_method = middle
        else:
            request_extension = middle
    elif len(parts) == 4:
        request_extension = parts[1]
        request_method = parts[2]

    return Script(
        name=name,
        request_extension=request_extension,
        request_method=request_method,
        script_extension=script_extension,
    )


def is_request_extension(token: str | None) -> bool:
    """Check if a token is a known request extension (e.g. "html", "json")."""
    return bool(token) and token in REQUEST_EXTENSIONS


def is_ambiguous_name(file_name: str, script: Script) -> bool:
    """Check if a two-part script's name may also be read as a request extension.

    ``html.html`` could serve the ``html`` selector or the ``html`` extension;
    callers emit a capability for each reading.
    """
    return (
        len(file_name.split(".")) == 2
        and script.request_method is None
        and is_request_extension(script.name)
    )
