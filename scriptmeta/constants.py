"""Centralized constants for the scriptmeta package."""

from types import MappingProxyType

# HTTP methods a script file name may carry
METHODS = frozenset({"TRACE", "OPTIONS", "GET", "HEAD", "POST", "PUT", "DELETE", "PATCH"})

# Reserved file names inside a resource type folder
EXTENDS_FILE = "extends"
REQUIRES_FILE = "requires"
CONTENT_XML_FILE = ".content.xml"

# Document view descriptor
JCR_NAMESPACE = "http://www.jcp.org/jcr/1.0"
SLING_NAMESPACE = "http://sling.apache.org/jcr/sling/1.0"
JCR_ROOT = "root"
SLING_RESOURCE_SUPER_TYPE = "resourceSuperType"
SLING_REQUIRED_RESOURCE_TYPES = "requiredResourceTypes"

# Header clause attributes and directives
VERSION_ATTRIBUTE = "version"
RESOLUTION_DIRECTIVE = "resolution"
RESOLUTION_OPTIONAL = "optional"
FILTER_DIRECTIVE = "filter"

# Capability namespace and attribute names
CAPABILITY_NS = "sling.servlet"
CAPABILITY_RESOURCE_TYPE_AT = "sling.servlet.resourceTypes"
CAPABILITY_SELECTORS_AT = "sling.servlet.selectors"
CAPABILITY_EXTENSIONS_AT = "sling.servlet.extensions"
CAPABILITY_METHODS_AT = "sling.servlet.methods"
CAPABILITY_PATH_AT = "sling.servlet.paths"
CAPABILITY_VERSION_AT = "version"
CAPABILITY_EXTENDS_AT = "extends"
CAPABILITY_SCRIPT_ENGINE_AT = "scriptEngine"
CAPABILITY_SCRIPT_EXTENSION_AT = "scriptExtension"

DEFAULT_SEARCH_PATHS = ("/libs", "/apps")

DEFAULT_SCRIPT_ENGINE_MAPPINGS = MappingProxyType(
    {
        "ftl": "freemarker",
        "gst": "gstring",
        "html": "htl",
        "java": "java",
        "esp": "rhino",
        "ecma": "rhino",
        "jsp": "jsp",
        "jspf": "jsp",
        "jspx": "jsp",
    }
)

DEFAULT_SOURCE_DIRECTORIES = ("src/main/scripts", "src/main/resources/javax.script")

DEFAULT_EXCLUDES = (
    # Miscellaneous typical temporary files
    "**/*~",
    "**/#*#",
    "**/.#*",
    "**/%*%",
    "**/._*",
    # CVS
    "**/CVS",
    "**/CVS/**",
    "**/.cvsignore",
    # Subversion
    "**/.svn",
    "**/.svn/**",
    # Bazaar
    "**/.bzr",
    "**/.bzr/**",
    # Mac
    "**/.DS_Store",
    # Mercurial
    "**/.hg",
    "**/.hg/**",
    # git
    "**/.git",
    "**/.git/**",
)

CONFIG_FILENAME = "scriptmeta.toml"
