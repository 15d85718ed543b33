"""scriptmeta: capability metadata for resource type script trees."""

__version__ = "0.1.0"
