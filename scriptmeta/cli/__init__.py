"""Command line interface for scriptmeta."""
