"""Command-line interface for kdef."""
