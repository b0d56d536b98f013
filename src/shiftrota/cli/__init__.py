"""Command-line interface for shiftrota."""
