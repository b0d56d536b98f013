"""YAML schedule definitions and loaders."""
