"""Core data model: coordinates, version requirements and namespaces."""
