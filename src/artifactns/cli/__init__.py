"""Command-line interface for artifactns."""
