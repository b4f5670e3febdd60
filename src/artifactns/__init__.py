"""artifactns: Hierarchical artifact version requirements, selections and search."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
