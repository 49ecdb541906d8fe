"""Cylc tree view builder.

Turns the flat workflow data served by the Cylc GraphQL API into the nested,
typed node hierarchy displayed by the tree view, with:
- settings loaded from `.env`
- structured logging
- a small CLI and REST surface
"""

__version__ = "0.1.0"

from cylc_tree.config import TreeSettings

__all__ = ["__version__", "TreeSettings"]
