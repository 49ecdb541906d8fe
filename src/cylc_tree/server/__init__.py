"""FastAPI server adapter for cylc-tree.

Design intent:
- Keep tree building in `cylc_tree.tree.*`
- Keep server-specific concerns (routing, CORS, status codes) here
"""

from __future__ import annotations

__all__ = ["create_app"]

from cylc_tree.server.app import create_app
