"""Top-level postboard package.

Sub-packages
------------
postboard.backend
    FastAPI server (api/), schemas/, services/, cli/ and core/utils
postboard.frontend
    View-model layer: query state, view units, HTML rendering, RPC client
"""

from __future__ import annotations
