"""HTTP API (optional ``web`` extra)."""

from code_deps.web.app import create_app

__all__ = ["create_app"]
