"""ASGI entrypoint."""

from __future__ import annotations

from knowdoc.api.app import create_app

app = create_app()
