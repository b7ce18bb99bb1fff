"""Headless editor session."""

from __future__ import annotations

from knowdoc.editor.session import EditorSession

__all__ = ["EditorSession"]
