"""Editing module for the running diary.

Provides copy-on-edit sessions that commit runs atomically.
"""

from .session import EditorRegistry, EditSession

__all__ = ["EditSession", "EditorRegistry"]
