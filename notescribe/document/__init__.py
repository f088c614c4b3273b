"""
Document module - the host surfaces the pipeline works against.

Abstract interfaces for the editor, workspace and notification channel,
plus an in-memory element tree and text editor that hosts (and tests)
can use directly.
"""

from .base import BaseEditor, BaseNotifier, BaseWorkspace
from .dom import Document, Element, Mutation
from .editor import LogNotifier, TextEditor, Workspace

__all__ = [
    "BaseEditor",
    "BaseNotifier",
    "BaseWorkspace",
    "Document",
    "Element",
    "LogNotifier",
    "Mutation",
    "TextEditor",
    "Workspace",
]
