"""
Abstract base classes for the host's editing and notification surfaces.

Hosts implement these so the transcription pipeline stays independent
of any particular editor.
"""

from abc import ABC, abstractmethod

from notescribe.core.models import Position


class BaseEditor(ABC):
    """Interface of an editable text document view."""

    @abstractmethod
    def get_cursor(self) -> Position:
        """Return the current cursor position."""

    @abstractmethod
    def set_cursor(self, pos: Position) -> None:
        """Move the cursor to ``pos``."""

    @abstractmethod
    def replace_range(self, text: str, start: Position, end: Position | None = None) -> None:
        """Replace the text between ``start`` and ``end`` with ``text``.

        Args:
            text: Replacement text (may contain newlines).
            start: Start of the range.
            end: End of the range; ``None`` means a pure insertion at ``start``.
        """

    @abstractmethod
    def line_count(self) -> int:
        """Return the number of lines in the document."""

    @abstractmethod
    def get_line(self, line: int) -> str:
        """Return the text of one line (without its line break)."""


class BaseWorkspace(ABC):
    """Interface to the host's window/tab management."""

    @abstractmethod
    def get_active_editor(self) -> BaseEditor | None:
        """Return the focused editor, or None when no document is being edited."""


class BaseNotifier(ABC):
    """Interface of the user notification channel (fire-and-forget)."""

    @abstractmethod
    def notice(self, message: str) -> None:
        """Show a transient in-app message."""

    @abstractmethod
    def notify(self, title: str, body: str) -> None:
        """Show a desktop-style notification."""
