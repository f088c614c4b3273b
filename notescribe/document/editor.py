"""
In-memory implementations of the host interfaces.

``TextEditor`` follows CodeMirror conventions: zero-based lines and
columns, positions outside the document are clamped.
"""

import logging

from notescribe.core.models import Position
from notescribe.document.base import BaseEditor, BaseNotifier, BaseWorkspace

logger = logging.getLogger(__name__)


class TextEditor(BaseEditor):
    """Line-based text buffer with a single cursor."""

    def __init__(self, text: str = "", cursor: Position | None = None) -> None:
        self._lines = text.split("\n")
        self._cursor = self._clamp(cursor or Position())

    def get_value(self) -> str:
        return "\n".join(self._lines)

    def get_cursor(self) -> Position:
        return self._cursor.model_copy()

    def set_cursor(self, pos: Position) -> None:
        self._cursor = self._clamp(pos)

    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, line: int) -> str:
        return self._lines[line]

    def replace_range(self, text: str, start: Position, end: Position | None = None) -> None:
        start = self._clamp(start)
        end = self._clamp(end) if end is not None else start
        if (end.line, end.ch) < (start.line, start.ch):
            start, end = end, start

        head = self._lines[start.line][: start.ch]
        tail = self._lines[end.line][end.ch :]
        new_lines = (head + text + tail).split("\n")
        self._lines[start.line : end.line + 1] = new_lines

    def _clamp(self, pos: Position) -> Position:
        if pos.line < 0:
            return Position(line=0, ch=0)
        if pos.line >= len(self._lines):
            last = len(self._lines) - 1
            return Position(line=last, ch=len(self._lines[last]))
        return Position(line=pos.line, ch=max(0, min(pos.ch, len(self._lines[pos.line]))))


class Workspace(BaseWorkspace):
    """Holds the currently focused editor (None when nothing is focused)."""

    def __init__(self, active_editor: BaseEditor | None = None) -> None:
        self.active_editor = active_editor

    def get_active_editor(self) -> BaseEditor | None:
        return self.active_editor


class LogNotifier(BaseNotifier):
    """Notifier that writes every message to the log and keeps a history."""

    def __init__(self) -> None:
        self.notices: list[str] = []
        self.notifications: list[tuple[str, str]] = []

    def notice(self, message: str) -> None:
        logger.info("Notice: %s", message)
        self.notices.append(message)

    def notify(self, title: str, body: str) -> None:
        logger.info("Notification [%s]: %s", title, body)
        self.notifications.append((title, body))
