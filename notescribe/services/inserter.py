"""Write a finished transcript into the focused document.

The target is the line below the editor's cursor *at completion time*;
the cursor may have moved while the job was running.
"""

import logging

from notescribe.core.exceptions import NoActiveDocumentError, NoInsertionTargetError
from notescribe.core.models import Position
from notescribe.document.base import BaseWorkspace
from notescribe.document.dom import Element
from notescribe.services.watcher import find_control

logger = logging.getLogger(__name__)


class ResultInserter:
    """Inserts text as a new line under the current cursor line.

    Args:
        workspace: Source of the focused editor.
    """

    def __init__(self, workspace: BaseWorkspace) -> None:
        self._workspace = workspace

    def insert(self, text: str, audio: Element) -> Position:
        """Insert ``text`` (trimmed) below the cursor and move the cursor to its end.

        Args:
            text: Final transcript.
            audio: The element whose control started the job.

        Returns:
            The new cursor position.

        Raises:
            NoInsertionTargetError: The audio element no longer has its control.
            NoActiveDocumentError: No editor is focused.
        """
        if find_control(audio) is None:
            raise NoInsertionTargetError()

        editor = self._workspace.get_active_editor()
        if editor is None:
            raise NoActiveDocumentError()

        text = text.strip()
        line = editor.get_cursor().line + 1

        if line < editor.line_count():
            editor.replace_range(f"{text}\n", Position(line=line, ch=0))
        else:
            # Cursor is on the last line: open a new one at the end
            last = editor.line_count() - 1
            editor.replace_range(f"\n{text}", Position(line=last, ch=len(editor.get_line(last))))

        inserted = text.split("\n")
        cursor = Position(line=line + len(inserted) - 1, ch=len(inserted[-1]))
        editor.set_cursor(cursor)
        logger.info("Inserted %d chars at line %d", len(text), line)
        return cursor
