"""Unit tests for ResultInserter."""

import pytest

from notescribe.core.exceptions import NoActiveDocumentError, NoInsertionTargetError
from notescribe.core.models import Position
from notescribe.document import TextEditor, Workspace
from notescribe.services.inserter import ResultInserter
from notescribe.services.watcher import ElementWatcher, find_control


@pytest.fixture
def bound_audio(document, audio):
    """The fixture audio element with its transcribe control attached."""
    ElementWatcher(on_activate=lambda a, c: None).scan(document)
    return audio


def test_inserts_trimmed_text_below_cursor_line(workspace, editor, bound_audio):
    cursor = ResultInserter(workspace).insert("  hello world \n", bound_audio)

    assert editor.get_value() == "# Voice memo\nhello world\n![[memo.mp3]]\n\nTail"
    assert cursor == Position(line=1, ch=11)
    assert editor.get_cursor() == cursor


def test_uses_cursor_at_insertion_time(workspace, editor, bound_audio):
    editor.set_cursor(Position(line=2, ch=0))

    ResultInserter(workspace).insert("hello", bound_audio)

    assert editor.get_line(3) == "hello"
    assert editor.get_line(1) == "![[memo.mp3]]"


def test_cursor_on_last_line_appends_new_line(bound_audio):
    editor = TextEditor("first\nlast", cursor=Position(line=1, ch=2))

    cursor = ResultInserter(Workspace(editor)).insert("hello", bound_audio)

    assert editor.get_value() == "first\nlast\nhello"
    assert cursor == Position(line=2, ch=5)


def test_multiline_result_puts_cursor_at_end(workspace, editor, bound_audio):
    cursor = ResultInserter(workspace).insert("# Summary\n- buy milk\n", bound_audio)

    assert editor.get_line(1) == "# Summary"
    assert editor.get_line(2) == "- buy milk"
    assert editor.get_line(3) == "![[memo.mp3]]"
    assert cursor == Position(line=2, ch=10)


def test_no_active_editor(bound_audio):
    with pytest.raises(NoActiveDocumentError, match="No active editor found!"):
        ResultInserter(Workspace()).insert("hello", bound_audio)


def test_control_missing(workspace, editor, bound_audio):
    find_control(bound_audio).remove()
    before = editor.get_value()

    with pytest.raises(NoInsertionTargetError):
        ResultInserter(workspace).insert("hello", bound_audio)

    assert editor.get_value() == before
