"""Tests for ElementWatcher: one control per audio element, now and later."""

import asyncio
from unittest.mock import MagicMock, patch

import pytest

from notescribe.document import Document, Element
from notescribe.services.watcher import CONTROL_CLASS, ElementWatcher, find_control


def _embed(src: str = "http://vault.local/memo.mp3") -> tuple[Element, Element]:
    container = Element("div", classes=["internal-embed"])
    audio = container.append_child(Element("audio", attrs={"src": src}))
    return container, audio


def _controls(root: Element) -> list[Element]:
    return [el for el in root.iter() if el.has_class(CONTROL_CLASS)]


@pytest.fixture
def on_activate():
    return MagicMock()


@pytest.fixture
def watcher(on_activate):
    return ElementWatcher(on_activate=on_activate, rescan_delay=0.01)


# ---------------------------------------------------------------------------
# scan()
# ---------------------------------------------------------------------------


class TestScan:
    def test_attaches_control_after_audio(self, watcher):
        container, audio = _embed()

        bindings = watcher.scan(container)

        assert len(bindings) == 1
        control = bindings[0].control
        assert audio.next_sibling() is control
        assert control.tag == "button"
        assert control.text == "Transcribe"
        assert control.get("title") == "Transcribe Audio"
        assert bindings[0].src == "http://vault.local/memo.mp3"
        assert find_control(audio) is control

    def test_rescan_is_idempotent(self, watcher):
        doc = Document()
        for i in range(3):
            doc.append_child(_embed(f"http://vault.local/{i}.mp3")[0])

        first = watcher.scan(doc)
        second = watcher.scan(doc)

        assert len(first) == 3
        assert second == []
        assert len(_controls(doc)) == 3

    def test_two_audios_in_one_container(self, watcher):
        container, first = _embed("http://vault.local/a.mp3")
        second = container.append_child(Element("audio", attrs={"src": "http://vault.local/b.mp3"}))

        watcher.scan(container)
        watcher.scan(container)

        assert len(_controls(container)) == 2
        assert find_control(first) is first.next_sibling()
        assert find_control(second) is second.next_sibling()

    def test_no_audio_is_empty_result(self, watcher):
        doc = Document()
        doc.append_child(Element("p", text="Just text"))

        assert watcher.scan(doc) == []
        assert _controls(doc) == []

    def test_foreign_button_does_not_count(self, watcher):
        container, audio = _embed()
        container.append_child(Element("button", classes=[CONTROL_CLASS]))

        assert len(watcher.scan(container)) == 1

    def test_click_activates_with_audio_and_control(self, watcher, on_activate):
        container, audio = _embed()
        control = watcher.scan(container)[0].control

        control.click()

        on_activate.assert_called_once_with(audio, control)


# ---------------------------------------------------------------------------
# observe()
# ---------------------------------------------------------------------------


class TestObserve:
    def test_binds_new_audio_synchronously_without_loop(self, watcher):
        doc = Document()
        watcher.observe(doc)

        container, audio = _embed()
        doc.append_child(container)

        assert find_control(audio) is not None

    async def test_binds_after_batching_window(self, watcher):
        doc = Document()
        watcher.observe(doc)

        container, audio = _embed()
        doc.append_child(container)
        assert find_control(audio) is None

        await asyncio.sleep(0.05)
        assert find_control(audio) is not None

    async def test_mutations_are_batched(self, watcher):
        doc = Document()
        container = doc.append_child(Element("div"))
        watcher.observe(doc)

        with patch.object(watcher, "scan", wraps=watcher.scan) as scan:
            for i in range(5):
                container.append_child(Element("audio", attrs={"src": f"http://x/{i}.mp3"}))
            await asyncio.sleep(0.05)

        assert scan.call_count == 1
        assert len(_controls(doc)) == 5

    async def test_rebinds_when_control_removed(self, watcher):
        doc = Document()
        container, audio = _embed()
        doc.append_child(container)
        watcher.scan(doc)
        watcher.observe(doc)

        find_control(audio).remove()
        await asyncio.sleep(0.05)

        assert find_control(audio) is not None
        assert len(_controls(doc)) == 1

    async def test_close_stops_observing(self, watcher):
        doc = Document()
        watcher.observe(doc)
        watcher.close()

        container, audio = _embed()
        doc.append_child(container)
        await asyncio.sleep(0.05)

        assert find_control(audio) is None

    async def test_close_cancels_pending_rescan(self, watcher):
        doc = Document()
        watcher.observe(doc)
        container, audio = _embed()
        doc.append_child(container)

        watcher.close()
        await asyncio.sleep(0.05)

        assert find_control(audio) is None
