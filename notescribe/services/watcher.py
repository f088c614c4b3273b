"""Attach a "Transcribe" control to every audio element in the document.

``scan`` binds whatever is under a node right now; ``observe`` keeps the
guarantee as the note re-renders by rescanning changed subtrees. Mutations
are collected and rescanned once per batching window instead of on every
single change.
"""

import asyncio
import logging
import weakref
from collections.abc import Callable
from dataclasses import dataclass

from notescribe.document.dom import Document, Element, Mutation

logger = logging.getLogger(__name__)

CONTROL_CLASS = "transcribe-button"

# control -> audio element it transcribes
_bindings: "weakref.WeakKeyDictionary[Element, Element]" = weakref.WeakKeyDictionary()


@dataclass
class ControlBinding:
    """A control attached to one audio element."""

    audio: Element
    control: Element

    @property
    def src(self) -> str:
        return self.audio.get("src")


def find_control(audio: Element) -> Element | None:
    """Return the control bound to ``audio``, or None."""
    for sibling in audio.siblings():
        if sibling.has_class(CONTROL_CLASS) and _bindings.get(sibling) is audio:
            return sibling
    return None


class ElementWatcher:
    """Keeps exactly one control next to each audio element.

    Args:
        on_activate: Called with ``(audio, control)`` when a control is clicked.
        rescan_delay: Seconds to collect mutations before rescanning.
    """

    def __init__(
        self,
        on_activate: Callable[[Element, Element], None],
        rescan_delay: float = 0.05,
    ) -> None:
        self._on_activate = on_activate
        self._rescan_delay = rescan_delay
        self._pending: list[Element] = []
        self._handle: asyncio.TimerHandle | None = None
        self._unsubscribe: Callable[[], None] | None = None

    # -- scanning --

    def scan(self, root: Element) -> list[ControlBinding]:
        """Bind every unbound audio element under ``root``.

        Returns:
            The bindings created by this call (empty when all were bound).
        """
        created = []
        for audio in root.query_all("audio"):
            if audio.parent is None or find_control(audio) is not None:
                continue
            created.append(self._attach(audio))
        if created:
            logger.debug("Attached %d transcribe control(s)", len(created))
        return created

    def _attach(self, audio: Element) -> ControlBinding:
        control = Element(
            "button",
            text="Transcribe",
            attrs={"title": "Transcribe Audio"},
            classes=[CONTROL_CLASS],
        )
        _bindings[control] = audio
        control.add_event_listener("click", lambda ctl: self._on_activate(audio, ctl))
        audio.parent.insert_after(control, audio)
        return ControlBinding(audio=audio, control=control)

    # -- observing --

    def observe(self, document: Document) -> None:
        """Rescan changed subtrees of ``document`` for as long as we are subscribed."""
        self.close()
        self._unsubscribe = document.subscribe(self._on_mutations)

    def close(self) -> None:
        """Stop observing and drop any rescan that has not run yet."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._pending.clear()

    def _on_mutations(self, mutations: list[Mutation]) -> None:
        for mutation in mutations:
            if mutation.added and all(self._cannot_hold_audio(n) for n in mutation.added):
                continue
            if not any(t is mutation.target for t in self._pending):
                self._pending.append(mutation.target)

        if not self._pending or self._handle is not None:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.flush()
            return
        self._handle = loop.call_later(self._rescan_delay, self.flush)

    def flush(self) -> list[ControlBinding]:
        """Rescan all subtrees changed since the last flush."""
        self._handle = None
        targets, self._pending = self._pending, []
        created = []
        for target in targets:
            if target.is_connected:
                created.extend(self.scan(target))
        return created

    @staticmethod
    def _cannot_hold_audio(node: Element) -> bool:
        # Our own controls and status lines land here
        return node.tag != "audio" and not node.children
