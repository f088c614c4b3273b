"""
Minimal live element tree with structural-change notifications.

Models just enough of a rendered note for the watcher: tags, attributes,
classes, text, click listeners, and a ``Document`` root that reports
every child-list change to its subscribers.
"""

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class Mutation:
    """One child-list change under ``target``."""

    target: "Element"
    added: list["Element"] = field(default_factory=list)
    removed: list["Element"] = field(default_factory=list)


class Element:
    """A node in the rendered document.

    Args:
        tag: Lower-case tag name (``"audio"``, ``"div"``, ...).
        text: Text content of the node itself.
        attrs: Attribute mapping (``src``, ``title``, ...).
        classes: CSS class names.
    """

    def __init__(
        self,
        tag: str,
        text: str = "",
        attrs: dict[str, str] | None = None,
        classes: list[str] | None = None,
    ) -> None:
        self.tag = tag.lower()
        self.text = text
        self.attrs: dict[str, str] = dict(attrs or {})
        self.classes: set[str] = set(classes or ())
        self.children: list[Element] = []
        self.parent: Element | None = None
        self.disabled = False
        self._click_listeners: list[Callable[[Element], None]] = []

    def __repr__(self) -> str:
        return f"<Element {self.tag} classes={sorted(self.classes)}>"

    # -- attributes --

    def get(self, name: str, default: str = "") -> str:
        return self.attrs.get(name, default)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    # -- tree structure --

    @property
    def root(self) -> "Element":
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def is_connected(self) -> bool:
        """True when the element is attached to a ``Document``."""
        return isinstance(self.root, Document)

    def siblings(self) -> list["Element"]:
        if self.parent is None:
            return []
        return [c for c in self.parent.children if c is not self]

    def next_sibling(self) -> "Element | None":
        if self.parent is None:
            return None
        children = self.parent.children
        idx = children.index(self)
        return children[idx + 1] if idx + 1 < len(children) else None

    def append_child(self, child: "Element") -> "Element":
        """Append ``child`` (detaching it from any previous parent)."""
        return self._insert(child, len(self.children))

    def insert_after(self, child: "Element", reference: "Element") -> "Element":
        """Insert ``child`` directly after ``reference``, one of our children."""
        return self._insert(child, self.children.index(reference) + 1)

    def remove(self) -> None:
        """Detach this element from its parent (no-op when detached)."""
        parent = self.parent
        if parent is None:
            return
        parent.children.remove(self)
        self.parent = None
        parent._dispatch(Mutation(target=parent, removed=[self]))

    def _insert(self, child: "Element", index: int) -> "Element":
        if child.parent is not None:
            child.remove()
        self.children.insert(index, child)
        child.parent = self
        self._dispatch(Mutation(target=self, added=[child]))
        return child

    def _dispatch(self, mutation: Mutation) -> None:
        root = self.root
        if isinstance(root, Document):
            root.record(mutation)

    # -- queries --

    def iter(self) -> Iterator["Element"]:
        """Yield this element and all descendants, depth first."""
        yield self
        for child in list(self.children):
            yield from child.iter()

    def query_all(self, tag: str) -> list["Element"]:
        """Return every element with ``tag`` in this subtree (self included)."""
        tag = tag.lower()
        return [el for el in self.iter() if el.tag == tag]

    # -- events --

    def add_event_listener(self, event: str, listener: Callable[["Element"], None]) -> None:
        if event != "click":
            raise ValueError(f"Unsupported event: {event}")
        self._click_listeners.append(listener)

    def click(self) -> None:
        """Simulate a user click; ignored while the element is disabled."""
        if self.disabled:
            logger.debug("Ignoring click on disabled %r", self)
            return
        for listener in list(self._click_listeners):
            listener(self)


class Document(Element):
    """Root of a rendered note.

    Subscribers receive each mutation as a one-element batch as soon as it
    happens; batching across mutations is the subscriber's business.
    """

    def __init__(self) -> None:
        super().__init__("body")
        self._subscribers: list[Callable[[list[Mutation]], None]] = []

    def subscribe(self, callback: Callable[[list[Mutation]], None]) -> Callable[[], None]:
        """Register ``callback`` for change batches; returns an unsubscribe callable."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def record(self, mutation: Mutation) -> None:
        for callback in list(self._subscribers):
            callback([mutation])
