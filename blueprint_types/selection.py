import logging
from typing import Callable, List, Optional

from .types import Node

logger = logging.getLogger(__name__)

SelectionListener = Callable[[Optional[Node]], None]


class SelectionStore:
    """Holds the single selected node (or None) and broadcasts every write.

    The host owns the store. The tree only reaches it through the callback the
    host hands down, and the viewer only reads it.
    """

    def __init__(self, value: Optional[Node] = None):
        self._value = value
        self._listeners: List[SelectionListener] = []

    @property
    def value(self) -> Optional[Node]:
        return self._value

    def subscribe(self, listener: SelectionListener) -> Callable[[], None]:
        """Register a listener, returns a function that removes it again."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def select(self, node: Optional[Node]) -> None:
        # Re-selecting the current node still notifies; listeners must be idempotent.
        self._value = node
        logger.debug("selection -> %s", node.name if node is not None else None)
        for listener in list(self._listeners):
            listener(node)

    def clear(self) -> None:
        self.select(None)
