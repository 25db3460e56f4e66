"""Visibility rewriter: widens every marker in a declaration to `pub`."""

import copy
import logging
from contextlib import contextmanager
from ..core.classifier import classify
from ..core.notice import add_internal_notice
from ..core.types import WidenedEntry, WidenReport
from ..dsl.ast import PUBLIC, Item
from ..rules.registry import get_handler


logger = logging.getLogger(__name__)


class VisibilityRewriter:
    """Rewrites declarations in place, recording every marker it visits."""

    def __init__(self):
        self.report = WidenReport()
        self._scope: list[str] = []

    def rewrite(self, item: Item) -> Item:
        """Widen `item` according to its kind. Unhandled kinds pass through."""
        kind = classify(item)
        handler = get_handler(kind) if kind is not None else None
        if handler is None:
            label = kind.value if kind is not None else type(item).__name__
            logger.debug("Leaving %s untouched", label)
            return item
        return handler(item, self)

    def widen_marker(self, node, name: str, kind: str) -> None:
        """
        Set `node.vis` to `pub`.

        The notice is added first, and only if the marker was restricted, so
        it reflects the original visibility.
        """
        previous = node.vis
        annotated = not previous.is_fully_public()
        if annotated:
            add_internal_notice(node.attrs)
        node.vis = PUBLIC

        path = "::".join([*self._scope, name])
        self.report.entries.append(WidenedEntry(
            path=path,
            kind=kind,
            previous=previous.level,
            annotated=annotated,
        ))
        if annotated:
            logger.debug("Widened %s %s from %s", kind, path, previous.level.value)

    @contextmanager
    def scope(self, name: str):
        self._scope.append(name)
        try:
            yield
        finally:
            self._scope.pop()


def widen(item: Item) -> Item:
    """Return a widened deep copy of `item`; the input is left untouched."""
    return VisibilityRewriter().rewrite(copy.deepcopy(item))
