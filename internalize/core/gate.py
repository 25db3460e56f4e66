"""Dual emission: the widened and the original declaration behind one feature flag."""

import copy
import logging
from dataclasses import dataclass
from typing import Iterable
from ..core.classifier import is_declaration
from ..core.errors import MalformedInvocationError
from ..core.rewriter import VisibilityRewriter
from ..core.types import GateConfig, WidenReport
from ..dsl.ast import Item
from ..dsl.parser import DeclParser
from ..dsl.printer import DeclPrinter


logger = logging.getLogger(__name__)


@dataclass
class GatedItem:
    """Both variants of one declaration, keyed on a single feature."""
    public: Item
    private: Item
    feature: str
    report: WidenReport

    def select(self, enabled_features: Iterable[str]) -> Item:
        """Return the variant a build with `enabled_features` keeps.

        A bare string names a single feature.
        """
        if isinstance(enabled_features, str):
            enabled_features = [enabled_features]
        if self.feature in set(enabled_features):
            return self.public
        return self.private


def internalize(item: Item, config: GateConfig | None = None) -> GatedItem:
    """Widen a deep copy of `item` and pair it with the untouched original."""
    if config is None:
        config = GateConfig()
    if not is_declaration(item):
        raise MalformedInvocationError(
            f"`#[internal]` wasn't called on an item (got {type(item).__name__})"
        )

    rewriter = VisibilityRewriter()
    public = rewriter.rewrite(copy.deepcopy(item))
    logger.debug(
        "Gated %s behind feature %r: %d markers, %d annotated",
        type(item).__name__,
        config.feature,
        len(rewriter.report.entries),
        len(rewriter.report.annotated()),
    )
    return GatedItem(
        public=public,
        private=item,
        feature=config.feature,
        report=rewriter.report,
    )


def cfg_enabled(feature: str) -> str:
    return f'#[cfg(feature = "{feature}")]'


def cfg_disabled(feature: str) -> str:
    return f'#[cfg(not(feature = "{feature}"))]'


def render_gated(gated: GatedItem, printer: DeclPrinter | None = None) -> str:
    """Render the original under `not(feature)` followed by the widened copy."""
    printer = printer or DeclPrinter()
    lines = [
        cfg_disabled(gated.feature),
        printer.render(gated.private),
        cfg_enabled(gated.feature),
        printer.render(gated.public),
    ]
    return "\n".join(lines)


def expand_internal(
    source: str,
    config: GateConfig | None = None,
    parser: DeclParser | None = None,
) -> str:
    """Apply `#[internal]` to the declaration written in `source`."""
    parser = parser or DeclParser()
    item = parser.parse(source)
    return render_gated(internalize(item, config))
