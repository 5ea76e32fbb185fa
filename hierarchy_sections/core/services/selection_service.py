from __future__ import annotations

"""Per-marker "is selected" flags derived from the host selection."""

import logging

from hierarchy_sections.core.context import SectionContext

__all__ = ["SelectionService"]

logger = logging.getLogger(__name__)


class SelectionService:
    """Recomputes ``Marker.is_selected`` when the selection size changes.

    Flags are only set for multi-item selections.

    Clicks that keep the selection size stable are ignored, so the O(n)
    membership pass only runs when items are added to or removed from the
    selection.
    """

    def on_selection_changed(self, context: SectionContext) -> bool:
        """Refresh the flags; return True when a recomputation happened."""
        selection = list(context.host.active_selection())
        count = len(selection)
        if count == context.selection_count:
            return False
        context.selection_count = count

        if count <= 1:
            # A single row is highlighted through RowRect.is_sole_selection.
            for marker in context.registry:
                marker.is_selected = False
        else:
            selected = {context.host.identity_of(node) for node in selection}
            for marker in context.registry:
                marker.is_selected = marker.identity in selected
        logger.debug("Section: selection recomputed size=%d", count)
        return True

    def reset(self, context: SectionContext) -> None:
        context.selection_count = 0
        for marker in context.registry:
            marker.is_selected = False
