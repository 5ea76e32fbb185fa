from __future__ import annotations

"""Navigation over section markers: current / pinned / renaming state.

Scope and guarantees:
- Operates on a SectionContext; the host is only reached through its adapter.
- Invalid or stale targets are no-ops returning OperationResult(success=False)
  with a ``reason`` detail; nothing raises.
- Status suffixes in marker names follow the current/pinned pointers; names
  are rewritten through the ReconciliationService.
"""

import logging
from typing import List, Literal, Optional

from hierarchy_sections.core.context import SectionContext
from hierarchy_sections.core.host import NodeRef
from hierarchy_sections.core.models import Identity
from hierarchy_sections.core.services.reconciliation_service import ReconciliationService
from hierarchy_sections.core.services.results import (
    REASON_INVALID_TARGET,
    REASON_NOT_A_MARKER,
    REASON_STALE_IDENTITY,
    OperationResult,
)

__all__ = ["NavigationService"]

logger = logging.getLogger(__name__)


class NavigationService:
    """Serves next/previous/pin/rename/move operations over the registry.

    Parameters
    ----------
    reconciler : ReconciliationService, optional
        Used to rewrite marker names when their display status changes.
    """

    def __init__(self, reconciler: Optional[ReconciliationService] = None) -> None:
        self._reconciler = reconciler or ReconciliationService()

    # -------------------------------------------------------------------------
    # Stepping
    # -------------------------------------------------------------------------

    def select_next(self, context: SectionContext) -> OperationResult:
        return self._step(context, 1)

    def select_previous(self, context: SectionContext) -> OperationResult:
        return self._step(context, -1)

    def _step(self, context: SectionContext, step: int) -> OperationResult:
        registry = context.registry
        count = len(registry)
        if count == 0:
            return OperationResult(False, "No section to navigate to.", {"reason": REASON_INVALID_TARGET})

        current = registry.get(context.navigation.current)
        if current is None or context.resolve_marker(current.identity) is None:
            # Re-anchor: next lands on the first marker, previous on the last.
            target_ordinal = 0 if step > 0 else registry.max_ordinal()
        else:
            target_ordinal = (current.ordinal + step) % count

        marker = registry.find_by_ordinal(target_ordinal)
        if marker is None:
            logger.info("Section: step noop ordinal=%d count=%d", target_ordinal, count)
            return OperationResult(False, "Section not available.", {"reason": REASON_INVALID_TARGET, "ordinal": target_ordinal})
        node = context.resolve_marker(marker.identity)
        if node is None:
            logger.info("Section: step target stale identity=%r", marker.identity)
            return OperationResult(False, "Section no longer exists.", {"reason": REASON_STALE_IDENTITY, "ordinal": target_ordinal})

        self._set_current(context, marker.identity)
        context.host.set_active_selection([node])
        logger.info("Section: current ordinal=%d title=%r", marker.ordinal, marker.title)
        return OperationResult(True, f"Selected section '{marker.title}'.", {"ordinal": marker.ordinal})

    # -------------------------------------------------------------------------
    # Pinning
    # -------------------------------------------------------------------------

    def pin_toggle(self, context: SectionContext) -> OperationResult:
        """Pin the selected (or current) marker, or unpin it if already pinned.

        Nodes that are not registered markers cannot be pinned.
        """
        host = context.host
        nav = context.navigation
        selection = list(host.active_selection())
        target: Optional[Identity] = host.identity_of(selection[0]) if selection else nav.current

        if target is not None and target in context.registry and context.resolve_marker(target) is None:
            return OperationResult(False, "Section no longer exists.", {"reason": REASON_STALE_IDENTITY})
        if target is None or context.resolve_marker(target) is None:
            logger.info("Section: pin rejected target=%r", target)
            return OperationResult(False, "Only a section can be pinned.", {"reason": REASON_NOT_A_MARKER})

        if nav.pinned == target:
            nav.pinned = None
            self._reconciler.canonicalize(context, target)
            logger.info("Section: unpinned identity=%r", target)
            return OperationResult(True, "Section unpinned.", {"pinned": None})

        previous_pinned = nav.pinned
        nav.pinned = target
        self._set_current(context, target)
        if previous_pinned is not None:
            self._reconciler.canonicalize(context, previous_pinned)
        logger.info("Section: pinned identity=%r", target)
        return OperationResult(True, "Section pinned.", {"pinned": target})

    # -------------------------------------------------------------------------
    # Inline rename
    # -------------------------------------------------------------------------

    def begin_rename(self, context: SectionContext) -> OperationResult:
        """Enter rename mode when exactly one marker is the sole selection."""
        selection = list(context.host.active_selection())
        if len(selection) != 1:
            return OperationResult(False, "Select a single section to rename.", {"reason": REASON_INVALID_TARGET})
        identity = context.host.identity_of(selection[0])
        if context.resolve_marker(identity) is None:
            return OperationResult(False, "Only a section can be renamed here.", {"reason": REASON_NOT_A_MARKER})
        context.navigation.renaming = identity
        logger.info("Section: rename begin identity=%r", identity)
        return OperationResult(True, "Renaming section.", {"identity": identity})

    def end_rename(self, context: SectionContext, confirm: bool = True) -> OperationResult:
        """Leave rename mode; on confirm the edited name is re-canonicalized."""
        identity = context.navigation.renaming
        if identity is None:
            return OperationResult(False, "Not renaming.", {"reason": REASON_INVALID_TARGET})
        context.navigation.renaming = None
        if confirm:
            self._reconciler.canonicalize(context, identity)
        logger.info("Section: rename end identity=%r confirm=%s", identity, confirm)
        return OperationResult(True, "Rename finished.", {"identity": identity, "confirmed": confirm})

    # -------------------------------------------------------------------------
    # Moving selection relative to a marker
    # -------------------------------------------------------------------------

    def move_selection_to_marker(self, context: SectionContext, upper: bool = False) -> OperationResult:
        """Place the selected nodes right after (or before, when ``upper``) the target marker.

        The target is the pinned marker, else the current one. Each selected
        node is re-parented to the root first; relative order is preserved.
        """
        host = context.host
        nav = context.navigation
        target = nav.pinned if nav.pinned is not None else nav.current
        marker_node = context.resolve_marker(target)
        if marker_node is None:
            return OperationResult(False, "No current section.", {"reason": REASON_INVALID_TARGET})

        selection = list(host.active_selection())
        if not selection:
            return OperationResult(False, "Nothing selected.", {"reason": REASON_INVALID_TARGET})
        if any(host.identity_of(node) in context.registry for node in selection):
            return OperationResult(False, "A section cannot be moved relative to a section.", {"reason": REASON_INVALID_TARGET})

        for node in selection:
            if host.parent_of(node) is not None:
                host.set_parent(node, None)

        anchor = marker_node
        for node in selection:
            position = host.sibling_index(node)
            if upper:
                marker_index = host.sibling_index(marker_node)
                host.set_sibling_index(node, marker_index if position > marker_index else marker_index - 1)
            else:
                anchor_index = host.sibling_index(anchor)
                host.set_sibling_index(node, anchor_index + 1 if position > anchor_index else anchor_index)
                anchor = node

        where = "above" if upper else "below"
        logger.info("Section: moved %d node(s) %s identity=%r", len(selection), where, target)
        return OperationResult(True, f"Moved {len(selection)} item(s) {where} the section.", {"count": len(selection), "upper": upper})

    def move_selection(self, context: SectionContext, direction: Literal["up", "down"]) -> OperationResult:
        """Shift the selected root-level nodes one sibling position.

        Consecutive nodes move as a group; nothing moves when the group is at
        the boundary.
        """
        host = context.host
        nodes: List[NodeRef] = [n for n in host.active_selection() if host.parent_of(n) is None]
        if not nodes:
            return OperationResult(False, "Nothing selected at the root.", {"reason": REASON_INVALID_TARGET})

        nodes.sort(key=host.sibling_index)
        if direction == "up":
            if host.sibling_index(nodes[0]) <= 0:
                return OperationResult(False, "Cannot move up (at boundary).", {"direction": direction})
            for node in nodes:
                host.set_sibling_index(node, host.sibling_index(node) - 1)
        elif direction == "down":
            if host.sibling_index(nodes[-1]) >= host.root_count() - 1:
                return OperationResult(False, "Cannot move down (at boundary).", {"direction": direction})
            for node in reversed(nodes):
                host.set_sibling_index(node, host.sibling_index(node) + 1)
        else:
            return OperationResult(False, f"Unsupported move direction '{direction}'.", {"allowed": ["up", "down"]})

        logger.info("Section: move_selection direction=%s count=%d", direction, len(nodes))
        return OperationResult(True, f"Moved {len(nodes)} item(s) {direction}.", {"count": len(nodes), "direction": direction})

    # -------------------------------------------------------------------------
    # State upkeep
    # -------------------------------------------------------------------------

    def revalidate(self, context: SectionContext) -> bool:
        """Clear pointers whose marker is no longer registered or alive."""
        nav = context.navigation
        changed = False
        if nav.current is not None and context.resolve_marker(nav.current) is None:
            nav.current = None
            changed = True
        if nav.pinned is not None and context.resolve_marker(nav.pinned) is None:
            nav.pinned = None
            changed = True
        if nav.renaming is not None and context.resolve_marker(nav.renaming) is None:
            nav.renaming = None
            changed = True
        if changed:
            logger.debug("Section: navigation revalidated current=%r pinned=%r", nav.current, nav.pinned)
        return changed

    def reset(self, context: SectionContext) -> None:
        context.navigation.clear()

    def _set_current(self, context: SectionContext, identity: Identity) -> None:
        previous = context.navigation.current
        context.navigation.current = identity
        if previous is not None and previous != identity:
            self._reconciler.canonicalize(context, previous)
        self._reconciler.canonicalize(context, identity)
