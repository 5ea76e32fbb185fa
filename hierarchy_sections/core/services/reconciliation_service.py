from __future__ import annotations

"""Reconciliation of the section registry with the host tree.

The host only says "the tree changed". This service compares the root count
with the one seen at the previous notification, classifies the change, and
repairs the registry accordingly:

- deleted:   prune identities that no longer resolve; recompute the order
             when the marker count dropped.
- unchanged: re-canonicalize selected markers whose name was edited, adopt
             selected nodes renamed into marker form, and recompute the
             order when any marker moved.
- inserted:  register selected nodes that carry the delimiter.

It is the only writer of marker display names. No method raises for stale
identities; they are dropped and the next notification or an explicit
refresh converges the state.

Examples
--------
    service = ReconciliationService()
    ctx = SectionContext(host=host)
    service.rebuild(ctx)
    ...
    kind = service.handle_change(ctx)   # from the host's change callback
"""

import logging
from typing import List, Optional, Tuple

from hierarchy_sections.core.classifier import classify_change
from hierarchy_sections.core.context import SectionContext
from hierarchy_sections.core.host import NodeRef
from hierarchy_sections.core.models import ChangeKind, Identity, Marker
from hierarchy_sections.core.naming import canonical_name, is_marker_name, strip_title

__all__ = ["ReconciliationService"]

logger = logging.getLogger(__name__)


class ReconciliationService:
    """Keeps a :class:`SectionContext` registry consistent with its host tree.

    The service is stateless; everything it reads and writes lives on the
    context passed to each call.
    """

    # -------------------------------------------------------------------------
    # Notification entry point
    # -------------------------------------------------------------------------

    def handle_change(self, context: SectionContext) -> ChangeKind:
        """React to one "tree changed" notification."""
        current = context.host.root_count()
        kind = classify_change(context.root_count, current)

        if kind is ChangeKind.DELETED:
            self.handle_deleted(context)
        elif kind is ChangeKind.UNCHANGED:
            self.handle_unchanged(context)
        else:
            self.handle_inserted(context)

        # Re-read: re-parenting nested markers may have changed the count.
        context.root_count = context.host.root_count()
        return kind

    def handle_deleted(self, context: SectionContext) -> None:
        before = len(context.registry)
        removed = context.registry.prune_dead(context.host)
        logger.info("Section: deletion pruned=%d remaining=%d", removed, len(context.registry))
        if len(context.registry) != before:
            self.recompute_order(context)

    def handle_unchanged(self, context: SectionContext) -> None:
        host = context.host
        for node in self._selected_nodes(context):
            identity = host.identity_of(node)
            name = host.display_name(node)
            marker = context.registry.get(identity)
            if marker is not None:
                if name != self._canonical_for(context, identity, name) or marker.title != strip_title(name):
                    logger.info("Section: rename adopted identity=%r name=%r", identity, name)
                self.canonicalize(context, identity)
            elif is_marker_name(name):
                self.register_node(context, node)

        if self.order_is_stale(context):
            self.recompute_order(context)

    def handle_inserted(self, context: SectionContext) -> None:
        for node in self._selected_nodes(context):
            self.register_node(context, node)

    # -------------------------------------------------------------------------
    # Registration and naming
    # -------------------------------------------------------------------------

    def register_node(self, context: SectionContext, node: NodeRef) -> Optional[Marker]:
        """Register ``node`` as a marker if its name carries the delimiter.

        On success the node name is canonicalized and, when the settings ask
        for it, the host tags the node editor-only.
        """
        host = context.host
        identity = host.identity_of(node)
        marker = context.registry.try_register(identity, host.display_name(node))
        if marker is None:
            return None
        self.canonicalize(context, identity)
        if context.settings.auto_tag_on_register:
            host.tag_editor_only(node)
        logger.info("Section: registered identity=%r title=%r ordinal=%d", identity, marker.title, marker.ordinal)
        return marker

    def canonicalize(self, context: SectionContext, identity: Identity) -> bool:
        """Write the canonical decorated name of a registered marker.

        The stripped title is stored on the registry entry. Returns False when
        the identity is unregistered or stale.
        """
        marker = context.registry.get(identity)
        node = context.resolve_marker(identity)
        if marker is None or node is None:
            return False
        name = context.host.display_name(node)
        title = strip_title(name)
        canonical = canonical_name(title, context.status_of(identity))
        if name != canonical:
            context.host.set_display_name(node, canonical)
        marker.title = title
        return True

    def _canonical_for(self, context: SectionContext, identity: Identity, name: str) -> str:
        return canonical_name(strip_title(name), context.status_of(identity))

    # -------------------------------------------------------------------------
    # Ordering
    # -------------------------------------------------------------------------

    def order_is_stale(self, context: SectionContext) -> bool:
        """True when any marker is stale, nested, or moved since last observed."""
        host = context.host
        for marker in context.registry:
            node = host.resolve(marker.identity)
            if node is None or host.parent_of(node) is not None:
                return True
            if host.sibling_index(node) != marker.last_known_sibling_index:
                return True
        return False

    def recompute_order(self, context: SectionContext) -> None:
        """Reassign dense ordinals following the markers' sibling positions.

        Nested markers are moved back to the root first. Identities that no
        longer resolve are dropped. Equal sibling indices keep registry order.
        """
        host = context.host
        live: List[Tuple[Identity, NodeRef]] = []
        for marker in context.registry:
            node = host.resolve(marker.identity)
            if node is None:
                continue
            if host.parent_of(node) is not None:
                logger.info("Section: reparent nested marker identity=%r", marker.identity)
                host.set_parent(node, None)
            live.append((marker.identity, node))

        positions = [(host.sibling_index(node), identity) for identity, node in live]
        positions.sort(key=lambda item: item[0])
        context.registry.reorder(identity for _, identity in positions)
        for index, identity in positions:
            marker = context.registry.get(identity)
            if marker is not None:
                marker.last_known_sibling_index = index
        logger.debug("Section: order recomputed count=%d", len(context.registry))

    # -------------------------------------------------------------------------
    # Full rescan
    # -------------------------------------------------------------------------

    def rebuild(self, context: SectionContext) -> int:
        """Clear the registry and rescan every root item for the delimiter.

        Returns the number of registered markers.
        """
        context.registry.clear()
        for node in list(context.host.root_items()):
            if is_marker_name(context.host.display_name(node)):
                self.register_node(context, node)
        self.recompute_order(context)
        context.root_count = context.host.root_count()
        logger.info("Section: rebuild document=%s markers=%d", context.document_id, len(context.registry))
        return len(context.registry)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _selected_nodes(self, context: SectionContext) -> List[NodeRef]:
        return [node for node in context.host.active_selection() if node is not None]
