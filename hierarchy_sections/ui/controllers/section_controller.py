from __future__ import annotations

from typing import Callable, Literal, Optional
import logging

from hierarchy_sections.core.context import SectionContext
from hierarchy_sections.core.host import HierarchyHost
from hierarchy_sections.core.models import ChangeKind, Identity, RowAppearance, RowRect, SectionSettings
from hierarchy_sections.core.naming import DEFAULT_FULL_LABEL
from hierarchy_sections.core.services.navigation_service import NavigationService
from hierarchy_sections.core.services.reconciliation_service import ReconciliationService
from hierarchy_sections.core.services.results import REASON_DECLINED, OperationResult
from hierarchy_sections.core.services.selection_service import SelectionService
from hierarchy_sections.ui.rendering import render_row

logger = logging.getLogger(__name__)

__all__ = ["SectionController", "RENAME_KEYS", "CONFIRM_KEYS", "CANCEL_KEYS"]

RENAME_KEYS = frozenset({"F2"})
CONFIRM_KEYS = frozenset({"Return", "KP_Enter"})
CANCEL_KEYS = frozenset({"Escape"})

REFRESH_PROMPT = (
    "Rescan the whole hierarchy for sections?\n"
    "This may take a while on large hierarchies."
)
REMOVE_ALL_PROMPT = "Delete every section marker from the hierarchy?"


class SectionController:
    """Controller wiring host notifications and menu commands to the section services.

    The controller owns the :class:`SectionContext` of the open document and
    replaces it on document switch. It contains no UI toolkit code.

    Parameters
    ----------
    host : HierarchyHost
        Adapter over the host tree.
    settings : SectionSettings, optional
        Marker preferences; defaults apply when omitted.
    confirm : Callable[[str], bool], optional
        Asked before destructive commands. Without it those commands are
        declined.

    Notes
    -----
    Commands never raise for routine failures; they return an
    :class:`OperationResult` whose ``reason`` names the no-op cause.
    """

    def __init__(
        self,
        host: HierarchyHost,
        settings: Optional[SectionSettings] = None,
        confirm: Optional[Callable[[str], bool]] = None,
        reconciler: Optional[ReconciliationService] = None,
        navigation: Optional[NavigationService] = None,
        selection: Optional[SelectionService] = None,
    ) -> None:
        self.host = host
        self.settings = settings or SectionSettings()
        self._confirm = confirm
        self.reconciler = reconciler or ReconciliationService()
        self.navigation = navigation or NavigationService(self.reconciler)
        self.selection = selection or SelectionService()
        self.context = self._new_context(None)

    # ---------------------------------------------------------------------------------
    # Host notifications
    # ---------------------------------------------------------------------------------

    def on_document_opened(self, document_id: Optional[str] = None) -> int:
        """Discard all section state and rebuild it from the host tree."""
        self.context = self._new_context(document_id)
        count = self.reconciler.rebuild(self.context)
        self.context.selection_count = 0
        self.selection.on_selection_changed(self.context)
        logger.info("Section: document opened id=%s markers=%d", document_id, count)
        return count

    def on_hierarchy_changed(self) -> ChangeKind:
        kind = self.reconciler.handle_change(self.context)
        self.navigation.revalidate(self.context)
        return kind

    def on_selection_changed(self) -> bool:
        return self.selection.on_selection_changed(self.context)

    def on_key(self, key: str) -> OperationResult:
        """Route a key press to the rename state machine."""
        if self.context.navigation.renaming is None:
            if key in RENAME_KEYS:
                return self.navigation.begin_rename(self.context)
            return OperationResult(False, "Key ignored.", {"key": key})
        if key in CONFIRM_KEYS:
            return self.navigation.end_rename(self.context, confirm=True)
        if key in CANCEL_KEYS:
            return self.navigation.end_rename(self.context, confirm=False)
        return OperationResult(False, "Key ignored.", {"key": key})

    def on_click_outside(self) -> OperationResult:
        """A click outside the inline editor commits the rename."""
        return self.navigation.end_rename(self.context, confirm=True)

    def render_row(self, identity: Identity, rect: Optional[RowRect] = None) -> Optional[RowAppearance]:
        return render_row(self.context, identity, rect)

    # ---------------------------------------------------------------------------------
    # Commands
    # ---------------------------------------------------------------------------------

    def create_marker_at_selection(self) -> OperationResult:
        """Create a ``--- Section ---`` node above the first selected root item."""
        host = self.host
        index: Optional[int] = None
        for node in host.active_selection():
            if host.parent_of(node) is None:
                index = host.sibling_index(node)
                break

        node = host.create_node(DEFAULT_FULL_LABEL, index)
        marker = self.reconciler.register_node(self.context, node)
        host.set_active_selection([node])
        if marker is None:
            logger.warning("Section: created node was not registered")
            return OperationResult(False, "Section could not be registered.", {"identity": host.identity_of(node)})
        logger.info("Section: create ordinal=%d index=%s", marker.ordinal, index)
        return OperationResult(True, "Section created.", {"identity": marker.identity, "ordinal": marker.ordinal})

    def move_selection_up(self) -> OperationResult:
        return self._move_selection("up")

    def move_selection_down(self) -> OperationResult:
        return self._move_selection("down")

    def _move_selection(self, direction: Literal["up", "down"]) -> OperationResult:
        return self.navigation.move_selection(self.context, direction)

    def select_next_marker(self) -> OperationResult:
        return self.navigation.select_next(self.context)

    def select_previous_marker(self) -> OperationResult:
        return self.navigation.select_previous(self.context)

    def move_selection_to_marker(self) -> OperationResult:
        return self.navigation.move_selection_to_marker(self.context, upper=False)

    def move_selection_to_marker_upper(self) -> OperationResult:
        return self.navigation.move_selection_to_marker(self.context, upper=True)

    def pin_toggle(self) -> OperationResult:
        return self.navigation.pin_toggle(self.context)

    def refresh_order(self) -> OperationResult:
        self.reconciler.recompute_order(self.context)
        self.navigation.revalidate(self.context)
        return OperationResult(True, "Section order refreshed.", {"count": len(self.context.registry)})

    def refresh_registry(self) -> OperationResult:
        """Destructive full rescan; asks for confirmation first."""
        if not self._ask(REFRESH_PROMPT):
            logger.info("Section: refresh_registry declined")
            return OperationResult(False, "Refresh cancelled.", {"reason": REASON_DECLINED})
        count = self.reconciler.rebuild(self.context)
        self.navigation.revalidate(self.context)
        self.context.selection_count = 0
        self.selection.on_selection_changed(self.context)
        return OperationResult(True, f"Found {count} section(s).", {"count": count})

    def remove_all_markers(self) -> OperationResult:
        """Delete every marker node from the host; asks for confirmation first."""
        if not self._ask(REMOVE_ALL_PROMPT):
            logger.info("Section: remove_all_markers declined")
            return OperationResult(False, "Removal cancelled.", {"reason": REASON_DECLINED})
        removed = 0
        for marker in self.context.registry.ordered():
            node = self.host.resolve(marker.identity)
            if node is None:
                continue
            self.host.delete_node(node)
            removed += 1
        self.context.registry.clear()
        self.navigation.reset(self.context)
        logger.info("Section: removed all markers count=%d", removed)
        return OperationResult(True, f"Removed {removed} section(s).", {"removed": removed})

    # ---------------------------------------------------------------------------------
    # Internal helpers
    # ---------------------------------------------------------------------------------

    def _new_context(self, document_id: Optional[str]) -> SectionContext:
        return SectionContext(
            host=self.host,
            settings=self.settings,
            root_count=self.host.root_count(),
            document_id=document_id,
        )

    def _ask(self, message: str) -> bool:
        if self._confirm is None:
            return False
        return bool(self._confirm(message))
