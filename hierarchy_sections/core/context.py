from __future__ import annotations

"""Per-document section state.

A :class:`SectionContext` is created when a document (scene) is opened and
discarded when another one replaces it. Every service receives it
explicitly; no section state lives at module level.
"""

from dataclasses import dataclass, field
from typing import Optional

from hierarchy_sections.core.host import HierarchyHost
from hierarchy_sections.core.models import Identity, MarkerStatus, SectionSettings
from hierarchy_sections.core.registry import SectionRegistry

__all__ = ["NavigationState", "SectionContext"]


@dataclass
class NavigationState:
    """Current / pinned / renaming pointers.

    Pinning a marker makes it current; being current does not imply pinned.
    """

    current: Optional[Identity] = None
    pinned: Optional[Identity] = None
    renaming: Optional[Identity] = None

    def clear(self) -> None:
        self.current = None
        self.pinned = None
        self.renaming = None


@dataclass
class SectionContext:
    """In-memory section state bound to one host document.

    Attributes
    ----------
    host
        Adapter over the host tree.
    settings
        Marker preferences (auto-tagging, colours).
    registry
        Identity registry of the document's markers.
    navigation
        Current / pinned / renaming pointers.
    root_count
        Root count observed at the last change notification.
    selection_count
        Selection size observed at the last selection notification.
    document_id
        Optional label of the document, used in log messages.
    """

    host: HierarchyHost
    settings: SectionSettings = field(default_factory=SectionSettings)
    registry: SectionRegistry = field(default_factory=SectionRegistry)
    navigation: NavigationState = field(default_factory=NavigationState)
    root_count: int = 0
    selection_count: int = 0
    document_id: Optional[str] = None

    def status_of(self, identity: Identity) -> MarkerStatus:
        """Display status of ``identity`` derived from the navigation pointers."""
        if identity is not None and identity == self.navigation.pinned:
            return MarkerStatus.PINNED
        if identity is not None and identity == self.navigation.current:
            return MarkerStatus.CURRENT
        return MarkerStatus.PLAIN

    def resolve_marker(self, identity: Optional[Identity]):
        """Return the live node of a registered marker, or None."""
        if identity is None or identity not in self.registry:
            return None
        return self.host.resolve(identity)
