from __future__ import annotations

"""Identity registry of section markers.

Maps a stable host identity to its :class:`Marker` metadata. Iteration order
is registration order, which is also the tie-break order when two markers
report the same sibling position.

The registry is a rebuildable cache: the decorated display names in the host
tree remain the source of truth.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from hierarchy_sections.core.host import HierarchyHost
from hierarchy_sections.core.models import Identity, Marker
from hierarchy_sections.core.naming import is_marker_name, strip_title

__all__ = ["SectionRegistry"]

logger = logging.getLogger(__name__)


class SectionRegistry:
    """Ordered mapping ``identity -> Marker``.

    Notes
    -----
    Ordinals are only guaranteed dense after :meth:`reorder`; single removals
    may leave a gap until the next reconciliation, so ordinal lookups return
    ``None`` rather than raising.
    """

    def __init__(self) -> None:
        self._entries: Dict[Identity, Marker] = {}

    # ------------------------------------------------------------------ mapping

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identity: object) -> bool:
        return identity in self._entries

    def __iter__(self) -> Iterator[Marker]:
        return iter(list(self._entries.values()))

    def get(self, identity: Optional[Identity]) -> Optional[Marker]:
        if identity is None:
            return None
        return self._entries.get(identity)

    def identities(self) -> List[Identity]:
        return list(self._entries.keys())

    def ordered(self) -> List[Marker]:
        """Markers sorted by ordinal."""
        return sorted(self._entries.values(), key=lambda m: m.ordinal)

    def ordinals(self) -> List[int]:
        return sorted(m.ordinal for m in self._entries.values())

    # ----------------------------------------------------------------- mutation

    def try_register(self, identity: Identity, display_name: str) -> Optional[Marker]:
        """Register ``identity`` if its name carries the delimiter.

        Returns the new entry, or None when the name is not a marker name or
        the identity is already registered.
        """
        if identity in self._entries or not is_marker_name(display_name):
            return None
        marker = Marker(identity=identity, title=strip_title(display_name), ordinal=len(self._entries))
        self._entries[identity] = marker
        logger.debug("Section: register identity=%r ordinal=%d", identity, marker.ordinal)
        return marker

    def remove(self, identity: Identity) -> Optional[Marker]:
        return self._entries.pop(identity, None)

    def unregister_if_dead(self, identity: Identity, host: HierarchyHost) -> bool:
        """Drop ``identity`` when the host no longer resolves it to a node."""
        if identity not in self._entries:
            return False
        if host.resolve(identity) is not None:
            return False
        del self._entries[identity]
        logger.debug("Section: prune stale identity=%r", identity)
        return True

    def prune_dead(self, host: HierarchyHost) -> int:
        """Apply :meth:`unregister_if_dead` to every entry; return the count removed."""
        return sum(1 for identity in self.identities() if self.unregister_if_dead(identity, host))

    def reorder(self, order: Iterable[Identity]) -> None:
        """Rebuild the registry in ``order`` with dense ordinals ``0..n-1``.

        Identities missing from ``order`` are dropped; unknown ones ignored.
        """
        rebuilt: Dict[Identity, Marker] = {}
        for identity in order:
            marker = self._entries.get(identity)
            if marker is None or identity in rebuilt:
                continue
            marker.ordinal = len(rebuilt)
            rebuilt[identity] = marker
        self._entries = rebuilt

    def clear(self) -> None:
        self._entries.clear()

    # ------------------------------------------------------------------ lookups

    def find_by_ordinal(self, ordinal: int) -> Optional[Marker]:
        for marker in self._entries.values():
            if marker.ordinal == ordinal:
                return marker
        return None

    def max_ordinal(self) -> int:
        """Highest ordinal in use, -1 when empty."""
        return max((m.ordinal for m in self._entries.values()), default=-1)
