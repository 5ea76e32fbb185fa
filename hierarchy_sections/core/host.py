from __future__ import annotations

"""Host tree adapter interface.

The core never owns the tree. It observes and mutates the host (a scene
hierarchy, an outline widget, ...) only through the operations below. Root
items have ``parent_of(node) is None``.
"""

from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from hierarchy_sections.core.models import Identity

__all__ = ["NodeRef", "HierarchyHost"]

# Live handle to a tree node, only valid until the next host mutation.
NodeRef = Any


@runtime_checkable
class HierarchyHost(Protocol):
    """Operations the section core consumes from the host tree."""

    def root_count(self) -> int: ...

    def root_items(self) -> Sequence[NodeRef]: ...

    def display_name(self, node: NodeRef) -> str: ...

    def set_display_name(self, node: NodeRef, name: str) -> None: ...

    def sibling_index(self, node: NodeRef) -> int: ...

    def set_sibling_index(self, node: NodeRef, index: int) -> None: ...

    def parent_of(self, node: NodeRef) -> Optional[NodeRef]: ...

    def set_parent(self, node: NodeRef, parent: Optional[NodeRef]) -> None: ...

    def resolve(self, identity: Identity) -> Optional[NodeRef]: ...

    def identity_of(self, node: NodeRef) -> Identity: ...

    def active_selection(self) -> Sequence[NodeRef]: ...

    def set_active_selection(self, nodes: Sequence[NodeRef]) -> None: ...

    def delete_node(self, node: NodeRef) -> None: ...

    def create_node(self, name: str, index: Optional[int] = None) -> NodeRef:
        """Create a root-level node, at ``index`` or appended when None."""
        ...

    def tag_editor_only(self, node: NodeRef) -> None:
        """Apply the host's editor-only classification to ``node``."""
        ...
