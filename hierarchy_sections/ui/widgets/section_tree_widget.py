from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, Dict, List, Optional, Sequence

from hierarchy_sections.core.models import MarkerStatus, RowAppearance

__all__ = ["SectionTreeWidget"]

EDITOR_ONLY_TAG = "editor-only"
_SECTION_TAG_PREFIX = "section-row-"
_STATUS_GLYPHS = {
    MarkerStatus.PLAIN: "",
    MarkerStatus.CURRENT: "  ◀",
    MarkerStatus.PINNED: "  ●",
}


class SectionTreeWidget(ttk.Frame):
    """Tkinter widget exposing a Treeview as a section host tree.

    The widget implements the ``HierarchyHost`` operations over a
    ``ttk.Treeview``: item ids are the node identities, the ``#0`` text is the
    display name. It does not know about sections beyond painting the rows it
    is given.

    Callbacks:
        - on_hierarchy_changed: Invoked once per idle cycle after any
          structural or name change, mirroring a host "tree changed" event.
        - on_selection_changed: Invoked on ``<<TreeviewSelect>>``.
        - on_key: Invoked with the ``keysym`` of key presses in the tree.

    Notes
    -----
    - Reordering re-appends the siblings in their new order, so positions do
      not depend on Tk's ``move`` index convention.
    - UI-only: no service or controller imports.
    """

    def __init__(
        self,
        master: "tk.Widget",
        *,
        on_hierarchy_changed: Optional[Callable[[], None]] = None,
        on_selection_changed: Optional[Callable[[], None]] = None,
        on_key: Optional[Callable[[str], None]] = None,
    ) -> None:
        super().__init__(master)
        self._on_hierarchy_changed = on_hierarchy_changed
        self._on_selection_changed = on_selection_changed
        self._on_key = on_key
        self._change_pending = False
        self._row_tags: Dict[str, str] = {}

        self._tree = ttk.Treeview(self, columns=("section",), selectmode="extended")
        self._tree.heading("#0", text="Hierarchy", anchor="w")
        self._tree.heading("section", text="Section", anchor="w")
        self._tree.column("section", width=160, stretch=False)
        self._tree.tag_configure(EDITOR_ONLY_TAG)

        vsb = ttk.Scrollbar(self, orient="vertical", command=self._tree.yview)
        self._tree.configure(yscrollcommand=vsb.set)
        self._tree.grid(row=0, column=0, sticky="nsew")
        vsb.grid(row=0, column=1, sticky="ns")
        self.rowconfigure(0, weight=1)
        self.columnconfigure(0, weight=1)

        self._tree.bind("<<TreeviewSelect>>", self._handle_select, add="+")
        self._tree.bind("<Key>", self._handle_key, add="+")

    # ------------------------------------------------------------------
    # Host tree operations
    # ------------------------------------------------------------------

    def root_count(self) -> int:
        return len(self._tree.get_children(""))

    def root_items(self) -> Sequence[str]:
        return tuple(self._tree.get_children(""))

    def display_name(self, node: str) -> str:
        return str(self._tree.item(node, "text"))

    def set_display_name(self, node: str, name: str) -> None:
        if self.display_name(node) == name:
            return
        self._tree.item(node, text=name)
        self._schedule_changed()

    def sibling_index(self, node: str) -> int:
        return int(self._tree.index(node))

    def set_sibling_index(self, node: str, index: int) -> None:
        parent = self._tree.parent(node)
        siblings: List[str] = [c for c in self._tree.get_children(parent) if c != node]
        index = max(0, min(int(index), len(siblings)))
        siblings.insert(index, node)
        for child in siblings:
            self._tree.move(child, parent, "end")
        self._schedule_changed()

    def parent_of(self, node: str) -> Optional[str]:
        return self._tree.parent(node) or None

    def set_parent(self, node: str, parent: Optional[str]) -> None:
        self._tree.move(node, parent or "", "end")
        self._schedule_changed()

    def resolve(self, identity: object) -> Optional[str]:
        if isinstance(identity, str) and self._tree.exists(identity):
            return identity
        return None

    def identity_of(self, node: str) -> str:
        return node

    def active_selection(self) -> Sequence[str]:
        return tuple(self._tree.selection())

    def set_active_selection(self, nodes: Sequence[str]) -> None:
        items = [n for n in nodes if self._tree.exists(n)]
        self._tree.selection_set(items)
        if items:
            self._tree.focus(items[0])
            self._tree.see(items[0])

    def delete_node(self, node: str) -> None:
        if self._tree.exists(node):
            self._tree.delete(node)
            self._row_tags.pop(node, None)
            self._schedule_changed()

    def create_node(self, name: str, index: Optional[int] = None) -> str:
        return self.insert_item(name, index=index)

    def tag_editor_only(self, node: str) -> None:
        tags = list(self._tree.item(node, "tags") or ())
        if EDITOR_ONLY_TAG not in tags:
            tags.append(EDITOR_ONLY_TAG)
            self._tree.item(node, tags=tuple(tags))

    # ------------------------------------------------------------------
    # Population helpers
    # ------------------------------------------------------------------

    def insert_item(self, name: str, parent: Optional[str] = None, index: Optional[int] = None) -> str:
        """Insert a node under ``parent`` (root when None) and notify the change."""
        position = "end" if index is None else max(0, int(index))
        iid = self._tree.insert(parent or "", position, text=name)
        self._schedule_changed()
        return iid

    def clear(self) -> None:
        for item in self._tree.get_children(""):
            self._tree.delete(item)
        self._row_tags.clear()
        self._change_pending = False

    def has_tag(self, node: str, tag: str) -> bool:
        return tag in (self._tree.item(node, "tags") or ())

    def section_label(self, node: str) -> str:
        values = self._tree.item(node, "values") or ("",)
        return str(values[0]) if values else ""

    # ------------------------------------------------------------------
    # Row painting
    # ------------------------------------------------------------------

    def apply_row_styles(self, render: Callable[[str], Optional[RowAppearance]]) -> None:
        """Paint root rows from ``render(identity)``; None leaves a row undecorated."""
        for node in self._tree.get_children(""):
            appearance = render(node)
            tags = [t for t in (self._tree.item(node, "tags") or ()) if not str(t).startswith(_SECTION_TAG_PREFIX)]
            if appearance is None:
                self._tree.item(node, tags=tuple(tags), values=("",))
                self._row_tags.pop(node, None)
                continue
            tag = f"{_SECTION_TAG_PREFIX}{appearance.background}-{appearance.foreground}"
            self._tree.tag_configure(tag, background=appearance.background, foreground=appearance.foreground)
            tags.append(tag)
            label = f"{appearance.label}{_STATUS_GLYPHS.get(appearance.status, '')}"
            self._tree.item(node, tags=tuple(tags), values=(label,))
            self._row_tags[node] = tag

    # ------------------------------------------------------------------
    # Event plumbing
    # ------------------------------------------------------------------

    def flush_changes(self) -> None:
        """Deliver a pending change notification immediately."""
        if self._change_pending:
            self._emit_changed()

    def _schedule_changed(self) -> None:
        if self._change_pending:
            return
        self._change_pending = True
        self.after_idle(self._emit_changed)

    def _emit_changed(self) -> None:
        if not self._change_pending:
            return
        self._change_pending = False
        if self._on_hierarchy_changed is not None:
            self._on_hierarchy_changed()

    def _handle_select(self, _event: "tk.Event") -> None:
        if self._on_selection_changed is not None:
            self._on_selection_changed()

    def _handle_key(self, event: "tk.Event") -> None:
        if self._on_key is not None:
            self._on_key(str(event.keysym))
