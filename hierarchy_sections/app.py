# -*- coding: utf-8 -*-
"""Tk-based demo front-end for Hierarchy Sections.

Hosts a :class:`SectionTreeWidget` and wires its notifications and the
section commands to a :class:`SectionController`. Exposes the
:class:`HierarchySectionsApp` widget, which is instantiated by ``run.py``.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

import tkinter as tk
from tkinter import messagebox, simpledialog, ttk

from hierarchy_sections.config import ConfigManager
from hierarchy_sections.core.models import RowRect
from hierarchy_sections.core.services.results import OperationResult
from hierarchy_sections.ui.controllers.section_controller import SectionController
from hierarchy_sections.ui.widgets.section_tree_widget import EDITOR_ONLY_TAG, SectionTreeWidget

logger = logging.getLogger(__name__)

__all__ = ["HierarchySectionsApp"]

_SAMPLE_ITEMS = ("Main Camera", "Directional Light", "--- Environment ---", "Terrain", "Water", "--- Actors", "Player")


class HierarchySectionsApp:
    """Main application widget wrapping all Tkinter UI components."""

    def __init__(self, root: tk.Tk):
        self.root = root
        self._config = ConfigManager()
        self.status_var = tk.StringVar(value="")

        self.tree = SectionTreeWidget(
            root,
            on_hierarchy_changed=self._on_hierarchy_changed,
            on_selection_changed=self._on_selection_changed,
            on_key=self._on_key,
        )
        self.controller = SectionController(
            self.tree,
            settings=self._config.get_section_settings(),
            confirm=lambda message: messagebox.askyesno("Hierarchy Sections", message, parent=self.root),
        )

        self._build_toolbar()
        self.tree.pack(fill="both", expand=True, padx=8, pady=(0, 4))
        ttk.Label(root, textvariable=self.status_var, anchor="w").pack(fill="x", padx=8, pady=(0, 6))
        self._build_menu()

        self.load_sample_document()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _build_toolbar(self) -> None:
        bar = ttk.Frame(self.root)
        bar.pack(fill="x", padx=8, pady=6)
        buttons = (
            ("Add item", self.add_item),
            ("Delete", self.delete_selection),
            ("Nest", self.nest_selection),
            ("New section", lambda: self._run(self.controller.create_marker_at_selection)),
            ("◀", lambda: self._run(self.controller.select_previous_marker)),
            ("▶", lambda: self._run(self.controller.select_next_marker)),
            ("Pin", lambda: self._run(self.controller.pin_toggle)),
        )
        for text, command in buttons:
            ttk.Button(bar, text=text, command=command).pack(side="left", padx=(0, 4))

    def _build_menu(self) -> None:
        menubar = tk.Menu(self.root)
        section_menu = tk.Menu(menubar, tearoff=0)
        entries = (
            ("Create Section", "Ctrl+T", "<Control-t>", self.controller.create_marker_at_selection),
            ("Next Section", "Ctrl+Down", "<Control-Down>", self.controller.select_next_marker),
            ("Previous Section", "Ctrl+Up", "<Control-Up>", self.controller.select_previous_marker),
            ("Move Selection Up", "Alt+Up", "<Alt-Up>", self.controller.move_selection_up),
            ("Move Selection Down", "Alt+Down", "<Alt-Down>", self.controller.move_selection_down),
            ("Move Selection To Section", "Ctrl+M", "<Control-m>", self.controller.move_selection_to_marker),
            ("Move Selection Above Section", "Ctrl+Shift+M", "<Control-M>", self.controller.move_selection_to_marker_upper),
            ("Pin / Unpin Section", "Ctrl+P", "<Control-p>", self.controller.pin_toggle),
            ("Refresh Order", None, None, self.controller.refresh_order),
            ("Refresh Sections…", None, None, self.controller.refresh_registry),
            ("Remove All Sections…", None, None, self.controller.remove_all_markers),
        )
        for label, accelerator, sequence, command in entries:
            handler = self._make_handler(command)
            section_menu.add_command(label=label, accelerator=accelerator or "", command=handler)
            if sequence:
                self.root.bind_all(sequence, lambda _e, h=handler: h())
        section_menu.add_separator()
        section_menu.add_command(label="Use Default Settings", command=self.reset_settings)
        menubar.add_cascade(label="Sections", menu=section_menu)
        self.root.config(menu=menubar)

    def _make_handler(self, command: Callable[[], OperationResult]) -> Callable[[], None]:
        return lambda: self._run(command)

    # ------------------------------------------------------------------
    # Document actions
    # ------------------------------------------------------------------

    def load_sample_document(self) -> None:
        self.tree.clear()
        for name in _SAMPLE_ITEMS:
            self.tree.insert_item(name)
        self.tree.flush_changes()
        count = self.controller.on_document_opened("sample")
        self._set_status(f"Sample hierarchy loaded with {count} section(s).")
        self._repaint()

    def add_item(self) -> None:
        name = simpledialog.askstring("Add item", "Name:", parent=self.root)
        if not name:
            return
        node = self.tree.insert_item(name)
        self.tree.set_active_selection([node])

    def delete_selection(self) -> None:
        for node in self.tree.active_selection():
            self.tree.delete_node(node)

    def nest_selection(self) -> None:
        """Make each selected root item a child of its previous sibling."""
        for node in self.tree.active_selection():
            if self.tree.parent_of(node) is not None:
                continue
            index = self.tree.sibling_index(node)
            if index > 0:
                self.tree.set_parent(node, self.tree.root_items()[index - 1])

    def reset_settings(self) -> None:
        self._config.reset_user_settings()
        self.controller.settings = self._config.get_section_settings()
        self.controller.context.settings = self.controller.settings
        self._set_status("Settings reset to defaults.")
        self._repaint()

    # ------------------------------------------------------------------
    # Widget callbacks
    # ------------------------------------------------------------------

    def _on_hierarchy_changed(self) -> None:
        kind = self.controller.on_hierarchy_changed()
        logger.debug("Hierarchy changed: %s", kind.value)
        self._repaint()

    def _on_selection_changed(self) -> None:
        self.controller.on_selection_changed()
        self._repaint()
        self._describe_selection()

    def _on_key(self, keysym: str) -> None:
        result = self.controller.on_key(keysym)
        if not result.success or self.controller.context.navigation.renaming is None:
            self._repaint()
            return
        # Treeview has no inline editor; a dialog stands in for it.
        identity = self.controller.context.navigation.renaming
        marker = self.controller.context.registry.get(identity)
        new_title = simpledialog.askstring(
            "Rename section", "Title:", initialvalue=marker.title if marker else "", parent=self.root
        )
        node = self.tree.resolve(identity)
        if new_title and node is not None:
            self.tree.set_display_name(node, new_title)
            self.controller.on_key("Return")
        else:
            self.controller.on_key("Escape")
        self._repaint()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _run(self, command: Callable[[], OperationResult]) -> Optional[OperationResult]:
        result = command()
        self._set_status(result.message)
        self._repaint()
        return result

    def _repaint(self) -> None:
        selection = tuple(self.tree.active_selection())
        self.tree.apply_row_styles(
            lambda node: self.controller.render_row(node, RowRect(is_sole_selection=selection == (node,)))
        )

    def _describe_selection(self) -> None:
        """Show the painted label of a single selected section in the status line."""
        selection = self.tree.active_selection()
        if len(selection) != 1:
            return
        label = self.tree.section_label(selection[0])
        if not label:
            return
        if self.tree.has_tag(selection[0], EDITOR_ONLY_TAG):
            label = f"{label} (editor only)"
        self._set_status(f"Section: {label}")

    def _set_status(self, text: str) -> None:
        self.status_var.set(text)
