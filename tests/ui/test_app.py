import tkinter as tk

import pytest

from hierarchy_sections.app import HierarchySectionsApp
from hierarchy_sections.config import ConfigManager


def _can_create_tk_root() -> bool:
    try:
        r = tk.Tk()
        r.destroy()
        return True
    except tk.TclError:
        return False


pytestmark = [
    pytest.mark.ui,
    pytest.mark.skipif(
        not _can_create_tk_root(),
        reason="Tkinter root cannot be created in this environment (likely headless CI without display).",
    ),
]


@pytest.fixture
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("HIERARCHY_SECTIONS_CONFIG_DIR", str(tmp_path))
    ConfigManager.reset_instance()
    root = tk.Tk()
    root.withdraw()
    yield HierarchySectionsApp(root)
    ConfigManager.reset_instance()
    root.destroy()


def test_selecting_a_section_shows_its_label(app):
    marker = app.tree.root_items()[2]
    app.tree.set_active_selection([marker])

    app._on_selection_changed()

    assert app.status_var.get() == "Section: Environment (editor only)"


def test_selecting_a_plain_item_keeps_status(app):
    app.status_var.set("unchanged")
    app.tree.set_active_selection([app.tree.root_items()[0]])

    app._on_selection_changed()

    assert app.status_var.get() == "unchanged"
