"""Shared fixtures for Hierarchy Sections tests.

Provides an in-memory host tree implementing the ``HierarchyHost`` operations
so the core can be exercised without a GUI toolkit.
"""

import itertools
import logging
from typing import Dict, List, Optional, Sequence

import pytest

from hierarchy_sections.core.context import SectionContext
from hierarchy_sections.core.models import SectionSettings
from hierarchy_sections.core.services.navigation_service import NavigationService
from hierarchy_sections.core.services.reconciliation_service import ReconciliationService
from hierarchy_sections.core.services.selection_service import SelectionService
from hierarchy_sections.ui.controllers.section_controller import SectionController

logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


class FakeNode:
    def __init__(self, node_id: int, name: str) -> None:
        self.id = node_id
        self.name = name
        self.parent: Optional["FakeNode"] = None
        self.children: List["FakeNode"] = []
        self.tags: set[str] = set()

    def __repr__(self) -> str:
        return f"FakeNode(id={self.id}, name={self.name!r})"


class FakeHierarchy:
    """Minimal scene-like tree: ordered roots, nested children, a selection.

    Identities are integer ids; deleted nodes stop resolving. Mutations do not
    notify anyone, tests call the controller/service hooks explicitly.
    """

    def __init__(self, names: Sequence[str] = ()) -> None:
        self._ids = itertools.count(1)
        self.roots: List[FakeNode] = []
        self.nodes: Dict[int, FakeNode] = {}
        self.selection: List[FakeNode] = []
        self.name_writes: List[tuple] = []
        for name in names:
            self.add(name)

    # -- test helpers -----------------------------------------------------

    def add(self, name: str, parent: Optional[FakeNode] = None, index: Optional[int] = None) -> FakeNode:
        node = FakeNode(next(self._ids), name)
        self.nodes[node.id] = node
        siblings = self._siblings_list(parent)
        node.parent = parent
        if index is None:
            siblings.append(node)
        else:
            siblings.insert(max(0, min(index, len(siblings))), node)
        return node

    def by_name(self, name: str) -> FakeNode:
        for node in self.nodes.values():
            if node.name == name:
                return node
        raise KeyError(name)

    def names(self) -> List[str]:
        return [n.name for n in self.roots]

    def select(self, *nodes: FakeNode) -> None:
        self.selection = list(nodes)

    # -- HierarchyHost ----------------------------------------------------

    def root_count(self) -> int:
        return len(self.roots)

    def root_items(self) -> Sequence[FakeNode]:
        return list(self.roots)

    def display_name(self, node: FakeNode) -> str:
        return node.name

    def set_display_name(self, node: FakeNode, name: str) -> None:
        self.name_writes.append((node.id, name))
        node.name = name

    def sibling_index(self, node: FakeNode) -> int:
        return self._siblings_list(node.parent).index(node)

    def set_sibling_index(self, node: FakeNode, index: int) -> None:
        siblings = self._siblings_list(node.parent)
        siblings.remove(node)
        siblings.insert(max(0, min(index, len(siblings))), node)

    def parent_of(self, node: FakeNode) -> Optional[FakeNode]:
        return node.parent

    def set_parent(self, node: FakeNode, parent: Optional[FakeNode]) -> None:
        self._siblings_list(node.parent).remove(node)
        node.parent = parent
        self._siblings_list(parent).append(node)

    def resolve(self, identity) -> Optional[FakeNode]:
        return self.nodes.get(identity)

    def identity_of(self, node: FakeNode) -> int:
        return node.id

    def active_selection(self) -> Sequence[FakeNode]:
        return [n for n in self.selection if n.id in self.nodes]

    def set_active_selection(self, nodes: Sequence[FakeNode]) -> None:
        self.selection = list(nodes)

    def delete_node(self, node: FakeNode) -> None:
        self._siblings_list(node.parent).remove(node)
        stack = [node]
        while stack:
            current = stack.pop()
            self.nodes.pop(current.id, None)
            stack.extend(current.children)
        self.selection = [n for n in self.selection if n.id in self.nodes]

    def create_node(self, name: str, index: Optional[int] = None) -> FakeNode:
        return self.add(name, index=index)

    def tag_editor_only(self, node: FakeNode) -> None:
        node.tags.add("EditorOnly")

    def _siblings_list(self, parent: Optional[FakeNode]) -> List[FakeNode]:
        return self.roots if parent is None else parent.children


@pytest.fixture
def host():
    return FakeHierarchy()


@pytest.fixture
def make_host():
    return FakeHierarchy


@pytest.fixture
def reconciler():
    return ReconciliationService()


@pytest.fixture
def navigation(reconciler):
    return NavigationService(reconciler)


@pytest.fixture
def selection_service():
    return SelectionService()


@pytest.fixture
def make_context(reconciler):
    """Build a host from root names and a context rebuilt from it."""
    def factory(names: Sequence[str] = (), settings: Optional[SectionSettings] = None):
        fake = FakeHierarchy(names)
        ctx = SectionContext(host=fake, settings=settings or SectionSettings(), document_id="test")
        reconciler.rebuild(ctx)
        return fake, ctx
    return factory


@pytest.fixture
def make_controller():
    def factory(names: Sequence[str] = (), confirm_answer: Optional[bool] = True, settings=None):
        fake = FakeHierarchy(names)
        prompts: List[str] = []

        def confirm(message: str) -> bool:
            prompts.append(message)
            return bool(confirm_answer)

        controller = SectionController(
            fake,
            settings=settings,
            confirm=None if confirm_answer is None else confirm,
        )
        controller.on_document_opened("test")
        controller.prompts = prompts  # type: ignore[attr-defined]
        return fake, controller
    return factory
