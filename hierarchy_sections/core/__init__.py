from __future__ import annotations

"""GUI-agnostic core of Hierarchy Sections.

Front-ends (Tk widget, editor integrations) should only depend on the public
API exposed here rather than importing internal modules directly.
"""

from .context import NavigationState, SectionContext
from .host import HierarchyHost
from .models import ChangeKind, Marker, MarkerStatus, SectionColors, SectionSettings
from .registry import SectionRegistry

__all__: list[str] = [
    "ChangeKind",
    "HierarchyHost",
    "Marker",
    "MarkerStatus",
    "NavigationState",
    "SectionColors",
    "SectionContext",
    "SectionRegistry",
    "SectionSettings",
]
