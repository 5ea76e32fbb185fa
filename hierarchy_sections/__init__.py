"""Top-level package for Hierarchy Sections.

Section markers organize the root items of a hierarchy view. Front-ends
should depend on the public API exposed here rather than importing internal
modules directly.
"""

from .core.context import SectionContext  # re-export for convenience
from .ui.controllers.section_controller import SectionController

__all__: list[str] = [
    "SectionContext",
    "SectionController",
]
