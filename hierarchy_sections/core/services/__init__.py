from __future__ import annotations

"""Section services: reconciliation, navigation and selection flags.

Services are stateless and operate on an explicit SectionContext.
"""

from .results import OperationResult  # noqa: F401
from .reconciliation_service import ReconciliationService  # noqa: F401
from .navigation_service import NavigationService  # noqa: F401
from .selection_service import SelectionService  # noqa: F401

__all__: list[str] = [
    "OperationResult",
    "ReconciliationService",
    "NavigationService",
    "SelectionService",
]
