from __future__ import annotations

"""Result value returned by section commands."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

__all__ = [
    "OperationResult",
    "REASON_STALE_IDENTITY",
    "REASON_INVALID_TARGET",
    "REASON_DECLINED",
    "REASON_NOT_A_MARKER",
]

REASON_STALE_IDENTITY = "stale_identity"
REASON_INVALID_TARGET = "invalid_navigation_target"
REASON_DECLINED = "declined"
REASON_NOT_A_MARKER = "not_a_marker"


@dataclass(frozen=True)
class OperationResult:
    """Result of a section command.

    Attributes
    ----------
    success
        Whether the operation changed anything.
    message
        Human-readable summary suitable for logs or UI display.
    details
        Optional structured details; ``details["reason"]`` names the failure
        kind for no-op results.
    """
    success: bool
    message: str
    details: Optional[Dict[str, Any]] = None

    @property
    def reason(self) -> Optional[str]:
        return (self.details or {}).get("reason")
