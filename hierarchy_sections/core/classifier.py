from __future__ import annotations

"""Three-way classification of a tree change from the root count alone.

The host reports only that "something changed". Comparing the root count
before and after is all the information available, so a deletion and an
insertion delivered in one batch look like :attr:`ChangeKind.UNCHANGED`.
Callers recover on the next notification or an explicit refresh.
"""

import logging

from hierarchy_sections.core.models import ChangeKind

__all__ = ["classify_change"]

logger = logging.getLogger(__name__)


def classify_change(previous: int, current: int) -> ChangeKind:
    if previous > current:
        kind = ChangeKind.DELETED
    elif previous < current:
        kind = ChangeKind.INSERTED
    else:
        kind = ChangeKind.UNCHANGED
    logger.debug("Section: classify previous=%d current=%d kind=%s", previous, current, kind.value)
    return kind
