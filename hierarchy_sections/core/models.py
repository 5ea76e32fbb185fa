from __future__ import annotations

"""Shared data structures used across the Hierarchy Sections core.

This module exposes dataclasses and value objects used by services and other
core layers. It is intentionally free of UI / I/O code so that the contained
objects can be reused in any context (unit-tests, CLI, GUI, etc.).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Hashable, Optional

__all__ = [
    "Identity",
    "Color",
    "ChangeKind",
    "MarkerStatus",
    "Marker",
    "SectionColors",
    "SectionSettings",
    "RowRect",
    "RowAppearance",
]

# Opaque host handle: stable across renames, invalid once the node is deleted.
Identity = Hashable

# Hex RGB string such as "#FFFF00".
Color = str


class ChangeKind(Enum):
    """Coarse classification of the last tree mutation."""

    DELETED = "deleted"
    UNCHANGED = "unchanged"
    INSERTED = "inserted"


class MarkerStatus(Enum):
    """Display status encoded in the suffix of a marker's name."""

    PLAIN = "plain"
    CURRENT = "current"
    PINNED = "pinned"


@dataclass
class Marker:
    """Registry entry for one section marker node.

    Attributes
    ----------
    identity
        Host handle of the backing node.
    title
        Display name with the marker decoration stripped.
    ordinal
        Zero-based rank among all registered markers.
    is_selected
        True when the node is part of the host's current selection.
    last_known_sibling_index
        Sibling position seen by the last reconciliation, -1 if never read.
    """

    identity: Identity
    title: str
    ordinal: int
    is_selected: bool = False
    last_known_sibling_index: int = -1


@dataclass(frozen=True)
class SectionColors:
    foreground: Color = "#FFFFFF"
    background: Color = "#000000"
    highlight_foreground: Color = "#FFFFFF"
    highlight_background: Color = "#FFFF00"


@dataclass(frozen=True)
class SectionSettings:
    """Persisted user preferences consumed by the core and the row renderer."""

    auto_tag_on_register: bool = True
    colors: SectionColors = field(default_factory=SectionColors)


@dataclass(frozen=True)
class RowRect:
    """Geometry and selection info of a row the host is about to paint."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    is_sole_selection: bool = False


@dataclass(frozen=True)
class RowAppearance:
    label: str
    background: Color
    foreground: Color
    status: MarkerStatus = MarkerStatus.PLAIN
    tooltip: Optional[str] = None
