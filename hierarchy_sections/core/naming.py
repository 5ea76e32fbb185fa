from __future__ import annotations

"""Marker name decoration.

The decorated display name is the durable, host-visible signal that a node is
a section marker; the registry is only a cache rebuilt from it. A name is a
marker name iff it contains :data:`DELIMITER`.

Canonical form: ``"--- <title> <suffix>"`` where the suffix encodes the
display status (plain, current or pinned).
"""

import re

from hierarchy_sections.core.models import MarkerStatus

__all__ = [
    "DELIMITER",
    "DEFAULT_TITLE",
    "DEFAULT_FULL_LABEL",
    "STATUS_SUFFIXES",
    "is_marker_name",
    "strip_title",
    "canonical_name",
    "canonicalize",
]

DELIMITER = "---"
DEFAULT_TITLE = "Section"

STATUS_SUFFIXES = {
    MarkerStatus.PLAIN: "---",
    MarkerStatus.CURRENT: "---<",
    MarkerStatus.PINNED: "---#",
}

DEFAULT_FULL_LABEL = f"{DELIMITER} {DEFAULT_TITLE} {STATUS_SUFFIXES[MarkerStatus.PLAIN]}"

_TRIM_CHARS = "- "
_SUFFIX_RE = re.compile(r"\s*-{3}[<#]?\s*$")


def is_marker_name(name: str | None) -> bool:
    return bool(name) and DELIMITER in name  # type: ignore[operator]


def strip_title(raw: str | None) -> str:
    """Return the user title carried by ``raw``.

    A trailing status suffix is removed first, then dashes and spaces are
    trimmed from both ends. Empty results fall back to ``"Section"``.
    """
    text = _SUFFIX_RE.sub("", raw or "")
    title = text.strip(_TRIM_CHARS)
    return title or DEFAULT_TITLE


def canonical_name(title: str, status: MarkerStatus = MarkerStatus.PLAIN) -> str:
    return f"{DELIMITER} {title} {STATUS_SUFFIXES[status]}"


def canonicalize(raw: str | None, status: MarkerStatus = MarkerStatus.PLAIN) -> str:
    """Return the canonical decorated form of ``raw``.

    Idempotent: ``canonicalize(canonicalize(x, s), s) == canonicalize(x, s)``.
    """
    return canonical_name(strip_title(raw), status)
