"""Row presentation for section markers.

:func:`render_row` is a pure function of the context state: the host calls
it for each visible row and paints the returned label and colours.
"""

from __future__ import annotations

from typing import Optional

from hierarchy_sections.core.context import SectionContext
from hierarchy_sections.core.models import Identity, RowAppearance, RowRect

__all__ = ["render_row"]


def render_row(context: SectionContext, identity: Identity, rect: Optional[RowRect] = None) -> Optional[RowAppearance]:
    """Return how to paint the row of ``identity``, or None to let the host draw it.

    None is returned for non-markers and for the marker being renamed, so the
    host's inline editor stays visible.
    """
    marker = context.registry.get(identity)
    if marker is None or context.navigation.renaming == identity:
        return None

    colors = context.settings.colors
    highlighted = marker.is_selected or bool(rect is not None and rect.is_sole_selection)
    if highlighted:
        background, foreground = colors.highlight_background, colors.highlight_foreground
    else:
        background, foreground = colors.background, colors.foreground

    return RowAppearance(
        label=marker.title,
        background=background,
        foreground=foreground,
        status=context.status_of(identity),
        tooltip=f"Section {marker.ordinal + 1} of {len(context.registry)}",
    )
