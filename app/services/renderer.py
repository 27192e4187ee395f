# =============================================================================
# Markdown Renderer — Agent Answer → Display Blocks
# =============================================================================
#
# Renders the constrained markdown dialect the advisory agent writes into a
# flat list of typed display blocks, one per source line. The client maps
# each block kind onto a visual element (heading size, bullet style, rule,
# spacer, paragraph).
#
# Line classification, first match wins:
#   "### "      → Heading level 4
#   "## "       → Heading level 3
#   "# "        → Heading level 2
#   "- " / "* " → unordered ListItem
#   "1. "       → ordered ListItem (number stripped)
#   "---"/"***" → Separator
#   blank       → Spacer
#   otherwise   → Paragraph
#
# Inline `**bold**` is resolved per line; nothing carries across lines.
# =============================================================================

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar

from app.services.lexicon import Span, split_emphasis

_ORDERED_PREFIX = re.compile(r"^\d+\.\s")


# ---------------------------------------------------------------------------
# Display Blocks
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Heading:
    kind: ClassVar[str] = "heading"

    level: int
    spans: tuple[Span, ...]


@dataclass(frozen=True)
class ListItem:
    kind: ClassVar[str] = "list_item"

    ordered: bool
    spans: tuple[Span, ...]


@dataclass(frozen=True)
class Separator:
    kind: ClassVar[str] = "separator"


@dataclass(frozen=True)
class Spacer:
    kind: ClassVar[str] = "spacer"


@dataclass(frozen=True)
class Paragraph:
    kind: ClassVar[str] = "paragraph"

    spans: tuple[Span, ...]


DisplayBlock = Heading | ListItem | Separator | Spacer | Paragraph

# Checked in order; "### " must precede "## " and "# ".
_HEADING_MARKERS: tuple[tuple[str, int], ...] = (
    ("### ", 4),
    ("## ", 3),
    ("# ", 2),
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render_line(line: str) -> DisplayBlock:
    """Classify a single line and resolve its inline emphasis."""
    for marker, level in _HEADING_MARKERS:
        if line.startswith(marker):
            return Heading(level=level, spans=split_emphasis(line[len(marker):]))

    if line.startswith("- ") or line.startswith("* "):
        return ListItem(ordered=False, spans=split_emphasis(line[2:]))

    if _ORDERED_PREFIX.match(line):
        return ListItem(
            ordered=True,
            spans=split_emphasis(_ORDERED_PREFIX.sub("", line, count=1)),
        )

    if line.startswith("---") or line.startswith("***"):
        return Separator()

    if not line.strip():
        return Spacer()

    return Paragraph(spans=split_emphasis(line))


def render(text: str | None) -> list[DisplayBlock]:
    """
    Render agent markdown into display blocks, one block per line.

    None or an empty string renders to an empty list.
    """
    if not text or not isinstance(text, str):
        return []
    return [render_line(line.removesuffix("\r")) for line in text.split("\n")]
