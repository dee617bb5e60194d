"""
Document Model
Pages of absolutely positioned blocks produced by the layout engine.

Coordinates are in PDF points. ``y`` is the text baseline measured down
from the top edge of the page; the writer flips it for the canvas.
"""

from dataclasses import dataclass
from typing import Optional

TEXT = "text"
GLYPH = "glyph"


@dataclass(frozen=True)
class Block:
    """A single positioned text run or decorative glyph."""

    kind: str
    text: str
    x: float
    y: float
    font_name: str
    font_size: float
    color: str
    align: str = "left"
    section: str = ""
    entry: Optional[int] = None

    @property
    def is_glyph(self) -> bool:
        return self.kind == GLYPH


@dataclass(frozen=True)
class Page:
    """One fixed-size page; ``number`` is 1-based."""

    number: int
    blocks: tuple[Block, ...]

    def blocks_in(self, section: str) -> list[Block]:
        return [block for block in self.blocks if block.section == section]

    @property
    def text(self) -> str:
        """All text blocks joined in emission order (glyphs excluded)."""
        return "\n".join(block.text for block in self.blocks if not block.is_glyph)


@dataclass(frozen=True)
class Document:
    """Finished multi-page report, ready to be written out."""

    pages: tuple[Page, ...]
    page_width: float
    page_height: float
    title: str
    filename: str

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def blocks_in(self, section: str) -> list[tuple[int, Block]]:
        """(page number, block) pairs for a section, in document order."""
        return [
            (page.number, block)
            for page in self.pages
            for block in page.blocks_in(section)
        ]


class Cursor:
    """Layout progress within one render call: vertical position and page index."""

    def __init__(self, top: float, bottom: float):
        self.top = top
        self.bottom = bottom
        self.y = top
        self.page_index = 0

    @property
    def remaining(self) -> float:
        return self.bottom - self.y

    @property
    def at_page_top(self) -> bool:
        return self.y <= self.top

    def advance(self, amount: float):
        self.y += amount

    def next_page(self):
        self.page_index += 1
        self.y = self.top

    def __repr__(self) -> str:
        return f"Cursor(page={self.page_index + 1}, y={self.y:.1f})"
