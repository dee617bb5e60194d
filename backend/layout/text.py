"""
Text measurement and word wrapping against real font metrics.
"""

from reportlab.pdfbase.pdfmetrics import stringWidth


def text_width(text: str, font_name: str, font_size: float) -> float:
    """Rendered width of text in points for the given font and size."""
    return stringWidth(text, font_name, font_size)


def wrap_text(text: str, font_name: str, font_size: float, max_width: float) -> list[str]:
    """
    Wrap text into lines no wider than max_width.

    Wrapping is word based: words are never split, so a single word wider
    than max_width is placed alone on its own line. Explicit newlines start
    a new line; blank paragraphs are dropped.

    Args:
        text: Text to wrap
        font_name: Font used to render the text
        font_size: Font size in points
        max_width: Available width in points

    Returns:
        List of lines (empty for blank text)
    """
    if not text:
        return []

    space_width = text_width(" ", font_name, font_size)
    lines = []

    for paragraph in text.splitlines():
        words = paragraph.split()
        if not words:
            continue

        current = words[0]
        current_width = text_width(current, font_name, font_size)

        for word in words[1:]:
            word_width = text_width(word, font_name, font_size)
            if current_width + space_width + word_width <= max_width:
                current = f"{current} {word}"
                current_width += space_width + word_width
            else:
                lines.append(current)
                current = word
                current_width = word_width

        lines.append(current)

    return lines
