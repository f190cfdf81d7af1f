"""
Markdown syntax helpers shared by the emitter and the reader.

Escaping is limited to what would otherwise change how a line is parsed:
leading block markers (including code fences, HTML and link reference
definitions), pipes inside table cells, and brackets/quotes inside image
syntax.
"""

import re
from typing import List, Optional, Tuple

from ..models import ImageReference

HEADING_PATTERN = re.compile(r"^(#{1,6}) (.*)$")
ORDERED_ITEM_PATTERN = re.compile(r"^(\d{1,9})\. (.+)$")
UNORDERED_ITEM_PATTERN = re.compile(r"^- (.+)$")
# Ends a list so that an adjacent list of the same kind starts a new one.
LIST_BREAK = "<!-- -->"
TABLE_SEPARATOR_PATTERN = re.compile(r"^\|(?:\s*:?-{3,}:?\s*\|)+$")
IMAGE_PATTERN = re.compile(
    r'^!\[((?:[^\]\\]|\\.)*)\]'
    r'\((<[^>]*>|[^\s)]+)'
    r'(?:\s+"((?:[^"\\]|\\.)*)")?\)$'
)

_ESCAPABLE = set("\\#>|-*+_=!`~<[")
_LEADING_NUMERAL = re.compile(r"^(\d{1,9})([.)])")
_ESCAPED_NUMERAL = re.compile(r"^(\d{1,9})\\([.)])")
_RULE_LIKE = re.compile(r"^[-*_=](?:\s*[-*_=]){2,}\s*$")
_FENCE_LIKE = re.compile(r"^(?:`{3,}|~{3,})")
_LINK_DEFINITION_LIKE = re.compile(r"^\[(?:[^\]\\]|\\.)+\]:")
_BACKSLASH_ESCAPE = re.compile(r"\\(.)")


def escape_text(text: str) -> str:
    """
    Escape a paragraph or list item so it is not read as block syntax.

    Args:
        text: Plain text

    Returns:
        Text safe to start a Markdown line with
    """
    if not text:
        return text
    if _RULE_LIKE.match(text):
        return "\\" + text
    if _FENCE_LIKE.match(text) or _LINK_DEFINITION_LIKE.match(text):
        return "\\" + text
    if text.startswith("![") or text[0] in "#>|<\\":
        return "\\" + text
    if text[0] in "-*+" and (len(text) == 1 or text[1].isspace()):
        return "\\" + text
    match = _LEADING_NUMERAL.match(text)
    if match and (len(text) == match.end() or text[match.end()].isspace()):
        return f"{match.group(1)}\\{match.group(2)}{text[match.end():]}"
    return text


def unescape_text(text: str) -> str:
    """Reverse `escape_text`."""
    if len(text) > 1 and text[0] == "\\" and text[1] in _ESCAPABLE:
        return text[1:]
    match = _ESCAPED_NUMERAL.match(text)
    if match:
        return f"{match.group(1)}{match.group(2)}{text[match.end():]}"
    return text


def escape_heading(text: str) -> str:
    """Escape a trailing ``#`` that CommonMark would drop as a closing sequence."""
    if text.endswith("#"):
        return text[:-1] + "\\#"
    return text


def unescape_heading(text: str) -> str:
    if text.endswith("\\#"):
        return text[:-2] + "#"
    return text


def escape_cell(text: str) -> str:
    return text.replace("|", "\\|")


def split_table_row(line: str) -> List[str]:
    """
    Split a pipe table row into unescaped cell texts.

    Args:
        line: A line such as ``| a | b \\| c |``

    Returns:
        Cell texts, stripped
    """
    body = line.strip()
    if body.startswith("|"):
        body = body[1:]
    if body.endswith("|") and not body.endswith("\\|"):
        body = body[:-1]

    cells: List[str] = []
    current: List[str] = []
    i = 0
    while i < len(body):
        char = body[i]
        if char == "\\" and i + 1 < len(body) and body[i + 1] == "|":
            current.append("|")
            i += 2
            continue
        if char == "|":
            cells.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1
    cells.append("".join(current).strip())
    return cells


def format_table_row(cells: List[str]) -> str:
    return "| " + " | ".join(escape_cell(cell) for cell in cells) + " |"


def format_table_separator(column_count: int) -> str:
    return "|" + "|".join(["---"] * column_count) + "|"


def format_image(image: ImageReference) -> str:
    """
    Render ``![alt](path "title")``; the title part is omitted when absent.

    Args:
        image: Image to reference

    Returns:
        Markdown image syntax
    """
    alt = image.resolved_alt.replace("\\", "\\\\").replace("[", "\\[").replace("]", "\\]")
    path = image.path
    if any(c.isspace() or c in "()<>" for c in path):
        path = f"<{path}>"
    if image.title is None:
        return f"![{alt}]({path})"
    title = image.title.replace("\\", "\\\\").replace('"', '\\"')
    return f'![{alt}]({path} "{title}")'


def parse_image(line: str) -> Optional[ImageReference]:
    """
    Parse a line holding only image syntax.

    Args:
        line: Markdown line

    Returns:
        ImageReference, or None when the line is not an image
    """
    match = IMAGE_PATTERN.match(line.strip())
    if not match:
        return None
    alt, path, title = match.groups()
    if path.startswith("<") and path.endswith(">"):
        path = path[1:-1]
    return ImageReference(
        path=path,
        alt=_BACKSLASH_ESCAPE.sub(r"\1", alt),
        title=_BACKSLASH_ESCAPE.sub(r"\1", title) if title is not None else None,
    )


def parse_heading(line: str) -> Optional[Tuple[int, str]]:
    match = HEADING_PATTERN.match(line)
    if not match:
        return None
    return len(match.group(1)), unescape_heading(match.group(2).strip())
