"""Structural events flowing from the tokenizer into the HTML renderer.

Events mirror the block/inline structure of a Markdown document. Container
elements are described by a :class:`Tag` and surrounded by :class:`Start` and
:class:`End` events; leaves (text, inline code, breaks, rules) are standalone
events. Every event is immutable and consumed exactly once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class Heading:
    level: int

    def __post_init__(self) -> None:
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be between 1 and 6, got {self.level}.")


@dataclass(frozen=True, slots=True)
class Paragraph:
    pass


@dataclass(frozen=True, slots=True)
class List:
    """Ordered when ``start`` carries the first item number, unordered otherwise."""

    start: int | None = None

    @property
    def ordered(self) -> bool:
        return self.start is not None


@dataclass(frozen=True, slots=True)
class Item:
    pass


@dataclass(frozen=True, slots=True)
class BlockQuote:
    pass


@dataclass(frozen=True, slots=True)
class CodeBlock:
    """Fenced or indented code block; ``language`` is empty when no hint is given."""

    language: str = ""


@dataclass(frozen=True, slots=True)
class Emphasis:
    pass


@dataclass(frozen=True, slots=True)
class Strong:
    pass


@dataclass(frozen=True, slots=True)
class Strikethrough:
    pass


@dataclass(frozen=True, slots=True)
class Link:
    href: str
    title: str = ""


@dataclass(frozen=True, slots=True)
class Image:
    src: str
    title: str = ""


@dataclass(frozen=True, slots=True)
class Table:
    pass


@dataclass(frozen=True, slots=True)
class TableHead:
    pass


@dataclass(frozen=True, slots=True)
class TableRow:
    pass


@dataclass(frozen=True, slots=True)
class TableCell:
    pass


Tag: TypeAlias = (
    Heading
    | Paragraph
    | List
    | Item
    | BlockQuote
    | CodeBlock
    | Emphasis
    | Strong
    | Strikethrough
    | Link
    | Image
    | Table
    | TableHead
    | TableRow
    | TableCell
)


@dataclass(frozen=True, slots=True)
class Start:
    tag: Tag


@dataclass(frozen=True, slots=True)
class End:
    tag: Tag


@dataclass(frozen=True, slots=True)
class Text:
    text: str


@dataclass(frozen=True, slots=True)
class Code:
    """Inline code span."""

    text: str


@dataclass(frozen=True, slots=True)
class Html:
    """Raw HTML passed through by the tokenizer."""

    html: str


@dataclass(frozen=True, slots=True)
class TaskListMarker:
    """Checkbox at the start of a task list item."""

    checked: bool


@dataclass(frozen=True, slots=True)
class FootnoteReference:
    label: str


@dataclass(frozen=True, slots=True)
class SoftBreak:
    pass


@dataclass(frozen=True, slots=True)
class HardBreak:
    pass


@dataclass(frozen=True, slots=True)
class Rule:
    pass


Event: TypeAlias = (
    Start
    | End
    | Text
    | Code
    | Html
    | TaskListMarker
    | FootnoteReference
    | SoftBreak
    | HardBreak
    | Rule
)


__all__ = [
    "BlockQuote",
    "Code",
    "CodeBlock",
    "Emphasis",
    "End",
    "Event",
    "FootnoteReference",
    "HardBreak",
    "Heading",
    "Html",
    "Image",
    "Item",
    "Link",
    "List",
    "Paragraph",
    "Rule",
    "SoftBreak",
    "Start",
    "Strikethrough",
    "Strong",
    "Table",
    "TableCell",
    "TableHead",
    "TableRow",
    "Tag",
    "TaskListMarker",
    "Text",
]
