"""Markdown tokenization for pagesmith.

markdown-it-py produces a token tree (block tokens whose ``inline`` entries
carry child tokens). :func:`iter_events` walks that tree and yields the flat
event stream consumed by the HTML renderer.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin
import yaml

from pagesmith.core.events import (
    BlockQuote,
    Code,
    CodeBlock,
    Emphasis,
    End,
    Event,
    FootnoteReference,
    HardBreak,
    Heading,
    Html,
    Image,
    Item,
    Link,
    List,
    Paragraph,
    Rule,
    SoftBreak,
    Start,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableHead,
    TableRow,
    Tag,
    TaskListMarker,
    Text,
)


__all__ = [
    "DEFAULT_MARKDOWN_RULES",
    "MarkdownDocument",
    "build_parser",
    "iter_events",
    "parse_document",
    "split_front_matter",
]


DEFAULT_MARKDOWN_RULES = ("table", "strikethrough")


@dataclass(slots=True)
class MarkdownDocument:
    """Markdown body with the metadata found in its front matter."""

    body: str
    front_matter: dict[str, Any] = field(default_factory=dict)

    @property
    def title(self) -> str | None:
        value = self.front_matter.get("title")
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    def events(self) -> Iterator[Event]:
        return iter_events(self.body)


@lru_cache(maxsize=1)
def build_parser() -> MarkdownIt:
    """Return the shared CommonMark parser with the GFM-style extensions enabled."""
    return (
        MarkdownIt("commonmark")
        .enable(list(DEFAULT_MARKDOWN_RULES))
        .use(footnote_plugin)
        .use(tasklists_plugin)
    )


def parse_document(source: str) -> MarkdownDocument:
    """Split front matter off ``source`` and wrap the result."""
    metadata, body = split_front_matter(source)
    return MarkdownDocument(body=body, front_matter=metadata)


def split_front_matter(source: str) -> tuple[dict[str, Any], str]:
    """Split YAML front matter from Markdown content, returning metadata and body."""
    candidate = source.lstrip("\ufeff")
    prefix_len = len(source) - len(candidate)
    lines = candidate.splitlines()
    if not lines or lines[0].strip() != "---":
        return {}, source

    front_matter_lines: list[str] = []
    closing_index: int | None = None
    for idx, line in enumerate(lines[1:], start=1):
        stripped = line.strip()
        if stripped in {"---", "..."}:
            closing_index = idx
            break
        front_matter_lines.append(line)

    if closing_index is None:
        return {}, source

    raw_block = "\n".join(front_matter_lines)
    try:
        metadata = yaml.safe_load(raw_block) or {}
    except yaml.YAMLError:
        return {}, source

    if not isinstance(metadata, dict):
        return {}, source

    body = "\n".join(lines[closing_index + 1 :])
    if source.endswith("\n"):
        body += "\n"

    return metadata, source[:prefix_len] + body


def _heading_level(token: Token) -> int:
    return int(token.tag[1:])


def _ordered_list_start(token: Token) -> int:
    raw = token.attrGet("start")
    try:
        return int(raw) if raw is not None else 1
    except (TypeError, ValueError):
        return 1


def _fence_language(token: Token) -> str:
    info = (token.info or "").strip()
    return info.split()[0] if info else ""


def _opening_tag(token: Token) -> Tag | None:
    kind = token.type[: -len("_open")]
    if kind == "heading":
        return Heading(_heading_level(token))
    if kind == "paragraph":
        return None if token.hidden else Paragraph()
    if kind == "bullet_list":
        return List()
    if kind == "ordered_list":
        return List(start=_ordered_list_start(token))
    if kind == "list_item":
        return Item()
    if kind == "blockquote":
        return BlockQuote()
    if kind == "table":
        return Table()
    if kind == "thead":
        return TableHead()
    if kind == "tr":
        return TableRow()
    if kind in {"th", "td"}:
        return TableCell()
    if kind == "em":
        return Emphasis()
    if kind == "strong":
        return Strong()
    if kind == "s":
        return Strikethrough()
    if kind == "link":
        return Link(href=str(token.attrGet("href") or ""), title=str(token.attrGet("title") or ""))
    return None


_TASK_CHECKBOX_CLASS = "task-list-item-checkbox"


def _task_marker(token: Token) -> TaskListMarker | None:
    if token.type != "html_inline" or _TASK_CHECKBOX_CLASS not in token.content:
        return None
    return TaskListMarker(checked="checked" in token.content)


def _footnote_label(token: Token) -> str:
    meta = token.meta or {}
    return str(meta.get("label", meta.get("id", "")))


def _code_block_events(content: str, language: str) -> Iterator[Event]:
    tag = CodeBlock(language)
    yield Start(tag)
    if content:
        yield Text(content)
    yield End(tag)


def _walk(tokens: Iterable[Token], stack: list[Tag | None]) -> Iterator[Event]:
    after_marker = False
    for token in tokens:
        marker = _task_marker(token)
        if marker is not None:
            after_marker = True
            yield marker
            continue
        if token.nesting == 1:
            tag = _opening_tag(token)
            stack.append(tag)
            if tag is not None:
                yield Start(tag)
            continue
        if token.nesting == -1:
            tag = stack.pop() if stack else None
            if tag is not None:
                yield End(tag)
            continue

        kind = token.type
        if kind == "inline":
            yield from _walk(token.children or [], stack)
        elif kind == "text":
            # the checkbox rule leaves the space that followed "[x]"
            content = token.content.lstrip(" \u00a0") if after_marker else token.content
            after_marker = False
            if content:
                yield Text(content)
        elif kind == "footnote_ref":
            yield FootnoteReference(_footnote_label(token))
        elif kind == "footnote_anchor":
            continue
        elif kind == "code_inline":
            yield Code(token.content)
        elif kind == "softbreak":
            yield SoftBreak()
        elif kind == "hardbreak":
            yield HardBreak()
        elif kind == "hr":
            yield Rule()
        elif kind == "fence":
            yield from _code_block_events(token.content, _fence_language(token))
        elif kind == "code_block":
            yield from _code_block_events(token.content, "")
        elif kind == "image":
            image = Image(
                src=str(token.attrGet("src") or ""), title=str(token.attrGet("title") or "")
            )
            yield Start(image)
            yield from _walk(token.children or [], stack)
            yield End(image)
        elif kind in {"html_block", "html_inline"}:
            yield Html(token.content)


def iter_events(source: str, *, parser: MarkdownIt | None = None) -> Iterator[Event]:
    """Yield the structural events of ``source`` in document order."""
    md = parser or build_parser()
    yield from _walk(md.parse(source), [])
