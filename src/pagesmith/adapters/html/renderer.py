"""Event to HTML rendering.

The renderer is a single left-to-right pass over the event stream. Its only
state is whether a code block is open, plus the text accumulated for that
block. :func:`render_event` is the pure transition function; :func:`render_events`
drives it over a whole document and wraps the result in a template.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from enum import Enum
import logging

from pagesmith.core.events import (
    BlockQuote,
    Code,
    CodeBlock,
    Emphasis,
    End,
    Event,
    HardBreak,
    Heading,
    Image,
    Item,
    Link,
    List,
    Paragraph,
    Rule,
    SoftBreak,
    Start,
    Strong,
    Table,
    TableCell,
    TableHead,
    TableRow,
    Tag,
    Text,
)
from pagesmith.core.exceptions import RenderError
from pagesmith.core.templates import DocumentTemplate

from .escape import escape_html


logger = logging.getLogger(__name__)

Highlighter = Callable[[str, str], str]
Escaper = Callable[[str], str]

CODE_BLOCK_OPEN = '<div class="code-block"><pre><code>'
CODE_BLOCK_CLOSE = "</code></pre></div>"

_ELEMENTS: dict[type, str] = {
    Paragraph: "p",
    Item: "li",
    BlockQuote: "blockquote",
    Emphasis: "em",
    Strong: "strong",
    Table: "table",
    TableHead: "thead",
    TableRow: "tr",
    TableCell: "td",
}


class Mode(Enum):
    NORMAL = "normal"
    IN_CODE_BLOCK = "in_code_block"


@dataclass(frozen=True, slots=True)
class RendererState:
    """Renderer state between two events.

    ``language`` and ``code`` form the code accumulator and are only
    meaningful while ``mode`` is :attr:`Mode.IN_CODE_BLOCK`.
    """

    mode: Mode = Mode.NORMAL
    language: str = ""
    code: str = ""


INITIAL_STATE = RendererState()


def _open_tag(tag: Tag, escape: Escaper) -> str:
    if isinstance(tag, Heading):
        return f"<h{tag.level}>"
    if isinstance(tag, List):
        return "<ol>" if tag.ordered else "<ul>"
    if isinstance(tag, Link):
        return f'<a href="{tag.href}" title="{escape(tag.title)}">'
    if isinstance(tag, Image):
        return f'<img src="{tag.src}" alt="{escape(tag.title)}" />'
    element = _ELEMENTS.get(type(tag))
    return f"<{element}>" if element else ""


def _close_tag(tag: Tag) -> str:
    if isinstance(tag, Heading):
        return f"</h{tag.level}>"
    if isinstance(tag, List):
        return "</ol>" if tag.ordered else "</ul>"
    if isinstance(tag, Link):
        return "</a>"
    element = _ELEMENTS.get(type(tag))
    return f"</{element}>" if element else ""


def render_event(
    event: Event,
    state: RendererState,
    *,
    highlight: Highlighter,
    escape: Escaper = escape_html,
) -> tuple[str, RendererState]:
    """Return the HTML fragment for ``event`` and the state that follows it.

    Raises:
        RenderError: when code block start/end events are unbalanced.
        HighlightError: propagated from ``highlight``.
    """
    if isinstance(event, Start) and isinstance(event.tag, CodeBlock):
        if state.mode is Mode.IN_CODE_BLOCK:
            raise RenderError("Code block opened while another code block is still open.")
        return "", RendererState(Mode.IN_CODE_BLOCK, language=event.tag.language)

    if isinstance(event, End) and isinstance(event.tag, CodeBlock):
        if state.mode is not Mode.IN_CODE_BLOCK:
            raise RenderError("Code block closed without a matching opening event.")
        highlighted = highlight(state.code, state.language)
        return f"{CODE_BLOCK_OPEN}{highlighted}{CODE_BLOCK_CLOSE}", INITIAL_STATE

    if isinstance(event, Text):
        if state.mode is Mode.IN_CODE_BLOCK:
            return "", replace(state, code=state.code + event.text)
        return escape(event.text), state

    if isinstance(event, Start):
        return _open_tag(event.tag, escape), state
    if isinstance(event, End):
        return _close_tag(event.tag), state
    if isinstance(event, Code):
        return f'<code class="inline-code">{escape(event.text)}</code>', state
    if isinstance(event, HardBreak):
        return "<br />", state
    if isinstance(event, SoftBreak):
        return " ", state
    if isinstance(event, Rule):
        return "<hr />", state
    return "", state


def render_events(
    events: Iterable[Event],
    template: DocumentTemplate,
    *,
    highlight: Highlighter,
    escape: Escaper = escape_html,
) -> str:
    """Render a complete HTML document from an event stream."""
    parts = [template.prefix]
    state = INITIAL_STATE
    code_blocks = 0
    for event in events:
        fragment, next_state = render_event(event, state, highlight=highlight, escape=escape)
        if state.mode is Mode.IN_CODE_BLOCK and next_state.mode is Mode.NORMAL:
            code_blocks += 1
        state = next_state
        if fragment:
            parts.append(fragment)
    if state.mode is Mode.IN_CODE_BLOCK:
        raise RenderError("Event stream ended inside an open code block.")
    parts.append(template.suffix)
    logger.debug("Rendered HTML document with %d code block(s)", code_blocks)
    return "".join(parts)


__all__ = [
    "CODE_BLOCK_CLOSE",
    "CODE_BLOCK_OPEN",
    "INITIAL_STATE",
    "Mode",
    "RendererState",
    "render_event",
    "render_events",
]
