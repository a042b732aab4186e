"""Turns a text and its highlight events into positioned, colored glyphs."""
from typing import Iterable, List, Optional

from constants import TEXT_COLOR
from errors import SpanDecodeError
from highlight import HighlightEvent, SourceSpan, StyleStart
from layout import DrawInstruction, LayoutCursor, LayoutMetrics
from palette import Color, resolve


def decode_span(data: bytes, span: SourceSpan) -> str:
    """Return the text a span points at, refusing ranges that split the text badly."""
    if span.start < 0 or span.end < span.start or span.start > len(data):
        raise SpanDecodeError(span.start, span.end, f"range outside 0..{len(data)}")
    try:
        return data[span.start:span.end].decode("utf-8")
    except UnicodeDecodeError as e:
        raise SpanDecodeError(span.start, span.end, str(e)) from e


def interpret(
    text: str,
    events: Iterable[HighlightEvent],
    metrics: Optional[LayoutMetrics] = None,
    default_color: Color = TEXT_COLOR,
) -> List[DrawInstruction]:
    """Walk the events in order and lay out every visible character.

    The active category and color are carried through the pass only; two runs
    over the same text and events give identical output.
    """
    data = text.encode("utf-8")
    cursor = LayoutCursor(metrics or LayoutMetrics())
    category: Optional[int] = None
    color = default_color
    instructions: List[DrawInstruction] = []

    for event in events:
        if isinstance(event, SourceSpan):
            for char in decode_span(data, event):
                instruction = cursor.advance(char, color)
                if instruction is not None:
                    instructions.append(instruction)
        elif isinstance(event, StyleStart):
            if event.category == category:
                continue
            resolved = resolve(event.category)
            if resolved is not None:
                category = event.category
                color = resolved
        # StyleEnd leaves the active color in place.

    return instructions
