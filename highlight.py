"""Highlight events produced from pygments tokens.

The event stream is flat: ``StyleStart`` switches the active category,
``SourceSpan`` points at a UTF-8 byte range of the text to draw with it, and
``StyleEnd`` closes the category without restoring anything.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Union

from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.token import (
    Comment, Keyword, Literal, Name, Number, Operator, Punctuation, String, Token,
)
from pygments.util import ClassNotFound

import palette

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceSpan:
    start: int
    end: int


@dataclass(frozen=True)
class StyleStart:
    category: int


@dataclass(frozen=True)
class StyleEnd:
    pass


HighlightEvent = Union[SourceSpan, StyleStart, StyleEnd]

BRACKETS = frozenset("()[]{}<>")

TOKEN_CATEGORIES = {
    Token: palette.VARIABLE,
    Comment: palette.COMMENT,
    Comment.Preproc: palette.FUNCTION_MACRO,
    Keyword: palette.KEYWORD,
    Keyword.Constant: palette.CONSTANT_BUILTIN,
    Keyword.Type: palette.TYPE_BUILTIN,
    Name: palette.VARIABLE,
    Name.Attribute: palette.PROPERTY,
    Name.Builtin: palette.FUNCTION_BUILTIN,
    Name.Builtin.Pseudo: palette.CONSTANT_BUILTIN,
    Name.Class: palette.TYPE,
    Name.Constant: palette.CONSTANT,
    Name.Decorator: palette.ATTRIBUTE,
    Name.Entity: palette.CONSTANT,
    Name.Exception: palette.TYPE,
    Name.Function: palette.FUNCTION,
    Name.Function.Magic: palette.FUNCTION_BUILTIN,
    Name.Label: palette.LABEL,
    Name.Namespace: palette.MODULE,
    Name.Tag: palette.LABEL,
    Name.Variable.Magic: palette.CONSTANT_BUILTIN,
    Literal: palette.CONSTANT,
    String: palette.STRING,
    String.Escape: palette.CONSTANT_BUILTIN,
    String.Interpol: palette.EMBEDDED,
    Number: palette.NUMBER,
    Operator: palette.OPERATOR,
    Operator.Word: palette.KEYWORD,
    Punctuation: palette.PUNCTUATION_DELIMITER,
}


def token_category(token_type, value: str) -> int:
    """Map a pygments token type to a lexical category, most specific first."""
    if token_type in Punctuation and value and all(char in BRACKETS for char in value):
        return palette.PUNCTUATION_BRACKET
    while token_type not in TOKEN_CATEGORIES:
        token_type = token_type.parent
    return TOKEN_CATEGORIES[token_type]


def lexer_for(text: str, path: Optional[Path] = None) -> Lexer:
    """Pick a lexer by file name, falling back to plain text."""
    # Offsets have to index the exact text, so no newline or tab rewriting.
    options = {"stripnl": False, "ensurenl": False, "tabsize": 0}
    if path is None:
        return TextLexer(**options)
    try:
        return get_lexer_for_filename(path.name, text, **options)
    except ClassNotFound:
        logger.debug("No lexer for %s, highlighting as plain text", path)
        return TextLexer(**options)


def _events_for_tokens(text: str, tokens) -> Iterator[HighlightEvent]:
    char_pos = 0
    byte_pos = 0
    for index, token_type, value in tokens:
        if not value or index + len(value) <= char_pos:
            continue
        if index > char_pos:
            # Text the lexer skipped keeps whatever category was active.
            gap = len(text[char_pos:index].encode("utf-8"))
            yield SourceSpan(byte_pos, byte_pos + gap)
            byte_pos += gap
            char_pos = index
        covered = text[char_pos:index + len(value)]
        size = len(covered.encode("utf-8"))
        yield StyleStart(token_category(token_type, covered))
        yield SourceSpan(byte_pos, byte_pos + size)
        yield StyleEnd()
        byte_pos += size
        char_pos += len(covered)
    if char_pos < len(text):
        tail = len(text[char_pos:].encode("utf-8"))
        yield SourceSpan(byte_pos, byte_pos + tail)


def highlight_events(text: str, path: Optional[Path] = None) -> List[HighlightEvent]:
    """Return the ordered highlight events covering all of ``text``."""
    lexer = lexer_for(text, path)
    return list(_events_for_tokens(text, lexer.get_tokens_unprocessed(text)))
