"""Lexical category to RGB color resolution.

Categories are small integers handed out by the parser integration. Each one
points at an entry of the 256-color xterm palette, whose hex string is split
into its red, green and blue pairs.
"""
import logging
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int, int]

# Lexical categories, in the order the parser integration numbers them.
ATTRIBUTE = 0
COMMENT = 1
CONSTANT = 2
CONSTANT_BUILTIN = 3
CONSTRUCTOR = 4
EMBEDDED = 5
FUNCTION = 6
FUNCTION_BUILTIN = 7
FUNCTION_MACRO = 8
KEYWORD = 9
LABEL = 10
MODULE = 11
NUMBER = 12
OPERATOR = 13
PROPERTY = 14
PUNCTUATION = 15
PUNCTUATION_BRACKET = 16
PUNCTUATION_DELIMITER = 17
STRING = 18
TYPE = 19
TYPE_BUILTIN = 20
VARIABLE = 21

CATEGORY_NAMES = (
    "attribute",
    "comment",
    "constant",
    "constant.builtin",
    "constructor",
    "embedded",
    "function",
    "function.builtin",
    "function.macro",
    "keyword",
    "label",
    "module",
    "number",
    "operator",
    "property",
    "punctuation",
    "punctuation.bracket",
    "punctuation.delimiter",
    "string",
    "type",
    "type.builtin",
    "variable",
)

# category -> xterm palette index
CATEGORY_PALETTE: Dict[int, int] = {
    ATTRIBUTE: 180,
    COMMENT: 102,
    CONSTANT: 173,
    CONSTANT_BUILTIN: 173,
    CONSTRUCTOR: 180,
    EMBEDDED: 145,
    FUNCTION: 75,
    FUNCTION_BUILTIN: 73,
    FUNCTION_MACRO: 73,
    KEYWORD: 170,
    LABEL: 168,
    MODULE: 180,
    NUMBER: 173,
    OPERATOR: 73,
    PROPERTY: 168,
    PUNCTUATION: 249,
    PUNCTUATION_BRACKET: 249,
    PUNCTUATION_DELIMITER: 249,
    STRING: 114,
    TYPE: 180,
    TYPE_BUILTIN: 180,
    VARIABLE: 249,
}

# 16 system colors, the 6x6x6 cube, then the 24-step gray ramp.
XTERM_PALETTE = (
    "000000", "800000", "008000", "808000", "000080", "800080", "008080", "c0c0c0",
    "808080", "ff0000", "00ff00", "ffff00", "0000ff", "ff00ff", "00ffff", "ffffff",
    "000000", "00005f", "000087", "0000af", "0000d7", "0000ff", "005f00", "005f5f",
    "005f87", "005faf", "005fd7", "005fff", "008700", "00875f", "008787", "0087af",
    "0087d7", "0087ff", "00af00", "00af5f", "00af87", "00afaf", "00afd7", "00afff",
    "00d700", "00d75f", "00d787", "00d7af", "00d7d7", "00d7ff", "00ff00", "00ff5f",
    "00ff87", "00ffaf", "00ffd7", "00ffff", "5f0000", "5f005f", "5f0087", "5f00af",
    "5f00d7", "5f00ff", "5f5f00", "5f5f5f", "5f5f87", "5f5faf", "5f5fd7", "5f5fff",
    "5f8700", "5f875f", "5f8787", "5f87af", "5f87d7", "5f87ff", "5faf00", "5faf5f",
    "5faf87", "5fafaf", "5fafd7", "5fafff", "5fd700", "5fd75f", "5fd787", "5fd7af",
    "5fd7d7", "5fd7ff", "5fff00", "5fff5f", "5fff87", "5fffaf", "5fffd7", "5fffff",
    "870000", "87005f", "870087", "8700af", "8700d7", "8700ff", "875f00", "875f5f",
    "875f87", "875faf", "875fd7", "875fff", "878700", "87875f", "878787", "8787af",
    "8787d7", "8787ff", "87af00", "87af5f", "87af87", "87afaf", "87afd7", "87afff",
    "87d700", "87d75f", "87d787", "87d7af", "87d7d7", "87d7ff", "87ff00", "87ff5f",
    "87ff87", "87ffaf", "87ffd7", "87ffff", "af0000", "af005f", "af0087", "af00af",
    "af00d7", "af00ff", "af5f00", "af5f5f", "af5f87", "af5faf", "af5fd7", "af5fff",
    "af8700", "af875f", "af8787", "af87af", "af87d7", "af87ff", "afaf00", "afaf5f",
    "afaf87", "afafaf", "afafd7", "afafff", "afd700", "afd75f", "afd787", "afd7af",
    "afd7d7", "afd7ff", "afff00", "afff5f", "afff87", "afffaf", "afffd7", "afffff",
    "d70000", "d7005f", "d70087", "d700af", "d700d7", "d700ff", "d75f00", "d75f5f",
    "d75f87", "d75faf", "d75fd7", "d75fff", "d78700", "d7875f", "d78787", "d787af",
    "d787d7", "d787ff", "d7af00", "d7af5f", "d7af87", "d7afaf", "d7afd7", "d7afff",
    "d7d700", "d7d75f", "d7d787", "d7d7af", "d7d7d7", "d7d7ff", "d7ff00", "d7ff5f",
    "d7ff87", "d7ffaf", "d7ffd7", "d7ffff", "ff0000", "ff005f", "ff0087", "ff00af",
    "ff00d7", "ff00ff", "ff5f00", "ff5f5f", "ff5f87", "ff5faf", "ff5fd7", "ff5fff",
    "ff8700", "ff875f", "ff8787", "ff87af", "ff87d7", "ff87ff", "ffaf00", "ffaf5f",
    "ffaf87", "ffafaf", "ffafd7", "ffafff", "ffd700", "ffd75f", "ffd787", "ffd7af",
    "ffd7d7", "ffd7ff", "ffff00", "ffff5f", "ffff87", "ffffaf", "ffffd7", "ffffff",
    "080808", "121212", "1c1c1c", "262626", "303030", "3a3a3a", "444444", "4e4e4e",
    "585858", "626262", "6c6c6c", "767676", "808080", "8a8a8a", "949494", "9e9e9e",
    "a8a8a8", "b2b2b2", "bcbcbc", "c6c6c6", "d0d0d0", "dadada", "e4e4e4", "eeeeee",
)


def hex_to_rgb(hex_string: str) -> Color:
    """Decode an ``rrggbb`` string into an opaque RGBA tuple."""
    red = int(hex_string[0:2], 16)
    green = int(hex_string[2:4], 16)
    blue = int(hex_string[4:6], 16)
    return (red, green, blue, 255)


def category_name(category: int) -> str:
    if 0 <= category < len(CATEGORY_NAMES):
        return CATEGORY_NAMES[category]
    return f"<unknown {category}>"


def resolve(category: int) -> Optional[Color]:
    """Return the color for a lexical category.

    Unmapped categories are reported and yield ``None`` so the caller keeps
    whatever color it already had.
    """
    palette_index = CATEGORY_PALETTE.get(category)
    if palette_index is None:
        logger.warning("No color mapped for highlight category %s", category_name(category))
        return None
    return hex_to_rgb(XTERM_PALETTE[palette_index])
