import unittest
from pathlib import Path

from pygments.token import Comment, Generic, Keyword, Name, Punctuation, String

import palette
from highlight import SourceSpan, StyleEnd, StyleStart, highlight_events, lexer_for, token_category


def spans(text, events):
    data = text.encode("utf-8")
    return [data[e.start:e.end].decode("utf-8") for e in events if isinstance(e, SourceSpan)]


def styled(text, events):
    """Pair every StyleStart with the text of the span that follows it."""
    data = text.encode("utf-8")
    out = []
    for first, second in zip(events, events[1:]):
        if isinstance(first, StyleStart) and isinstance(second, SourceSpan):
            out.append((first.category, data[second.start:second.end].decode("utf-8")))
    return out


class TestTokenCategory(unittest.TestCase):

    def test_most_specific_mapping_wins(self):
        self.assertEqual(token_category(Keyword, "def"), palette.KEYWORD)
        self.assertEqual(token_category(Keyword.Type, "int"), palette.TYPE_BUILTIN)
        self.assertEqual(token_category(Name.Function, "f"), palette.FUNCTION)
        self.assertEqual(token_category(String.Interpol, "{x}"), palette.EMBEDDED)
        self.assertEqual(token_category(String.Double, '"'), palette.STRING)
        self.assertEqual(token_category(Comment.Single, "# x"), palette.COMMENT)

    def test_unknown_tokens_use_variable(self):
        self.assertEqual(token_category(Generic.Heading, "x"), palette.VARIABLE)

    def test_punctuation_brackets(self):
        self.assertEqual(token_category(Punctuation, "("), palette.PUNCTUATION_BRACKET)
        self.assertEqual(token_category(Punctuation, "]}"), palette.PUNCTUATION_BRACKET)
        self.assertEqual(token_category(Punctuation, ","), palette.PUNCTUATION_DELIMITER)


class TestHighlightEvents(unittest.TestCase):

    def test_events_cover_whole_text(self):
        text = "\n\nimport os  # héllo\n\tx = {'a': 1}\n\n"
        events = highlight_events(text, Path("sample.py"))
        self.assertEqual("".join(spans(text, events)), text)

    def test_python_categories(self):
        text = "def f(x):\n    return 'hi'\n"
        pairs = styled(text, highlight_events(text, Path("f.py")))
        self.assertIn((palette.KEYWORD, "def"), pairs)
        self.assertIn((palette.FUNCTION, "f"), pairs)
        self.assertIn((palette.PUNCTUATION_BRACKET, "("), pairs)
        self.assertIn((palette.KEYWORD, "return"), pairs)

    def test_each_token_is_opened_and_closed(self):
        text = "x = 1\n"
        events = highlight_events(text, Path("x.py"))
        starts = sum(isinstance(e, StyleStart) for e in events)
        ends = sum(isinstance(e, StyleEnd) for e in events)
        self.assertEqual(starts, ends)

    def test_byte_offsets_for_multibyte_text(self):
        text = "s = 'ünï'\n"
        events = highlight_events(text, Path("s.py"))
        last = [e for e in events if isinstance(e, SourceSpan)][-1]
        self.assertEqual(last.end, len(text.encode("utf-8")))

    def test_without_path_text_is_plain(self):
        text = "Please press TAB!"
        events = highlight_events(text)
        self.assertEqual(styled(text, events), [(palette.VARIABLE, text)])

    def test_unknown_extension_falls_back_to_plain_text(self):
        self.assertEqual(lexer_for("x", Path("notes.unknown-ext")).name, "Text only")

    def test_empty_text_has_no_spans(self):
        self.assertEqual(spans("", highlight_events("", Path("e.py"))), [])


if __name__ == "__main__":
    unittest.main()
