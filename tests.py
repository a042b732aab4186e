import random
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import pygame
from pygame.locals import (
    K_BACKSPACE, K_ESCAPE, K_F1, K_RETURN, K_TAB, K_a, K_c, K_UP,
    KEYDOWN, KMOD_LCTRL, QUIT, TEXTINPUT,
)

import typing_session
from errors import SamplingExhausted
from highlight import highlight_events
from sampler import PLACEHOLDER, RetryPolicy
from typing_session import KeyAction, SessionState, TypingSession, classify_char, classify_key


def key_event(key, mod=0, unicode=""):
    return pygame.event.Event(KEYDOWN, key=key, mod=mod, unicode=unicode)


def text_event(text):
    return pygame.event.Event(TEXTINPUT, text=text)


class TestKeyClassification(unittest.TestCase):

    def test_printable_ascii_is_appended(self):
        for char in "a Z0~{":
            self.assertEqual(classify_char(char), KeyAction.APPEND)

    def test_non_ascii_text_is_ignored(self):
        self.assertEqual(classify_char("é"), KeyAction.IGNORE)
        self.assertEqual(classify_char("\x07"), KeyAction.IGNORE)

    def test_control_keys(self):
        self.assertEqual(classify_key(K_RETURN), KeyAction.NEWLINE)
        self.assertEqual(classify_key(K_BACKSPACE), KeyAction.NEWLINE)
        self.assertEqual(classify_key(K_ESCAPE), KeyAction.QUIT)
        self.assertEqual(classify_key(K_TAB), KeyAction.NEXT)
        self.assertEqual(classify_key(K_c, KMOD_LCTRL), KeyAction.COPY)

    def test_letter_keys_are_left_to_text_input(self):
        self.assertIsNone(classify_key(K_a))
        self.assertIsNone(classify_key(K_c))

    def test_other_keys_are_ignored(self):
        self.assertEqual(classify_key(K_UP), KeyAction.IGNORE)
        self.assertEqual(classify_key(K_F1), KeyAction.IGNORE)


class TestTypingSession(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)
        self.old = self.root / "old.py"
        self.old.write_text("old")
        self.session = TypingSession((self.old,), rng=random.Random(0))

    def tearDown(self):
        self.tmp.cleanup()

    def test_initial_state(self):
        self.assertEqual(self.session.state, SessionState.RUNNING)
        self.assertEqual(self.session.practice.text, "old")
        self.assertEqual(self.session.transcript, "")
        self.assertEqual("".join(i.char for i in self.session.instructions), "old")

    def test_initial_load_falls_back_to_placeholder(self):
        session = TypingSession((self.root / "missing.py",), policy=RetryPolicy(3))
        self.assertEqual(session.practice, PLACEHOLDER)
        self.assertEqual(session.practice.text, "Please press TAB!")
        self.assertTrue(session.running)
        self.assertEqual(len(session.instructions), len("PleasepressTAB!"))

    def test_empty_candidate_set_starts_with_placeholder(self):
        session = TypingSession(())
        self.assertIs(session.practice, PLACEHOLDER)

    def test_typing_appends_to_transcript(self):
        self.session.handle_event(text_event("ab"))
        self.session.handle_event(key_event(K_a, unicode="a"))
        self.assertEqual(self.session.transcript, "ab")

    def test_enter_starts_a_new_transcript_line(self):
        self.session.handle_event(text_event("ab"))
        self.session.handle_event(key_event(K_RETURN, unicode="\r"))
        self.session.handle_event(text_event("c"))
        self.assertEqual(self.session.transcript_lines(), ["ab", "c"])

    def test_backspace_inserts_a_newline(self):
        self.session.handle_event(text_event("ab"))
        self.session.handle_event(key_event(K_BACKSPACE, unicode="\b"))
        self.assertEqual(self.session.transcript, "ab\n")

    def test_unrecognized_input_does_not_touch_transcript(self):
        self.session.handle_event(text_event("a"))
        with self.assertLogs("typing_session", level="DEBUG"):
            self.session.handle_event(key_event(K_UP))
        with self.assertLogs("typing_session", level="DEBUG"):
            self.session.handle_event(text_event("ü"))
        self.assertEqual(self.session.transcript, "a")

    def test_escape_stops_the_session(self):
        self.session.handle_event(key_event(K_ESCAPE, unicode="\x1b"))
        self.assertEqual(self.session.state, SessionState.STOPPED)
        self.session.handle_event(text_event("x"))
        self.assertEqual(self.session.transcript, "")

    def test_window_close_stops_the_session(self):
        self.session.handle_event(pygame.event.Event(QUIT))
        self.assertFalse(self.session.running)

    def test_tab_loads_next_text_with_fresh_events(self):
        new = self.root / "new.py"
        new.write_text("new")
        self.session.candidates = (new,)
        self.session.handle_event(text_event("ol"))

        with mock.patch.object(typing_session, "highlight_events", wraps=highlight_events) as highlighter:
            self.session.handle_event(key_event(K_TAB, unicode="\t"))

        self.assertEqual(self.session.transcript, "")
        self.assertEqual(self.session.practice.text, "new")
        highlighter.assert_called_once_with("new", new)
        self.assertEqual("".join(i.char for i in self.session.instructions), "new")

    def test_next_text_failure_is_fatal(self):
        self.session.candidates = (self.root / "gone.py",)
        self.session.policy = RetryPolicy(5)
        with self.assertRaises(SamplingExhausted):
            self.session.handle_event(key_event(K_TAB))

    def test_tab_with_no_candidates_names_the_root(self):
        session = TypingSession((), root=self.root)
        with self.assertRaises(SamplingExhausted) as ctx:
            session.handle_event(key_event(K_TAB))
        self.assertEqual(ctx.exception.attempts, 0)
        self.assertEqual(str(ctx.exception), f"No candidate files found under {self.root}")

    def test_unrecognized_keys_are_not_logged_at_info(self):
        with self.assertRaises(AssertionError):
            with self.assertLogs("typing_session", level="INFO"):
                self.session.handle_event(key_event(K_UP))

    def test_ctrl_c_copies_transcript(self):
        self.session.handle_event(text_event("abc"))
        with mock.patch("typing_session.pyperclip.copy") as copy:
            self.session.handle_event(key_event(K_c, mod=KMOD_LCTRL))
        copy.assert_called_once_with("abc")
        self.assertEqual(self.session.transcript, "abc")


if __name__ == '__main__':
    unittest.main()
