"""The typing session: practice text, transcript and keystroke handling."""
import logging
import random
from enum import Enum
from typing import List, Optional

import pygame
import pyperclip
from pygame.locals import (
    K_BACKSPACE, K_ESCAPE, K_KP_ENTER, K_RETURN, K_TAB, K_c,
    KMOD_LCTRL, KMOD_RCTRL, KMOD_LMETA, KMOD_RMETA,
    KEYDOWN, QUIT, TEXTINPUT,
)

from highlight import highlight_events
from interpreter import interpret
from layout import DrawInstruction, LayoutMetrics
from sampler import CandidateSet, PracticeText, RetryPolicy, sample, sample_initial

logger = logging.getLogger(__name__)


class SessionState(Enum):
    RUNNING = "running"
    STOPPED = "stopped"


class KeyAction(Enum):
    APPEND = "append"
    NEWLINE = "newline"
    QUIT = "quit"
    NEXT = "next"
    COPY = "copy"
    IGNORE = "ignore"


# Backspace does not delete; like Enter it starts a new transcript line.
KEY_ACTIONS = {
    K_RETURN: KeyAction.NEWLINE,
    K_KP_ENTER: KeyAction.NEWLINE,
    K_BACKSPACE: KeyAction.NEWLINE,
    K_ESCAPE: KeyAction.QUIT,
    K_TAB: KeyAction.NEXT,
}

CTRL_CMD = KMOD_LCTRL | KMOD_RCTRL | KMOD_LMETA | KMOD_RMETA


def classify_char(char: str) -> KeyAction:
    """Printable ASCII is typed, anything else is ignored."""
    if " " <= char <= "~":
        return KeyAction.APPEND
    return KeyAction.IGNORE


def classify_key(key: int, mod: int = 0) -> Optional[KeyAction]:
    """Map a key press to a session action.

    Returns None for ASCII keys, whose characters arrive as text input.
    """
    if mod & CTRL_CMD and key == K_c:
        return KeyAction.COPY
    action = KEY_ACTIONS.get(key)
    if action is not None:
        return action
    if key < 128:
        return None
    return KeyAction.IGNORE


class TypingSession:
    """Owns the practice text and the transcript typed against it.

    The cached draw instructions are recomputed, from freshly generated
    highlight events, every time the practice text is replaced.
    """

    def __init__(self, candidates: CandidateSet, metrics: Optional[LayoutMetrics] = None,
                 rng: Optional[random.Random] = None, policy: RetryPolicy = RetryPolicy(),
                 root=None) -> None:
        self.candidates = candidates
        self.root = root
        self.metrics = metrics or LayoutMetrics()
        self.rng = rng or random.Random()
        self.policy = policy
        self.transcript = ""
        self.practice: PracticeText = sample_initial(candidates, self.rng, policy, root)
        self.instructions: List[DrawInstruction] = self.layout_practice()
        self.state = SessionState.RUNNING

    @property
    def running(self) -> bool:
        return self.state is SessionState.RUNNING

    def layout_practice(self) -> List[DrawInstruction]:
        events = highlight_events(self.practice.text, self.practice.path)
        return interpret(self.practice.text, events, self.metrics)

    def transcript_lines(self) -> List[str]:
        return self.transcript.split("\n")

    def handle_event(self, event: pygame.event.Event) -> None:
        """Process one pygame event while the session is running."""
        if not self.running:
            return
        if event.type == QUIT:
            self.apply(KeyAction.QUIT)
        elif event.type == TEXTINPUT:
            for char in event.text:
                self.apply(classify_char(char), char)
        elif event.type == KEYDOWN:
            action = classify_key(event.key, event.mod)
            if action is KeyAction.IGNORE:
                logger.debug("Ignoring unrecognized key code %d", event.key)
            elif action is not None:
                self.apply(action)

    def apply(self, action: KeyAction, char: str = "") -> None:
        if not self.running:
            return
        if action is KeyAction.APPEND:
            self.transcript += char
        elif action is KeyAction.NEWLINE:
            self.transcript += "\n"
        elif action is KeyAction.QUIT:
            logger.info("Session stopped")
            self.state = SessionState.STOPPED
        elif action is KeyAction.NEXT:
            self.next_text()
        elif action is KeyAction.COPY:
            self.copy_transcript()
        else:
            logger.debug("Ignoring non-ASCII input %r", char)

    def next_text(self) -> None:
        """Swap in a new practice text; running out of retries here is fatal."""
        self.practice = sample(self.candidates, self.rng, self.policy, self.root)
        self.transcript = ""
        self.instructions = self.layout_practice()
        logger.info("Practicing %s", self.practice.path)

    def copy_transcript(self) -> None:
        try:
            pyperclip.copy(self.transcript)
        except pyperclip.PyperclipException as e:
            logger.warning("Could not copy transcript to clipboard: %s", e)
