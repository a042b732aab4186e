from typing import Optional


class TypeWizardError(Exception):
    """Base class for failures that end a typing session."""


class SamplingExhausted(TypeWizardError):
    """Raised when no candidate file could be read within the retry bound."""

    def __init__(self, attempts: int, root: Optional[str] = None) -> None:
        self.attempts = attempts
        self.root = root
        where = f" under {root}" if root else ""
        if attempts == 0:
            message = f"No candidate files found{where}"
        else:
            message = f"No readable candidate found{where} after {attempts} attempts"
        super().__init__(message)


class SpanDecodeError(TypeWizardError):
    """Raised when a highlight span does not line up with the text it was made for."""

    def __init__(self, start: int, end: int, reason: str) -> None:
        self.start = start
        self.end = end
        super().__init__(f"Highlight span {start}..{end} is inconsistent with the text: {reason}")
