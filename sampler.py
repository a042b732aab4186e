"""Discovery and random selection of practice files."""
import logging
import os
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from constants import DEFAULT_EXTENSION, HIDDEN_PREFIX, MAX_SAMPLE_ATTEMPTS, MAX_WALK_DEPTH, PLACEHOLDER_TEXT
from errors import SamplingExhausted

logger = logging.getLogger(__name__)

CandidateSet = Tuple[Path, ...]


@dataclass(frozen=True)
class PracticeText:
    """A loaded practice text; ``path`` is None for the placeholder."""
    text: str
    path: Optional[Path] = None

    @property
    def name(self) -> str:
        return self.path.name if self.path is not None else ""


PLACEHOLDER = PracticeText(PLACEHOLDER_TEXT)


@dataclass(frozen=True)
class RetryPolicy:
    """How many random candidates to try before giving up."""
    max_attempts: int = MAX_SAMPLE_ATTEMPTS


def is_candidate(name: str, extension: str = DEFAULT_EXTENSION) -> bool:
    return not name.startswith(HIDDEN_PREFIX) and name.endswith(extension)


def discover(root, extension: str = DEFAULT_EXTENSION, max_depth: int = MAX_WALK_DEPTH) -> CandidateSet:
    """Collect eligible files up to ``max_depth`` levels below ``root``.

    Entries that cannot be listed are skipped, so the result may be partial.
    """
    root = Path(root)
    found = []
    for dirpath, dirnames, filenames in os.walk(root):
        relative = os.path.relpath(dirpath, root)
        depth = 0 if relative == os.curdir else relative.count(os.sep) + 1
        if depth + 1 >= max_depth:
            # Files one level further down are the last ones we keep.
            dirnames[:] = []
        dirnames.sort()
        for name in sorted(filenames):
            if is_candidate(name, extension):
                found.append(Path(dirpath) / name)
    logger.info("Found %d candidate %s files under %s", len(found), extension, root)
    return tuple(found)


def read_candidate(path: Path) -> str:
    """Read a candidate whole; empty files count as unreadable."""
    text = path.read_text(encoding="utf-8")
    if not text:
        raise ValueError(f"{path} is empty")
    return text


def sample(candidates: CandidateSet, rng: Optional[random.Random] = None,
           policy: RetryPolicy = RetryPolicy(), root=None) -> PracticeText:
    """Pick a random readable candidate, retrying up to the policy's bound."""
    rng = rng or random.Random()
    attempts = 0
    while candidates and attempts < policy.max_attempts:
        attempts += 1
        path = rng.choice(candidates)
        try:
            return PracticeText(read_candidate(path), path)
        except (OSError, ValueError) as e:
            # UnicodeDecodeError is a ValueError too.
            logger.debug("Could not read %s (attempt %d): %s", path, attempts, e)
    raise SamplingExhausted(attempts, str(root) if root is not None else None)


def sample_initial(candidates: CandidateSet, rng: Optional[random.Random] = None,
                   policy: RetryPolicy = RetryPolicy(), root=None) -> PracticeText:
    """Like ``sample`` but falls back to the placeholder text."""
    try:
        return sample(candidates, rng, policy, root)
    except SamplingExhausted as e:
        logger.warning("%s; starting with placeholder text", e)
        return PLACEHOLDER
