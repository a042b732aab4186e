import argparse
import logging
import random
import sys

import imageio
import pygame
from pygame.locals import VIDEORESIZE

from constants import (
    DEFAULT_EXTENSION, FONT_SIZE, FPS, INITIAL_HEIGHT, INITIAL_WIDTH,
    KEY_REPEAT_DELAY, KEY_REPEAT_INTERVAL, VIDEO_OUTPUT_PATH, WINDOW_CAPTION,
)
from errors import TypeWizardError
from layout import LayoutMetrics
from renderer import Renderer
from sampler import discover
from typing_session import TypingSession

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="typewizard",
        description="Practice typing over randomly picked, syntax-highlighted source files.",
    )
    parser.add_argument("root", nargs="?", default=".", help="directory to pick practice files from")
    parser.add_argument("--extension", default=DEFAULT_EXTENSION, help="file extension of practice files")
    parser.add_argument("--font", help="path to a monospace TTF font (default: system monospace)")
    parser.add_argument("--font-size", type=_positive_int, default=FONT_SIZE)
    parser.add_argument("--seed", type=int, help="seed for picking practice files")
    parser.add_argument("--output-video", action="store_true", help=f"record the session to {VIDEO_OUTPUT_PATH}")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug messages")
    return parser.parse_args(argv)


def load_font(path, size: int) -> pygame.font.Font:
    if path:
        return pygame.font.Font(path, size)
    return pygame.font.SysFont("monospace", size)


def caption_for(session: TypingSession) -> str:
    name = session.practice.name
    return f"{WINDOW_CAPTION} - {name}" if name else WINDOW_CAPTION


def run(args: argparse.Namespace) -> None:
    """Open the window and run the frame loop until the session stops."""
    candidates = discover(args.root, args.extension)
    metrics = LayoutMetrics(font_size=args.font_size)
    session = TypingSession(candidates, metrics, random.Random(args.seed), root=args.root)

    pygame.init()
    # Enable key repeat so held keys keep typing.
    pygame.key.set_repeat(KEY_REPEAT_DELAY, KEY_REPEAT_INTERVAL)
    screen = pygame.display.set_mode((INITIAL_WIDTH, INITIAL_HEIGHT), pygame.RESIZABLE)
    renderer = Renderer(load_font(args.font, args.font_size), metrics)
    clock = pygame.time.Clock()
    caption = None

    # Frames are only kept when recording.
    frames = [] if args.output_video else None
    try:
        while session.running:
            for event in pygame.event.get():
                if event.type == VIDEORESIZE:
                    screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                else:
                    session.handle_event(event)
                if not session.running:
                    break
            if not session.running:
                break

            if caption != caption_for(session):
                caption = caption_for(session)
                pygame.display.set_caption(caption)
            renderer.draw(screen, session)
            pygame.display.flip()

            if frames is not None:
                frame_data = pygame.surfarray.array3d(pygame.display.get_surface())
                frames.append(frame_data.transpose([1, 0, 2]))

            clock.tick(FPS)
    finally:
        pygame.quit()

    if frames:
        logger.info("Writing %d frames to %s", len(frames), VIDEO_OUTPUT_PATH)
        imageio.mimwrite(VIDEO_OUTPUT_PATH, frames, fps=FPS)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        run(args)
    except TypeWizardError as e:
        print(f"typewizard: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
