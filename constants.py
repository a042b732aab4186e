# Window
INITIAL_WIDTH, INITIAL_HEIGHT = 1000, 800
WINDOW_CAPTION = "Type Wizard"
FPS = 60
KEY_REPEAT_DELAY, KEY_REPEAT_INTERVAL = 300, 50

# Colors
BACKGROUND_COLOR = (32, 35, 44)
TEXT_COLOR = (178, 184, 194, 255)
TRANSCRIPT_COLOR = (255, 255, 255, 255)

# Text layout
FONT_SIZE = 14
LEFT_MARGIN = 12.0
TRANSCRIPT_MARGIN = 12.0
GLYPH_ADVANCE_RATIO = 0.615  # monospace approximation of the real advance width
LINE_PITCH_RATIO = 1.3
TAB_WIDTH = 2  # in glyph advances

# Practice text discovery
DEFAULT_EXTENSION = ".py"
HIDDEN_PREFIX = "."
MAX_WALK_DEPTH = 8
MAX_SAMPLE_ATTEMPTS = 100
PLACEHOLDER_TEXT = "Please press TAB!"

# Recording
VIDEO_OUTPUT_PATH = "output_video.mp4"
