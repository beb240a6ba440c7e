"""Configuration - output paths, comparison defaults and capture settings."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Comparison sensitivity, 0 (strictest) to 1
DEFAULT_THRESHOLD = float(os.getenv("VISUAL_DIFF_THRESHOLD", "0.1"))

# Opacity of the original image in the diff background
DEFAULT_ALPHA = float(os.getenv("VISUAL_DIFF_ALPHA", "0.1"))

# Codec used for reading inputs and writing artifacts ('pillow' or 'opencv')
DEFAULT_CODEC = os.getenv("VISUAL_DIFF_CODEC", "pillow")

# Directory receiving the three artifacts
OUTPUT_DIR = Path(os.getenv("VISUAL_DIFF_OUTPUT_DIR", "output"))

CAPTURE_A_NAME = "urlA.png"
CAPTURE_B_NAME = "urlB.png"
DIFF_NAME = "diff.png"

# Page load strategy passed to Playwright's page.goto
WAIT_UNTIL = os.getenv("VISUAL_DIFF_WAIT_UNTIL", "networkidle")
NAVIGATION_TIMEOUT_MS = int(os.getenv("VISUAL_DIFF_TIMEOUT_MS", "30000"))


def parse_viewport(value: str) -> tuple:
    """Parse a WIDTHxHEIGHT string such as '1280x720'."""
    parts = value.strip().lower().split("x")
    try:
        width, height = (int(part) for part in parts)
    except ValueError:
        raise ValueError(
            f"VISUAL_DIFF_VIEWPORT must look like WIDTHxHEIGHT, got {value!r}"
        ) from None
    if width <= 0 or height <= 0:
        raise ValueError(f"VISUAL_DIFF_VIEWPORT must be positive, got {value!r}")
    return width, height


# Browser viewport as WIDTHxHEIGHT; full-page captures extend below it
VIEWPORT = parse_viewport(os.getenv("VISUAL_DIFF_VIEWPORT", "800x600"))

LOG_LEVEL = os.getenv("VISUAL_DIFF_LOG_LEVEL", "INFO").upper()
