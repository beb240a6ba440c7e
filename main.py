#!/usr/bin/env python3
"""
Visual URL Diff
Main entry point: captures two pages (or takes two images) and diffs them.
"""

import logging
from pathlib import Path
from typing import List, Tuple

import typer
from rich.console import Console
from rich.markup import escape

import config
from core.errors import CaptureError, DecodeError, EncodeError
from core.pixel_comparator import ComparisonConfig
from utils.file_utils import ensure_directory, is_image_file
from visual.codecs import get_codec
from visual.compare_images import ImageComparator
from visual.generate_screenshots import ScreenshotGenerator, to_url

logger = logging.getLogger(__name__)
console = Console()

app = typer.Typer(
    name="visual-diff",
    help="Captures two web pages and reports a pixel-level visual diff.",
    add_completion=False,
)


def _acquire(targets: List[Tuple[str, str, Path]], comparator: ImageComparator,
             wait_until: str, timeout: int) -> None:
    """Write each target to its artifact path, capturing pages in one browser session."""
    pages = []
    for label, target, path in targets:
        if is_image_file(target):
            console.print(f"Loading image {label}: {target}")
            comparator.convert(target, path)
        else:
            pages.append((label, target, path))

    if not pages:
        return

    with ScreenshotGenerator(wait_until=wait_until, timeout_ms=timeout, viewport=config.VIEWPORT) as generator:
        for label, target, path in pages:
            console.print(f"Capturing URL {label}: {target}")
            generator.capture_screenshot(to_url(target), path)


@app.command()
def compare(
    url_a: str = typer.Argument(..., help="First URL, HTML file or image."),
    url_b: str = typer.Argument(..., help="Second URL, HTML file or image."),
    output_dir: Path = typer.Option(
        config.OUTPUT_DIR, "--output-dir", "-o", help="Directory for the captures and the diff image."
    ),
    threshold: float = typer.Option(
        config.DEFAULT_THRESHOLD, "--threshold", "-t", help="Sensitivity from 0 to 1; lower flags smaller differences."
    ),
    alpha: float = typer.Option(
        config.DEFAULT_ALPHA, "--alpha", help="Opacity of the original image in the diff background."
    ),
    include_aa: bool = typer.Option(
        False, "--include-aa", help="Count anti-aliased pixels as differences."
    ),
    diff_mask: bool = typer.Option(
        False, "--diff-mask", help="Draw only differing pixels on a transparent background."
    ),
    codec: str = typer.Option(config.DEFAULT_CODEC, "--codec", help="Image codec: pillow or opencv."),
    wait_until: str = typer.Option(
        config.WAIT_UNTIL, "--wait-until", help="Page load event to wait for before capturing."
    ),
    timeout: int = typer.Option(
        config.NAVIGATION_TIMEOUT_MS, "--timeout", help="Navigation timeout in milliseconds."
    ),
    fail_on_diff: bool = typer.Option(
        False, "--fail-on-diff", help="Exit with status 1 when any pixel differs."
    ),
):
    """
    Compares two pages (or images) pixel by pixel.
    """
    try:
        comparison = ComparisonConfig(
            threshold=threshold, alpha=alpha, include_aa=include_aa, diff_mask=diff_mask
        )
        comparator = ImageComparator(comparison, get_codec(codec))
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=2)

    path_a = output_dir / config.CAPTURE_A_NAME
    path_b = output_dir / config.CAPTURE_B_NAME
    diff_path = output_dir / config.DIFF_NAME

    try:
        ensure_directory(output_dir)
        _acquire([("A", url_a, path_a), ("B", url_b, path_b)], comparator, wait_until, timeout)
        console.print("Comparing screenshots...")
        result = comparator.generate_diff_image(path_a, path_b, diff_path)
    except (CaptureError, DecodeError, EncodeError, OSError) as e:
        logger.debug(f"Comparison failed: {e!r}")
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)

    console.print(f"✅ Done. {result.diff_pixel_count} pixels different.")
    console.print(f"🖼️ Diff saved to {diff_path}")

    if fail_on_diff and result.diff_pixel_count:
        raise typer.Exit(code=1)


def main():
    """Main execution function."""
    logging.basicConfig(level=config.LOG_LEVEL)
    app()


if __name__ == "__main__":
    main()
