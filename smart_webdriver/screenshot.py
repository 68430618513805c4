"""Full-page screenshots stitched together from viewport captures."""

import io
import logging
import time
from pathlib import Path

from PIL import Image
from selenium.webdriver.remote.webdriver import WebDriver

from .config import Timeouts

logger = logging.getLogger(__name__)

Rectangle = tuple[int, int, int, int]  # left, top, width, height


def tile_rectangles(total_width: int, total_height: int, viewport_width: int, viewport_height: int) -> list[Rectangle]:
    """
    Split the page into viewport-sized tiles, row by row.

    Tiles on the right and bottom edges are trimmed to the page size.
    """
    rectangles = []
    for top in range(0, total_height, viewport_height):
        height = min(viewport_height, total_height - top)
        for left in range(0, total_width, viewport_width):
            width = min(viewport_width, total_width - left)
            rectangles.append((left, top, width, height))
    return rectangles


def _script_int(driver: WebDriver, script: str) -> int:
    return int(driver.execute_script(script) or 0)


def capture_full_page(driver: WebDriver, file_path: str) -> bool:
    """
    Save a screenshot of the whole page, not just the visible viewport.

    The page is scrolled one viewport at a time; each capture is cropped
    to the part of the page it adds and pasted into a single JPEG image.

    Args:
        driver: Selenium WebDriver instance
        file_path: Where to write the JPEG

    Returns:
        True if the image was written, False otherwise
    """
    try:
        total_width = _script_int(driver, "return document.body.offsetWidth")
        total_height = _script_int(driver, "return document.body.parentNode.scrollHeight")
        viewport_width = _script_int(driver, "return document.body.clientWidth")
        viewport_height = _script_int(driver, "return window.innerHeight")

        if total_height == 0:
            total_height = viewport_height

        rectangles = tile_rectangles(total_width, total_height, viewport_width, viewport_height)
        logger.debug(f"Capturing {total_width}x{total_height} page in {len(rectangles)} tiles")

        stitched = Image.new("RGB", (total_width, total_height))
        previous = None
        for rectangle in rectangles:
            left, top, width, height = rectangle
            if previous is not None:
                x_diff = (left + width) - (previous[0] + previous[2])
                y_diff = (top + height) - (previous[1] + previous[3])
                driver.execute_script(f"window.scrollBy({x_diff}, {y_diff})")
                time.sleep(Timeouts.SCROLL_SETTLE)

            with Image.open(io.BytesIO(driver.get_screenshot_as_png())) as screenshot:
                # After scrolling, the new part of the page is at the bottom right of the viewport
                source_left = viewport_width - width
                source_top = viewport_height - height
                tile = screenshot.crop((source_left, source_top, source_left + width, source_top + height))
                stitched.paste(tile.convert("RGB"), (left, top))

            previous = rectangle

        Path(file_path).parent.mkdir(parents=True, exist_ok=True)
        stitched.save(file_path, format="JPEG")
        logger.info(f"Saved full-page screenshot to {file_path}")
        return True
    except Exception as e:
        logger.warning(f"Failed to take a full-page screenshot: {e}", exc_info=True)
        return False
