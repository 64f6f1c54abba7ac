"""Synthetic comic pages shared by the test suite."""

import numpy as np
import pytest


def checker_page(w: int, h: int) -> np.ndarray:
    """Gray page covered by a 2-pixel checkerboard: every interior pixel is an edge."""
    yy, xx = np.mgrid[0:h, 0:w]
    return ((((xx // 2) + (yy // 2)) % 2) * 255).astype(np.uint8)


def two_by_two_page(w: int = 800, h: int = 1200, gutter_y: int = 600, gutter_x: int = 400,
                    band: int = 40) -> np.ndarray:
    """Textured page with one white horizontal and one white vertical gutter band.

    The bands start one pixel before the gutter position so that the first
    row/column whose Sobel window is entirely blank is exactly the gutter.
    """
    gray = checker_page(w, h)
    gray[gutter_y - 1:gutter_y + band, :] = 255
    gray[:, gutter_x - 1:gutter_x + band] = 255
    return np.dstack([gray, gray, gray])


def draw_frame(img: np.ndarray, left: int, top: int, right: int, bottom: int,
               thickness: int = 3) -> None:
    """Draw a black rectangular outline covering [left, right) x [top, bottom)."""
    img[top:top + thickness, left:right] = 0
    img[bottom - thickness:bottom, left:right] = 0
    img[top:bottom, left:left + thickness] = 0
    img[top:bottom, right - thickness:right] = 0


@pytest.fixture
def grid_page():
    return two_by_two_page()


@pytest.fixture
def blank_page():
    return np.full((1200, 800, 3), 255, dtype=np.uint8)


@pytest.fixture
def stacked_frames_page():
    """600x800 white page with two framed panels stacked vertically and a small speck."""
    img = np.full((800, 600, 3), 255, dtype=np.uint8)
    draw_frame(img, 50, 50, 550, 350)
    draw_frame(img, 50, 420, 550, 750)
    img[778:781, 578:581] = 0
    return img


@pytest.fixture
def side_by_side_frames_page():
    """600x800 white page with two framed panels in one row."""
    img = np.full((800, 600, 3), 255, dtype=np.uint8)
    draw_frame(img, 30, 50, 280, 400)
    draw_frame(img, 320, 50, 570, 400)
    return img
