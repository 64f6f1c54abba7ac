"""Tests for the Sobel edge map and gutter-line discovery."""

import numpy as np

from comicpanels.config import DetectionConfig
from comicpanels.detector.edges import detect_edges, sobel_magnitude
from comicpanels.detector.gutter import (
    find_horizontal_gutters,
    find_vertical_gutters,
    longest_blank_runs,
    panels_from_grid,
    with_page_borders,
)


def test_uniform_image_has_no_edges():
    gray = np.full((20, 30), 128, dtype=np.uint8)
    assert not detect_edges(gray, 50).any()


def test_vertical_step_edges_and_zero_border():
    gray = np.zeros((10, 10), dtype=np.uint8)
    gray[:, 5:] = 255
    mag = sobel_magnitude(gray)
    edges = detect_edges(gray, 50)

    assert mag.max() == 255
    assert edges[1:-1, 4].all()
    assert edges[1:-1, 5].all()
    assert not edges[:, 2].any()
    assert not edges[0, :].any() and not edges[-1, :].any()
    assert not edges[:, 0].any() and not edges[:, -1].any()


def test_tiny_image_has_no_edges():
    gray = np.array([[0, 255], [255, 0]], dtype=np.uint8)
    assert detect_edges(gray, 50).shape == (2, 2)
    assert not detect_edges(gray, 50).any()


def test_edge_threshold_is_strict():
    # One-pixel step of 13: |gx| = 4 * 13 = 52 on both sides of the step
    gray = np.zeros((5, 6), dtype=np.uint8)
    gray[:, 3:] = 13
    assert sobel_magnitude(gray)[2, 2] == 52
    assert detect_edges(gray, 51)[2, 2]
    assert not detect_edges(gray, 52)[2, 2]


def test_longest_blank_runs():
    blank = np.array([
        [True, True, False, True],
        [False, False, False, False],
        [True, True, True, True],
    ])
    assert longest_blank_runs(blank).tolist() == [2, 0, 4]


def test_gutter_scan_suppresses_near_duplicates():
    config = DetectionConfig()
    edges = np.zeros((400, 300), dtype=bool)
    lines = find_horizontal_gutters(edges, config)
    # margin 20, then every candidate more than 100 rows after the last one
    assert lines == [20, 121, 222, 323]


def test_gutters_on_textured_page(grid_page):
    from comicpanels.image_utils import to_grayscale

    edges = detect_edges(to_grayscale(grid_page), 50)
    config = DetectionConfig()
    assert find_horizontal_gutters(edges, config) == [600]
    assert find_vertical_gutters(edges, config) == [400]


def test_page_borders_are_added_and_sorted():
    assert with_page_borders([600, 0], 1200) == [0, 600, 1200]


def test_grid_cells_are_padded_and_numbered():
    panels = panels_from_grid([0, 600, 1200], [0, 400, 800], 800, 1200, 5.0)
    assert [p.as_tuple() for p in panels] == [
        (5.0, 5.0, 395.0, 595.0),
        (405.0, 5.0, 795.0, 595.0),
        (5.0, 605.0, 395.0, 1195.0),
        (405.0, 605.0, 795.0, 1195.0),
    ]
    assert [p.id for p in panels] == [0, 1, 2, 3]
    assert all(p.confidence == 0.9 for p in panels)


def test_collapsed_cells_are_dropped():
    panels = panels_from_grid([0, 8, 200], [0, 200], 200, 200, 5.0)
    assert len(panels) == 1
    assert panels[0].id == 0
    assert panels[0].top == 13.0
