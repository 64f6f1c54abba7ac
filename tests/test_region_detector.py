"""End-to-end tests for the region detector."""

import numpy as np
import pytest

from comicpanels import (
    CancellationToken,
    DetectionConfig,
    Error,
    NoPanelsFound,
    ReadingDirection,
    RegionPanelDetector,
    Success,
)


def test_stacked_frames(stacked_frames_page):
    result = RegionPanelDetector().detect(stacked_frames_page)

    assert isinstance(result, Success)
    # Frames grow by one pixel of dilation; the small speck is filtered out
    assert [p.as_tuple() for p in result.panels] == [
        (49.0, 49.0, 550.0, 350.0),
        (49.0, 419.0, 550.0, 750.0),
    ]
    assert [p.reading_order for p in result.panels] == [0, 1]
    assert all(p.confidence == 1.0 for p in result.panels)
    assert result.debug.threshold == 1
    assert result.debug.component_count == 3


@pytest.mark.parametrize("direction, expected_lefts", [
    (ReadingDirection.LEFT_TO_RIGHT, [29.0, 319.0]),
    (ReadingDirection.RIGHT_TO_LEFT, [319.0, 29.0]),
])
def test_side_by_side_frames(side_by_side_frames_page, direction, expected_lefts):
    result = RegionPanelDetector().detect(side_by_side_frames_page, direction)
    assert [p.left for p in result.panels] == expected_lefts
    assert [p.reading_order for p in result.panels] == [0, 1]


def test_uniform_page_has_no_panels():
    page = np.full((500, 500, 3), 230, dtype=np.uint8)
    assert RegionPanelDetector().detect(page) == NoPanelsFound()


def test_empty_image_has_no_panels():
    result = RegionPanelDetector().detect(np.zeros((0, 0, 3), dtype=np.uint8))
    assert isinstance(result, NoPanelsFound)
    assert not result.ok
    assert result.panels == ()


def test_only_small_blobs_gives_no_panels():
    page = np.full((400, 400, 3), 255, dtype=np.uint8)
    page[100:110, 100:110] = 0
    page[300:305, 50:60] = 0
    assert RegionPanelDetector().detect(page) == NoPanelsFound()


def test_touching_panels_become_one(side_by_side_frames_page):
    page = side_by_side_frames_page.copy()
    page[200:203, 280:320] = 0   # bridge between the two frames
    result = RegionPanelDetector().detect(page)
    assert len(result.panels) == 1
    assert result.panels[0].as_tuple() == (29.0, 49.0, 570.0, 400.0)


def test_gray_input(stacked_frames_page):
    gray = stacked_frames_page[:, :, 0].copy()
    result = RegionPanelDetector().detect(gray)
    assert len(result.panels) == 2


def test_no_dilation():
    page = np.full((400, 400, 3), 255, dtype=np.uint8)
    page[100:300, 100:300] = 0
    result = RegionPanelDetector(DetectionConfig(dilation_size=1)).detect(page)
    assert [p.as_tuple() for p in result.panels] == [(100.0, 100.0, 299.0, 299.0)]


@pytest.mark.parametrize("side, expected", [
    (57, None),                          # box 56x56 = 3136 <= 2% of 160000
    (58, (0.0, 0.0, 57.0, 57.0)),        # box 57x57 = 3249 > 3200
])
def test_area_filter_uses_inclusive_boxes(side, expected):
    page = np.full((400, 400, 3), 255, dtype=np.uint8)
    page[:side, :side] = 0
    result = RegionPanelDetector(DetectionConfig(dilation_size=1)).detect(page)
    if expected is None:
        assert result == NoPanelsFound()
    else:
        assert [p.as_tuple() for p in result.panels] == [expected]


def test_single_row_component_is_dropped_not_an_error():
    page = np.full((400, 400, 3), 255, dtype=np.uint8)
    page[200, 50:350] = 0
    result = RegionPanelDetector(DetectionConfig(dilation_size=1)).detect(page)
    assert result == NoPanelsFound()


def test_cancelled_token(stacked_frames_page):
    token = CancellationToken()
    token.cancel()
    result = RegionPanelDetector().detect(stacked_frames_page, cancel=token)
    assert isinstance(result, Error)
    assert result.cancelled


def test_detection_is_deterministic(stacked_frames_page):
    detector = RegionPanelDetector()
    assert detector.detect(stacked_frames_page) == detector.detect(stacked_frames_page)


@pytest.mark.parametrize("seed", [0, 1])
def test_output_invariants(seed):
    rng = np.random.default_rng(seed)
    page = np.full((300, 300, 3), 255, dtype=np.uint8)
    for _ in range(6):
        x, y = rng.integers(0, 250, size=2)
        page[y:y + 50, x:x + 50] = rng.integers(0, 100)

    result = RegionPanelDetector().detect(page)
    if isinstance(result, Success):
        assert [p.reading_order for p in result.panels] == list(range(len(result.panels)))
        for p in result.panels:
            assert 0 <= p.left < p.right <= 300
            assert 0 <= p.top < p.bottom <= 300
    else:
        assert isinstance(result, NoPanelsFound)
