import numpy as np
import pytest

from delogofind.finder import Box
from delogofind.imageops import (
    average_frames,
    bounding_boxes,
    close,
    find_box_in_channel,
    morphological_gradient,
    sharpen,
    threshold,
)

LOGO = (40, 30, 60, 12)


def logo_frame(height=80, width=160, logo=LOGO):
    frame = np.zeros((height, width, 3), dtype=np.uint8)
    x, y, w, h = logo
    frame[y:y + h, x:x + w] = 255
    return frame


def test_sharpen_keeps_flat_image():
    image = np.full((6, 7, 3), 77, dtype=np.uint8)
    result = sharpen(image)
    assert result.dtype == np.uint8
    assert np.array_equal(result, image)


def test_sharpen_single_point():
    image = np.zeros((5, 5, 3), dtype=np.uint8)
    image[2, 2] = 20
    result = sharpen(image)
    assert int(result[2, 2, 0]) == 0
    assert int(result[1, 1, 1]) == 20
    assert int(result[3, 2, 2]) == 20
    assert int(result[0, 0, 0]) == 0


def test_sharpen_two_dimensional():
    image = np.full((4, 4), 9, dtype=np.uint8)
    assert np.array_equal(sharpen(image), image)


def test_gradient_of_flat_channel_is_zero():
    channel = np.full((5, 5), 123, dtype=np.uint8)
    assert not morphological_gradient(channel).any()


def test_gradient_of_step_edge():
    channel = np.zeros((5, 6), dtype=np.uint8)
    channel[:, 3:] = 100
    result = morphological_gradient(channel)
    assert (result[:, 2] == 100).all()
    assert (result[:, 3] == 100).all()
    assert not result[:, 0].any()
    assert not result[:, 5].any()


def test_gradient_rejects_colour_image():
    with pytest.raises(ValueError):
        morphological_gradient(np.zeros((3, 3, 3), dtype=np.uint8))


def test_threshold_is_strictly_greater():
    image = np.array([[0, 190, 191, 255]], dtype=np.uint8)
    assert threshold(image, 190, 255).tolist() == [[0, 0, 255, 255]]


def test_close_fills_small_horizontal_gap():
    mask = np.zeros((3, 30), dtype=np.uint8)
    mask[1, 5:10] = 255
    mask[1, 12:17] = 255
    result = close(mask, 7, 1, 1)
    assert (result[1, 5:17] == 255).all()
    assert not result[1, :5].any()
    assert not result[1, 17:].any()
    assert not result[0].any()
    assert not result[2].any()


def test_close_keeps_large_gap():
    mask = np.zeros((3, 30), dtype=np.uint8)
    mask[1, 3:7] = 255
    mask[1, 20:24] = 255
    result = close(mask, 7, 1, 1)
    assert int(result[1, 13]) == 0
    assert (result >= mask).all()


def test_close_rejects_bad_arguments():
    with pytest.raises(ValueError):
        close(np.zeros((2, 2), dtype=np.uint8), 0, 1, 1)
    with pytest.raises(ValueError):
        close(np.zeros((2, 2), dtype=np.uint8), 7, 1, -1)


def test_bounding_boxes_of_rectangles():
    mask = np.zeros((20, 30), dtype=np.uint8)
    mask[2:5, 3:8] = 255
    mask[10:15, 15:25] = 255
    assert set(bounding_boxes(mask)) == {Box(3, 2, 5, 3), Box(15, 10, 10, 5)}


def test_bounding_boxes_use_diagonal_connectivity():
    mask = np.zeros((5, 5), dtype=np.uint8)
    mask[0, 0] = 1
    mask[1, 1] = 1
    assert bounding_boxes(mask) == [Box(0, 0, 2, 2)]


def test_bounding_boxes_of_empty_mask():
    assert bounding_boxes(np.zeros((4, 4), dtype=np.uint8)) == []


def test_find_box_around_logo():
    image = sharpen(logo_frame())
    box = find_box_in_channel(image, 0, 47, 135, 9, 23, 3)
    x, y, w, h = LOGO
    assert box.found()
    assert box.x <= x and box.y <= y
    assert box.x + box.width >= x + w
    assert box.y + box.height >= y + h
    assert 47 <= box.width <= 135
    assert 9 <= box.height <= 23


def test_same_box_in_every_channel_of_grey_logo():
    image = sharpen(logo_frame())
    boxes = {find_box_in_channel(image, c, 47, 135, 9, 23, 3) for c in range(3)}
    assert len(boxes) == 1


def test_find_box_on_blank_image():
    image = sharpen(np.zeros((80, 160, 3), dtype=np.uint8))
    assert find_box_in_channel(image, 1, 47, 135, 9, 23, 3) == Box()


def test_find_box_ignores_oversized_regions():
    image = sharpen(logo_frame(height=80, width=300, logo=(40, 30, 200, 12)))
    assert find_box_in_channel(image, 0, 47, 135, 9, 23, 3) == Box()


def test_average_of_identical_frames():
    frame = logo_frame()
    assert np.array_equal(average_frames([frame, frame, frame]), frame)


def test_average_of_two_levels():
    frames = [np.full((2, 2, 3), 10, dtype=np.uint8), np.full((2, 2, 3), 20, dtype=np.uint8)]
    assert (average_frames(frames) == 15).all()


def test_average_accepts_generator():
    result = average_frames(np.full((2, 2, 3), 40, dtype=np.uint8) for _ in range(4))
    assert (result == 40).all()


def test_average_of_nothing_raises():
    with pytest.raises(ValueError):
        average_frames([])


def test_average_rejects_mismatched_frames():
    with pytest.raises(ValueError):
        average_frames([np.zeros((2, 2, 3)), np.zeros((1, 1, 3))])