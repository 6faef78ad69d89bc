"""Image operations used to locate a logo in an averaged frame."""

import numpy as np
from scipy import ndimage

from .finder import Box

_SHARPEN_KERNEL = np.ones((3, 3), dtype=np.float64)
_SHARPEN_KERNEL[1, 1] = -7

GRADIENT_THRESHOLD = 190
CLOSE_KERNEL_WIDTH = 7
CLOSE_KERNEL_HEIGHT = 1


def _saturate(values):
    """Round to the nearest integer and clamp into the uint8 range."""
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)


def sharpen(image):
    """Apply the 3x3 sharpening kernel (ones with -7 in the centre) per channel."""
    image = np.asarray(image)
    if image.ndim == 2:
        kernel = _SHARPEN_KERNEL
    elif image.ndim == 3:
        kernel = _SHARPEN_KERNEL[:, :, np.newaxis]
    else:
        raise ValueError("image must have two or three dimensions")
    filtered = ndimage.correlate(image.astype(np.float64), kernel, mode="mirror")
    return _saturate(filtered)


def morphological_gradient(channel):
    """Difference between the 3x3 dilation and erosion of a single channel."""
    channel = np.asarray(channel, dtype=np.uint8)
    if channel.ndim != 2:
        raise ValueError("channel must be a two-dimensional array")
    dilated = ndimage.maximum_filter(channel, size=3, mode="nearest")
    eroded = ndimage.minimum_filter(channel, size=3, mode="nearest")
    return dilated - eroded


def threshold(image, thresh, maxval):
    """Binary threshold: maxval where a pixel is above thresh, 0 elsewhere."""
    image = np.asarray(image)
    value = min(max(maxval, 0), 255)
    return np.where(image > thresh, value, 0).astype(np.uint8)


def close(image, kernel_width, kernel_height, iterations):
    """Morphological closing with a rectangular kernel applied `iterations` times."""
    if kernel_width < 1 or kernel_height < 1:
        raise ValueError("kernel size must be positive")
    if iterations < 0:
        raise ValueError("iterations must not be negative")
    result = np.array(image, dtype=np.uint8)
    size = (kernel_height, kernel_width)
    for _ in range(iterations):
        result = ndimage.maximum_filter(result, size=size, mode="constant", cval=0)
    for _ in range(iterations):
        result = ndimage.minimum_filter(result, size=size, mode="constant", cval=255)
    return result


def bounding_boxes(mask):
    """Bounding boxes of the 8-connected foreground regions of a mask.

    Regions are listed from the most recently discovered in a top-to-bottom
    scan back to the first.
    """
    mask = np.asarray(mask)
    if mask.ndim != 2:
        raise ValueError("mask must be a two-dimensional array")
    labels, _ = ndimage.label(mask != 0, structure=np.ones((3, 3), dtype=bool))
    boxes = [
        Box(cols.start, rows.start, cols.stop - cols.start, rows.stop - rows.start)
        for rows, cols in ndimage.find_objects(labels)
    ]
    boxes.reverse()
    return boxes


def find_box_in_channel(image, channel, min_width, max_width, min_height, max_height, close_steps):
    """Find the first box in one channel whose size is within the given limits.

    Returns an empty Box when nothing suitable is found.
    """
    grey = np.asarray(image)[:, :, channel]
    gradient = morphological_gradient(grey)
    mask = threshold(gradient, GRADIENT_THRESHOLD, 255)
    closed = close(mask, CLOSE_KERNEL_WIDTH, CLOSE_KERNEL_HEIGHT, close_steps)
    for box in bounding_boxes(closed):
        if min_width <= box.width <= max_width and min_height <= box.height <= max_height:
            return box
    return Box()


def average_frames(frames):
    """Pixel-wise average of an iterable of frames, rounded to uint8."""
    total = None
    count = 0
    for frame in frames:
        values = np.asarray(frame, dtype=np.float64)
        if total is None:
            total = values.copy()
        elif values.shape != total.shape:
            raise ValueError("all frames must have the same shape")
        else:
            total += values
        count += 1
    if count == 0:
        raise ValueError("no frames to average")
    return _saturate(total * (1.0 / count))