"""Frame sources that a logo finder reads video frames from."""

from abc import ABC, abstractmethod

import numpy as np

from .errors import FrameNotAvailableError, VideoNotOpenedError


class FrameSource(ABC):
    """Sequential access to the frames of a video.

    A source is positioned with seek(); grab() then reads the frame at the
    current position and moves past it, and retrieve() returns the frame
    read by the last grab().
    """

    @property
    @abstractmethod
    def frame_count(self):
        """Number of frames in the video."""

    @property
    @abstractmethod
    def frame_shape(self):
        """Shape of every frame as (height, width, 3)."""

    @abstractmethod
    def seek(self, frame_number):
        """Position the source so that the next grab() reads frame_number."""

    @abstractmethod
    def grab(self):
        """Read the next frame, raising FrameNotAvailableError if there is none."""

    @abstractmethod
    def retrieve(self):
        """Return the last grabbed frame as a height x width x 3 uint8 array."""


class MemoryVideo(FrameSource):
    """A video held in memory as a sequence of frames."""

    def __init__(self, frames):
        arrays = [np.array(frame, dtype=np.uint8) for frame in frames]
        if not arrays:
            raise VideoNotOpenedError()
        shape = arrays[0].shape
        if len(shape) != 3 or shape[2] != 3:
            raise ValueError("frames must be height x width x 3 arrays")
        if any(array.shape != shape for array in arrays):
            raise ValueError("all frames must have the same shape")
        for array in arrays:
            array.setflags(write=False)
        self._frames = arrays
        self._position = 0
        self._current = None

    @property
    def frame_count(self):
        return len(self._frames)

    @property
    def frame_shape(self):
        return self._frames[0].shape

    def seek(self, frame_number):
        if frame_number < 0:
            raise ValueError("frame number must not be negative")
        self._position = frame_number
        self._current = None

    def grab(self):
        if self._position >= len(self._frames):
            raise FrameNotAvailableError(self._position)
        self._current = self._frames[self._position]
        self._position += 1

    def retrieve(self):
        if self._current is None:
            raise FrameNotAvailableError(self._position)
        return self._current