"""Finding logos in a video by averaging frames and looking for boxes."""

from itertools import chain

import numpy as np

from .errors import FrameNotAvailableError
from .finder import Box, FindResult, LogoFinder, LogoFinderCallback, LogoFinderResult
from .imageops import average_frames, find_box_in_channel, sharpen
from .intervals import get_subintervals


def select_box(boxes):
    """Pick the found box with the smallest x, or the first box if none was found."""
    boxes = list(boxes)
    if not boxes:
        raise ValueError("no boxes to select from")
    found = [box for box in boxes if box.found()]
    if not found:
        return boxes[0]
    return min(found, key=lambda box: box.x)


def _crop(frame, box):
    return frame[box.y:box.y + box.height, box.x:box.x + box.width]


class FrameLogoFinder(LogoFinder):
    """Searches a frame source for logos interval by interval."""

    def __init__(self, source, callback, verbose=False):
        super().__init__(callback, verbose)
        self.source = source
        self.total_frames = source.frame_count
        # Levels of interval subdivision tried before giving up on an interval.
        self.steps = 2
        # Only every frame_step-th frame is used for the average.
        self.frame_step = 10
        # Number of times the closing morphology is applied.
        self.close_steps = 3
        # Largest logo difference still considered the same logo.
        self.similarity_threshold = 0.7
        self._n_last_failures = 0
        self._stop_requested = False
        self._current_frame = 0

    @property
    def stop_requested(self):
        """Whether stop() has been called."""
        return self._stop_requested

    def stop(self):
        self._stop_requested = True

    def find_logos(self):
        if self.frame_interval_min <= 0:
            raise ValueError("frame_interval_min must be positive")
        try:
            self._search()
        except FrameNotAvailableError as error:
            return FindResult(False, f"Could not get frame {error.frame}")
        return FindResult(True)

    def _info(self, message):
        if self.verbose:
            print(message)

    def _search(self):
        interval_start = self.start_frame
        while interval_start < self.total_frames:
            interval_end = min(interval_start + self.frame_interval_min, self.total_frames)

            self._info(f"find_logos iteration for [{interval_start}, {interval_end})")
            box = self._find_logo_in_interval(interval_start, interval_end)
            self._info(f"  logo found = {box}")

            if self._stop_requested:
                break

            if box.found():
                new_start = self._logo_transition_point(interval_end, box)
                self.callback.success(LogoFinderResult(
                    start_frame=interval_start,
                    end_frame=new_start - 1,
                    x=box.x,
                    y=box.y,
                    width=box.width,
                    height=box.height,
                ))
                interval_start = new_start
                self._n_last_failures = 0
            else:
                self.callback.failure(interval_start, interval_end - 1)
                interval_start += self.frame_interval_min
                self._n_last_failures += 1

    def _find_logo_in_interval(self, interval_start, interval_end):
        n_subintervals = 1
        for level in range(1, self.steps + 1):
            subintervals = get_subintervals(interval_start, interval_end, n_subintervals)
            box = select_box(self._find_boxes(start, end) for start, end in subintervals)
            if box.x > 0:
                return box

            self._info(f"  Not found in level {level}")
            n_subintervals *= 2
            if self._stop_requested:
                break
        return Box()

    def _find_boxes(self, start_frame, end_frame):
        self._info(f"  find_boxes in [{start_frame}, {end_frame})")
        sharpened = sharpen(self._average_frame(start_frame, end_frame))
        return select_box(self._find_box_in_channel(sharpened, channel) for channel in range(3))

    def _find_box_in_channel(self, image, channel):
        box = find_box_in_channel(
            image,
            channel,
            self.min_logo_width,
            self.max_logo_width,
            self.min_logo_height,
            self.max_logo_height,
            self.close_steps,
        )
        if box.found():
            self._info(f"    find_box_in_channel {channel} = {box}")
        else:
            self._info(f"    find_box_in_channel {channel} = not found")
        return box

    def _average_frame(self, start_frame, end_frame):
        frames = self._sampled_frames(start_frame, end_frame)
        first = next(frames, None)
        if first is None:
            return np.zeros(self.source.frame_shape, dtype=np.uint8)
        return average_frames(chain([first], frames))

    def _sampled_frames(self, start_frame, end_frame):
        self._go_to_frame(start_frame)
        for frame_number in range(start_frame, end_frame):
            self._advance_frame()
            if frame_number % self.frame_step != 0:
                continue
            yield self._get_frame()
            if self._stop_requested:
                return

    def _go_to_frame(self, frame_number):
        self.source.seek(frame_number)
        self._current_frame = frame_number

    def _advance_frame(self):
        try:
            self.source.grab()
        except FrameNotAvailableError as error:
            raise FrameNotAvailableError(self._current_frame) from error
        self._current_frame += 1

    def _get_frame(self):
        try:
            return self.source.retrieve()
        except FrameNotAvailableError as error:
            raise FrameNotAvailableError(self._current_frame) from error

    def _logo_transition_point(self, current_frame, box):
        if current_frame >= self.total_frames:
            return current_frame

        extra_frames_to_check = self.extra_frames + self._n_last_failures * self.extra_frames
        if extra_frames_to_check <= 0:
            return current_frame

        frame = self._get_frame()
        for _ in range(extra_frames_to_check):
            logo = _crop(frame, box).astype(np.float64)
            self._advance_frame()
            frame = self._get_frame()
            logo_next = _crop(frame, box)

            norm = float(np.linalg.norm(logo - logo_next))
            difference = norm / (box.width * box.height)
            self._info(f"  extra frame {current_frame} difference = {difference:g}")

            if difference > self.similarity_threshold:
                break
            current_frame += 1

        return current_frame


class MatcherCallback(LogoFinderCallback):
    """Prints each result and stops the finder once end_frame is passed."""

    def __init__(self, frame_interval, end_frame=None, finder=None):
        self.frame_interval = frame_interval
        self.end_frame = end_frame
        self.finder = finder

    def success(self, result):
        print(f"Success at {result.start_frame}-{result.end_frame}")
        self._stop_if_past_end(result.start_frame)

    def failure(self, start_frame, end_frame):
        print(f"Failure at {start_frame}-{end_frame}")
        self._stop_if_past_end(start_frame)

    def _stop_if_past_end(self, start_frame):
        if self.end_frame is None or self.finder is None:
            return
        if start_frame + self.frame_interval > self.end_frame:
            self.finder.stop()