# delogofind

`delogofind` finds the on-screen logo (a small watermark box) in a video and
reports the frame ranges where it stays in one place. It averages groups of
frames, sharpens the result, and looks for a box whose size falls within the
expected logo limits.

## How it works

The video is walked in intervals of `frame_interval_min` frames, starting at
`start_frame`. For each interval, every frame whose number is a multiple of
`frame_step` (10 by default) is averaged. The average is sharpened. Each
colour channel then goes through a morphological gradient, a threshold and a
horizontal closing. The bounding boxes of the regions left are checked against
the logo size limits. If nothing is found for the whole interval, the interval
is split into halves, and so on for `steps` levels (2 by default), before it is
given up.

When a logo is found and `extra_frames` is positive, the finder checks the
frames after the interval. It extends the range for as long as the logo area
stays similar (up to `similarity_threshold`). This handles videos whose logo
changes at irregular points. After consecutive failures, more extra frames are
checked.

Each result is passed to a callback:

- `success(result)` gets a `LogoFinderResult` with the start and end frame and
  the box (`x`, `y`, `width`, `height`).
- `failure(start_frame, end_frame)` is called for a range where no logo was
  found.

## Usage

```python
import numpy as np

from delogofind.detector import FrameLogoFinder
from delogofind.finder import LogoFinderCallback
from delogofind.video import MemoryVideo


class Printer(LogoFinderCallback):
    def success(self, result):
        print("logo", result.start_frame, result.end_frame,
              result.x, result.y, result.width, result.height)

    def failure(self, start_frame, end_frame):
        print("no logo", start_frame, end_frame)


frames = [np.zeros((720, 1280, 3), dtype=np.uint8) for _ in range(500)]
finder = FrameLogoFinder(MemoryVideo(frames), Printer())
finder.frame_interval_min = 250
finder.extra_frames = 50
outcome = finder.find_logos()
print(outcome.ok, outcome.message)
```

You must set `frame_interval_min` to a positive number before calling
`find_logos()`. Otherwise it raises `ValueError`.

The logo size limits are plain attributes: `min_logo_width` (47),
`max_logo_width` (135), `min_logo_height` (9) and `max_logo_height` (23).
`FrameLogoFinder` also has `close_steps` (3) and `similarity_threshold` (0.7).
With `verbose=True` the finder prints its progress.

`MemoryVideo` serves frames held in memory. Each frame is a height × width × 3
array. To read from another frame store, subclass `FrameSource`. It needs
`frame_count` and `frame_shape`, plus `seek`, `grab` and `retrieve`.

`MatcherCallback(frame_interval, end_frame=None, finder=None)` prints each
range. When both `end_frame` and `finder` are set, it calls `stop()` on the
finder once a range starts within `frame_interval` frames of `end_frame`, or
past it. `stop()` can also be called from anywhere else to end a search early.

`find_logos()` returns a `FindResult(ok, message)`. If a frame could not be
read, `ok` is false and `message` names the frame.

## Helpers

- `delogofind.intervals.get_subintervals(start, end, n)` splits `[start, end)`
  into `n` consecutive subintervals. The last one ends exactly at `end`.
- `delogofind.detector.select_box(boxes)` picks the found box with the smallest
  `x`. If no box was found, it returns the first box.
- `delogofind.imageops` holds the image steps used above: `sharpen`,
  `morphological_gradient`, `threshold`, `close`, `bounding_boxes`,
  `find_box_in_channel` and `average_frames`.
- `delogofind.finder` defines `Box`. A box with `x == 0` means "not found".
  It also defines `Point` and `Rectangle`.

## Errors

`delogofind.errors` defines `LogoFinderError` and its subclasses:

- `VideoNotOpenedError`: raised by `MemoryVideo` when it is given no frames.
- `FrameNotAvailableError`: carries the number of the frame that could not be
  read.
- `DuplicateRowError`, `ScriptGenerationError` and `FFmpegStartError`.

## What it does not do

This is a library only. It has no command-line program. It does not decode
video files itself: frames must come from a `FrameSource`. It also does not
save results or turn them into filter scripts. Handling the results passed to
the callback is up to you.