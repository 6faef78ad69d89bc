"""Exceptions raised while searching videos for logos."""


class LogoFinderError(Exception):
    """Base class for every error raised by this package."""

    default_message = "Logo finder error"

    def __init__(self, message=None):
        super().__init__(message if message is not None else self.default_message)

    @property
    def message(self):
        """The human-readable description of the error."""
        return self.args[0]


class VideoNotOpenedError(LogoFinderError):
    """The video file could not be opened."""

    default_message = "Failed to open video file"


class FrameNotAvailableError(LogoFinderError):
    """A frame could not be read from the video."""

    default_message = "Failed to get frame"

    def __init__(self, frame):
        super().__init__()
        self.frame = frame


class DuplicateRowError(LogoFinderError):
    """A row with the same key already exists."""

    default_message = "Duplicate row"


class ScriptGenerationError(LogoFinderError):
    """A filter script could not be generated."""


class FFmpegStartError(LogoFinderError):
    """The encoder process could not be started."""