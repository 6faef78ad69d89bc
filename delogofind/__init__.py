"""Find logo boxes in video frames and report the frame ranges they cover."""

__version__ = "0.1.0"