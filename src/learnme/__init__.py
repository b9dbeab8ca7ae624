"""LearnMe - programming education platform."""

__version__ = "0.1.0"
