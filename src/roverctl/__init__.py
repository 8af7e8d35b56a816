"""roverctl — drive rovers across a bounded grid with static obstacles."""

__version__ = "0.1.0"
