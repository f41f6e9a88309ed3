"""clipgif: turn short video clips into looping GIF previews."""

__version__ = "0.1.0"
