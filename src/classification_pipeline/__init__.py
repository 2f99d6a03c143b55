"""Image classification pre/post-processing around an inference engine."""

__version__ = "0.0.1"
