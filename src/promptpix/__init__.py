"""promptpix - share AI-generated images on a hosted social feed."""

__version__ = "0.1.0"
