"""
Errors reported to the user when loading, filtering or saving fails.
"""


class ImageFilterError(Exception):
    """Base class for failures the application reports and survives."""


class ImageLoadError(ImageFilterError, OSError):
    """The source image could not be read or decoded."""


class ImageSaveError(ImageFilterError, OSError):
    """The processed image could not be written."""


class NoImageLoadedError(ImageFilterError, RuntimeError):
    """A filter or save was requested before any image was loaded."""
