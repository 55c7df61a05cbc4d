"""
Filter selection and the session state shared with the GUI.
"""
import logging
from enum import Enum
from typing import Callable, Dict, Optional, Union

from image_filter.config import INPUT_FILENAME, OUTPUT_FILENAME
from image_filter.errors import NoImageLoadedError
from image_filter.image_data import ImageData
from image_filter.io_utils import load_image, save_image
from image_filter.processing import (
    to_grayscale,
    apply_differential,
    apply_gradient,
    apply_prewitt,
    apply_sobel,
    apply_modified_sobel,
)

logger = logging.getLogger(__name__)


class FilterSelection(Enum):
    """Dropdown entries, valued by their on-screen label."""
    ORIGINAL = "Original Image"
    GRAYSCALE = "Grayscale"
    DIFFERENTIAL = "Differential"
    GRADIENT = "Gradient"
    PREWITT = "Prewitt"
    SOBEL = "Sobel"
    MODIFIED_SOBEL = "Modified Sobel"

    @classmethod
    def from_label(cls, label: str) -> 'FilterSelection':
        try:
            return cls(label)
        except ValueError:
            raise ValueError(f"Unknown filter: {label!r}") from None


FILTER_OPTIONS = [selection.value for selection in FilterSelection]

EDGE_FILTERS: Dict[FilterSelection, Callable[[ImageData], ImageData]] = {
    FilterSelection.DIFFERENTIAL: apply_differential,
    FilterSelection.GRADIENT: apply_gradient,
    FilterSelection.PREWITT: apply_prewitt,
    FilterSelection.SOBEL: apply_sobel,
    FilterSelection.MODIFIED_SOBEL: apply_modified_sobel,
}

Selection = Union[FilterSelection, str]


def apply_filter(selection: Selection, original: Optional[ImageData],
                 grayscale: Optional[ImageData]) -> ImageData:
    """
    Run the filter for a dropdown selection.

    Args:
        selection: FilterSelection member or its label
        original: Loaded source image
        grayscale: Cached grayscale version of ``original``

    Returns:
        ``original`` or ``grayscale`` unchanged for those selections,
        otherwise a new filtered image

    Raises:
        NoImageLoadedError: if no source image is loaded
    """
    if not isinstance(selection, FilterSelection):
        selection = FilterSelection.from_label(selection)

    if original is None:
        raise NoImageLoadedError("No image loaded.")

    if selection is FilterSelection.ORIGINAL:
        return original
    if grayscale is None:
        raise NoImageLoadedError("No grayscale image available.")
    if selection is FilterSelection.GRAYSCALE:
        return grayscale

    return EDGE_FILTERS[selection](grayscale)


class FilterSession:
    """
    Holds the source image, its cached grayscale version and the current result.

    The grayscale image is computed once per load; ``apply`` never calls the
    converter again.
    """

    def __init__(self, converter: Callable[[ImageData], ImageData] = to_grayscale):
        self._converter = converter
        self.original_image: Optional[ImageData] = None
        self.grayscale_image: Optional[ImageData] = None
        self.processed_image: Optional[ImageData] = None
        self.selection: FilterSelection = FilterSelection.ORIGINAL

    @property
    def has_image(self) -> bool:
        return self.original_image is not None

    def clear(self):
        self.original_image = None
        self.grayscale_image = None
        self.processed_image = None
        self.selection = FilterSelection.ORIGINAL

    def load(self, file_path: str = INPUT_FILENAME) -> ImageData:
        """Load the source image; on failure the session is left empty."""
        self.clear()
        image = load_image(file_path)
        return self.set_image(image)

    def set_image(self, image: ImageData) -> ImageData:
        if image is None:
            raise ValueError("No image given")

        self.clear()
        grayscale = self._converter(image)
        self.original_image = image
        self.grayscale_image = grayscale
        self.processed_image = image
        return image

    def apply(self, selection: Selection) -> ImageData:
        if not isinstance(selection, FilterSelection):
            selection = FilterSelection.from_label(selection)

        result = apply_filter(selection, self.original_image, self.grayscale_image)
        self.selection = selection
        self.processed_image = result
        logger.info(f"Applied {selection.value}: {result.width}x{result.height}, mode {result.mode}")
        return result

    def save(self, file_path: str = OUTPUT_FILENAME) -> str:
        if self.processed_image is None:
            raise NoImageLoadedError("No processed image to save.")
        return save_image(self.processed_image, file_path)
