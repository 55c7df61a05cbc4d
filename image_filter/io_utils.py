"""
Image I/O utilities for reading the source image and writing the processed result.
"""
import numpy as np
from PIL import Image, UnidentifiedImageError
from typing import Any, Dict, Optional
import os
import logging

from image_filter.config import OUTPUT_FORMAT
from image_filter.errors import ImageLoadError, ImageSaveError
from image_filter.image_data import ImageData

logger = logging.getLogger(__name__)


def load_image(file_path: str) -> ImageData:
    """
    Load an image file as 8-bit RGB or grayscale.

    Args:
        file_path: Path to image file

    Returns:
        Loaded image

    Raises:
        ImageLoadError: if the file is missing, unreadable or not an image
    """
    if not os.path.exists(file_path):
        logger.error(f"Image file not found: {file_path}")
        raise ImageLoadError(f"Image file not found: {file_path}")

    try:
        with Image.open(file_path) as pil_image:
            pil_image.load()
            image = ImageData.from_pil(_normalize_mode(pil_image))
    except (OSError, UnidentifiedImageError, ValueError) as e:
        logger.error(f"Failed to load image {file_path}: {str(e)}")
        raise ImageLoadError(str(e)) from e

    logger.info(f"Loaded {file_path}: {image.width}x{image.height}, mode {image.mode}")
    return image


def _normalize_mode(pil_image: Image.Image) -> Image.Image:
    """Reduce any Pillow mode to 'RGB' or 'L'."""
    # Composite transparent images over white
    if pil_image.mode in ('RGBA', 'LA'):
        background = Image.new('RGB', pil_image.size, (255, 255, 255))
        background.paste(pil_image.convert('RGBA'), mask=pil_image.split()[-1])
        return background
    elif pil_image.mode == 'P':
        return pil_image.convert('RGB')
    elif pil_image.mode != 'RGB' and pil_image.mode != 'L':
        return pil_image.convert('RGB')
    return pil_image


def save_image(image: ImageData, file_path: str, image_format: Optional[str] = OUTPUT_FORMAT) -> str:
    """
    Save an image to disk.

    Args:
        image: Image to write
        file_path: Output file path
        image_format: Pillow format name, or None to infer it from the extension

    Returns:
        Absolute path of the written file

    Raises:
        ImageSaveError: if the file cannot be written
    """
    output_path = os.path.abspath(file_path)

    try:
        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        image.to_pil().save(output_path, format=image_format)
        logger.info(f"Saved {output_path} ({image.width}x{image.height}, mode {image.mode})")

    except (OSError, ValueError, KeyError) as e:
        logger.error(f"Error saving {output_path}: {str(e)}")
        raise ImageSaveError(str(e)) from e

    return output_path


def get_image_info(image: ImageData) -> Dict[str, Any]:
    """
    Get information about an image.

    Args:
        image: Image to describe

    Returns:
        Dictionary with image information
    """
    info = {
        'shape': image.shape,
        'mode': image.mode,
        'min_value': int(np.min(image.pixels)),
        'max_value': int(np.max(image.pixels)),
        'mean_value': float(np.mean(image.pixels)),
    }

    if image.is_grayscale:
        info['channels'] = 1
        info['type'] = 'grayscale'
    else:
        info['channels'] = 3
        info['type'] = 'color'

    return info
