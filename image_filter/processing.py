"""
Core image processing algorithms: grayscale conversion, convolution kernels and edge filters.

Every edge filter reads a single intensity channel, allocates a new image of the
same size and leaves the border pixels its kernel cannot cover at zero.
"""
import numpy as np
from typing import Callable, Sequence
import functools
import logging
import time

from scipy.ndimage import correlate

from image_filter.image_data import ImageData

logger = logging.getLogger(__name__)

# ITU-R 601 luma, in thousandths
LUMA_WEIGHTS = (299, 587, 114)


def _kernel(rows: Sequence[Sequence[int]]) -> np.ndarray:
    kernel = np.array(rows, dtype=np.int64)
    kernel.setflags(write=False)
    return kernel


# Kernels are indexed [i][j] with i the x offset and j the y offset from the
# centre pixel, so kernel[i][j] weights I(x + i - r, y + j - r).
PREWITT_X = _kernel([[-1, 0, 1],
                     [-1, 0, 1],
                     [-1, 0, 1]])

PREWITT_Y = _kernel([[-1, -1, -1],
                     [ 0,  0,  0],
                     [ 1,  1,  1]])

SOBEL_X = _kernel([[-1, 0, 1],
                   [-2, 0, 2],
                   [-1, 0, 1]])

SOBEL_Y = _kernel([[-1, -2, -1],
                   [ 0,  0,  0],
                   [ 1,  2,  1]])

MODIFIED_SOBEL_X = _kernel([[-1,  -2, 0,  2, 1],
                            [-4, -10, 0, 10, 4],
                            [-7, -17, 0, 17, 7],
                            [-4, -10, 0, 10, 4],
                            [-1,  -2, 0,  2, 1]])

MODIFIED_SOBEL_Y = _kernel([[ 1,   4,   7,   4,  1],
                            [ 2,  10,  17,  10,  2],
                            [ 0,   0,   0,   0,  0],
                            [-2, -10, -17, -10, -2],
                            [-1,  -4,  -7,  -4, -1]])


def _timed(name: str) -> Callable:
    """Log filter name, input size and elapsed time at DEBUG level."""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(image: ImageData) -> ImageData:
            start = time.perf_counter()
            result = func(image)
            logger.debug(f"{name} filter on {image.width}x{image.height} took "
                         f"{(time.perf_counter() - start) * 1000:.1f} ms")
            return result
        return wrapper
    return decorator


def _require_image(image: ImageData) -> ImageData:
    if image is None:
        raise ValueError("No image given")
    if not isinstance(image, ImageData):
        raise ValueError(f"Expected ImageData, got {type(image).__name__}")
    return image


def to_grayscale(image: ImageData) -> ImageData:
    """
    Collapse a color image to a single luminance channel.

    Args:
        image: Input image ('RGB' or 'L')

    Returns:
        New 'L' image with the same dimensions
    """
    _require_image(image)

    if image.is_grayscale:
        return ImageData(image.pixels)

    rgb = image.pixels.astype(np.int64)
    red_w, green_w, blue_w = LUMA_WEIGHTS
    gray = (red_w * rgb[:, :, 0] + green_w * rgb[:, :, 1] + blue_w * rgb[:, :, 2] + 500) // 1000
    logger.debug(f"Converted {image.width}x{image.height} image to grayscale")

    return ImageData(gray.astype(np.uint8))


def correlate_interior(intensity: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """
    Correlate a single-channel image with an [x][y]-indexed kernel.

    Args:
        intensity: Single-channel image (height, width)
        kernel: Square odd-sized kernel indexed [dx][dy]

    Returns:
        Integer response over the interior, shape (height - 2r, width - 2r)
    """
    k_h, k_w = kernel.shape
    if k_h != k_w or k_h % 2 == 0:
        raise ValueError("Kernel must be square with odd size")

    radius = k_h // 2
    h, w = intensity.shape

    # Arrays are indexed [row][col] = [y][x], hence the transpose
    response = correlate(intensity.astype(np.int64), np.asarray(kernel).T,
                         mode='constant', cval=0)

    return response[radius:max(radius, h - radius), radius:max(radius, w - radius)]


def gradient_magnitude(gx: np.ndarray, gy: np.ndarray) -> np.ndarray:
    """floor(sqrt(gx^2 + gy^2)) clamped to 255, as uint8."""
    gx = gx.astype(np.int64)
    gy = gy.astype(np.int64)
    magnitude = np.floor(np.sqrt(gx * gx + gy * gy))
    return np.minimum(magnitude, 255).astype(np.uint8)


def _gray_output(plane: np.ndarray, mode: str) -> ImageData:
    if mode == 'L':
        return ImageData(plane)
    return ImageData(np.stack([plane] * 3, axis=2))


def _kernel_filter(image: ImageData, kernel_x: np.ndarray, kernel_y: np.ndarray,
                   mode: str = 'RGB') -> ImageData:
    """Gradient magnitude of a kernel pair, written into the interior of a black buffer."""
    intensity = _require_image(image).intensity()
    h, w = intensity.shape
    radius = kernel_x.shape[0] // 2

    gx = correlate_interior(intensity, kernel_x)
    gy = correlate_interior(intensity, kernel_y)

    plane = np.zeros((h, w), dtype=np.uint8)
    plane[radius:max(radius, h - radius), radius:max(radius, w - radius)] = gradient_magnitude(gx, gy)

    return _gray_output(plane, mode)


@_timed("Differential")
def apply_differential(image: ImageData) -> ImageData:
    """
    Horizontal first difference |I(x,y) - I(x-1,y)|.

    Row 0 and column 0 are left black.
    """
    intensity = _require_image(image).intensity().astype(np.int64)
    h, w = intensity.shape

    plane = np.zeros((h, w), dtype=np.uint8)
    plane[1:, 1:] = np.abs(intensity[1:, 1:] - intensity[1:, :-1])

    return _gray_output(plane, 'RGB')


@_timed("Gradient")
def apply_gradient(image: ImageData) -> ImageData:
    """
    Central-difference gradient magnitude.

    gx = I(x+1,y) - I(x-1,y), gy = I(x,y+1) - I(x,y-1). The outer 1-pixel ring
    is left black.
    """
    intensity = _require_image(image).intensity().astype(np.int64)
    h, w = intensity.shape

    plane = np.zeros((h, w), dtype=np.uint8)
    if h > 2 and w > 2:
        gx = intensity[1:h - 1, 2:] - intensity[1:h - 1, :w - 2]
        gy = intensity[2:, 1:w - 1] - intensity[:h - 2, 1:w - 1]
        plane[1:h - 1, 1:w - 1] = gradient_magnitude(gx, gy)

    return _gray_output(plane, 'RGB')


@_timed("Prewitt")
def apply_prewitt(image: ImageData) -> ImageData:
    return _kernel_filter(image, PREWITT_X, PREWITT_Y)


@_timed("Sobel")
def apply_sobel(image: ImageData) -> ImageData:
    return _kernel_filter(image, SOBEL_X, SOBEL_Y)


@_timed("Modified Sobel")
def apply_modified_sobel(image: ImageData) -> ImageData:
    """5x5 Sobel variant. Output is single-channel with a 2-pixel black border."""
    return _kernel_filter(image, MODIFIED_SOBEL_X, MODIFIED_SOBEL_Y, mode='L')
