"""
Immutable image value passed between the loader, the filters and the display.
"""
from dataclasses import dataclass

import numpy as np
from PIL import Image

MODES = ('L', 'RGB')


@dataclass(frozen=True, eq=False)
class ImageData:
    """
    Rectangular 8-bit image.

    ``pixels`` has shape (height, width) for grayscale ('L') images and
    (height, width, 3) for 'RGB' images. The array is copied on construction
    and marked read-only.
    """
    pixels: np.ndarray

    def __post_init__(self):
        pixels = np.asarray(self.pixels)
        if pixels.dtype != np.uint8:
            raise ValueError(f"Pixel buffer must be uint8, got {pixels.dtype}")
        if pixels.ndim == 3 and pixels.shape[2] != 3:
            raise ValueError(f"RGB pixel buffer must have 3 channels, got {pixels.shape[2]}")
        if pixels.ndim not in (2, 3):
            raise ValueError(f"Unsupported pixel buffer shape: {pixels.shape}")
        if pixels.shape[0] < 1 or pixels.shape[1] < 1:
            raise ValueError(f"Image dimensions must be positive, got {pixels.shape[1]}x{pixels.shape[0]}")

        frozen = np.array(pixels, dtype=np.uint8, copy=True)
        frozen.setflags(write=False)
        object.__setattr__(self, 'pixels', frozen)

    @classmethod
    def blank(cls, width: int, height: int, mode: str = 'RGB') -> 'ImageData':
        """All-black image of the given size."""
        if mode not in MODES:
            raise ValueError(f"Unknown image mode: {mode}")
        shape = (height, width) if mode == 'L' else (height, width, 3)
        return cls(np.zeros(shape, dtype=np.uint8))

    @classmethod
    def from_pil(cls, pil_image: Image.Image) -> 'ImageData':
        if pil_image.mode not in MODES:
            pil_image = pil_image.convert('RGB')
        return cls(np.array(pil_image, dtype=np.uint8))

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def shape(self):
        return self.pixels.shape

    @property
    def mode(self) -> str:
        return 'L' if self.pixels.ndim == 2 else 'RGB'

    @property
    def is_grayscale(self) -> bool:
        return self.mode == 'L'

    def intensity(self) -> np.ndarray:
        """
        Single channel read by the edge filters.

        Grayscale images return their stored intensity. RGB images return the
        blue channel, the low byte of a packed 0xRRGGBB pixel.
        """
        if self.is_grayscale:
            return self.pixels
        return self.pixels[:, :, 2]

    def to_rgb(self) -> 'ImageData':
        if not self.is_grayscale:
            return self
        return ImageData(np.stack([self.pixels] * 3, axis=2))

    def to_pil(self) -> Image.Image:
        return Image.fromarray(np.array(self.pixels))

    def __eq__(self, other):
        if not isinstance(other, ImageData):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(self.pixels, other.pixels)

    def __repr__(self):
        return f"ImageData({self.width}x{self.height}, mode={self.mode!r})"
