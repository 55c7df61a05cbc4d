import numpy as np
from PIL import Image
import argparse
import os

from image_filter.config import INPUT_FILENAME


def make_demo_scene(width: int = 320, height: int = 240) -> np.ndarray:
    """Colored scene with flat regions and sharp edges."""
    rows, cols = np.mgrid[0:height, 0:width]
    scene = np.zeros((height, width, 3), dtype=np.uint8)

    # Horizontal color ramp background
    scene[:, :, 0] = (cols * 255 // max(width - 1, 1)).astype(np.uint8)
    scene[:, :, 1] = (rows * 255 // max(height - 1, 1)).astype(np.uint8)
    scene[:, :, 2] = 96

    # Filled rectangle
    scene[height // 5:height // 2, width // 8:width // 3] = (240, 240, 40)

    # Filled disc
    cy, cx, radius = height * 2 // 3, width * 2 // 3, min(width, height) // 5
    disc = (rows - cy) ** 2 + (cols - cx) ** 2 <= radius ** 2
    scene[disc] = (20, 40, 200)

    return scene


def make_vertical_edge(width: int = 64, height: int = 64) -> np.ndarray:
    """Left half black, right half white."""
    edge = np.zeros((height, width), dtype=np.uint8)
    edge[:, width // 2:] = 255
    return edge


def generate_sample_images(output_dir: str = 'sample_data'):
    """Generate test images for the filters."""
    os.makedirs(output_dir, exist_ok=True)

    # 1. 8-bit RGB demo scene
    Image.fromarray(make_demo_scene()).save(os.path.join(output_dir, 'demo_scene.png'))

    # 2. Vertical step edge
    Image.fromarray(make_vertical_edge()).save(os.path.join(output_dir, 'vertical_edge.png'))

    # 3. Uniform image
    uniform_array = np.full((200, 200), 128, dtype=np.uint8)
    Image.fromarray(uniform_array).save(os.path.join(output_dir, 'uniform_image.png'))

    # 4. Too small for any kernel interior
    tiny_array = np.random.randint(0, 256, (3, 3, 3), dtype=np.uint8)
    Image.fromarray(tiny_array).save(os.path.join(output_dir, 'edge_case_tiny.png'))

    # 5. Noisy image (salt & pepper)
    noisy_array = np.full((256, 256), 128, dtype=np.uint8)
    salt_pepper = np.random.random((256, 256))
    noisy_array[salt_pepper < 0.05] = 0    # pepper
    noisy_array[salt_pepper > 0.95] = 255  # salt
    Image.fromarray(noisy_array).save(os.path.join(output_dir, 'noisy_image.png'))

    print(f"Sample images generated in {output_dir}/ folder")


def write_input_image(path: str = INPUT_FILENAME):
    """Write the demo scene where the application looks for its input."""
    Image.fromarray(make_demo_scene()).save(path, format='JPEG', quality=95)
    print(f"Demo input written to {os.path.abspath(path)}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description='Generate sample images')
    parser.add_argument('--output-dir', default='sample_data', help='Directory for sample images')
    parser.add_argument('--input-image', action='store_true',
                        help=f'Also write {INPUT_FILENAME} to the current directory')
    args = parser.parse_args()

    generate_sample_images(args.output_dir)
    if args.input_image:
        write_input_image()
