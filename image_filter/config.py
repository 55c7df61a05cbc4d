"""
Fixed application settings: file names, output format and window layout.
"""

INPUT_FILENAME = "Image.jpg"
OUTPUT_FILENAME = "processed_image.jpg"
OUTPUT_FORMAT = "JPEG"

WINDOW_TITLE = "Image Filter Application"
WINDOW_GEOMETRY = "1200x900"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
