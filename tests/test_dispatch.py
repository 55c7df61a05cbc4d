"""
Unit tests for filter dispatch and session state.
"""
import os
import tempfile
import unittest
from unittest import mock

import numpy as np
from PIL import Image

from image_filter.dispatch import (
    FilterSelection,
    FilterSession,
    FILTER_OPTIONS,
    EDGE_FILTERS,
    apply_filter,
)
from image_filter.errors import ImageLoadError, NoImageLoadedError
from image_filter.image_data import ImageData
from image_filter.processing import to_grayscale, apply_sobel


def color_image():
    rng = np.random.default_rng(42)
    return ImageData(rng.integers(0, 256, (10, 12, 3), dtype=np.uint8))


class TestFilterSelection(unittest.TestCase):

    def test_labels_in_dropdown_order(self):
        self.assertEqual(FILTER_OPTIONS, ["Original Image", "Grayscale", "Differential",
                                          "Gradient", "Prewitt", "Sobel", "Modified Sobel"])

    def test_from_label(self):
        self.assertIs(FilterSelection.from_label("Modified Sobel"), FilterSelection.MODIFIED_SOBEL)
        with self.assertRaises(ValueError):
            FilterSelection.from_label("Laplacian")

    def test_every_edge_selection_has_a_filter(self):
        expected = set(FilterSelection) - {FilterSelection.ORIGINAL, FilterSelection.GRAYSCALE}
        self.assertEqual(set(EDGE_FILTERS), expected)


class TestApplyFilter(unittest.TestCase):

    def test_no_image_loaded(self):
        for selection in FilterSelection:
            with self.subTest(selection.value):
                with self.assertRaises(NoImageLoadedError):
                    apply_filter(selection, None, None)

    def test_original_and_grayscale_are_references(self):
        original = color_image()
        grayscale = to_grayscale(original)

        self.assertIs(apply_filter(FilterSelection.ORIGINAL, original, grayscale), original)
        self.assertIs(apply_filter("Grayscale", original, grayscale), grayscale)

    def test_edge_filters_run_on_grayscale(self):
        original = color_image()
        grayscale = to_grayscale(original)

        result = apply_filter(FilterSelection.SOBEL, original, grayscale)
        self.assertEqual(result, apply_sobel(grayscale))


class TestFilterSession(unittest.TestCase):

    def setUp(self):
        self.converter = mock.Mock(wraps=to_grayscale)
        self.session = FilterSession(converter=self.converter)
        self.original = color_image()
        self.session.set_image(self.original)

    def test_initial_state_after_load(self):
        self.assertTrue(self.session.has_image)
        self.assertIs(self.session.processed_image, self.original)
        self.assertEqual(self.session.selection, FilterSelection.ORIGINAL)
        self.assertEqual(self.converter.call_count, 1)

    def test_grayscale_is_cached(self):
        first = self.session.apply(FilterSelection.GRAYSCALE)
        self.session.apply("Sobel")
        second = self.session.apply("Grayscale")

        self.assertIs(first, second)
        self.assertIs(second, self.session.grayscale_image)
        self.assertEqual(self.converter.call_count, 1)

    def test_original_returns_loaded_image(self):
        self.session.apply("Prewitt")
        result = self.session.apply("Original Image")

        self.assertIs(result, self.original)
        self.assertIs(self.session.processed_image, self.original)

    def test_every_selection_updates_processed_image(self):
        for label in FILTER_OPTIONS:
            with self.subTest(label):
                result = self.session.apply(label)
                self.assertIs(self.session.processed_image, result)
                self.assertEqual(self.session.selection.value, label)
                self.assertEqual((result.width, result.height), (12, 10))

        self.assertEqual(self.converter.call_count, 1)

    def test_edge_filters_allocate_new_images(self):
        first = self.session.apply("Gradient")
        second = self.session.apply("Gradient")

        self.assertIsNot(first, second)
        self.assertEqual(first, second)

    def test_unknown_label_keeps_state(self):
        self.session.apply("Sobel")
        processed = self.session.processed_image

        with self.assertRaises(ValueError):
            self.session.apply("Emboss")
        self.assertIs(self.session.processed_image, processed)

    def test_empty_session_fails_gracefully(self):
        session = FilterSession()

        self.assertFalse(session.has_image)
        with self.assertRaises(NoImageLoadedError):
            session.apply("Sobel")
        with self.assertRaises(NoImageLoadedError):
            session.save(os.path.join(tempfile.gettempdir(), "never_written.jpg"))

    def test_set_image_rejects_none(self):
        with self.assertRaises(ValueError):
            self.session.set_image(None)

    def test_load_and_save(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            input_path = os.path.join(tmp_dir, "Image.jpg")
            Image.fromarray(self.original.pixels).save(input_path, format='JPEG')

            session = FilterSession()
            loaded = session.load(input_path)
            self.assertEqual((loaded.width, loaded.height), (12, 10))

            session.apply("Modified Sobel")
            output_path = session.save(os.path.join(tmp_dir, "processed_image.jpg"))

            self.assertTrue(os.path.isabs(output_path))
            self.assertTrue(os.path.exists(output_path))
            with Image.open(output_path) as saved:
                self.assertEqual(saved.size, (12, 10))

    def test_failed_load_leaves_no_image(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            with self.assertRaises(ImageLoadError):
                self.session.load(os.path.join(tmp_dir, "missing.jpg"))

        self.assertFalse(self.session.has_image)
        self.assertIsNone(self.session.processed_image)
        with self.assertRaises(NoImageLoadedError):
            self.session.apply("Original Image")

if __name__ == '__main__':
    unittest.main()
