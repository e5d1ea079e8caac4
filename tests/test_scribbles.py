"""
Tests for the scribble mask helpers.
"""

import unittest

import numpy as np

from colorkde import DimensionMismatch, binarize_scribble, validate_masks


class TestScribbles(unittest.TestCase):

    def test_binarize_dark_strokes(self):
        scribble = np.array([[0, 255], [10, 0]], dtype=np.uint8)
        mask = binarize_scribble(scribble)
        self.assertEqual(mask.dtype, np.uint8)
        self.assertTrue(np.array_equal(mask, [[255, 0], [0, 255]]))

    def test_binarize_bright_strokes(self):
        scribble = np.array([[0, 255], [10, 128]], dtype=np.uint8)
        mask = binarize_scribble(scribble, threshold=128, invert=False)
        self.assertTrue(np.array_equal(mask, [[0, 255], [0, 255]]))

    def test_overlapping_masks_warn(self):
        fg = np.array([[1, 1], [0, 0]], dtype=np.uint8)
        bg = np.array([[0, 1], [1, 1]], dtype=np.uint8)
        with self.assertLogs("colorkde.scribbles", level="WARNING") as cm:
            validate_masks(fg, bg)
        self.assertIn("1 pixels", cm.output[0])

    def test_mask_shapes_must_match(self):
        with self.assertRaises(DimensionMismatch):
            validate_masks(np.zeros((2, 2)), np.zeros((2, 3)))


if __name__ == "__main__":
    unittest.main()
