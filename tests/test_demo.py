"""
Tests for the Lab conversion used by the example script.
"""

import importlib.util
import os
import unittest

import numpy as np

DEMO_PATH = os.path.join(os.path.dirname(__file__), "..", "examples", "probability_demo.py")
HAS_EXAMPLE_DEPS = all(importlib.util.find_spec(m) is not None for m in ("PIL", "matplotlib"))


def _load_demo():
    os.environ.setdefault("MPLBACKEND", "Agg")
    spec = importlib.util.spec_from_file_location("probability_demo", DEMO_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@unittest.skipUnless(HAS_EXAMPLE_DEPS, "needs the examples extra (pillow, matplotlib)")
class TestRgbToLab(unittest.TestCase):

    def setUp(self):
        self.demo = _load_demo()

    def test_neutral_colours_centered(self):
        rgb = np.array([[[128, 128, 128], [0, 0, 0], [255, 255, 255]]], dtype=np.uint8)
        lab = self.demo.rgb_to_lab(rgb)
        self.assertEqual(lab.shape, (1, 3, 3))
        self.assertEqual(lab.dtype, np.uint8)
        self.assertTrue(np.all(np.abs(lab[..., 1:].astype(int) - 128) <= 2))

    def test_near_neutral_axis_is_continuous(self):
        rgb = np.array([[[128, 128, 128], [120, 135, 128], [135, 120, 128],
                         [128, 128, 140], [128, 128, 115]]], dtype=np.uint8)
        lab = self.demo.rgb_to_lab(rgb)[0].astype(int)
        a, b = lab[:, 1], lab[:, 2]
        self.assertTrue(np.all(np.abs(a - 128) <= 20))
        self.assertTrue(np.all(np.abs(b - 128) <= 20))
        # Greenish below neutral, reddish above it
        self.assertLess(a[1], a[0])
        self.assertGreater(a[2], a[0])
        # Bluish below neutral, yellowish above it
        self.assertLess(b[3], b[0])
        self.assertGreater(b[4], b[0])


if __name__ == "__main__":
    unittest.main()
