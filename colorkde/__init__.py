"""
colorkde
--------
Colour density estimation from foreground and background scribbles.

Each class is described by one 256-bin density per colour channel, estimated
from the pixels under the user's strokes. A pixel's class likelihood is the
product of its channel densities, which gives the data term of an interactive
segmentation or matting solver.

Example:
    >>> import numpy as np
    >>> from colorkde import class_probabilities
    >>>
    >>> # Three uint8 channels of shape [height, width], e.g. L, a, b
    >>> lab = ...  # Your image loading and colour conversion here
    >>>
    >>> fg_mask = np.zeros(lab.shape[:2], dtype=np.uint8)
    >>> bg_mask = np.zeros(lab.shape[:2], dtype=np.uint8)
    >>> fg_mask[30:40, 30:40] = 255  # Foreground strokes
    >>> bg_mask[0:5, :] = 255        # Background strokes
    >>>
    >>> fg_prob, bg_prob = class_probabilities(lab, fg_mask, bg_mask)
"""

from .core import (
    NUM_BINS,
    channel_densities,
    class_probabilities,
    estimate_density,
    histogram,
    joint_probability,
    log_probability_from_densities,
    probability_from_densities,
    smooth_histogram,
)
from .errors import DimensionMismatch, InvalidChannel
from .export import load_class_densities, save_class_densities, save_vector
from .scribbles import binarize_scribble, validate_masks

__version__ = "0.1.0"
__all__ = [
    "NUM_BINS",
    "estimate_density",
    "histogram",
    "smooth_histogram",
    "channel_densities",
    "joint_probability",
    "probability_from_densities",
    "log_probability_from_densities",
    "class_probabilities",
    "binarize_scribble",
    "validate_masks",
    "save_vector",
    "save_class_densities",
    "load_class_densities",
    "DimensionMismatch",
    "InvalidChannel",
]
