"""
Helpers turning user scribble overlays into class sample masks.
"""

import logging

import numpy as np

from .errors import DimensionMismatch

logger = logging.getLogger(__name__)


def binarize_scribble(scribble: np.ndarray, threshold: int = 1, invert: bool = True) -> np.ndarray:
    """
    Binarize a grayscale scribble overlay so drawn pixels become 255.

    Parameters:
    ----------
    scribble : np.ndarray
        Grayscale overlay, shape [height, width]
    threshold : int, optional
        Intensity threshold
        Default: 1
    invert : bool, optional
        If True, strokes are dark on a light canvas and pixels below threshold
        are marked. If False, pixels at or above threshold are marked.
        Default: True

    Returns:
    -------
    np.ndarray
        uint8 mask with values 0 and 255
    """
    s = np.asarray(scribble)
    drawn = s < threshold if invert else s >= threshold
    return np.where(drawn, 255, 0).astype(np.uint8)


def validate_masks(fg_mask: np.ndarray, bg_mask: np.ndarray) -> None:
    """Check that foreground and background masks can be used together."""
    fg = np.asarray(fg_mask) != 0
    bg = np.asarray(bg_mask) != 0
    if fg.shape != bg.shape:
        raise DimensionMismatch(fg.shape, bg.shape, what="Foreground and background masks")
    overlap = int(np.count_nonzero(fg & bg))
    if overlap:
        logger.warning(f"{overlap} pixels are marked as both foreground and background")
