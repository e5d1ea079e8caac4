"""
Core functionality for colour density estimation from scribbles.

A density is a 256-entry probability mass function over the intensities of one
8-bit channel, estimated from the pixels selected by a sample mask. Per-pixel
class likelihoods are the product of the channel densities evaluated at the
pixel's intensities, i.e. channels are treated as independent.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence, Tuple

import numpy as np
from scipy.ndimage import gaussian_filter1d, median_filter

from .errors import DimensionMismatch, InvalidChannel

logger = logging.getLogger(__name__)

NUM_BINS = 256
DEFAULT_SIGMA = 2.0
DEFAULT_MEDIAN_SIZE = 5
SMOOTHING_METHODS = ("gaussian", "median")


# --------------------------- Input checks ---------------------------

def _as_channel(channel: np.ndarray) -> np.ndarray:
    arr = np.asarray(channel)
    if arr.dtype == np.uint8:
        return arr
    if not np.issubdtype(arr.dtype, np.integer):
        raise InvalidChannel(f"Channel must hold 8-bit integer values, got dtype {arr.dtype}")
    if arr.size and (arr.min() < 0 or arr.max() >= NUM_BINS):
        raise InvalidChannel(f"Channel values must lie in [0, {NUM_BINS - 1}], "
                             f"got range [{arr.min()}, {arr.max()}]")
    return arr.astype(np.uint8)


def _as_mask(mask: np.ndarray) -> np.ndarray:
    return np.asarray(mask) != 0


def _split_channels(channels: Sequence[np.ndarray]) -> List[np.ndarray]:
    # An (H, W, N) array is split along its last axis
    if isinstance(channels, np.ndarray) and channels.ndim == 3:
        channels = [channels[..., c] for c in range(channels.shape[-1])]
    channels = [_as_channel(ch) for ch in channels]
    if not channels:
        raise ValueError("At least one channel is required")
    shape = channels[0].shape
    for ch in channels[1:]:
        if ch.shape != shape:
            raise DimensionMismatch(shape, ch.shape, what="Channels")
    return channels


def _check_density(density: np.ndarray) -> np.ndarray:
    d = np.asarray(density, dtype=np.float64)
    if d.shape != (NUM_BINS,):
        raise ValueError(f"Density must have {NUM_BINS} entries, got shape {d.shape}")
    if np.any(~np.isfinite(d) | (d < 0)):
        raise ValueError("Density entries must be finite and non-negative")
    return d


# --------------------------- DensityEstimator ---------------------------

def histogram(channel: np.ndarray, mask: np.ndarray) -> np.ndarray:
    """
    Count the sampled intensities of one channel.

    Parameters:
    ----------
    channel : np.ndarray
        8-bit channel buffer, shape [height, width] or flat row-major
    mask : np.ndarray
        Sample mask of the same shape, a pixel is sampled iff non-zero

    Returns:
    -------
    np.ndarray
        int64 array of 256 counts, indexed by intensity
    """
    channel = _as_channel(channel)
    mask = _as_mask(mask)
    if channel.shape != mask.shape:
        raise DimensionMismatch(channel.shape, mask.shape)
    return np.bincount(channel[mask], minlength=NUM_BINS).astype(np.int64)


def smooth_histogram(hist: np.ndarray,
                     method: str = "gaussian",
                     sigma: float = DEFAULT_SIGMA,
                     size: int = DEFAULT_MEDIAN_SIZE) -> np.ndarray:
    """
    Smooth a histogram along the intensity axis.

    "gaussian" is a histogram based kernel density estimate with bandwidth
    sigma (in bins). "median" is rank filter denoising with a window of size
    bins. Both clamp at the borders of the value range. The result is not
    normalised.
    """
    if method not in SMOOTHING_METHODS:
        raise ValueError(f"Smoothing method must be one of {SMOOTHING_METHODS}, got {method!r}")
    h = np.asarray(hist, dtype=np.float64)
    if method == "gaussian":
        if sigma <= 0:
            raise ValueError(f"sigma must be positive, got {sigma}")
        return gaussian_filter1d(h, sigma=sigma, mode="nearest")
    if size < 1:
        raise ValueError(f"Median window size must be at least 1, got {size}")
    return median_filter(h, size=size, mode="nearest")


def estimate_density(channel: np.ndarray,
                     mask: np.ndarray,
                     smoothing: bool = True,
                     method: str = "gaussian",
                     sigma: float = DEFAULT_SIGMA,
                     size: int = DEFAULT_MEDIAN_SIZE) -> np.ndarray:
    """
    Estimate the distribution of one channel's intensities under a mask.

    Parameters:
    ----------
    channel : np.ndarray
        8-bit channel buffer, shape [height, width] or flat row-major
    mask : np.ndarray
        Sample mask of the same shape, a pixel is sampled iff non-zero
    smoothing : bool, optional
        Smooth the histogram before normalisation
        Default: True
    method : str, optional
        "gaussian" or "median", see smooth_histogram
        Default: "gaussian"
    sigma : float, optional
        Gaussian bandwidth in bins
    size : int, optional
        Median window in bins

    Returns:
    -------
    np.ndarray
        float64 array of 256 non-negative values summing to 1, indexed by
        intensity. When the mask selects no pixel the uniform distribution is
        returned.
    """
    counts = histogram(channel, mask)
    total = int(counts.sum())
    if total == 0:
        logger.warning("Empty sample mask, using a uniform density")
        return np.full(NUM_BINS, 1.0 / NUM_BINS, dtype=np.float64)

    if not smoothing:
        logger.debug(f"Density from {total} samples, unsmoothed")
        return counts / float(total)

    smoothed = smooth_histogram(counts, method=method, sigma=sigma, size=size)
    mass = float(smoothed.sum())
    if mass <= 0:
        # Every bin was an isolated spike the median window removed
        logger.warning(f"{method} smoothing removed all {total} samples, using gaussian smoothing")
        smoothed = smooth_histogram(counts, method="gaussian", sigma=sigma)
        mass = float(smoothed.sum())
    logger.debug(f"Density from {total} samples, {method} smoothing")
    return smoothed / mass


# --------------------------- JointProbabilityEstimator ---------------------------

def channel_densities(channels: Sequence[np.ndarray],
                      mask: np.ndarray,
                      smoothing: bool = True,
                      method: str = "gaussian",
                      sigma: float = DEFAULT_SIGMA,
                      size: int = DEFAULT_MEDIAN_SIZE,
                      workers: int = 0) -> List[np.ndarray]:
    """
    Estimate one density per channel, all with the same sample mask.

    channels is a sequence of same-shape 8-bit buffers, or an array of shape
    [height, width, N]. With workers > 0 the channels are processed on a
    thread pool.
    """
    channels = _split_channels(channels)
    mask = _as_mask(mask)
    if mask.shape != channels[0].shape:
        raise DimensionMismatch(channels[0].shape, mask.shape)

    def task(ch):
        return estimate_density(ch, mask, smoothing=smoothing, method=method, sigma=sigma, size=size)

    if workers and workers > 0:
        with ThreadPoolExecutor(max_workers=int(workers)) as ex:
            return list(ex.map(task, channels))
    return [task(ch) for ch in channels]


def probability_from_densities(channels: Sequence[np.ndarray], densities: Sequence[np.ndarray]) -> np.ndarray:
    """
    Evaluate the joint likelihood of every pixel under per-channel densities.

    out[i] = densities[0][channels[0][i]] * ... * densities[N-1][channels[N-1][i]]

    The product is taken in float64 linear space.
    """
    channels = _split_channels(channels)
    densities = [_check_density(d) for d in densities]
    if len(densities) != len(channels):
        raise ValueError(f"Need one density per channel, got {len(densities)} for {len(channels)} channels")

    out = np.ones(channels[0].shape, dtype=np.float64)
    for ch, d in zip(channels, densities):
        out *= d[ch]
    return out


def log_probability_from_densities(channels: Sequence[np.ndarray], densities: Sequence[np.ndarray]) -> np.ndarray:
    """Log of probability_from_densities, -inf where any density is zero."""
    channels = _split_channels(channels)
    densities = [_check_density(d) for d in densities]
    if len(densities) != len(channels):
        raise ValueError(f"Need one density per channel, got {len(densities)} for {len(channels)} channels")

    out = np.zeros(channels[0].shape, dtype=np.float64)
    with np.errstate(divide="ignore"):
        for ch, d in zip(channels, densities):
            out += np.log(d)[ch]
    return out


def joint_probability(channels: Sequence[np.ndarray],
                      mask: np.ndarray,
                      smoothing: bool = True,
                      method: str = "gaussian",
                      sigma: float = DEFAULT_SIGMA,
                      size: int = DEFAULT_MEDIAN_SIZE,
                      workers: int = 0) -> np.ndarray:
    """
    Compute the per-pixel likelihood map of the class sampled by mask.

    Parameters:
    ----------
    channels : sequence of np.ndarray or np.ndarray
        N same-shape 8-bit channel buffers, or one [height, width, N] array
    mask : np.ndarray
        Class sample mask, same shape as each channel
    smoothing : bool, optional
        Smooth each channel histogram
        Default: True
    method : str, optional
        Smoothing method, "gaussian" or "median"
    sigma : float, optional
        Gaussian bandwidth in bins
    size : int, optional
        Median window in bins
    workers : int, optional
        Thread count for the per-channel estimation, 0 runs serially

    Returns:
    -------
    np.ndarray
        float64 map with the shape of a channel, entries >= 0. It is a
        relative likelihood surface and does not sum to 1.
    """
    channels = _split_channels(channels)
    densities = channel_densities(channels, mask, smoothing=smoothing, method=method,
                                  sigma=sigma, size=size, workers=workers)
    return probability_from_densities(channels, densities)


def class_probabilities(channels: Sequence[np.ndarray],
                        fg_mask: np.ndarray,
                        bg_mask: np.ndarray,
                        smoothing: bool = True,
                        method: str = "gaussian",
                        sigma: float = DEFAULT_SIGMA,
                        size: int = DEFAULT_MEDIAN_SIZE,
                        workers: int = 0) -> Tuple[np.ndarray, np.ndarray]:
    """Foreground and background likelihood maps computed with the same settings."""
    fg_mask = _as_mask(fg_mask)
    bg_mask = _as_mask(bg_mask)
    if fg_mask.shape != bg_mask.shape:
        raise DimensionMismatch(fg_mask.shape, bg_mask.shape, what="Foreground and background masks")
    channels = _split_channels(channels)
    fg = joint_probability(channels, fg_mask, smoothing=smoothing, method=method,
                           sigma=sigma, size=size, workers=workers)
    bg = joint_probability(channels, bg_mask, smoothing=smoothing, method=method,
                           sigma=sigma, size=size, workers=workers)
    logger.info(f"Class maps {fg.shape}, fg samples {int(fg_mask.sum())}, bg samples {int(bg_mask.sum())}")
    return fg, bg
