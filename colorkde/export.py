"""
Export of density tables for offline plotting.

The table format has one tab separated line per density, every value followed
by a tab. For N channels the file holds 2 * N lines: the foreground density of
channel 0, its background density, then the same pair for channel 1, and so on.
"""

import logging
from pathlib import Path
from typing import List, Sequence, Tuple

import numpy as np

from .core import DEFAULT_MEDIAN_SIZE, DEFAULT_SIGMA, channel_densities

logger = logging.getLogger(__name__)


def _format_line(values) -> str:
    return "".join(f"{float(v):g}\t" for v in values)


def save_vector(path: str, values: Sequence[float]) -> None:
    """Write values as a single tab separated line."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(_format_line(values), encoding="utf-8")


def save_class_densities(path: str,
                         channels,
                         fg_mask: np.ndarray,
                         bg_mask: np.ndarray,
                         smoothing: bool = True,
                         method: str = "gaussian",
                         sigma: float = DEFAULT_SIGMA,
                         size: int = DEFAULT_MEDIAN_SIZE) -> Tuple[List[np.ndarray], List[np.ndarray]]:
    """
    Estimate foreground and background densities for every channel and save them.

    Returns:
    -------
    (fg_densities, bg_densities)
        Lists with one 256-entry density per channel
    """
    fg = channel_densities(channels, fg_mask, smoothing=smoothing, method=method, sigma=sigma, size=size)
    bg = channel_densities(channels, bg_mask, smoothing=smoothing, method=method, sigma=sigma, size=size)

    lines = []
    for fg_d, bg_d in zip(fg, bg):
        lines.append(_format_line(fg_d))
        lines.append(_format_line(bg_d))

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.info(f"Saved {len(fg)} channel density pairs to {p}")
    return fg, bg


def load_class_densities(path: str) -> Tuple[List[np.ndarray], List[np.ndarray]]:
    """Read a table written by save_class_densities."""
    rows = []
    for line in Path(path).read_text(encoding="utf-8").splitlines():
        fields = [f for f in line.split("\t") if f.strip()]
        if fields:
            rows.append(np.array([float(f) for f in fields], dtype=np.float64))
    if len(rows) % 2:
        raise ValueError(f"Expected foreground/background line pairs in {path}, got {len(rows)} lines")
    return rows[0::2], rows[1::2]
