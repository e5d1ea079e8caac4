#!/usr/bin/env python3
"""
Example script computing foreground and background likelihood maps from scribbles.
"""

import argparse
import logging

import numpy as np
import matplotlib.pyplot as plt
from PIL import Image, ImageCms
from colorkde import binarize_scribble, class_probabilities, save_class_densities, validate_masks


def rgb_to_lab(rgb):
    """
    Convert a uint8 [height, width, 3] sRGB array to CIE Lab.

    L is scaled to [0, 255]. Pillow stores a* and b* as signed bytes, they are
    shifted by 128 so neutral colours sit at 128 and the value axis is
    continuous.
    """
    img = Image.fromarray(np.ascontiguousarray(rgb, dtype=np.uint8))
    srgb = ImageCms.createProfile("sRGB")
    lab = ImageCms.createProfile("LAB")
    transform = ImageCms.buildTransformFromOpenProfiles(srgb, lab, "RGB", "LAB")
    out = np.array(ImageCms.applyTransform(img, transform), dtype=np.uint8)
    out[..., 1:] = (out[..., 1:].view(np.int8).astype(np.int16) + 128).astype(np.uint8)
    return out


def load_lab_image(image_path):
    """Load an image and return its CIE Lab channels as a uint8 [height, width, 3] array."""
    return rgb_to_lab(np.asarray(Image.open(image_path).convert("RGB")))


def load_scribble(path, shape):
    """Load a scribble overlay and binarize it so drawn pixels become 255."""
    img = Image.open(path)
    if img.mode != 'L':
        img = img.convert('L')
    scribble = np.asarray(img)
    if scribble.shape != shape:
        raise ValueError(f"Scribble {path} must match image size, got {scribble.shape} vs {shape}")
    return binarize_scribble(scribble)


def imagesc(ax, values, title):
    """Show values scaled to their own min and max, like MATLAB's imagesc."""
    vmin, vmax = float(values.min()), float(values.max())
    logging.info(f"[{title}] min = {vmin:g}, max = {vmax:g}")
    ax.imshow(values, cmap='jet', vmin=vmin, vmax=vmax)
    ax.set_title(title)
    ax.axis('off')


def visualize_results(image, fg_prob, bg_prob):
    """Visualize the input image and both class likelihood maps."""
    fig, axes = plt.subplots(1, 3, figsize=(15, 5))

    axes[0].imshow(image)
    axes[0].set_title('Original Image')
    axes[0].axis('off')

    imagesc(axes[1], fg_prob, 'Foreground likelihood')
    imagesc(axes[2], bg_prob, 'Background likelihood')

    plt.tight_layout()
    plt.show()


def main():
    parser = argparse.ArgumentParser(description='Colour likelihood maps from foreground/background scribbles')
    parser.add_argument('image_path', help='Path to the input image')
    parser.add_argument('fg_scribble', help='Foreground scribble overlay, dark strokes on white')
    parser.add_argument('bg_scribble', help='Background scribble overlay, dark strokes on white')
    parser.add_argument('--method', default='gaussian', choices=['gaussian', 'median'],
                        help='Histogram smoothing method (default: gaussian)')
    parser.add_argument('--no-smoothing', action='store_true', help='use raw histograms')
    parser.add_argument('--sigma', type=float, default=2.0, help='Gaussian bandwidth in bins (default: 2.0)')
    parser.add_argument('--size', type=int, default=5, help='Median window in bins (default: 5)')
    parser.add_argument('--workers', type=int, default=0, help='threads for per-channel estimation')
    parser.add_argument('--export', help='write the density table to this file for plot_densities.py')
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    print("Loading image...")
    rgb = np.asarray(Image.open(args.image_path).convert("RGB"))
    lab = load_lab_image(args.image_path)

    print("Loading scribbles...")
    fg_mask = load_scribble(args.fg_scribble, lab.shape[:2])
    bg_mask = load_scribble(args.bg_scribble, lab.shape[:2])
    validate_masks(fg_mask, bg_mask)

    if args.export:
        save_class_densities(args.export, lab, fg_mask, bg_mask,
                             smoothing=not args.no_smoothing, method=args.method,
                             sigma=args.sigma, size=args.size)

    print("Computing class likelihoods...")
    fg_prob, bg_prob = class_probabilities(lab, fg_mask, bg_mask,
                                           smoothing=not args.no_smoothing,
                                           method=args.method,
                                           sigma=args.sigma,
                                           size=args.size,
                                           workers=args.workers)

    # Pixels where foreground is more likely than background
    total = fg_prob + bg_prob
    fg_share = np.divide(fg_prob, total, out=np.full_like(total, 0.5), where=total > 0)
    print("\nStatistics:")
    print(f"Image shape: {lab.shape[:2]}")
    print(f"Foreground samples: {int(np.count_nonzero(fg_mask))}")
    print(f"Background samples: {int(np.count_nonzero(bg_mask))}")
    print(f"Pixels favouring foreground: {100 * np.mean(fg_share > 0.5):.1f}%")

    print("\nDisplaying visualization...")
    visualize_results(rgb, fg_prob, bg_prob)


if __name__ == "__main__":
    main()
