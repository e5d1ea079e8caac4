#!/usr/bin/env python3
"""
Plot a density table written by colorkde.save_class_densities.
"""

import argparse

import numpy as np
import matplotlib.pyplot as plt
from colorkde import load_class_densities


def main():
    parser = argparse.ArgumentParser(description='Plot foreground and background channel densities')
    parser.add_argument('table', help='Density table file')
    parser.add_argument('--names', default='L,a,b', help='Comma separated channel names (default: L,a,b)')
    args = parser.parse_args()

    fg, bg = load_class_densities(args.table)
    names = args.names.split(',')

    fig, axes = plt.subplots(len(fg), 1, figsize=(8, 3 * len(fg)), squeeze=False)
    for c, (fg_d, bg_d) in enumerate(zip(fg, bg)):
        ax = axes[c, 0]
        x = np.arange(len(fg_d))
        ax.plot(x, fg_d, color='tab:red', label='foreground')
        ax.plot(x, bg_d, color='tab:blue', label='background')
        ax.set_title(names[c] if c < len(names) else f'channel {c}')
        ax.set_xlim(0, len(fg_d) - 1)
        ax.legend()

    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
