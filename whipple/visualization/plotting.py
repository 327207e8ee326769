"""
Standard Plotting Functions

Provides visualization of bicycle stability results: eigenvalues versus
forward speed and root-locus plots in the complex plane.
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from typing import Optional, Tuple


def plot_eigenvalues_vs_speed(
    speeds: np.ndarray,
    eigenvalues: np.ndarray,
    stable_range: Optional[Tuple[float, float]] = None,
    title: str = "Eigenvalues vs Speed",
    figsize: Tuple[float, float] = (10, 6),
    save_path: Optional[str] = None
) -> Figure:
    """
    Plot real and imaginary parts of the eigenvalues against speed.

    Parameters
    ----------
    speeds : np.ndarray
        Forward speeds (N,)
    eigenvalues : np.ndarray
        Complex eigenvalues (N, 4), e.g. from StabilityAnalyzer.speed_sweep
    stable_range : Tuple[float, float], optional
        (weave speed, capsize speed); shaded when given
    title : str, optional
        Plot title
    figsize : Tuple[float, float], optional
        Figure size in inches
    save_path : Optional[str], optional
        Path to save figure

    Returns
    -------
    Figure
        Matplotlib figure object
    """
    fig, ax = plt.subplots(figsize=figsize)

    ax.plot(speeds, eigenvalues.real, 'k.', markersize=3)
    ax.plot(speeds, np.abs(eigenvalues.imag), 'b.', markersize=2)

    # Proxy artists for a compact legend
    ax.plot([], [], 'k.', label='Real part')
    ax.plot([], [], 'b.', label='|Imaginary part|')

    if stable_range is not None:
        ax.axvspan(stable_range[0], stable_range[1], color='g', alpha=0.15, label='Self-stable')

    ax.axhline(y=0, color='k', linestyle='--', alpha=0.5)
    ax.set_xlabel('Speed (m/s)', fontsize=11)
    ax.set_ylabel('Eigenvalue (1/s)', fontsize=11)
    ax.set_title(title, fontsize=13, fontweight='bold')
    ax.set_ylim(-10, 10)
    ax.legend(loc='best')
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig


def plot_root_locus(
    eigenvalues: np.ndarray,
    speeds: Optional[np.ndarray] = None,
    title: str = "Root Locus",
    figsize: Tuple[float, float] = (8, 8),
    save_path: Optional[str] = None
) -> Figure:
    """
    Plot eigenvalues in the complex plane, coloured by speed.

    Parameters
    ----------
    eigenvalues : np.ndarray
        Complex eigenvalues (N, 4)
    speeds : np.ndarray, optional
        Forward speeds (N,) for the colour scale
    title : str, optional
        Plot title
    figsize : Tuple[float, float], optional
        Figure size in inches
    save_path : Optional[str], optional
        Path to save figure

    Returns
    -------
    Figure
        Matplotlib figure object
    """
    fig, ax = plt.subplots(figsize=figsize)

    n_speeds, n_roots = eigenvalues.shape
    colour = np.repeat(speeds if speeds is not None else np.arange(n_speeds), n_roots)

    points = ax.scatter(eigenvalues.real.ravel(), eigenvalues.imag.ravel(),
                        c=colour, cmap='viridis', s=8)

    if speeds is not None:
        fig.colorbar(points, ax=ax, label='Speed (m/s)')

    ax.axvline(x=0, color='k', linestyle='--', alpha=0.5)
    ax.axhline(y=0, color='k', linewidth=0.5, alpha=0.5)
    ax.set_xlabel('Real (1/s)', fontsize=11)
    ax.set_ylabel('Imaginary (rad/s)', fontsize=11)
    ax.set_title(title, fontsize=13, fontweight='bold')
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig


def setup_plotting_style():
    """Light background and faint grid for eigenvalue plots."""
    plt.rcParams['figure.facecolor'] = 'white'
    plt.rcParams['axes.grid'] = True
    plt.rcParams['grid.alpha'] = 0.3
    plt.rcParams['font.size'] = 10
    plt.rcParams['lines.markersize'] = 3
