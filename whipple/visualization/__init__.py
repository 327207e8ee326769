"""
Visualization Module

Provides plotting of bicycle stability results.
"""

from .plotting import (
    plot_eigenvalues_vs_speed,
    plot_root_locus,
    setup_plotting_style
)

__all__ = [
    'plot_eigenvalues_vs_speed',
    'plot_root_locus',
    'setup_plotting_style'
]
