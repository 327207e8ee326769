"""
Analysis tools for bicycle dynamics.

This module provides speed sweeps, mode identification and critical speeds.
"""

from .stability import BicycleMode, StabilityAnalyzer, classify_eigenvalues

__all__ = ['BicycleMode', 'StabilityAnalyzer', 'classify_eigenvalues']
