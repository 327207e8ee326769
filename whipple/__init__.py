"""
Linearized stability analysis of the Whipple bicycle model.
"""

from .core import BicycleParameters, compute_eigenvalues, create_default

__version__ = '0.1.0'

__all__ = ['BicycleParameters', 'compute_eigenvalues', 'create_default']
