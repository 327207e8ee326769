"""
Configuration input/output.
"""

from .config import BicycleConfig, load_bicycle_config, save_bicycle_config, create_example_config

__all__ = ['BicycleConfig', 'load_bicycle_config', 'save_bicycle_config', 'create_example_config']
