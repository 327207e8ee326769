"""
Bicycle Configuration System

Provides YAML-based configuration loading for bicycle parameters and
stability analysis setup.
"""

import yaml
import numpy as np
from typing import Dict, Any

from ..core.parameters import BicycleParameters
from ..core.state_space import DEFAULT_MAX_CONDITION
from ..analysis.stability import StabilityAnalyzer


class BicycleConfig:
    """
    Bicycle configuration loaded from YAML file.

    Attributes
    ----------
    name : str
        Bicycle name
    parameters : BicycleParameters
        Benchmark defaults overridden by the configured values
    speed : float
        Forward speed for single-point analysis (m/s)
    speed_range : list
        [start, stop, count] for speed sweeps
    max_condition : float
        Condition number limit for the mass matrix
    """

    def __init__(self, config_dict: Dict[str, Any]):
        """
        Initialize bicycle configuration from dictionary.

        Parameters
        ----------
        config_dict : dict
            Configuration dictionary (typically from YAML)

        Raises
        ------
        InvalidParameterValue
            If a parameter value is not numeric
        ValueError
            If a section has the wrong structure
        """
        self.raw_config = config_dict or {}
        self._parse_config()

    def _parse_config(self):
        """Parse configuration dictionary."""
        bicycle = self.raw_config.get('bicycle') or {}
        analysis = self.raw_config.get('analysis') or {}

        self.name = bicycle.get('name', 'Unnamed Bicycle')

        overrides = bicycle.get('parameters', {}) or {}
        if not isinstance(overrides, dict):
            raise ValueError(f"bicycle.parameters must be a mapping, got {type(overrides).__name__}")
        self.parameters = BicycleParameters().with_overrides(overrides)

        self.speed = float(analysis.get('speed', 5.0))

        self.speed_range = list(analysis.get('speed_range', [0.0, 10.0, 101]))
        if len(self.speed_range) != 3:
            raise ValueError(f"analysis.speed_range must be [start, stop, count], got {self.speed_range}")

        self.max_condition = float(analysis.get('max_condition', DEFAULT_MAX_CONDITION))

    def speeds(self) -> np.ndarray:
        """Speeds for a sweep, from speed_range."""
        start, stop, count = self.speed_range
        return np.linspace(float(start), float(stop), int(count))

    def create_analyzer(self) -> StabilityAnalyzer:
        """
        Create StabilityAnalyzer from configuration.

        Returns
        -------
        StabilityAnalyzer
            Configured analyzer
        """
        return StabilityAnalyzer(self.parameters, max_condition=self.max_condition)

    def __repr__(self):
        """String representation."""
        return (f"BicycleConfig(name='{self.name}', "
                f"speed={self.speed}, "
                f"speed_range={self.speed_range})")


def load_bicycle_config(yaml_file: str) -> BicycleConfig:
    """
    Load bicycle configuration from YAML file.

    Parameters
    ----------
    yaml_file : str
        Path to YAML configuration file

    Returns
    -------
    BicycleConfig
        Loaded bicycle configuration

    Examples
    --------
    >>> config = load_bicycle_config('examples/benchmark.yaml')
    >>> analyzer = config.create_analyzer()
    >>> eigs = analyzer.eigenvalues(config.speed)
    """
    with open(yaml_file, 'r') as f:
        config_dict = yaml.safe_load(f)

    return BicycleConfig(config_dict)


def save_bicycle_config(config: BicycleConfig, yaml_file: str):
    """
    Save bicycle configuration to YAML file.

    The parameter section is written in full, so the file reproduces the
    parameter set even if the defaults change.
    """
    config_dict = dict(config.raw_config)
    bicycle = dict(config_dict.get('bicycle') or {})
    bicycle['name'] = config.name
    bicycle['parameters'] = config.parameters.as_dict()
    config_dict['bicycle'] = bicycle
    config_dict['analysis'] = {
        'speed': config.speed,
        'speed_range': config.speed_range,
        'max_condition': config.max_condition
    }

    with open(yaml_file, 'w') as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)

    print(f"Configuration saved to: {yaml_file}")


def create_example_config() -> Dict[str, Any]:
    """
    Create example bicycle configuration dictionary.

    Returns
    -------
    dict
        Example configuration (benchmark bicycle)
    """
    config = {
        'bicycle': {
            'name': 'Benchmark bicycle',
            'parameters': BicycleParameters().as_dict()
        },
        'analysis': {
            'speed': 5.0,                     # m/s
            'speed_range': [0.0, 10.0, 101],  # start, stop, count
            'max_condition': DEFAULT_MAX_CONDITION
        }
    }

    return config
