"""
Physical parameters of the Whipple benchmark bicycle.

Four rigid bodies plus global constants, following the benchmark of
Meijaard, Papadopoulos, Ruina and Schwab (2007):

- Rear wheel R
- Rear frame and rider B
- Fork and handlebar H
- Front wheel F

Coordinates are in the rear-contact reference frame: x forward, z down.
"""

from dataclasses import fields, replace
from typing import Any, Dict, List, Mapping

import numpy as np

from archimedes import struct

from .errors import InvalidParameterValue


# External names that are not valid Python identifiers
PARAMETER_ALIASES = {'lambda': 'lam'}


@struct(frozen=True)
class BicycleParameters:
    """
    Immutable set of Whipple bicycle parameters (SI units).

    Defaults are the published benchmark values. Use with_overrides()
    to obtain a modified copy.
    """

    # Global geometry
    w: float = 1.02                 # Wheelbase (m)
    c: float = 0.08                 # Trail (m)
    lam: float = np.pi / 10.0       # Steer axis tilt (rad)
    g: float = 9.81                 # Gravity (m/s^2)

    # Rear wheel
    rR: float = 0.3
    mR: float = 2.0
    IRxx: float = 0.0603
    IRyy: float = 0.12
    IRzz: float = 2.8

    # Rear frame and rider
    xB: float = 0.3
    zB: float = -0.9
    mB: float = 85.0
    IBxx: float = 9.2
    IByy: float = 11.0
    IBzz: float = 2.8
    IBxz: float = 2.4

    # Fork and handlebar
    xH: float = 0.9
    zH: float = -0.7
    mH: float = 4.0
    IHxx: float = 0.05892
    IHyy: float = 0.06
    IHzz: float = 0.00708
    IHxz: float = -0.00756

    # Front wheel
    rF: float = 0.35
    mF: float = 3.0
    IFxx: float = 0.1405
    IFyy: float = 0.28
    IFzz: float = 0.28

    @classmethod
    def names(cls) -> List[str]:
        """Field names in declaration order."""
        return [f.name for f in fields(cls)]

    def with_overrides(self, overrides: Mapping[str, Any]) -> 'BicycleParameters':
        """
        Return a copy with named fields replaced by values from a mapping.

        Keys that are not parameter names are ignored. Each value is parsed
        with float(); strings such as "0.3" are accepted.

        Parameters
        ----------
        overrides : mapping
            Parameter name (or alias, e.g. 'lambda') to value

        Returns
        -------
        BicycleParameters
            New parameter set; self is never modified

        Raises
        ------
        InvalidParameterValue
            If a known key holds a non-numeric or non-finite value. The
            exception's ``applied`` attribute holds the parameter set with
            all overrides preceding the failing key applied.
        """
        known = set(self.names())
        applied = self

        for key, value in overrides.items():
            name = PARAMETER_ALIASES.get(key, key)
            if name not in known:
                continue

            try:
                number = float(value)
            except (TypeError, ValueError) as e:
                raise InvalidParameterValue(key, value, applied) from e

            if not np.isfinite(number):
                raise InvalidParameterValue(key, value, applied)

            applied = replace(applied, **{name: number})

        return applied

    def as_dict(self) -> Dict[str, float]:
        """Flat mapping of external parameter names to values."""
        external = {v: k for k, v in PARAMETER_ALIASES.items()}
        return {external.get(name, name): float(getattr(self, name))
                for name in self.names()}

    def scaled_masses(self, k: float) -> 'BicycleParameters':
        """Copy with every mass and inertia component multiplied by k."""
        scaled = {name: getattr(self, name) * k for name in self.names()
                  if name.startswith('m') or name.startswith('I')}
        return replace(self, **scaled)

    def validate(self) -> List[str]:
        """
        Check the physical invariants of the parameter set.

        Returns
        -------
        list of str
            One message per violated invariant (empty if valid)
        """
        issues = []

        for name in ('mR', 'mB', 'mH', 'mF'):
            if getattr(self, name) <= 0:
                issues.append(f"mass {name} must be positive (got {getattr(self, name)})")

        for name in ('rR', 'rF', 'w'):
            if getattr(self, name) <= 0:
                issues.append(f"{name} must be positive (got {getattr(self, name)})")

        if not 0.0 < self.lam < np.pi / 2:
            issues.append(f"lambda must lie in (0, pi/2) (got {self.lam})")

        return issues

    def __repr__(self):
        """String representation."""
        return (f"BicycleParameters(w={self.w}, c={self.c}, "
                f"lambda={self.lam:.4f}, "
                f"m=[{self.mR}, {self.mB}, {self.mH}, {self.mF}])")


def create_default() -> BicycleParameters:
    """Benchmark bicycle parameter set."""
    return BicycleParameters()


def update(params: BicycleParameters, overrides: Mapping[str, Any]) -> BicycleParameters:
    """Apply overrides to a parameter set. See BicycleParameters.with_overrides."""
    return params.with_overrides(overrides)
