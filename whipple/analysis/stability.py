"""
Stability Analysis Tools

Provides speed-dependent stability analysis of the Whipple bicycle:
- Eigenvalues over a range of forward speeds
- Identify weave, capsize and castor modes
- Locate the weave and capsize critical speeds
- Print a stability report
"""

import numpy as np
from scipy.optimize import brentq
from typing import Dict, List, Optional, Sequence, Tuple
from dataclasses import dataclass

from ..core.matrices import EquationsOfMotion, assemble_mkc
from ..core.parameters import BicycleParameters
from ..core.state_space import DEFAULT_MAX_CONDITION, sorted_eigenvalues, state_matrix


@dataclass
class BicycleMode:
    """
    Represents an eigenmode of the bicycle at one forward speed.

    Attributes
    ----------
    name : str
        Mode name ('Weave', 'Capsize', 'Castor', or 'Fall (slow)' and
        'Fall (fast)' for the real weave branch at low speed)
    eigenvalue : complex
        Complex eigenvalue (the positive-imaginary member of a conjugate pair)
    damping_ratio : float
        Damping ratio ζ
    natural_frequency : float
        Natural frequency ωn (rad/s)
    period : float
        Period of oscillation (seconds)
    time_to_half : float
        Time to half amplitude (seconds, inf when not decaying)
    """
    name: str
    eigenvalue: complex
    damping_ratio: float
    natural_frequency: float
    period: float
    time_to_half: float

    @property
    def is_stable(self) -> bool:
        return self.eigenvalue.real < 0


def classify_eigenvalues(eigenvalues: np.ndarray) -> Dict[str, np.ndarray]:
    """
    Label sorted eigenvalues with their mode branch.

    The weave branch is the complex conjugate pair or, below the speed at
    which the pair forms, the two largest real roots. Of the remaining two
    real roots the more negative is castor, the other capsize.

    Parameters
    ----------
    eigenvalues : ndarray
        Four eigenvalues sorted by real part

    Returns
    -------
    dict
        Mode name to array of its eigenvalue(s)
    """
    eigenvalues = np.asarray(eigenvalues, dtype=complex)
    oscillatory = np.abs(eigenvalues.imag) > 1e-12

    if np.count_nonzero(oscillatory) >= 2:
        weave = eigenvalues[oscillatory][:2]
        real_roots = np.sort(eigenvalues[~oscillatory].real)
        if real_roots.size < 2:
            # Two oscillatory pairs: the faster decaying pair takes castor's place
            return {'Castor': eigenvalues[:2], 'Weave': eigenvalues[2:]}
    else:
        weave = eigenvalues[2:]
        real_roots = eigenvalues[:2].real

    return {
        'Castor': np.array([real_roots[0]], dtype=complex),
        'Capsize': np.array([real_roots[1]], dtype=complex),
        'Weave': weave
    }


def _make_mode(name: str, lam: complex) -> BicycleMode:
    sigma = np.real(lam)
    omega = np.abs(np.imag(lam))

    if omega > 0:
        omega_n = np.sqrt(sigma**2 + omega**2)
        zeta = -sigma / omega_n if omega_n > 0 else 0
        period = 2 * np.pi / omega
    else:
        omega_n = np.abs(sigma)
        zeta = 1.0  # Overdamped
        period = np.inf

    time_to_half = np.log(2) / (-sigma) if sigma < 0 else np.inf

    return BicycleMode(
        name=name,
        eigenvalue=complex(sigma, omega),
        damping_ratio=zeta,
        natural_frequency=omega_n,
        period=period,
        time_to_half=time_to_half
    )


class StabilityAnalyzer:
    """
    Stability analysis for the Whipple bicycle.

    The speed-independent matrices are assembled once; eigenvalues at any
    forward speed are then cheap to evaluate.
    """

    def __init__(self, params: BicycleParameters, max_condition: float = DEFAULT_MAX_CONDITION):
        """
        Initialize stability analyzer.

        Parameters
        ----------
        params : BicycleParameters
            Bicycle parameters
        max_condition : float, optional
            Condition number limit for the mass matrix
        """
        self.params = params
        self.max_condition = max_condition
        self._eom: Optional[EquationsOfMotion] = None

    def equations_of_motion(self) -> EquationsOfMotion:
        """Speed-independent coefficient matrices (cached)."""
        if self._eom is None:
            self._eom = assemble_mkc(self.params)
        return self._eom

    def state_matrix(self, speed: float) -> np.ndarray:
        """State matrix A(v)."""
        return state_matrix(self.equations_of_motion(), speed, self.max_condition)

    def eigenvalues(self, speed: float) -> np.ndarray:
        """Sorted eigenvalues at a forward speed."""
        return sorted_eigenvalues(self.state_matrix(speed))

    def speed_sweep(self, speeds: Sequence[float]) -> np.ndarray:
        """
        Eigenvalues over a range of speeds.

        Parameters
        ----------
        speeds : sequence of float
            Forward speeds (m/s)

        Returns
        -------
        ndarray
            Complex array of shape (len(speeds), 4)
        """
        return np.array([self.eigenvalues(v) for v in speeds])

    def is_stable(self, speed: float) -> bool:
        """True if all eigenvalues have negative real parts."""
        return bool(np.all(np.real(self.eigenvalues(speed)) < 0))

    def identify_modes(self, speed: float) -> List[BicycleMode]:
        """
        Identify and characterize the modes at a forward speed.

        Returns
        -------
        list of BicycleMode
            One entry per real root and per conjugate pair, sorted by
            natural frequency (descending)
        """
        modes = []

        for name, roots in classify_eigenvalues(self.eigenvalues(speed)).items():
            if np.any(np.abs(roots.imag) > 1e-12):
                # Conjugate pair reported once
                modes.append(_make_mode(name, roots[np.argmax(roots.imag)]))
            elif name == 'Weave':
                # Real weave branch below pair formation: two static falls
                slow, fast = roots[np.argsort(np.abs(roots.real))]
                modes.append(_make_mode('Fall (slow)', slow))
                modes.append(_make_mode('Fall (fast)', fast))
            else:
                for lam in roots:
                    modes.append(_make_mode(name, lam))

        modes.sort(key=lambda m: m.natural_frequency, reverse=True)

        return modes

    def _branch_real_part(self, speed: float, branch: str) -> float:
        branches = classify_eigenvalues(self.eigenvalues(speed))
        if branch not in branches:
            raise ValueError(f"{branch} branch is not present at {speed} m/s")
        roots = branches[branch]
        return float(np.max(roots.real))

    def _critical_speed(self, branch: str, v_min: float, v_max: float, xtol: float) -> float:
        f_min = self._branch_real_part(v_min, branch)
        f_max = self._branch_real_part(v_max, branch)

        if np.sign(f_min) == np.sign(f_max):
            raise ValueError(
                f"{branch} real part does not change sign between "
                f"{v_min} and {v_max} m/s ({f_min:.4g}, {f_max:.4g})"
            )

        return brentq(self._branch_real_part, v_min, v_max, args=(branch,), xtol=xtol)

    def weave_speed(self, v_min: float = 1.0, v_max: float = 10.0, xtol: float = 1e-12) -> float:
        """
        Speed at which the weave mode becomes stable.

        Raises
        ------
        ValueError
            If the weave real part does not change sign over [v_min, v_max]
        """
        return self._critical_speed('Weave', v_min, v_max, xtol)

    def capsize_speed(self, v_min: float = 1.0, v_max: float = 10.0, xtol: float = 1e-12) -> float:
        """
        Speed above which the capsize mode becomes unstable.

        Raises
        ------
        ValueError
            If the capsize root does not change sign over [v_min, v_max]
        """
        return self._critical_speed('Capsize', v_min, v_max, xtol)

    def stable_speed_range(self, v_min: float = 1.0, v_max: float = 10.0) -> Tuple[float, float]:
        """Self-stable speed interval (weave speed, capsize speed)."""
        return self.weave_speed(v_min, v_max), self.capsize_speed(v_min, v_max)

    def print_stability_report(self, speed: float):
        """
        Print comprehensive stability analysis report.

        Parameters
        ----------
        speed : float
            Forward speed (m/s)
        """
        eom = self.equations_of_motion()

        print("=" * 70)
        print("STABILITY ANALYSIS REPORT")
        print("=" * 70)
        print()

        print(f"Forward speed: {speed:.3f} m/s")
        print()

        for name in ('M', 'C1', 'K0', 'K2'):
            matrix = getattr(eom, name)
            print(f"{name}:")
            for row in matrix:
                print("  " + "  ".join(f"{value:>16.10f}" for value in row))
        print()

        print("Eigenvalues:")
        for lam in self.eigenvalues(speed):
            print(f"  {lam.real:>16.10f} {lam.imag:+16.10f}j")
        print()

        is_stable = self.is_stable(speed)
        print(f"System Stability: {'STABLE' if is_stable else 'UNSTABLE'}")
        print()

        modes = self.identify_modes(speed)

        print("Modes:")
        print("-" * 70)
        print(f"{'Mode':<15} {'Freq (rad/s)':<12} {'Damp Ratio':<12} {'Period (s)':<12} {'T_half (s)':<12}")
        print("-" * 70)

        for mode in modes:
            period_str = f"{mode.period:.2f}" if mode.period < 1000 else "N/A"
            t_half_str = f"{mode.time_to_half:.2f}" if mode.time_to_half < 1000 else "N/A"

            print(f"{mode.name:<15} {mode.natural_frequency:<12.4f} {mode.damping_ratio:<12.4f} "
                  f"{period_str:<12} {t_half_str:<12}")

        print()
