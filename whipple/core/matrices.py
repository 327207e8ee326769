"""
Linearized equations of motion of the Whipple bicycle.

    M q'' + v C1 q' + (g K0 + v^2 K2) q = 0

with q = [lean angle phi, steer angle delta].
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .bodies import CombinedBodyProperties, compute_combined_body_properties
from .parameters import BicycleParameters


@dataclass(frozen=True)
class EquationsOfMotion:
    """
    Speed-independent coefficient matrices of the linearized model.

    Attributes
    ----------
    M : ndarray
        Mass matrix (2x2, symmetric)
    C1 : ndarray
        Velocity-proportional damping-like matrix (2x2)
    K0 : ndarray
        Gravity-dependent stiffness matrix (2x2, symmetric)
    K2 : ndarray
        Velocity-squared stiffness matrix (2x2)
    g : float
        Gravitational acceleration multiplying K0
    """
    M: np.ndarray
    C1: np.ndarray
    K0: np.ndarray
    K2: np.ndarray
    g: float

    def damping(self, speed: float) -> np.ndarray:
        """Damping matrix v*C1."""
        return speed * self.C1

    def stiffness(self, speed: float) -> np.ndarray:
        """Stiffness matrix g*K0 + v^2*K2."""
        return self.g * self.K0 + speed**2 * self.K2

    def is_mass_positive_definite(self) -> bool:
        """True if M is symmetric positive definite."""
        try:
            np.linalg.cholesky(self.M)
        except np.linalg.LinAlgError:
            return False
        return bool(np.allclose(self.M, self.M.T))


def assemble_mkc(p: BicycleParameters,
                 props: Optional[CombinedBodyProperties] = None) -> EquationsOfMotion:
    """
    Assemble M, C1, K0 and K2 from a parameter set.

    Parameters
    ----------
    p : BicycleParameters
        Bicycle parameters
    props : CombinedBodyProperties, optional
        Pre-computed composition results (computed from p if omitted)

    Returns
    -------
    EquationsOfMotion
        Coefficient matrices
    """
    if props is None:
        props = compute_combined_body_properties(p)

    T = props.total
    S = props.steer
    k = props.coupling

    sin_lam, cos_lam = np.sin(p.lam), np.cos(p.lam)
    cw = cos_lam / p.w

    M12 = S.IAlx + k.mu * T.ITxz
    M = np.array([
        [T.ITxx, M12],
        [M12, S.IAll + 2 * k.mu * S.IAlz + k.mu**2 * T.ITzz]
    ])

    K0 = np.array([
        [T.mT * T.zT, -k.SA],
        [-k.SA, -k.SA * sin_lam]
    ])

    K2 = np.array([
        [0.0, (k.ST - T.mT * T.zT) * cw],
        [0.0, (k.SA + k.SF * sin_lam) * cw]
    ])

    # Gyroscopic coupling of the wheels appears with opposite signs
    gyro = k.mu * k.ST + k.SF * cos_lam
    C1 = np.array([
        [0.0, gyro + T.ITxz * cw - k.mu * T.mT * T.zT],
        [-gyro, S.IAlz * cw + k.mu * (k.SA + T.ITzz * cw)]
    ])

    return EquationsOfMotion(M=M, C1=C1, K0=K0, K2=K2, g=p.g)
