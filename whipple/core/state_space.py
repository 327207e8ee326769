"""
First-order state-space form and eigenvalues of the Whipple model.

State vector: x = [phi, delta, phi_dot, delta_dot]

    x' = A(v) x,   A(v) = [[0, I], [-M^-1 (g K0 + v^2 K2), -v M^-1 C1]]
"""

import warnings

import numpy as np

from .errors import NonConvergentEigensolve, SingularMassMatrix
from .matrices import EquationsOfMotion, assemble_mkc
from .parameters import BicycleParameters

# Largest acceptable condition number of the mass matrix
DEFAULT_MAX_CONDITION = 1e12


def state_matrix(eom: EquationsOfMotion,
                 speed: float,
                 max_condition: float = DEFAULT_MAX_CONDITION) -> np.ndarray:
    """
    Build the 4x4 state matrix A(v).

    Parameters
    ----------
    eom : EquationsOfMotion
        Coefficient matrices
    speed : float
        Forward speed v (m/s)
    max_condition : float, optional
        Mass matrices with a larger condition number are treated as singular

    Returns
    -------
    ndarray
        State matrix (4x4)

    Raises
    ------
    SingularMassMatrix
        If M is not invertible within max_condition
    """
    condition = np.linalg.cond(eom.M)
    if not np.isfinite(condition) or condition > max_condition:
        raise SingularMassMatrix(condition, max_condition)

    n = eom.M.shape[0]
    M_inv = np.linalg.inv(eom.M)

    A = np.zeros((2 * n, 2 * n))
    A[:n, n:] = np.eye(n)
    A[n:, :n] = -M_inv @ eom.stiffness(speed)
    A[n:, n:] = -M_inv @ eom.damping(speed)

    return A


def sorted_eigenvalues(A: np.ndarray) -> np.ndarray:
    """
    Eigenvalues of A ordered by real part, then imaginary part (ascending).

    Raises
    ------
    NonConvergentEigensolve
        If the eigenvalue routine fails or produces non-finite values
    """
    try:
        eigs = np.linalg.eigvals(A)
    except np.linalg.LinAlgError as e:
        raise NonConvergentEigensolve(f"Eigenvalue computation failed: {e}") from e

    eigs = np.asarray(eigs, dtype=complex)
    if not np.all(np.isfinite(eigs)):
        raise NonConvergentEigensolve("Eigenvalue computation produced non-finite values")

    # lexsort uses the last key as primary and is stable
    order = np.lexsort((eigs.imag, eigs.real))
    return eigs[order]


def compute_eigenvalues(params: BicycleParameters,
                        speed: float,
                        max_condition: float = DEFAULT_MAX_CONDITION) -> np.ndarray:
    """
    Stability eigenvalues of the bicycle at a given forward speed.

    Parameters
    ----------
    params : BicycleParameters
        Bicycle parameters
    speed : float
        Forward speed (m/s)
    max_condition : float, optional
        Condition number limit for the mass matrix

    Returns
    -------
    ndarray
        Four complex eigenvalues, sorted by real then imaginary part

    Examples
    --------
    >>> eigs = compute_eigenvalues(create_default(), 0.0)
    >>> np.round(eigs.real, 4)
    array([-5.5309, -3.1316,  3.1316,  5.5309])
    """
    issues = params.validate()
    if issues:
        warnings.warn("Non-physical bicycle parameters: " + "; ".join(issues))

    eom = assemble_mkc(params)
    if not eom.is_mass_positive_definite():
        warnings.warn("Mass matrix is not positive definite; check the parameter set")

    A = state_matrix(eom, speed, max_condition=max_condition)
    return sorted_eigenvalues(A)
