"""
Equations of Motion and Eigenvalue Tests

Tests for the dynamics pipeline:
- Benchmark M, C1, K0, K2 matrices
- State matrix structure
- Benchmark eigenvalues
- Error reporting (singular mass matrix, eigensolver failure)
"""

import pytest
import numpy as np
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from whipple.core.parameters import BicycleParameters, create_default
from whipple.core.matrices import EquationsOfMotion, assemble_mkc
from whipple.core.state_space import state_matrix, sorted_eigenvalues, compute_eigenvalues
from whipple.core.errors import NonConvergentEigensolve, SingularMassMatrix, WhippleError


# Benchmark values, Meijaard et al. (2007)
M_REF = np.array([[80.81722, 2.31941332208709],
                  [2.31941332208709, 0.29784188199686]])
K0_REF = np.array([[-80.95, -2.59951685249872],
                   [-2.59951685249872, -0.80329488458618]])
K2_REF = np.array([[0.0, 76.59734589573222],
                   [0.0, 2.65431523794604]])
C1_REF = np.array([[0.0, 33.86641391492494],
                   [-0.85035641456978, 1.68540397397560]])

EIGS_V0_REF = np.array([-5.53094371765393, -3.13164324790656,
                        3.13164324790656, 5.53094371765393])


def random_parameters(seed: int) -> BicycleParameters:
    """Benchmark bicycle with every parameter perturbed by up to 20%."""
    rng = np.random.default_rng(seed)
    d = create_default().as_dict()
    return create_default().with_overrides(
        {name: value * rng.uniform(0.8, 1.2) for name, value in d.items()}
    )


class TestBenchmarkMatrices:
    """Test assembled matrices against the published benchmark."""

    @pytest.fixture
    def eom(self):
        return assemble_mkc(create_default())

    def test_mass_matrix(self, eom):
        assert np.allclose(eom.M, M_REF, rtol=1e-6, atol=0)

    def test_gravity_stiffness(self, eom):
        assert np.allclose(eom.K0, K0_REF, rtol=1e-6, atol=0)

    def test_velocity_stiffness(self, eom):
        assert np.allclose(eom.K2, K2_REF, rtol=1e-6, atol=0)

    def test_damping(self, eom):
        assert np.allclose(eom.C1, C1_REF, rtol=1e-6, atol=0)

    def test_speed_dependent_matrices(self, eom):
        """stiffness(v) = g K0 + v^2 K2 and damping(v) = v C1."""
        assert np.allclose(eom.stiffness(3.0), 9.81 * K0_REF + 9.0 * K2_REF, rtol=1e-6)
        assert np.allclose(eom.damping(3.0), 3.0 * C1_REF, rtol=1e-6)

    def test_mass_positive_definite(self, eom):
        assert eom.is_mass_positive_definite()


class TestSymmetry:
    """M and K0 are symmetric for any parameter set."""

    @pytest.mark.parametrize("seed", range(5))
    def test_symmetric(self, seed):
        eom = assemble_mkc(random_parameters(seed))

        assert np.isclose(eom.M[0, 1], eom.M[1, 0], rtol=1e-12)
        assert np.isclose(eom.K0[0, 1], eom.K0[1, 0], rtol=1e-12)


class TestStateMatrix:
    """Test first-order state matrix."""

    def test_structure(self):
        eom = assemble_mkc(create_default())
        A = state_matrix(eom, 4.0)

        assert A.shape == (4, 4)
        assert np.allclose(A[:2, :2], 0.0)
        assert np.allclose(A[:2, 2:], np.eye(2))
        assert np.allclose(eom.M @ A[2:, :2], -eom.stiffness(4.0))
        assert np.allclose(eom.M @ A[2:, 2:], -eom.damping(4.0))

    def test_zero_speed_has_no_damping(self):
        A = state_matrix(assemble_mkc(create_default()), 0.0)
        assert np.allclose(A[2:, 2:], 0.0)

    def test_singular_mass_matrix(self):
        """Non-invertible M raises SingularMassMatrix."""
        eom = EquationsOfMotion(
            M=np.array([[1.0, 1.0], [1.0, 1.0]]),
            C1=np.zeros((2, 2)),
            K0=np.eye(2),
            K2=np.zeros((2, 2)),
            g=9.81
        )

        with pytest.raises(SingularMassMatrix):
            state_matrix(eom, 1.0)

    def test_condition_threshold_configurable(self):
        """Benchmark M (condition ~350) fails a tight threshold."""
        eom = assemble_mkc(create_default())

        with pytest.raises(SingularMassMatrix) as exc_info:
            state_matrix(eom, 1.0, max_condition=10.0)

        assert exc_info.value.condition > 10.0
        assert isinstance(exc_info.value, np.linalg.LinAlgError)


class TestEigenvalues:
    """Test eigenvalue extraction."""

    def test_benchmark_zero_speed(self):
        """Golden v=0 eigenvalues."""
        eigs = compute_eigenvalues(create_default(), 0.0)

        assert eigs.shape == (4,)
        assert np.allclose(eigs.real, EIGS_V0_REF, rtol=1e-6, atol=0)
        assert np.allclose(eigs.imag, 0.0, atol=1e-9)

    def test_weave_pair_at_speed(self):
        """A conjugate weave pair exists at 5 m/s and all roots are stable."""
        eigs = compute_eigenvalues(create_default(), 5.0)

        assert np.count_nonzero(np.abs(eigs.imag) > 1e-6) == 2
        assert np.all(eigs.real < 0)

    def test_sorted(self):
        """Sorted by real part, ties by imaginary part."""
        eigs = compute_eigenvalues(create_default(), 5.0)

        assert np.all(np.diff(eigs.real) >= 0)
        for a, b in zip(eigs[:-1], eigs[1:]):
            if a.real == b.real:
                assert a.imag < b.imag

    def test_tie_break(self):
        A = np.array([[0.0, 1.0], [-1.0, 0.0]])
        eigs = sorted_eigenvalues(A)

        assert np.allclose(eigs, [-1j, 1j])

    def test_deterministic(self):
        """Repeated calls give identical sequences."""
        p = create_default()
        for speed in (0.0, 2.5, 5.0, 8.0):
            assert np.array_equal(compute_eigenvalues(p, speed), compute_eigenvalues(p, speed))

    @pytest.mark.parametrize("k", [0.5, 3.0])
    def test_mass_scaling_invariance(self, k):
        """Scaling every mass and inertia leaves eigenvalues unchanged."""
        p = create_default()
        q = p.scaled_masses(k)

        eom_p = assemble_mkc(p)
        eom_q = assemble_mkc(q)
        assert np.allclose(eom_q.M, k * eom_p.M)
        assert np.allclose(eom_q.K0, k * eom_p.K0)
        assert np.allclose(eom_q.K2, k * eom_p.K2)
        assert np.allclose(eom_q.C1, k * eom_p.C1)

        for speed in (0.0, 5.0):
            assert np.allclose(compute_eigenvalues(q, speed), compute_eigenvalues(p, speed),
                               rtol=1e-9, atol=1e-9)

    def test_non_physical_parameters_warn(self):
        """Invariant violations are reported as warnings, not errors."""
        p = create_default().with_overrides({'lambda': 2.0})

        with pytest.warns(UserWarning, match="lambda"):
            eigs = compute_eigenvalues(p, 5.0)

        assert eigs.shape == (4,)


class TestEigensolveFailure:
    """Test eigensolver error reporting."""

    def test_non_finite_matrix(self):
        with pytest.raises(NonConvergentEigensolve):
            sorted_eigenvalues(np.full((4, 4), np.nan))

    def test_lapack_failure(self, monkeypatch):
        """LinAlgError from numpy surfaces as NonConvergentEigensolve."""
        def fail(A):
            raise np.linalg.LinAlgError("Eigenvalues did not converge")

        monkeypatch.setattr(np.linalg, 'eigvals', fail)

        with pytest.raises(NonConvergentEigensolve) as exc_info:
            compute_eigenvalues(create_default(), 5.0)

        assert isinstance(exc_info.value, WhippleError)
        assert "converge" in str(exc_info.value)
