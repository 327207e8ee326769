"""
Body Composition Tests

Tests for the composition stages:
- Parallel axis theorem
- Whole-bicycle totals
- Front assembly
- Steer axis projection and coupling terms
"""

import pytest
import numpy as np
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from whipple.core.parameters import create_default
from whipple.core.bodies import (
    parallel_axis,
    planar_inertia,
    rigid_bodies,
    combine_rear_body,
    combine_front_assembly,
    project_steer_axis,
    coupling_terms,
    compute_combined_body_properties
)


class TestParallelAxis:
    """Test inertia transport."""

    def test_offset_along_x(self):
        """Point mass on x axis adds to yy and zz only."""
        I = parallel_axis(2.0, np.array([3.0, 0.0, 0.0]))

        assert np.allclose(I, np.diag([0.0, 18.0, 18.0]))

    def test_product_of_inertia_sign(self):
        """Product term is -m*x*z."""
        I = parallel_axis(85.0, np.array([0.3, 0.0, -0.9]))

        assert np.isclose(I[0, 0], 85.0 * 0.81)
        assert np.isclose(I[2, 2], 85.0 * 0.09)
        assert np.isclose(I[0, 2], 85.0 * 0.3 * 0.9)
        assert np.allclose(I, I.T)

    def test_planar_inertia(self):
        """Planar tensor carries xz product symmetrically."""
        I = planar_inertia(9.2, 11.0, 2.8, 2.4)

        assert I[0, 2] == 2.4
        assert I[2, 0] == 2.4
        assert I[0, 1] == 0.0

    def test_wheels_are_axisymmetric(self):
        """Wheel yaw inertia equals diametral inertia."""
        bodies = rigid_bodies(create_default())

        assert bodies['R'].inertia[2, 2] == bodies['R'].inertia[0, 0] == 0.0603
        assert bodies['F'].inertia[2, 2] == bodies['F'].inertia[0, 0] == 0.1405


class TestTotals:
    """Test whole-bicycle totals against hand-computed benchmark values."""

    @pytest.fixture
    def total(self):
        return combine_rear_body(create_default())

    def test_total_mass(self, total):
        assert np.isclose(total.mT, 94.0)

    def test_centre_of_mass(self, total):
        assert np.isclose(total.xT, 32.16 / 94.0)
        assert np.isclose(total.zT, -80.95 / 94.0)

    def test_inertia(self, total):
        assert np.isclose(total.ITxx, 80.81722, rtol=1e-12)
        assert np.isclose(total.ITxz, 28.93344, rtol=1e-12)
        assert np.isclose(total.ITzz, 17.01908, rtol=1e-12)

    def test_inertia_symmetric(self, total):
        assert np.allclose(total.inertia, total.inertia.T)


class TestFrontAssembly:
    """Test front assembly composition."""

    @pytest.fixture
    def front(self):
        return combine_front_assembly(create_default())

    def test_mass_and_centre(self, front):
        assert np.isclose(front.mA, 7.0)
        assert np.isclose(front.xA, 6.66 / 7.0)
        assert np.isclose(front.zA, -0.55)

    def test_inertia_about_own_centre(self, front):
        """Inertia follows the parallel axis sums about the assembly CoM."""
        p = create_default()
        xA, zA = front.xA, front.zA

        IAxx = p.IHxx + p.IFxx + p.mH * (p.zH - zA)**2 + p.mF * (p.rF + zA)**2
        IAxz = p.IHxz - p.mH * (p.xH - xA) * (p.zH - zA) + p.mF * (p.w - xA) * (p.rF + zA)
        IAzz = p.IHzz + p.IFxx + p.mH * (p.xH - xA)**2 + p.mF * (p.w - xA)**2

        assert np.isclose(front.IAxx, IAxx)
        assert np.isclose(front.IAxz, IAxz)
        assert np.isclose(front.IAzz, IAzz)


class TestSteerAxis:
    """Test steer axis projection and coupling terms."""

    def test_projection(self):
        """Projection matches the scalar rotation formulas."""
        p = create_default()
        front = combine_front_assembly(p)
        steer = project_steer_axis(p, front)

        s, c = np.sin(p.lam), np.cos(p.lam)
        uA = (front.xA - p.w - p.c) * c - front.zA * s

        assert np.isclose(steer.uA, uA)
        assert np.isclose(steer.IAll, front.mA * uA**2 + front.IAxx * s**2
                          + 2 * front.IAxz * s * c + front.IAzz * c**2)
        assert np.isclose(steer.IAlx, -front.mA * uA * front.zA + front.IAxx * s + front.IAxz * c)
        assert np.isclose(steer.IAlz, front.mA * uA * front.xA + front.IAxz * s + front.IAzz * c)

    def test_coupling_terms(self):
        p = create_default()
        props = compute_combined_body_properties(p)
        k = props.coupling

        assert np.isclose(k.mu, 0.08 / 1.02 * np.cos(np.pi / 10))
        assert np.isclose(k.SR, 0.4)
        assert np.isclose(k.SF, 0.8)
        assert np.isclose(k.ST, 1.2)
        assert np.isclose(k.SA, props.front.mA * props.steer.uA + k.mu * 94.0 * props.total.xT)

    def test_stage_functions_agree_with_pipeline(self):
        p = create_default()
        props = compute_combined_body_properties(p)
        total = combine_rear_body(p)
        front = combine_front_assembly(p)
        steer = project_steer_axis(p, front)

        assert np.isclose(props.total.ITxx, total.ITxx)
        assert np.isclose(props.steer.IAll, steer.IAll)
        assert coupling_terms(p, total, front, steer) == props.coupling
