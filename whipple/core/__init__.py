"""
Core Whipple bicycle model components.

This module provides the parameter set and the fixed pipeline that turns
it into linearized equations of motion and stability eigenvalues.
"""

from .errors import (
    WhippleError,
    InvalidParameterValue,
    SingularMassMatrix,
    NonConvergentEigensolve
)
from .parameters import BicycleParameters, create_default, update
from .bodies import (
    CombinedBodyProperties,
    combine_rear_body,
    combine_front_assembly,
    project_steer_axis,
    coupling_terms,
    compute_combined_body_properties
)
from .matrices import EquationsOfMotion, assemble_mkc
from .state_space import state_matrix, sorted_eigenvalues, compute_eigenvalues

__all__ = [
    'WhippleError',
    'InvalidParameterValue',
    'SingularMassMatrix',
    'NonConvergentEigensolve',
    'BicycleParameters',
    'create_default',
    'update',
    'CombinedBodyProperties',
    'combine_rear_body',
    'combine_front_assembly',
    'project_steer_axis',
    'coupling_terms',
    'compute_combined_body_properties',
    'EquationsOfMotion',
    'assemble_mkc',
    'state_matrix',
    'sorted_eigenvalues',
    'compute_eigenvalues'
]
