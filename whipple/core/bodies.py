"""
Rigid-body composition for the Whipple bicycle.

Combines the four bodies into the whole-bicycle totals (T) and the front
assembly (A), projects the front assembly inertia onto the steer axis, and
derives the scalar coupling terms used by the equations of motion.

Every stage is a pure function; the results are collected in an immutable
CombinedBodyProperties record.

Inertia tensors are 3x3 in the rear-contact frame (x forward, y right,
z down). Bodies lie in the xz symmetry plane, so only xx, yy, zz and xz
entries are non-zero.
"""

from dataclasses import dataclass
from typing import Dict, Iterable

import numpy as np

from .parameters import BicycleParameters


@dataclass(frozen=True)
class RigidBody:
    """Mass, centre of mass position and inertia tensor (about own CoM)."""
    mass: float
    position: np.ndarray
    inertia: np.ndarray


@dataclass(frozen=True)
class TotalBodyProperties:
    """Whole-bicycle mass properties, inertia about the rear contact point."""
    mT: float
    xT: float
    zT: float
    inertia: np.ndarray

    @property
    def ITxx(self) -> float:
        return self.inertia[0, 0]

    @property
    def ITxz(self) -> float:
        return self.inertia[0, 2]

    @property
    def ITzz(self) -> float:
        return self.inertia[2, 2]


@dataclass(frozen=True)
class FrontAssemblyProperties:
    """Front assembly (fork, handlebar, front wheel), inertia about its CoM."""
    mA: float
    xA: float
    zA: float
    inertia: np.ndarray

    @property
    def IAxx(self) -> float:
        return self.inertia[0, 0]

    @property
    def IAxz(self) -> float:
        return self.inertia[0, 2]

    @property
    def IAzz(self) -> float:
        return self.inertia[2, 2]


@dataclass(frozen=True)
class SteerAxisProperties:
    """
    Front assembly inertia referred to the steer axis.

    Attributes
    ----------
    uA : float
        Perpendicular distance of the front assembly CoM ahead of the steer axis
    IAll : float
        Moment of inertia about the steer axis
    IAlx : float
        Steer-axis / x-axis product of inertia
    IAlz : float
        Steer-axis / z-axis product of inertia
    """
    uA: float
    IAll: float
    IAlx: float
    IAlz: float


@dataclass(frozen=True)
class CouplingTerms:
    """Trail ratio, gyrostatic and static moment terms."""
    mu: float
    SR: float
    SF: float
    ST: float
    SA: float


@dataclass(frozen=True)
class CombinedBodyProperties:
    """Output of the composition stages, input to matrix assembly."""
    total: TotalBodyProperties
    front: FrontAssemblyProperties
    steer: SteerAxisProperties
    coupling: CouplingTerms


def planar_inertia(Ixx: float, Iyy: float, Izz: float, Ixz: float = 0.0) -> np.ndarray:
    """Inertia tensor of a body symmetric about the xz plane."""
    return np.array([
        [Ixx, 0.0, Ixz],
        [0.0, Iyy, 0.0],
        [Ixz, 0.0, Izz]
    ])


def parallel_axis(mass: float, offset: np.ndarray) -> np.ndarray:
    """
    Point-mass inertia contribution of a body displaced by offset.

    Parameters
    ----------
    mass : float
        Body mass (kg)
    offset : np.ndarray, shape (3,)
        Position of the body CoM relative to the reference point (m)

    Returns
    -------
    np.ndarray, shape (3, 3)
        m * (|r|^2 E - r r^T)
    """
    r = np.asarray(offset, dtype=float)
    return mass * (np.dot(r, r) * np.eye(3) - np.outer(r, r))


def rigid_bodies(p: BicycleParameters) -> Dict[str, RigidBody]:
    """
    Build the four rigid bodies from a parameter set.

    Wheels are axisymmetric, so their yaw inertia equals their
    in-plane diametral inertia (Izz = Ixx).
    """
    return {
        'R': RigidBody(p.mR, np.array([0.0, 0.0, -p.rR]),
                       planar_inertia(p.IRxx, p.IRyy, p.IRxx)),
        'B': RigidBody(p.mB, np.array([p.xB, 0.0, p.zB]),
                       planar_inertia(p.IBxx, p.IByy, p.IBzz, p.IBxz)),
        'H': RigidBody(p.mH, np.array([p.xH, 0.0, p.zH]),
                       planar_inertia(p.IHxx, p.IHyy, p.IHzz, p.IHxz)),
        'F': RigidBody(p.mF, np.array([p.w, 0.0, -p.rF]),
                       planar_inertia(p.IFxx, p.IFyy, p.IFxx)),
    }


def _composite(bodies: Iterable[RigidBody], reference: np.ndarray) -> np.ndarray:
    """Sum of body inertias transported to a common reference point."""
    inertia = np.zeros((3, 3))
    for body in bodies:
        inertia += body.inertia + parallel_axis(body.mass, body.position - reference)
    return inertia


def _centre_of_mass(bodies: Iterable[RigidBody]):
    bodies = list(bodies)
    mass = sum(body.mass for body in bodies)
    position = sum(body.mass * body.position for body in bodies) / mass
    return mass, position


def combine_rear_body(p: BicycleParameters) -> TotalBodyProperties:
    """
    Combine all four bodies into whole-bicycle totals.

    The total inertia is taken about the rear wheel contact point, which is
    the frame origin.
    """
    bodies = rigid_bodies(p).values()
    mT, position = _centre_of_mass(bodies)
    inertia = _composite(bodies, np.zeros(3))
    return TotalBodyProperties(mT=mT, xT=position[0], zT=position[2], inertia=inertia)


def combine_front_assembly(p: BicycleParameters) -> FrontAssemblyProperties:
    """Combine fork/handlebar and front wheel about their joint CoM."""
    bodies = rigid_bodies(p)
    front = [bodies['H'], bodies['F']]
    mA, position = _centre_of_mass(front)
    inertia = _composite(front, position)
    return FrontAssemblyProperties(mA=mA, xA=position[0], zA=position[2], inertia=inertia)


def project_steer_axis(p: BicycleParameters, front: FrontAssemblyProperties) -> SteerAxisProperties:
    """
    Refer the front assembly inertia to the steer axis.

    The steer axis direction in the rear frame is (sin lambda, 0, cos lambda);
    the front assembly CoM lies a distance uA ahead of it.
    """
    sin_lam, cos_lam = np.sin(p.lam), np.cos(p.lam)
    axis = np.array([sin_lam, 0.0, cos_lam])

    uA = (front.xA - p.w - p.c) * cos_lam - front.zA * sin_lam

    # Inertia about the axis through the assembly CoM, then shifted by uA
    I_axis = front.inertia @ axis
    IAll = front.mA * uA**2 + axis @ I_axis
    IAlx = -front.mA * uA * front.zA + I_axis[0]
    IAlz = front.mA * uA * front.xA + I_axis[2]

    return SteerAxisProperties(uA=uA, IAll=IAll, IAlx=IAlx, IAlz=IAlz)


def coupling_terms(p: BicycleParameters,
                   total: TotalBodyProperties,
                   front: FrontAssemblyProperties,
                   steer: SteerAxisProperties) -> CouplingTerms:
    """Trail ratio mu, wheel gyrostatic coefficients and static moment SA."""
    mu = p.c / p.w * np.cos(p.lam)
    SR = p.IRyy / p.rR
    SF = p.IFyy / p.rF
    ST = SR + SF
    SA = front.mA * steer.uA + mu * total.mT * total.xT
    return CouplingTerms(mu=mu, SR=SR, SF=SF, ST=ST, SA=SA)


def compute_combined_body_properties(p: BicycleParameters) -> CombinedBodyProperties:
    """Run the composition stages in order."""
    total = combine_rear_body(p)
    front = combine_front_assembly(p)
    steer = project_steer_axis(p, front)
    coupling = coupling_terms(p, total, front, steer)
    return CombinedBodyProperties(total=total, front=front, steer=steer, coupling=coupling)
