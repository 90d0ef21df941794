# elastobar/kernel/dof.py
"""
DIRICHLET MAP: Constrained Degrees of Freedom
=============================================

PURPOSE:
--------
Which global DOFs have a prescribed value, and what that value is.

    variant 1:  u(0) = g1, u(L) = g2    -> two entries
    variant 2:  u(0) = g1               -> one entry (x = L carries a flux)

Boundary DOFs are found by comparing node_location against the domain end
points. The comparison uses a tolerance relative to the domain length; on
the generated uniform mesh the end nodes sit exactly at 0 and L, so an
exact comparison would give the same result.

USAGE:
------
    bc = DirichletMap.for_problem(problem, mesh.node_location)
    bc[0]            # -> g1
    0 in bc          # -> True
    bc.dofs()        # -> sorted constrained DOFs
"""

from collections.abc import Mapping
from typing import Dict, Iterator, List

import numpy as np

from ..model import BarProblem, ProblemVariant


def boundary_dofs(node_location: np.ndarray, x: float, length: float,
                  rtol: float = 1e-12) -> List[int]:
    """
    Global DOFs located at coordinate x.

    Parameters:
    -----------
    node_location : np.ndarray
        Coordinate table indexed by global DOF
    x : float
        Boundary coordinate (0 or L)
    length : float
        Domain length, sets the scale of the tolerance
    rtol : float
        Tolerance relative to the domain length
    """
    hits = np.isclose(node_location, x, rtol=0.0, atol=rtol * length)
    return [int(i) for i in np.flatnonzero(hits)]


class DirichletMap(Mapping):
    """
    Read-only mapping from constrained global DOF to prescribed value.

    Keys are unique; iteration order is ascending DOF index.
    """

    def __init__(self, values: Dict[int, float]):
        self._values = {int(k): float(v) for k, v in values.items()}

    @classmethod
    def for_problem(cls, problem: BarProblem, node_location: np.ndarray,
                    rtol: float = 1e-12) -> "DirichletMap":
        values = {}
        for dof in boundary_dofs(node_location, 0.0, problem.length, rtol):
            values[dof] = problem.g1
        if problem.variant == ProblemVariant.DIRICHLET_DIRICHLET:
            for dof in boundary_dofs(node_location, problem.length, problem.length, rtol):
                values[dof] = problem.g2
        return cls(values)

    def __getitem__(self, dof: int) -> float:
        return self._values[dof]

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def dofs(self) -> np.ndarray:
        return np.array(sorted(self._values), dtype=int)

    def prescribed(self) -> np.ndarray:
        return np.array([self._values[d] for d in sorted(self._values)], dtype=float)

    def __repr__(self):
        return f"DirichletMap({dict(sorted(self._values.items()))})"
