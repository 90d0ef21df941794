# elastobar/kernel/assemble.py
"""
ASSEMBLY: Global Sparse System with an Explicit Lifecycle
=========================================================

PURPOSE:
--------
Element kernels produce a dense (p+1)×(p+1) matrix and a (p+1) vector.
This module scatter-adds them into one global sparse system and then
enforces the Dirichlet constraints.

The global system is an explicit aggregate instead of module-level state:

    system = GlobalSystem(n_dofs)
    system.begin_assembly()              # reset K, F
    for dofs, ke, fe in contributions:
        system.add_local(dofs, ke, fe)   # scatter-add
    system.end_assembly()                # K -> CSR, duplicates summed
    system.apply_dirichlet(bc)           # constrained rows/cols fixed

ALGORITHM (scatter-add):
------------------------
    for each element:
        for each (a, b) in ke:
            K[dofs[a], dofs[b]] += ke[a, b]
        for each a in fe:
            F[dofs[a]] += fe[a]

Entries are collected as COO triplets; converting to CSR sums the
duplicates, which is exactly the additive accumulation at DOFs shared
between neighbouring elements.

DIRICHLET ENFORCEMENT:
----------------------
With x the vector holding the prescribed values on constrained DOFs
(zero elsewhere):

    F <- F - K x                  move known columns to the right-hand side
    K <- T K T + D                T zeroes constrained rows/cols, D puts 1 on their diagonal
    F[i] <- g_i                   for every constrained DOF i

The system keeps its size, constrained rows read u_i = g_i, and K stays
symmetric.
"""

from typing import List, Mapping, Sequence, Tuple

import numpy as np
from scipy.sparse import coo_matrix, csr_matrix, spdiags

EMPTY, ASSEMBLING, ASSEMBLED, CONSTRAINED = "empty", "assembling", "assembled", "constrained"


class GlobalSystem:
    """
    Global stiffness matrix K (sparse) and load vector F (dense).

    Parameters:
    -----------
    n_dofs : int
        Number of global DOFs (size of K)
    """

    def __init__(self, n_dofs: int):
        if n_dofs < 1:
            raise ValueError(f"Global system needs at least one DOF, got {n_dofs}.")
        self.n_dofs = int(n_dofs)
        self.state = EMPTY
        self._rows: List[np.ndarray] = []
        self._cols: List[np.ndarray] = []
        self._vals: List[np.ndarray] = []
        self._K = None
        self._F = np.zeros(self.n_dofs, dtype=float)

    # -- lifecycle ---------------------------------------------------------

    def begin_assembly(self) -> None:
        self._rows, self._cols, self._vals = [], [], []
        self._K = None
        self._F = np.zeros(self.n_dofs, dtype=float)
        self.state = ASSEMBLING

    def add_local(self, dofs: Sequence[int], ke: np.ndarray, fe: np.ndarray) -> None:
        """Scatter-add one element's stiffness matrix and load vector."""
        if self.state != ASSEMBLING:
            raise RuntimeError(f"add_local() called in state '{self.state}'; call begin_assembly() first.")
        dofs = np.asarray(dofs, dtype=int)
        n = len(dofs)
        ke = np.asarray(ke, dtype=float)
        fe = np.asarray(fe, dtype=float)
        if ke.shape != (n, n):
            raise ValueError(f"Element ke shape {ke.shape} doesn't match dof map length {n}")
        if fe.shape != (n,):
            raise ValueError(f"Element fe shape {fe.shape} doesn't match dof map length {n}")

        self._rows.append(np.repeat(dofs, n))
        self._cols.append(np.tile(dofs, n))
        self._vals.append(ke.ravel())
        np.add.at(self._F, dofs, fe)

    def end_assembly(self) -> None:
        if self.state != ASSEMBLING:
            raise RuntimeError(f"end_assembly() called in state '{self.state}'.")
        if self._vals:
            rows = np.concatenate(self._rows)
            cols = np.concatenate(self._cols)
            vals = np.concatenate(self._vals)
        else:
            rows = cols = np.zeros(0, dtype=int)
            vals = np.zeros(0, dtype=float)
        shape = (self.n_dofs, self.n_dofs)
        self._K = coo_matrix((vals, (rows, cols)), shape=shape).tocsr()
        self._rows, self._cols, self._vals = [], [], []
        self.state = ASSEMBLED

    def apply_dirichlet(self, constraints: Mapping[int, float]) -> None:
        """Fix constrained DOFs without resizing the system."""
        if self.state != ASSEMBLED:
            raise RuntimeError(f"apply_dirichlet() called in state '{self.state}'; finish assembly first.")
        K, F = self._K, self._F

        is_fixed = np.zeros(self.n_dofs, dtype=bool)
        x = np.zeros(self.n_dofs, dtype=float)
        for dof, value in constraints.items():
            if not 0 <= dof < self.n_dofs:
                raise IndexError(f"Constrained DOF {dof} outside system of size {self.n_dofs}.")
            is_fixed[dof] = True
            x[dof] = value

        F = F - K @ x
        bd = is_fixed.astype(float)
        Tbd = spdiags(bd, 0, self.n_dofs, self.n_dofs)
        T = spdiags(1.0 - bd, 0, self.n_dofs, self.n_dofs)
        self._K = csr_matrix(T @ K @ T + Tbd)
        F[is_fixed] = x[is_fixed]
        self._F = F
        self.state = CONSTRAINED

    # -- access ------------------------------------------------------------

    @property
    def stiffness(self) -> csr_matrix:
        if self._K is None:
            raise RuntimeError("Stiffness matrix not available before end_assembly().")
        return self._K

    @property
    def load(self) -> np.ndarray:
        return self._F

    def is_symmetric(self, rtol: float = 1e-12) -> bool:
        K = self.stiffness
        diff = abs(K - K.T)
        scale = abs(K).max() if K.nnz else 1.0
        return diff.max() <= rtol * scale if diff.nnz else True


def assemble_global(
    n_dofs: int,
    contributions: List[Tuple[Sequence[int], np.ndarray, np.ndarray]]
) -> GlobalSystem:
    """
    Assemble a global system from (dof_map, ke, fe) element contributions.

    Runs the full begin/add/end lifecycle; constraints are not applied.
    """
    system = GlobalSystem(n_dofs)
    system.begin_assembly()
    for dofs, ke, fe in contributions:
        system.add_local(dofs, ke, fe)
    system.end_assembly()
    return system
