# elastobar/kernel/solve.py
"""Sparse direct solve of the constrained global system."""

import numpy as np
from scipy.sparse import csc_matrix
from scipy.sparse.linalg import splu


class SingularSystemError(RuntimeError):
    """Raised when the global system is singular or the solve is not finite."""
    pass


def solve_sparse(K, F: np.ndarray) -> np.ndarray:
    """
    Solve K·D = F with a sparse LU factorization (SuperLU).

    Args:
        K: Constrained global stiffness matrix (n_dofs x n_dofs, sparse)
        F: Constrained global load vector (n_dofs,)

    Returns:
        D: Solution vector (n_dofs,), read-only

    Raises:
        SingularSystemError: If the factorization fails or the result is not finite
    """
    K = csc_matrix(K)
    F = np.asarray(F, dtype=float)
    if K.shape[0] != K.shape[1] or K.shape[0] != F.shape[0]:
        raise ValueError(f"Incompatible system: K {K.shape}, F {F.shape}.")

    try:
        lu = splu(K)
    except RuntimeError as e:
        raise SingularSystemError(f"Global stiffness matrix is singular: {e}") from e

    D = lu.solve(F)
    if not np.all(np.isfinite(D)):
        raise SingularSystemError("Solve produced non-finite values. Check boundary conditions.")

    D.setflags(write=False)
    return D


def residual_norm(K, D: np.ndarray, F: np.ndarray) -> float:
    """Relative residual ||K D - F|| / ||F|| (absolute if F is zero)."""
    r = K @ D - F
    nF = np.linalg.norm(F)
    return float(np.linalg.norm(r) / nF) if nF > 0 else float(np.linalg.norm(r))
