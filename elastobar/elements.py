# Element length, local stiffness and local load by Gauss quadrature

import numpy as np

from .basis import LagrangeBasis
from .quadrature import GaussQuadrature


class DegenerateElementError(ValueError):
    """Raised when an element has zero or negative length."""
    pass


def element_length(coords: np.ndarray) -> float:
    """h_e = x(local node 1) - x(local node 0)."""
    h_e = float(coords[1] - coords[0])
    if h_e <= 0.0:
        raise DegenerateElementError(
            f"Element from x={coords[0]:.6g} to x={coords[1]:.6g} has non-positive length {h_e:.3e}."
        )
    return h_e


def quadrature_coordinates(coords: np.ndarray, N: np.ndarray) -> np.ndarray:
    """x_q = Σ_B x_B N_B(ξ_q), for a basis table N of shape (n_nodes, n_qp)."""
    return np.asarray(coords, dtype=float) @ N


def local_stiffness(coords: np.ndarray, basis: LagrangeBasis,
                    quad: GaussQuadrature, modulus: float = 1.0) -> np.ndarray:
    """
    Local stiffness matrix.
    K_AB = Σ_q (2/h_e) E dN_A(ξ_q) dN_B(ξ_q) w_q
    2/h_e is dξ/dx squared times the Jacobian h_e/2.
    """
    h_e = element_length(coords)
    dN = basis.gradients(quad.points)
    k = np.zeros((basis.n_nodes, basis.n_nodes), dtype=float)
    for q, w in enumerate(quad.weights):
        k += 2.0 / h_e * modulus * np.outer(dN[:, q], dN[:, q]) * w
    return k


def local_load(coords: np.ndarray, basis: LagrangeBasis,
               quad: GaussQuadrature, source) -> np.ndarray:
    """
    Local load vector.
    F_A = Σ_q (h_e/2) N_A(ξ_q) w_q f(x_q)
    `source` is a callable f(x), evaluated at the interpolated x_q.
    """
    h_e = element_length(coords)
    N = basis.values(quad.points)
    x_q = quadrature_coordinates(coords, N)
    f_q = np.asarray(source(x_q), dtype=float)
    fe = np.zeros(basis.n_nodes, dtype=float)
    for q, w in enumerate(quad.weights):
        fe += h_e / 2.0 * N[:, q] * w * f_q[q]
    return fe
