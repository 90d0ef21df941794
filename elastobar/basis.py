# elastobar/basis.py
"""
REFERENCE BASIS: Lagrange Shape Functions on [-1, 1]
====================================================

PURPOSE:
--------
Every element, whatever its physical length, is mapped onto the bi-unit
reference interval ξ ∈ [-1, 1]. On that interval we define (order + 1)
nodal Lagrange polynomials N_0 ... N_p with

    N_a(ξ_b) = 1 if a == b else 0        (nodal interpolation)
    Σ_a N_a(ξ) = 1                        (partition of unity)

LOCAL NODE NUMBERING:
---------------------
End nodes come first, interior nodes follow from left to right:

    order 1:   0 --------------- 1
    order 2:   0 ------- 2 ------- 1
    order 3:   0 ---- 2 ---- 3 ---- 1

so ξ_0 = -1, ξ_1 = +1 and ξ_a = -1 + 2 (a - 1) / order for 2 <= a <= order.

DERIVATIVES:
------------
The derivative of the Lagrange product is evaluated in closed form,

    dN_a/dξ = Σ_{j≠a} 1/(ξ_a - ξ_j) · Π_{m≠a,j} (ξ - ξ_m)/(ξ_a - ξ_m)

i.e. a sum of terms, each omitting one distinct factor of the product.
The same expression covers orders 1, 2 and 3; nothing is differenced
numerically, so the stiffness integral carries no truncation error.

USAGE:
------
    basis = LagrangeBasis(order=2)
    N = basis.values(quad.points)       # shape (3, n_qp)
    dN = basis.gradients(quad.points)   # shape (3, n_qp)
"""

from functools import lru_cache
from typing import Tuple

import numpy as np

from .model import ConfigurationError, check_order


def reference_coordinate(local_node: int, order: int) -> float:
    """
    Position of a local node on the reference interval.

    Parameters:
    -----------
    local_node : int
        Local node index (0 to order)
    order : int
        Polynomial order of the basis (1, 2 or 3)

    Returns:
    --------
    float
        -1 for node 0, +1 for node 1, equally spaced interior points otherwise

    Raises:
    -------
    ConfigurationError
        If local_node is outside 0..order

    Examples:
    ---------
    >>> reference_coordinate(2, 2)
    0.0
    >>> reference_coordinate(3, 3)
    0.3333333333333333
    """
    order = check_order(order)
    if local_node == 0:
        return -1.0
    if local_node == 1:
        return 1.0
    if 2 <= local_node <= order:
        return -1.0 + 2.0 * (local_node - 1.0) / order
    raise ConfigurationError(
        f"Local node {local_node} requested but an order-{order} element "
        f"only has {order + 1} nodes."
    )


@lru_cache(maxsize=None)
def _reference_nodes(order: int) -> Tuple[float, ...]:
    return tuple(reference_coordinate(a, order) for a in range(order + 1))


def _scalar_or_array(a: np.ndarray):
    return float(a) if a.ndim == 0 else a


class LagrangeBasis:
    """
    Nodal Lagrange basis of a fixed order on [-1, 1].

    Node coordinates and the product denominators Π_{m≠a}(ξ_a - ξ_m) are
    computed once per instance; evaluation never mutates them.
    """

    def __init__(self, order: int):
        self.order = check_order(order)
        self.n_nodes = self.order + 1
        self.nodes = np.array(_reference_nodes(self.order), dtype=float)
        self.nodes.setflags(write=False)

        diff = self.nodes[:, None] - self.nodes[None, :]
        np.fill_diagonal(diff, 1.0)
        self._denominators = np.prod(diff, axis=1)
        self._denominators.setflags(write=False)

    @property
    def polynomial_degree(self) -> int:
        return self.order

    def _check_node(self, node: int) -> None:
        if not 0 <= node <= self.order:
            raise ConfigurationError(
                f"Local node {node} requested but an order-{self.order} element "
                f"only has {self.n_nodes} nodes."
            )

    def value(self, node: int, xi):
        """N_node(ξ) as a Lagrange product over the other nodes."""
        self._check_node(node)
        xi = np.asarray(xi, dtype=float)
        result = np.ones_like(xi)
        for m in range(self.n_nodes):
            if m != node:
                result = result * (xi - self.nodes[m])
        return _scalar_or_array(result / self._denominators[node])

    def gradient(self, node: int, xi):
        """dN_node/dξ, summing the products that omit one factor each."""
        self._check_node(node)
        xi = np.asarray(xi, dtype=float)
        result = np.zeros_like(xi)
        for j in range(self.n_nodes):
            if j == node:
                continue
            term = np.ones_like(xi)
            for m in range(self.n_nodes):
                if m != node and m != j:
                    term = term * (xi - self.nodes[m])
            result = result + term
        return _scalar_or_array(result / self._denominators[node])

    def values(self, xi) -> np.ndarray:
        """Table N[a, q] = N_a(ξ_q)."""
        xi = np.atleast_1d(np.asarray(xi, dtype=float))
        return np.array([self.value(a, xi) for a in range(self.n_nodes)])

    def gradients(self, xi) -> np.ndarray:
        """Table dN[a, q] = dN_a/dξ(ξ_q)."""
        xi = np.atleast_1d(np.asarray(xi, dtype=float))
        return np.array([self.gradient(a, xi) for a in range(self.n_nodes)])

    def __repr__(self):
        return f"LagrangeBasis(order={self.order})"


@lru_cache(maxsize=None)
def get_basis(order: int) -> LagrangeBasis:
    """Shared basis instance per order."""
    return LagrangeBasis(order)


def basis_value(node: int, xi, order: int):
    """Value of local basis function `node` of the given order at ξ."""
    return get_basis(order).value(node, xi)


def basis_gradient(node: int, xi, order: int):
    """Derivative with respect to ξ (not x) of local basis function `node`."""
    return get_basis(order).gradient(node, xi)
