# File: tests/test_basis.py
"""
TEST: LAGRANGE BASIS ON THE REFERENCE INTERVAL
==============================================

Checks the properties every nodal Lagrange basis must have:
- N_a(ξ_b) = δ_ab (nodal interpolation)
- Σ_a N_a(ξ) = 1 (partition of unity)
- dN_a/dξ is the true derivative (finite difference + explicit formulas)
"""

import numpy as np
import pytest

from elastobar.basis import (
    LagrangeBasis,
    reference_coordinate,
    basis_value,
    basis_gradient,
)
from elastobar.model import ConfigurationError

ORDERS = [1, 2, 3]
XI_GRID = np.linspace(-1.0, 1.0, 41)


def test_reference_coordinates():
    assert reference_coordinate(0, 1) == -1.0
    assert reference_coordinate(1, 1) == 1.0
    assert reference_coordinate(2, 2) == 0.0
    assert reference_coordinate(2, 3) == pytest.approx(-1.0 / 3.0)
    assert reference_coordinate(3, 3) == pytest.approx(1.0 / 3.0)


@pytest.mark.parametrize("node, order", [(2, 1), (3, 2), (4, 3), (-1, 2)])
def test_reference_coordinate_out_of_range(node, order):
    with pytest.raises(ConfigurationError):
        reference_coordinate(node, order)


@pytest.mark.parametrize("order", [0, 4])
def test_unsupported_order(order):
    with pytest.raises(ConfigurationError, match="order"):
        LagrangeBasis(order)


@pytest.mark.parametrize("order", ORDERS)
def test_nodal_interpolation(order):
    """
    WHAT IS THIS TEST?
    ==================
    Each basis function is 1 at its own node and 0 at all the others.

    WHY DOES THIS MATTER?
    =====================
    This is what makes the DOFs nodal values: u_h(x_b) = Σ_a D_a N_a(ξ_b) = D_b.
    """
    for node in range(order + 1):
        for other in range(order + 1):
            xi = reference_coordinate(other, order)
            expected = 1.0 if node == other else 0.0
            assert basis_value(node, xi, order) == pytest.approx(expected, abs=1e-14)


@pytest.mark.parametrize("order", ORDERS)
def test_partition_of_unity(order):
    basis = LagrangeBasis(order)
    N = basis.values(XI_GRID)
    np.testing.assert_allclose(N.sum(axis=0), 1.0, rtol=0, atol=1e-13)

    # derivative of a constant
    dN = basis.gradients(XI_GRID)
    np.testing.assert_allclose(dN.sum(axis=0), 0.0, rtol=0, atol=1e-12)


@pytest.mark.parametrize("order", ORDERS)
def test_gradient_matches_finite_difference(order):
    eps = 1e-6
    for node in range(order + 1):
        fd = (basis_value(node, XI_GRID + eps, order)
              - basis_value(node, XI_GRID - eps, order)) / (2 * eps)
        exact = basis_gradient(node, XI_GRID, order)
        np.testing.assert_allclose(exact, fd, rtol=0, atol=1e-7,
                                   err_msg=f"order {order}, node {node}")


def test_linear_gradients_are_constant():
    np.testing.assert_allclose(basis_gradient(0, XI_GRID, 1), -0.5)
    np.testing.assert_allclose(basis_gradient(1, XI_GRID, 1), 0.5)


def test_quadratic_explicit_formulas():
    # nodes: ξ0 = -1, ξ1 = +1, ξ2 = 0
    xi = XI_GRID
    np.testing.assert_allclose(basis_value(0, xi, 2), xi * (xi - 1) / 2, atol=1e-14)
    np.testing.assert_allclose(basis_value(1, xi, 2), xi * (xi + 1) / 2, atol=1e-14)
    np.testing.assert_allclose(basis_value(2, xi, 2), 1 - xi**2, atol=1e-14)

    np.testing.assert_allclose(basis_gradient(0, xi, 2), xi - 0.5, atol=1e-14)
    np.testing.assert_allclose(basis_gradient(1, xi, 2), xi + 0.5, atol=1e-14)
    np.testing.assert_allclose(basis_gradient(2, xi, 2), -2 * xi, atol=1e-14)


def _cubic_gradient_by_hand(node, xi):
    """dN/dξ for order 3, written out term by term for each node."""
    nodes = [-1.0, 1.0, -1.0 / 3.0, 1.0 / 3.0]
    x0 = nodes[node]
    x1, x2, x3 = [nodes[m] for m in range(4) if m != node]
    denom = (x0 - x1) * (x0 - x2) * (x0 - x3)
    return ((xi - x2) * (xi - x3) + (xi - x1) * (xi - x3) + (xi - x1) * (xi - x2)) / denom


@pytest.mark.parametrize("node", [0, 1, 2, 3])
def test_cubic_explicit_gradients(node):
    np.testing.assert_allclose(
        basis_gradient(node, XI_GRID, 3), _cubic_gradient_by_hand(node, XI_GRID),
        rtol=1e-13, atol=1e-13,
    )


def test_tables_have_expected_shape():
    basis = LagrangeBasis(3)
    xi = np.array([-0.5, 0.0, 0.5])
    assert basis.values(xi).shape == (4, 3)
    assert basis.gradients(xi).shape == (4, 3)
    assert basis.polynomial_degree == 3


def test_evaluation_does_not_mutate_nodes():
    basis = LagrangeBasis(2)
    before = basis.nodes.copy()
    basis.values(XI_GRID)
    basis.gradients(XI_GRID)
    np.testing.assert_array_equal(basis.nodes, before)
    with pytest.raises(ValueError):
        basis.nodes[0] = 5.0
