import numpy as np
import pytest

from elastobar.basis import LagrangeBasis
from elastobar.assembly import element_contributions, required_degree
from elastobar.mesh import IntervalMesh
from elastobar.model import BarProblem, ConfigurationError
from elastobar.quadrature import GaussQuadrature, QuadratureError


@pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 6])
def test_weights_sum_to_two(n):
    quad = GaussQuadrature(n)
    assert quad.weights.sum() == pytest.approx(2.0, rel=1e-14)
    assert len(quad) == n


def test_three_point_rule_constants():
    quad = GaussQuadrature(3)
    np.testing.assert_allclose(quad.points, [-np.sqrt(0.6), 0.0, np.sqrt(0.6)], atol=1e-15)
    np.testing.assert_allclose(quad.weights, [5 / 9, 8 / 9, 5 / 9], atol=1e-15)
    assert quad.degree_of_exactness == 5


@pytest.mark.parametrize("n", [1, 2, 3, 4])
def test_monomials_integrated_exactly(n):
    quad = GaussQuadrature(n)
    for k in range(quad.degree_of_exactness + 1):
        exact = 2.0 / (k + 1) if k % 2 == 0 else 0.0
        approx = sum(w * xi**k for xi, w in quad)
        assert approx == pytest.approx(exact, abs=1e-14), f"n={n}, degree {k}"


def test_insufficient_rule_is_rejected():
    quad = GaussQuadrature(3)
    quad.require_exactness(5)
    with pytest.raises(QuadratureError, match="degree 6"):
        quad.require_exactness(6)
    assert issubclass(QuadratureError, ConfigurationError)


@pytest.mark.parametrize("n", [0, 7])
def test_unsupported_rule_size(n):
    with pytest.raises(QuadratureError):
        GaussQuadrature(n)


def test_required_degree_per_order():
    assert required_degree(1) == 2
    assert required_degree(2) == 3
    assert required_degree(3) == 4


def test_assembly_refuses_too_small_rule():
    # cubic elements need degree 4; a 2-point rule stops at 3
    problem = BarProblem(order=3, n_elements=4)
    mesh = IntervalMesh.uniform(problem.length, problem.n_elements, problem.order)
    with pytest.raises(QuadratureError):
        element_contributions(mesh, problem, LagrangeBasis(3), GaussQuadrature(2))


def test_points_are_read_only():
    quad = GaussQuadrature(3)
    with pytest.raises(ValueError):
        quad.weights[0] = 1.0
