import numpy as np
import pytest
from scipy.sparse import csr_matrix

from elastobar.analysis import BarAnalysis
from elastobar.kernel.solve import SingularSystemError, residual_norm, solve_sparse
from elastobar.model import BarProblem


def test_dirichlet_dirichlet_boundary_values():
    """
    Order 1, variant 1, L = 0.1, 10 elements, u(0) = 0, u(L) = 0.001.
    The constrained DOFs come out at their prescribed values, and linear
    elements in 1D are nodally exact, so every vertex matches u_exact.
    """
    problem = BarProblem(length=0.1, n_elements=10, order=1, variant=1, g1=0.0, g2=0.001)
    analysis = BarAnalysis(problem)
    result = analysis.run()
    D = result.solution
    x = result.mesh.node_location

    left = int(np.argmin(x))
    right = int(np.argmax(x))
    assert D[left] == 0.0
    assert D[right] == pytest.approx(0.001, rel=1e-14)

    np.testing.assert_allclose(D, problem.exact_solution(x), rtol=1e-9, atol=1e-15)
    assert result.residual < 1e-10


def test_dirichlet_neumann_nodally_exact():
    problem = BarProblem(length=0.1, n_elements=10, order=1, variant=2)
    result = BarAnalysis(problem).run()
    x = result.mesh.node_location
    assert result.solution[int(np.argmin(x))] == 0.0
    np.testing.assert_allclose(result.solution, problem.exact_solution(x), rtol=1e-9, atol=1e-15)


def test_solution_is_read_only():
    result = BarAnalysis(BarProblem(n_elements=4)).run()
    with pytest.raises(ValueError):
        result.solution[0] = 1.0


def test_small_system():
    K = csr_matrix(np.array([[4.0, 1.0], [1.0, 3.0]]))
    F = np.array([1.0, 2.0])
    D = solve_sparse(K, F)
    np.testing.assert_allclose(D, np.linalg.solve(K.toarray(), F), rtol=1e-14)
    assert residual_norm(K, D, F) < 1e-14


def test_singular_system_raises():
    K = csr_matrix((3, 3))
    with pytest.raises(SingularSystemError, match="singular"):
        solve_sparse(K, np.ones(3))


def test_incompatible_shapes():
    with pytest.raises(ValueError):
        solve_sparse(csr_matrix(np.eye(3)), np.ones(2))
